"""
业务逻辑模块
UI 与核心模块之间的胶水层（后台任务、线程切换）
"""

from .catalog_loader import CatalogLoader, run_inline

__all__ = ["CatalogLoader", "run_inline"]
