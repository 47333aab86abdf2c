"""
UI 组件模块
包含可复用的 UI 组件：语言选择面板
"""

from .language_selection_panel import LanguageSelectionPanel

__all__ = ["LanguageSelectionPanel"]
