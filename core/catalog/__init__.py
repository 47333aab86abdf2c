"""
语言目录模块
为语言选择面板提供翻译服务支持的语言列表
"""

from .base import LanguageCatalog
from .registry import create_language_catalog, register_catalog, list_catalogs
from .retry import fetch_languages

__all__ = [
    "LanguageCatalog",
    "create_language_catalog",
    "register_catalog",
    "list_catalogs",
    "fetch_languages",
]
