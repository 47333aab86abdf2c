"""
Core I18n Module

统一的国际化入口，提供 t(), tn(), set_language() 函数
UI 文案、CLI 帮助、日志消息共用同一套翻译文件

使用方法：
    from core.i18n import t, tn, set_language

    set_language("zh-CN")
    text = t("source_language_label")
    text = tn("status_languages_loaded_single", "status_languages_loaded", 5, count=5)
"""

from pathlib import Path
from typing import Optional, Any

from .json_provider import JsonI18nProvider

# 支持的界面语言
SUPPORTED_LANGUAGES = ["zh-CN", "en-US"]
DEFAULT_LANGUAGE = "en-US"

# 全局 Provider 实例
_provider: Optional[JsonI18nProvider] = None
_current_language: str = DEFAULT_LANGUAGE


def _get_locale_dir() -> Path:
    """获取 locales 目录路径"""
    return Path(__file__).parent / "locales"


def _ensure_provider() -> JsonI18nProvider:
    """确保 Provider 已初始化"""
    global _provider
    if _provider is None:
        _provider = JsonI18nProvider(_get_locale_dir(), _current_language)
    return _provider


def set_language(lang_code: str) -> bool:
    """切换界面语言

    Args:
        lang_code: 语言代码（"zh-CN" / "en-US"）

    Returns:
        是否切换成功（不支持的语言返回 False，保持当前语言）
    """
    global _provider, _current_language

    if lang_code not in SUPPORTED_LANGUAGES:
        return False

    _current_language = lang_code

    if _provider is None:
        _provider = JsonI18nProvider(_get_locale_dir(), lang_code)
    else:
        _provider.reload(lang_code)

    return True


def get_language() -> str:
    """获取当前界面语言代码"""
    return _current_language


def t(key: str, default: Optional[str] = None, **kwargs: Any) -> str:
    """翻译函数（主入口）

    Args:
        key: 翻译键，支持点号分隔（如 "log.language_saved"）
        default: 未找到翻译时的默认值，若为 None 则返回 key
        **kwargs: 格式化参数（使用命名占位符）

    Returns:
        翻译后的字符串
    """
    provider = _ensure_provider()
    text = provider.get(key, default)
    return _format_safe(text, **kwargs)


def tn(singular: str, plural: str, n: int, **kwargs: Any) -> str:
    """复数翻译函数

    Args:
        singular: 单数形式的翻译键
        plural: 复数形式的翻译键
        n: 数量
        **kwargs: 格式化参数

    Returns:
        翻译后的字符串
    """
    provider = _ensure_provider()
    text = provider.nget(singular, plural, n)
    return _format_safe(text, n=n, **kwargs)


def _format_safe(text: str, **kwargs: Any) -> str:
    """安全格式化，缺少参数时返回原文本"""
    if not kwargs:
        return text
    try:
        return text.format(**kwargs)
    except (KeyError, ValueError, IndexError):
        return text


__all__ = [
    "t",
    "tn",
    "set_language",
    "get_language",
    "SUPPORTED_LANGUAGES",
    "DEFAULT_LANGUAGE",
]
