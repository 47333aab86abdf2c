"""
主题系统
语言面板默认使用深灰主题（深色背景、白色标签文字）
"""

from typing import Dict, Literal
from dataclasses import dataclass

ThemeName = Literal["dark_gray", "light"]


@dataclass(frozen=True)
class ThemeTokens:
    """主题 token 定义"""

    bg_primary: str  # 面板背景色
    bg_secondary: str  # 窗口背景色
    text_primary: str  # 标签文字
    text_secondary: str  # 状态栏文字
    text_disabled: str  # 禁用下拉框文字
    accent: str  # 按钮
    accent_hover: str
    error: str  # 状态栏错误提示
    appearance_mode: str  # customtkinter 外观模式


THEMES: Dict[str, ThemeTokens] = {
    "dark_gray": ThemeTokens(
        bg_primary="#282828",
        bg_secondary="#1E1E1E",
        text_primary="#FFFFFF",
        text_secondary="#CCCCCC",
        text_disabled="#888888",
        accent="#4A9EFF",
        accent_hover="#6BB5FF",
        error="#EB5757",
        appearance_mode="dark",
    ),
    "light": ThemeTokens(
        bg_primary="#FFFFFF",
        bg_secondary="#F5F5F5",
        text_primary="#000000",
        text_secondary="#666666",
        text_disabled="#999999",
        accent="#0078D4",
        accent_hover="#005A9E",
        error="#E81123",
        appearance_mode="light",
    ),
}


def get_theme(name: str) -> ThemeTokens:
    """获取指定主题的 token，未知主题回退到 dark_gray"""
    return THEMES.get(name, THEMES["dark_gray"])


def get_theme_names() -> list[str]:
    return list(THEMES.keys())
