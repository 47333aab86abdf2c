"""
字体配置模块
统一管理 UI 字体大小规格
"""

import customtkinter as ctk
from typing import Literal

FONT_SIZE_HEADING = 16  # 窗口标题
FONT_SIZE_BODY = 13  # 标签、下拉框、状态文本
FONT_SIZE_SMALL = 11  # 状态栏


def get_font(
    size: int, weight: Literal["normal", "bold"] = "normal", family: str = None
) -> ctk.CTkFont:
    """获取字体对象

    Args:
        size: 字体大小
        weight: 字体粗细（"normal" 或 "bold"）
        family: 字体族，可选

    Returns:
        CTkFont 对象
    """
    font_kwargs = {"size": size}
    if weight == "bold":
        font_kwargs["weight"] = "bold"
    if family:
        font_kwargs["family"] = family

    return ctk.CTkFont(**font_kwargs)


def heading_font(weight: Literal["normal", "bold"] = "bold") -> ctk.CTkFont:
    return get_font(FONT_SIZE_HEADING, weight)


def body_font(weight: Literal["normal", "bold"] = "normal") -> ctk.CTkFont:
    return get_font(FONT_SIZE_BODY, weight)


def small_font() -> ctk.CTkFont:
    return get_font(FONT_SIZE_SMALL)
