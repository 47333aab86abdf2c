"""
语言选择面板

源语言 / 目标语言两个下拉框，数据和选择逻辑都在 core.language_selection 中，
这里只负责渲染和把用户操作转发给模型
"""

import customtkinter as ctk
from typing import Optional, Sequence

from config.manager import AppConfig, ConfigManager
from core.i18n import t
from core.language import Language, LanguageOption
from core.language_selection import (
    SOURCE,
    TARGET,
    LanguageSelectionModel,
    SelectionList,
)
from ui.fonts import body_font
from ui.themes import ThemeTokens, get_theme

COMBO_WIDTH = 160
COMBO_HEIGHT = 24


class LanguageSelectionPanel(ctk.CTkFrame):
    """语言选择面板

    包含两行（居中）：
    - 源语言：标签 + 下拉框
    - 目标语言：标签 + 下拉框

    未加载语言目录前两个下拉框为空且禁用
    """

    def __init__(
        self,
        parent,
        config_manager: ConfigManager,
        app_config: AppConfig,
        model: Optional[LanguageSelectionModel] = None,
        theme: Optional[ThemeTokens] = None,
        **kwargs
    ):
        """初始化语言选择面板

        Args:
            parent: 父容器
            config_manager: 配置管理器（选择变化后保存）
            app_config: 当前配置
            model: 语言选择模型，默认根据配置新建
            theme: 主题 token，默认使用配置中的主题
        """
        self.theme = theme or get_theme(app_config.theme)
        kwargs.setdefault("fg_color", self.theme.bg_primary)
        super().__init__(parent, **kwargs)

        self.model = model or LanguageSelectionModel(config_manager, app_config)
        self.model.add_listener(self._on_model_selection_changed)

        self.grid_columnconfigure(0, weight=1)
        self._build_ui()
        self._render()

    def _build_ui(self):
        """构建 UI"""
        self._source_label, self.source_combo = self._build_row(
            0, t("source_language_label"), self._on_source_combo_selected
        )
        self._target_label, self.target_combo = self._build_row(
            1, t("target_language_label"), self._on_target_combo_selected
        )

    def _build_row(self, row: int, text: str, command):
        """构建一行：标签 + 下拉框，整体水平居中"""
        row_frame = ctk.CTkFrame(self, fg_color="transparent")
        row_frame.grid(row=row, column=0, pady=(10, 0) if row == 0 else 10)

        label = ctk.CTkLabel(
            row_frame, text=text, font=body_font(), text_color=self.theme.text_primary
        )
        label.pack(side="left", padx=(0, 5))

        combo = ctk.CTkComboBox(
            row_frame,
            values=[],
            width=COMBO_WIDTH,
            height=COMBO_HEIGHT,
            font=body_font(),
            dropdown_font=body_font(),
            text_color=self.theme.text_primary,
            text_color_disabled=self.theme.text_disabled,
            state="disabled",
            command=command,
        )
        combo.pack(side="left")
        return label, combo

    # ============ 对外接口 ============

    def disable(self) -> None:
        """清空并禁用两个下拉框"""
        self.model.disable()
        self._render()

    def enable(self, languages: Sequence[Language]) -> None:
        """加载语言目录并启用两个下拉框

        Args:
            languages: 翻译服务支持的语言列表
        """
        self.model.enable(languages)
        self._render()

    def set_source_language(self, code: Optional[str]) -> bool:
        """按语言代码选中源语言，例如 'en'"""
        return self.model.set_source_language(code)

    def set_target_language(self, code: Optional[str]) -> bool:
        """按语言代码选中目标语言，例如 'da'"""
        return self.model.set_target_language(code)

    def refresh_language(self) -> None:
        """刷新语言相关文本"""
        self._source_label.configure(text=t("source_language_label"))
        self._target_label.configure(text=t("target_language_label"))
        self._render()

    # ============ 渲染 ============

    def _render(self) -> None:
        self._render_list(self.source_combo, self.model.source)
        self._render_list(self.target_combo, self.model.target)

    def _render_list(self, combo: ctk.CTkComboBox, selection: SelectionList) -> None:
        if not selection.enabled:
            combo.configure(values=[], state="normal")
            combo.set(t("language_not_loaded"))
            combo.configure(state="disabled")
            return

        combo.configure(values=selection.labels, state="readonly")
        combo.set(selection.selected.label if selection.selected else "")

    # ============ 事件 ============

    def _on_source_combo_selected(self, value: str) -> None:
        self._forward_selection(SOURCE, value)

    def _on_target_combo_selected(self, value: str) -> None:
        self._forward_selection(TARGET, value)

    def _forward_selection(self, slot: str, value: str) -> None:
        """下拉框回调只给出文字，映射回第一个同名条目"""
        selection = self.model.source if slot == SOURCE else self.model.target
        if value not in selection.labels:
            return
        index = selection.labels.index(value)
        if slot == SOURCE:
            self.model.select_source_index(index)
        else:
            self.model.select_target_index(index)

    def _on_model_selection_changed(self, slot: str, option: LanguageOption) -> None:
        # combo.set() 不会触发 command，不会回环
        combo = self.source_combo if slot == SOURCE else self.target_combo
        combo.set(option.label)
