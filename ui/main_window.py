"""
主窗口
语言选择面板 + 状态栏 + 重新加载按钮，启动时在后台加载语言目录
"""
import customtkinter as ctk
from typing import List, Optional

from config.manager import ConfigManager
from core.exceptions import AppException
from core.i18n import t, tn, set_language, get_language
from core.language import Language
from core.logger import get_logger
from ui.business_logic import CatalogLoader
from ui.components import LanguageSelectionPanel
from ui.fonts import heading_font, small_font
from ui.themes import get_theme

# 界面语言下拉框的显示文本是固定的，不随界面语言变化
UI_LANGUAGE_CHOICES = {"English": "en-US", "中文": "zh-CN"}


class MainWindow(ctk.CTk):
    """主窗口类

    - 顶部：标题 + 界面语言切换
    - 中间：语言选择面板
    - 底部：状态栏 + 重新加载语言按钮
    """

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        super().__init__()

        self.config_manager = config_manager or ConfigManager()
        self.app_config = self.config_manager.load()
        self._init_i18n()

        self.theme_tokens = get_theme(self.app_config.theme)
        ctk.set_appearance_mode(self.theme_tokens.appearance_mode)
        self.configure(fg_color=self.theme_tokens.bg_secondary)

        self.title(t("app_name"))
        self.geometry("420x240")
        self.minsize(360, 200)

        self._build_ui()

        self.catalog_loader = CatalogLoader(
            self.language_panel,
            self.app_config,
            schedule=lambda fn: self.after(0, fn),
            on_loaded=self._on_catalog_loaded,
            on_failed=self._on_catalog_failed,
        )
        self.after(100, self._on_reload_languages)

    def _init_i18n(self):
        """初始化 i18n，从配置读取语言设置（不支持的语言保持默认）"""
        if not set_language(self.app_config.ui_language):
            get_logger().warning_i18n("ui_language_unsupported", value=self.app_config.ui_language)

    def _build_ui(self):
        """构建 UI 布局"""
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        header = ctk.CTkFrame(self, fg_color="transparent")
        header.grid(row=0, column=0, sticky="ew", padx=12, pady=(12, 4))
        header.grid_columnconfigure(0, weight=1)

        self._title_label = ctk.CTkLabel(
            header, text=t("language_panel_title"), font=heading_font(),
            text_color=self.theme_tokens.text_primary,
        )
        self._title_label.grid(row=0, column=0, sticky="w")

        self.ui_language_combo = ctk.CTkOptionMenu(
            header,
            values=list(UI_LANGUAGE_CHOICES),
            width=100,
            command=self._on_ui_language_changed,
        )
        current = next(
            (label for label, code in UI_LANGUAGE_CHOICES.items() if code == get_language()),
            "English",
        )
        self.ui_language_combo.set(current)
        self.ui_language_combo.grid(row=0, column=1, sticky="e")

        self.language_panel = LanguageSelectionPanel(
            self, self.config_manager, self.app_config, theme=self.theme_tokens
        )
        self.language_panel.grid(row=1, column=0, sticky="nsew", padx=12, pady=4)

        footer = ctk.CTkFrame(self, fg_color="transparent")
        footer.grid(row=2, column=0, sticky="ew", padx=12, pady=(4, 12))
        footer.grid_columnconfigure(0, weight=1)

        self.status_label = ctk.CTkLabel(
            footer, text="", font=small_font(), text_color=self.theme_tokens.text_secondary,
            anchor="w",
        )
        self.status_label.grid(row=0, column=0, sticky="ew")

        self.reload_btn = ctk.CTkButton(
            footer,
            text=t("reload_languages"),
            width=120,
            fg_color=self.theme_tokens.accent,
            hover_color=self.theme_tokens.accent_hover,
            command=self._on_reload_languages,
        )
        self.reload_btn.grid(row=0, column=1, sticky="e")

    # ============ 目录加载 ============

    def _on_reload_languages(self):
        """开始加载语言目录（已在加载中则忽略）"""
        if self.catalog_loader.is_loading:
            return
        self.reload_btn.configure(state="disabled")
        self._set_status(t("status_loading_languages"))
        self.catalog_loader.load()

    def _on_catalog_loaded(self, languages: List[Language]):
        self.reload_btn.configure(state="normal")
        count = len(languages)
        self._set_status(tn("status_languages_loaded_single", "status_languages_loaded", count, count=count))

    def _on_catalog_failed(self, error: AppException):
        self.reload_btn.configure(state="normal")
        self._set_status(t("status_languages_failed", error_type=error.error_type.value), error=True)

    def _set_status(self, text: str, error: bool = False):
        self.status_label.configure(
            text=text,
            text_color=self.theme_tokens.error if error else self.theme_tokens.text_secondary,
        )

    # ============ 界面语言 ============

    def _on_ui_language_changed(self, value: str):
        """界面语言切换回调"""
        new_lang = UI_LANGUAGE_CHOICES.get(value)
        if new_lang is None or new_lang == get_language():
            return

        set_language(new_lang)
        self.app_config.ui_language = new_lang
        self.config_manager.save(self.app_config)
        get_logger().info_i18n("ui_language_changed", component="main_window", value=new_lang)

        self._refresh_ui_texts()

    def _refresh_ui_texts(self):
        """刷新所有界面文本"""
        self.title(t("app_name"))
        self._title_label.configure(text=t("language_panel_title"))
        self.reload_btn.configure(text=t("reload_languages"))
        self.language_panel.refresh_language()


def main():
    """GUI 主入口"""
    ctk.set_default_color_theme("blue")
    app = MainWindow()
    app.mainloop()


if __name__ == "__main__":
    main()
