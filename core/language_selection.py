"""
语言选择状态模型

源语言 / 目标语言两个独立的选择列表，以及选择变化时写入配置的逻辑。
UI 层（ui.components.language_selection_panel）只负责渲染这个模型，
所有状态变化都在这里完成，便于脱离 GUI 测试
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from config.manager import AppConfig, ConfigManager
from core.language import Language, LanguageOption, codes_equal
from core.logger import get_logger

logger = get_logger()

SOURCE = "source"
TARGET = "target"
SLOTS = (SOURCE, TARGET)

# (slot, option) -> None
SelectionListener = Callable[[str, LanguageOption], None]


@dataclass
class SelectionList:
    """单个下拉列表的状态

    禁用时为空且无选中项；启用时 items 顺序与语言目录顺序一致
    """
    slot: str
    enabled: bool = False
    items: List[LanguageOption] = field(default_factory=list)
    selected: Optional[LanguageOption] = None

    def find(self, code: str) -> Optional[LanguageOption]:
        """按顺序查找第一个代码匹配的条目（忽略大小写）"""
        for option in self.items:
            if codes_equal(option.code, code):
                return option
        return None

    def index_of(self, option: LanguageOption) -> int:
        """按身份查找条目位置，不在列表中返回 -1

        目录中允许出现重复语言，两个相同的条目仍是不同的可选项，所以不能用 ==
        """
        for i, item in enumerate(self.items):
            if item is option:
                return i
        return -1

    @property
    def labels(self) -> List[str]:
        return [option.label for option in self.items]

    @property
    def selected_index(self) -> int:
        if self.selected is None:
            return -1
        return self.index_of(self.selected)


class LanguageSelectionModel:
    """语言选择模型

    两种状态：
    - 禁用：两个列表都为空，不可交互，不触发任何事件
    - 启用：两个列表包含相同的语言目录（各自独立的条目实例）

    只有 select_* / set_*_language 会走选择变化路径（写配置 + 通知监听者），
    enable / disable 整体替换状态，不触发任何选择事件
    """

    def __init__(self, config_manager: ConfigManager, app_config: AppConfig):
        """
        Args:
            config_manager: 配置管理器，选择变化后调用 save 持久化
            app_config: 当前配置对象，选择写入 app_config.language
        """
        self.config_manager = config_manager
        self.app_config = app_config
        self.source = SelectionList(SOURCE)
        self.target = SelectionList(TARGET)
        self._listeners: List[SelectionListener] = []

    # ============ 监听者 ============

    def add_listener(self, listener: SelectionListener) -> None:
        """注册选择变化监听者（在配置写入之后调用）"""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: SelectionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ============ 启用 / 禁用 ============

    @property
    def enabled(self) -> bool:
        return self.source.enabled and self.target.enabled

    def disable(self) -> None:
        """清空并禁用两个列表（幂等，不触发事件）"""
        self.source = SelectionList(SOURCE)
        self.target = SelectionList(TARGET)

    def enable(self, languages: Sequence[Language]) -> None:
        """加载语言目录并启用两个列表

        两个列表按输入顺序各自创建条目，不去重，不预设选中项

        Args:
            languages: 语言目录（有序）
        """
        self.source = SelectionList(
            SOURCE, enabled=True, items=[LanguageOption(lang) for lang in languages]
        )
        self.target = SelectionList(
            TARGET, enabled=True, items=[LanguageOption(lang) for lang in languages]
        )
        logger.debug_i18n(
            "language_options_loaded",
            component="language_panel",
            item_count=len(self.source.items),
        )

    # ============ 按代码恢复选择 ============

    def set_source_language(self, code: Optional[str]) -> bool:
        """按语言代码选中源语言，例如 'en'

        Returns:
            是否找到并选中（找不到只记录警告，不抛异常）
        """
        return self._set_language(self.source, code)

    def set_target_language(self, code: Optional[str]) -> bool:
        """按语言代码选中目标语言，例如 'da'"""
        return self._set_language(self.target, code)

    def _set_language(self, selection: SelectionList, code: Optional[str]) -> bool:
        # 非字符串（例如手工编辑的配置中的数字）按空代码处理
        if not code or not isinstance(code, str):
            logger.warning_i18n("language_null_code", component="language_panel", slot=selection.slot)
            return False

        option = selection.find(code)
        if option is None:
            logger.warning_i18n(
                "language_not_found",
                component="language_panel",
                slot=selection.slot,
                language_code=code,
                item_count=len(selection.items),
            )
            return False

        self._select(selection, option)
        return True

    # ============ 用户选择 ============

    def select_source(self, option: LanguageOption) -> bool:
        """用户在源语言下拉框中选中条目

        Returns:
            是否触发了选择变化
        """
        return self._select(self.source, option)

    def select_target(self, option: LanguageOption) -> bool:
        """用户在目标语言下拉框中选中条目"""
        return self._select(self.target, option)

    def select_source_index(self, index: int) -> bool:
        return self._select_index(self.source, index)

    def select_target_index(self, index: int) -> bool:
        return self._select_index(self.target, index)

    def _select_index(self, selection: SelectionList, index: int) -> bool:
        if not 0 <= index < len(selection.items):
            return False
        return self._select(selection, selection.items[index])

    def _select(self, selection: SelectionList, option: LanguageOption) -> bool:
        # 禁用的列表、其他列表的条目都不接受；重复选中同一条目不算变化
        if not selection.enabled or selection.index_of(option) < 0:
            return False
        if selection.selected is option:
            return False

        selection.selected = option
        self._on_selection_changed(selection.slot, option)
        return True

    def _on_selection_changed(self, slot: str, option: LanguageOption) -> None:
        """选择变化：写入对应槽位并持久化，然后通知监听者"""
        language = option.language
        logger.info_i18n(
            f"language_selected_{slot}",
            component="language_panel",
            slot=slot,
            language_code=language.code,
            language_name=language.name,
        )

        self.app_config.language.set_slot(slot, language)
        self.config_manager.save(self.app_config)

        logger.info_i18n(
            f"language_saved_{slot}",
            component="language_panel",
            slot=slot,
            language_code=language.code,
            language_name=language.name,
        )

        for listener in list(self._listeners):
            listener(slot, option)
