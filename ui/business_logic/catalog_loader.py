"""
语言目录加载模块
在后台线程获取语言目录，回到 UI 线程后填充面板并恢复上次的选择
"""

import threading
from typing import Callable, List, Optional

from config.manager import AppConfig
from core.catalog import create_language_catalog, fetch_languages
from core.exceptions import AppException, ErrorType
from core.language import Language
from core.language_selection import SOURCE, TARGET
from core.logger import get_logger

logger = get_logger()

# schedule(callback)：把回调投递到 UI 线程执行，GUI 中为 lambda fn: widget.after(0, fn)
Scheduler = Callable[[Callable[[], None]], None]


def run_inline(callback: Callable[[], None]) -> None:
    """直接在当前线程执行（CLI / 测试使用）"""
    callback()


class CatalogLoader:
    """语言目录加载器

    面板（或 LanguageSelectionModel）需要提供 enable / disable /
    set_source_language / set_target_language 四个方法
    """

    def __init__(
        self,
        panel,
        app_config: AppConfig,
        schedule: Scheduler = run_inline,
        catalog_factory=create_language_catalog,
        on_loaded: Optional[Callable[[List[Language]], None]] = None,
        on_failed: Optional[Callable[[AppException], None]] = None,
        retry_delay: float = 1.0,
        restore_selection: bool = True,
    ):
        """
        Args:
            panel: 语言选择面板
            app_config: 当前配置（读取目录配置和上次选择）
            schedule: UI 线程投递函数
            catalog_factory: 目录工厂，参数为 CatalogConfig
            on_loaded: 加载成功回调（UI 线程）
            on_failed: 加载失败回调（UI 线程）
            retry_delay: 首次重试等待秒数
            restore_selection: 加载后是否恢复上次的选择（会走选择流程并写配置）
        """
        self.panel = panel
        self.app_config = app_config
        self.schedule = schedule
        self.catalog_factory = catalog_factory
        self.on_loaded = on_loaded
        self.on_failed = on_failed
        self.retry_delay = retry_delay
        self.restore_selection = restore_selection
        self._thread: Optional[threading.Thread] = None

    @property
    def is_loading(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def load(self) -> threading.Thread:
        """在后台线程加载目录，结果通过 schedule 回到 UI 线程

        Returns:
            启动的线程对象
        """

        def load_in_thread():
            try:
                languages = self._fetch()
            except AppException as e:
                self.schedule(lambda err=e: self._apply_failure(err))
                return
            self.schedule(lambda: self._apply_languages(languages))

        self._thread = threading.Thread(target=load_in_thread, daemon=True)
        self._thread.start()
        return self._thread

    def load_sync(self) -> Optional[List[Language]]:
        """在当前线程加载目录并填充面板

        Returns:
            成功时返回语言列表，失败返回 None（错误已记录日志）
        """
        try:
            languages = self._fetch()
        except AppException as e:
            self._apply_failure(e)
            return None
        self._apply_languages(languages)
        return languages

    def _fetch(self) -> List[Language]:
        catalog_config = self.app_config.catalog
        logger.info_i18n("catalog_loading", component="catalog_loader", provider=catalog_config.provider)
        try:
            catalog = self.catalog_factory(catalog_config)
            return fetch_languages(
                catalog, max_retries=catalog_config.max_retries, retry_delay=self.retry_delay
            )
        except AppException:
            raise
        except Exception as e:
            # 第三方库的未知异常统一映射，避免后台线程静默退出
            raise AppException(str(e), error_type=ErrorType.UNKNOWN, cause=e)

    def _apply_languages(self, languages: List[Language]) -> None:
        """UI 线程：填充面板并恢复上次的选择"""
        self.panel.enable(languages)
        logger.info_i18n("catalog_loaded", component="catalog_loader", item_count=len(languages))

        if self.restore_selection:
            self._restore_saved_selection()

        if self.on_loaded:
            self.on_loaded(languages)

    def _restore_saved_selection(self) -> None:
        saved = self.app_config.language
        for slot, restore in (
            (SOURCE, self.panel.set_source_language),
            (TARGET, self.panel.set_target_language),
        ):
            code = saved.get_code(slot)
            if code:
                restore(code)

    def _apply_failure(self, error: AppException) -> None:
        """UI 线程：禁用面板并记录错误"""
        self.panel.disable()
        logger.error_i18n(
            "catalog_load_failed",
            component="catalog_loader",
            error=str(error),
            error_type=error.error_type.value,
        )
        if self.on_failed:
            self.on_failed(error)
