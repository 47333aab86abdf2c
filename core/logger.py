"""
统一日志系统
支持：文件输出、控制台输出、UI回调、敏感信息脱敏、上下文字段、国际化
"""

import logging
import sys
import time
from core.sanitizer import sanitize_message as _sanitize_message
from pathlib import Path
from typing import Optional, Callable, List
from datetime import datetime
from threading import Lock, local
from logging.handlers import RotatingFileHandler

from config.manager import get_user_data_dir

# ============ 国际化支持 ============

_i18n_module = None
_i18n_lock = Lock()


def _get_i18n():
    """延迟加载 i18n 模块，避免循环依赖

    Returns:
        core.i18n 模块，如果不可用则返回 None
    """
    global _i18n_module
    if _i18n_module is None:
        with _i18n_lock:
            if _i18n_module is None:
                try:
                    from core import i18n

                    _i18n_module = i18n
                except ImportError:
                    _i18n_module = False
    return _i18n_module if _i18n_module else None


def translate_log(key: str, **kwargs) -> str:
    """翻译日志消息

    Args:
        key: 翻译键（支持 "log.xxx" 或 "xxx" 格式）
        **kwargs: 格式化参数（用于 {placeholder} 替换）

    Returns:
        翻译后的消息，如果翻译失败则返回原 key

    Example:
        >>> translate_log("language_saved_source", slot="source", language_name="Danish")
        "已保存源语言: Danish"  # 中文环境
        "Saved source language: Danish"  # 英文环境
    """
    i18n = _get_i18n()

    if i18n is None:
        if kwargs:
            return f"{key}: {', '.join(f'{k}={v}' for k, v in kwargs.items())}"
        return key

    if key.startswith("log.") or key.startswith("exception."):
        full_key = key
    else:
        full_key = f"log.{key}"

    text = i18n.t(full_key, default=key)

    if kwargs:
        try:
            text = text.format(**kwargs)
        except (KeyError, ValueError, IndexError):
            pass

    return text


def translate_exception(key: str, **kwargs) -> str:
    """翻译异常消息

    Args:
        key: 翻译键（支持 "exception.xxx" 或 "xxx" 格式）
        **kwargs: 格式化参数

    Returns:
        翻译后的消息，如果翻译失败则返回原 key
    """
    i18n = _get_i18n()

    if i18n is None:
        return key

    if not key.startswith("exception."):
        full_key = f"exception.{key}"
    else:
        full_key = key

    text = i18n.t(full_key, default=key)

    if kwargs:
        try:
            text = text.format(**kwargs)
        except (KeyError, ValueError, IndexError):
            pass

    return text


# Windows 控制台编码修复
if sys.platform == "win32" and hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")


# 线程本地存储，用于存储上下文信息（component 等）
_context = local()

# 额外字段输出顺序
EXTRA_FIELDS = ("provider", "slot", "language_code", "item_count", "attempt", "error_type")


def set_log_context(component: Optional[str] = None, **kwargs) -> None:
    """设置日志上下文（线程本地）

    Args:
        component: 组件名（如 language_panel, catalog_loader, cli）
        **kwargs: 其他上下文字段（provider, slot 等）
    """
    _context.component = component
    _context.extra_fields = kwargs


def clear_log_context() -> None:
    """清除日志上下文"""
    for attr in ("component", "extra_fields"):
        if hasattr(_context, attr):
            delattr(_context, attr)


class ContextFormatter(logging.Formatter):
    """支持上下文字段的日志格式化器

    格式：[时间] [级别] [component:<name>] 消息 [额外字段]
    """

    def format(self, record: logging.LogRecord) -> str:
        record.msg = _sanitize_message(str(record.msg))

        component = getattr(_context, "component", None) or getattr(
            record, "component", None
        )
        context_str = f"[component:{component}] " if component else ""

        extra_fields = getattr(_context, "extra_fields", {}) or {}
        extra_parts = []
        for key in EXTRA_FIELDS:
            value = extra_fields.get(key)
            if value is None:
                value = getattr(record, key, None)
            if value is not None:
                extra_parts.append(f"{key}={value}")
        extra_str = " " + " ".join(extra_parts) if extra_parts else ""

        timestamp = datetime.fromtimestamp(record.created).strftime(
            "%Y-%m-%d %H:%M:%S.%f"
        )[:-3]
        level_str = f"{record.levelname:5s}"

        return f"[{timestamp}] [{level_str}] {context_str}{record.getMessage()}{extra_str}"


class Logger:
    """统一日志管理器

    - 日志格式包含 component 字段
    - 敏感信息脱敏
    - 日志轮转（20MB x 5份）
    - 回退策略（目录不可写时回退到控制台）
    """

    LEVELS = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }

    # Python logging 的保留字段（不能作为 extra 传递）
    RESERVED_FIELDS = {
        "filename", "lineno", "funcName", "pathname", "process", "processName",
        "thread", "threadName", "created", "msecs", "relativeCreated",
        "levelname", "levelno", "message", "name", "args", "exc_info",
        "exc_text", "stack_info", "module", "msg", "asctime", "taskName",
    }

    def __init__(
        self,
        name: str = "chat-translator",
        log_file: Optional[Path] = None,
        level: str = "INFO",
        console_output: bool = True,
        file_output: bool = True,
        auto_cleanup: bool = True,
        max_log_age_days: int = 14,
    ):
        """初始化日志器

        Args:
            name: 日志器名称
            log_file: 日志文件路径，如果为 None 则使用默认路径
            level: 日志级别（DEBUG/INFO/WARN/ERROR）
            console_output: 是否输出到控制台
            file_output: 是否输出到文件
            auto_cleanup: 是否在初始化时清理过期日志（默认 True）
            max_log_age_days: 日志最大保留天数（默认 14 天）
        """
        self.name = name
        self.level = self.LEVELS.get(level.upper(), logging.INFO)
        self.console_output = console_output
        self.file_output = file_output

        # 回调函数列表（供 UI 和测试使用）
        self._callbacks: List[Callable[[str, str, Optional[str]], None]] = []
        self._callback_lock = Lock()

        self.logger = logging.getLogger(name)
        self.logger.setLevel(self.level)
        self.logger.propagate = False

        # 避免重复添加 handler
        if self.logger.handlers:
            return

        if auto_cleanup and file_output:
            log_dir = log_file.parent if log_file else get_user_data_dir() / "logs"
            cleaned_count = cleanup_old_logs(log_dir, max_log_age_days)
            if cleaned_count > 0:
                logging.getLogger(f"{name}.cleanup").info(
                    translate_log(
                        "cleanup_old_logs",
                        cleaned_count=cleaned_count,
                        max_log_age_days=max_log_age_days,
                    )
                )

        formatter = ContextFormatter()

        if console_output:
            self._add_console_handler(formatter)

        if file_output:
            file_handler = self._create_file_handler(log_file, formatter)
            if file_handler:
                self.logger.addHandler(file_handler)
            else:
                if not console_output:
                    self._add_console_handler(formatter)
                self.logger.critical(translate_log("log_dir_not_writable"))

        if not self.logger.handlers:
            self.logger.addHandler(logging.NullHandler())

    def _add_console_handler(self, formatter: logging.Formatter) -> None:
        # 控制台日志写 stderr，stdout 只留给 CLI 命令的输出
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(self.level)
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

    def _create_file_handler(
        self, log_file: Optional[Path], formatter: logging.Formatter
    ) -> Optional[RotatingFileHandler]:
        """创建文件 handler（带错误处理）

        Returns:
            RotatingFileHandler 实例，如果创建失败则返回 None
        """
        try:
            if log_file is None:
                log_dir = get_user_data_dir() / "logs"
                log_dir.mkdir(parents=True, exist_ok=True)
                log_file = log_dir / "app.log"

            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=20 * 1024 * 1024,
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(self.level)
            file_handler.setFormatter(formatter)
            return file_handler
        except OSError:
            # 由调用方回退到控制台
            return None

    def add_callback(self, callback: Callable[[str, str, Optional[str]], None]) -> None:
        """添加日志回调函数（供 UI 使用）

        Args:
            callback: 回调函数，参数为 (level, message, component)
        """
        with self._callback_lock:
            if callback not in self._callbacks:
                self._callbacks.append(callback)

    def remove_callback(
        self, callback: Callable[[str, str, Optional[str]], None]
    ) -> None:
        """移除日志回调函数"""
        with self._callback_lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def _invoke_callbacks(
        self, level: str, message: str, component: Optional[str] = None
    ) -> None:
        with self._callback_lock:
            callbacks = list(self._callbacks)
        for callback in callbacks:
            try:
                callback(level, message, component)
            except Exception as e:
                # 回调失败不能影响日志主流程
                self.logger.debug(f"log callback failed: {e}")

    def _log_with_context(
        self, level: int, message: str, component: Optional[str] = None, **kwargs
    ) -> None:
        """带上下文的日志记录

        Args:
            level: 日志级别
            message: 日志消息（会自动脱敏）
            component: 组件名（可选，会覆盖上下文中的 component）
            **kwargs: 额外字段（provider, slot, language_code, item_count 等）
        """
        if level < self.level:
            return

        sanitized_message = _sanitize_message(message)

        final_component = component or getattr(_context, "component", None)
        extra_fields = getattr(_context, "extra_fields", {}) or {}
        merged_extra = {**extra_fields, **kwargs, "component": final_component}
        final_extra = {
            k: v for k, v in merged_extra.items() if k not in self.RESERVED_FIELDS
        }

        record = self.logger.makeRecord(
            self.logger.name,
            level,
            "",
            0,
            sanitized_message,
            (),
            None,
            func="",
            extra=final_extra,
        )
        self.logger.handle(record)

        self._invoke_callbacks(
            logging.getLevelName(level), sanitized_message, final_component
        )

    def _translate_if_key(self, message: str, **kwargs) -> str:
        """如果 message 是翻译键，则自动翻译（启发式判断）

        判断规则：全 ASCII、不以空格开头、包含下划线或点号、不含空格
        """
        is_key = (
            message.isascii()
            and " " not in message
            and ("_" in message or "." in message)
            and len(message) > 3
        )

        if is_key:
            translated = translate_log(message, **kwargs)
            if translated != message:
                return translated

        return message

    def debug(self, message: str, component: Optional[str] = None, **kwargs) -> None:
        """记录 DEBUG 级别日志（支持自动翻译）"""
        translated_message = self._translate_if_key(message, **kwargs)
        self._log_with_context(logging.DEBUG, translated_message, component, **kwargs)

    def info(self, message: str, component: Optional[str] = None, **kwargs) -> None:
        """记录 INFO 级别日志（支持自动翻译）"""
        translated_message = self._translate_if_key(message, **kwargs)
        self._log_with_context(logging.INFO, translated_message, component, **kwargs)

    def warning(self, message: str, component: Optional[str] = None, **kwargs) -> None:
        """记录 WARNING 级别日志（支持自动翻译）"""
        translated_message = self._translate_if_key(message, **kwargs)
        self._log_with_context(logging.WARNING, translated_message, component, **kwargs)

    def error(self, message: str, component: Optional[str] = None, **kwargs) -> None:
        """记录 ERROR 级别日志（支持自动翻译）"""
        translated_message = self._translate_if_key(message, **kwargs)
        self._log_with_context(logging.ERROR, translated_message, component, **kwargs)

    # ============ 显式国际化方法 ============

    def debug_i18n(self, key: str, component: Optional[str] = None, **kwargs) -> str:
        """显式国际化 DEBUG 日志（不做启发式判断，直接翻译 key）"""
        message = translate_log(key, **kwargs)
        self._log_with_context(logging.DEBUG, message, component, **kwargs)
        return message

    def info_i18n(self, key: str, component: Optional[str] = None, **kwargs) -> str:
        """显式国际化 INFO 日志

        Args:
            key: 翻译键（支持 "log.xxx" 或 "xxx" 格式）
            component: 组件名（可选）
            **kwargs: 格式化参数，同时作为额外字段写入日志

        Returns:
            翻译后的消息（用于状态栏等 UI 展示）

        Example:
            >>> msg = logger.info_i18n("language_selected_source", slot="source", language_name="English")
            # 中文环境：msg = "已选择源语言: English"
        """
        message = translate_log(key, **kwargs)
        self._log_with_context(logging.INFO, message, component, **kwargs)
        return message

    def warning_i18n(self, key: str, component: Optional[str] = None, **kwargs) -> str:
        """显式国际化 WARNING 日志

        Returns:
            翻译后的消息
        """
        message = translate_log(key, **kwargs)
        self._log_with_context(logging.WARNING, message, component, **kwargs)
        return message

    def error_i18n(self, key: str, component: Optional[str] = None, **kwargs) -> str:
        """显式国际化 ERROR 日志

        Returns:
            翻译后的消息
        """
        message = translate_log(key, **kwargs)
        self._log_with_context(logging.ERROR, message, component, **kwargs)
        return message

    def set_level(self, level: str) -> None:
        """设置日志级别"""
        self.level = self.LEVELS.get(level.upper(), logging.INFO)
        self.logger.setLevel(self.level)
        for handler in self.logger.handlers:
            handler.setLevel(self.level)


# 全局 logger 实例（单例模式）
_global_logger: Optional[Logger] = None


def get_logger(
    name: str = "chat-translator",
    log_file: Optional[Path] = None,
    level: str = "INFO",
    console_output: bool = True,
    file_output: bool = True,
    cleanup_old_logs: bool = True,
    max_log_age_days: int = 14,
) -> Logger:
    """获取全局 logger 实例（单例模式）

    首次调用的参数决定 logger 配置，之后的调用直接返回已有实例

    Returns:
        Logger 实例
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = Logger(
            name=name,
            log_file=log_file,
            level=level,
            console_output=console_output,
            file_output=file_output,
            auto_cleanup=cleanup_old_logs,
            max_log_age_days=max_log_age_days,
        )

    return _global_logger


def set_global_logger(logger: Logger) -> None:
    """设置全局 logger 实例（用于测试或自定义配置）"""
    global _global_logger
    _global_logger = logger


def cleanup_old_logs(log_dir: Optional[Path] = None, max_age_days: int = 14) -> int:
    """清理过期的日志文件（app.log, app.log.1, ...）

    Args:
        log_dir: 日志目录路径，如果为 None 则使用默认路径
        max_age_days: 最大保留天数（默认 14 天）

    Returns:
        清理的文件数量
    """
    if log_dir is None:
        log_dir = get_user_data_dir() / "logs"

    if not log_dir.exists():
        return 0

    max_age_seconds = max_age_days * 24 * 3600
    now = time.time()
    cleaned_count = 0

    for log_file in log_dir.iterdir():
        if not log_file.is_file() or not log_file.name.startswith("app.log"):
            continue
        try:
            if now - log_file.stat().st_mtime > max_age_seconds:
                log_file.unlink()
                cleaned_count += 1
        except OSError:
            # 文件可能被其他进程占用
            continue

    return cleaned_count
