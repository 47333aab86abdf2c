"""
统一异常定义
语言目录加载、配置读写等模块共用的错误处理基础设施
"""
from enum import Enum
from typing import Optional


class ErrorType(str, Enum):
    """统一错误类型枚举

    所有模块抛错必须映射到以下类型
    """
    NETWORK = "network"  # 网络不可达、DNS 失败、连接重置等
    TIMEOUT = "timeout"  # 显式超时
    RATE_LIMIT = "rate_limit"  # 对方限流（429）、配额耗尽
    AUTH = "auth"  # 无效/缺失 API Key
    FILE_IO = "file_io"  # 文件系统异常（权限不足、磁盘满、原子重命名失败）
    PARSE = "parse"  # 响应结构解析失败、JSON 解析失败
    INVALID_INPUT = "invalid_input"  # 参数不完整、配置错误
    EXTERNAL_SERVICE = "external_service"  # 第三方服务异常但非网络问题（5xx、依赖缺失）
    UNKNOWN = "unknown"  # 无法归类的其他错误


class AppException(Exception):
    """统一应用异常

    所有模块的异常都应该映射为这个类型，包含 error_type 和可选的原始异常

    Attributes:
        error_type: 错误类型（ErrorType 枚举）
        cause: 原始异常（可选）
    """

    def __init__(
        self,
        message: str,
        *,
        error_type: ErrorType,
        cause: Optional[Exception] = None
    ):
        super().__init__(message)
        self.error_type = error_type
        self.cause = cause

    def __str__(self) -> str:
        base = f"[{self.error_type.value}] {super().__str__()}"
        if self.cause:
            base += f" (caused by: {type(self.cause).__name__}: {self.cause})"
        return base


class CatalogUnavailableError(AppException):
    """语言目录不可用异常

    重试耗尽后由 fetch_languages 抛出，保留最后一次失败的错误类型
    """

    def __init__(self, provider: str, last_error: AppException):
        from core.logger import translate_exception

        super().__init__(
            translate_exception("exception.catalog_unavailable", provider=provider),
            error_type=last_error.error_type,
            cause=last_error,
        )
        self.provider = provider


def should_retry(error_type: ErrorType) -> bool:
    """判断错误类型是否应该重试

    - NETWORK, TIMEOUT, RATE_LIMIT, EXTERNAL_SERVICE: 可重试
    - AUTH, PARSE, INVALID_INPUT, FILE_IO, UNKNOWN: 不重试

    Args:
        error_type: 错误类型

    Returns:
        是否应该重试
    """
    retry_types = {
        ErrorType.NETWORK,
        ErrorType.TIMEOUT,
        ErrorType.RATE_LIMIT,
        ErrorType.EXTERNAL_SERVICE,
    }
    return error_type in retry_types
