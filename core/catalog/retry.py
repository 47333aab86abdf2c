"""
语言目录获取的重试工具
"""

import time
from typing import List

from core.exceptions import AppException, CatalogUnavailableError, should_retry
from core.language import Language
from core.logger import get_logger

logger = get_logger()


def fetch_languages(catalog, max_retries: int = 2, retry_delay: float = 1.0) -> List[Language]:
    """获取语言列表，可重试错误按指数退避重试

    Args:
        catalog: LanguageCatalog 实例
        max_retries: 最大重试次数（不含首次请求）
        retry_delay: 首次重试前的等待秒数，之后每次翻倍

    Returns:
        Language 列表

    Raises:
        AppException: 不可重试的错误（如 AUTH、PARSE）原样抛出
        CatalogUnavailableError: 重试耗尽
    """
    attempt = 0
    while True:
        try:
            return catalog.list_languages()
        except AppException as e:
            if not should_retry(e.error_type):
                raise
            if attempt >= max_retries:
                raise CatalogUnavailableError(catalog.provider_name, e)

            attempt += 1
            logger.warning_i18n(
                "catalog_retry",
                component="catalog",
                provider=catalog.provider_name,
                attempt=attempt,
                max_retries=max_retries,
                error_type=e.error_type.value,
            )
            time.sleep(retry_delay * (2 ** (attempt - 1)))
