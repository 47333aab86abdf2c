"""
Google Cloud Translation 语言目录

调用 Cloud Translation v2 的 languages 接口：
GET https://translation.googleapis.com/language/translate/v2/languages?key=...&target=en
"""

from typing import List

import requests

from config.manager import CatalogConfig, load_api_key
from core.exceptions import AppException, ErrorType
from core.language import Language
from core.logger import get_logger, translate_exception

logger = get_logger()

LANGUAGES_URL = "https://translation.googleapis.com/language/translate/v2/languages"


class GoogleCloudCatalog:
    """Google Cloud Translation 语言目录（需要 API Key）"""

    provider_name = "google_cloud"

    def __init__(self, catalog_config: CatalogConfig, session: requests.Session = None):
        """
        Args:
            catalog_config: 目录配置（api_key 支持 "env:NAME" 格式）
            session: 可选的 requests 会话（测试时注入）
        """
        self.catalog_config = catalog_config
        self.api_key = load_api_key(catalog_config.api_key)
        self.session = session or requests.Session()

        if not self.api_key:
            raise AppException(
                translate_exception("exception.catalog_api_key_missing"),
                error_type=ErrorType.AUTH,
            )

    def list_languages(self) -> List[Language]:
        params = {"key": self.api_key, "target": self.catalog_config.display_language}
        try:
            response = self.session.get(
                LANGUAGES_URL,
                params=params,
                timeout=self.catalog_config.timeout_seconds,
            )
        except requests.exceptions.Timeout as e:
            raise AppException(
                translate_exception("exception.catalog_timeout", provider=self.provider_name),
                error_type=ErrorType.TIMEOUT,
                cause=e,
            )
        except requests.exceptions.RequestException as e:
            raise AppException(
                translate_exception("exception.catalog_request_failed", provider=self.provider_name),
                error_type=ErrorType.NETWORK,
                cause=e,
            )

        self._raise_for_status(response)
        return self._parse(response)

    def _raise_for_status(self, response: requests.Response) -> None:
        """HTTP 状态码映射为统一错误类型"""
        status = response.status_code
        if status < 400:
            return

        if status in (401, 403):
            error_type = ErrorType.AUTH
        elif status == 429:
            error_type = ErrorType.RATE_LIMIT
        elif status >= 500:
            error_type = ErrorType.EXTERNAL_SERVICE
        else:
            error_type = ErrorType.INVALID_INPUT

        raise AppException(
            translate_exception(
                "exception.catalog_http_error", provider=self.provider_name, status=status
            ),
            error_type=error_type,
        )

    def _parse(self, response: requests.Response) -> List[Language]:
        try:
            entries = response.json()["data"]["languages"]
            languages = [
                Language(code=entry["language"], name=entry.get("name") or entry["language"])
                for entry in entries
            ]
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise AppException(
                translate_exception("exception.catalog_parse_failed", provider=self.provider_name),
                error_type=ErrorType.PARSE,
                cause=e,
            )

        logger.debug_i18n(
            "catalog_fetched",
            component="catalog",
            provider=self.provider_name,
            item_count=len(languages),
        )
        return languages
