"""
语言目录测试

deep-translator 和 requests 全部 mock，不访问网络
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from config.manager import CatalogConfig
from core.catalog import create_language_catalog, fetch_languages, list_catalogs, register_catalog
from core.catalog.google_cloud import LANGUAGES_URL, GoogleCloudCatalog
from core.catalog.google_translate import GoogleTranslateCatalog
from core.exceptions import AppException, CatalogUnavailableError, ErrorType, should_retry
from core.language import Language


def _response(status=200, payload=None, json_error=None):
    response = MagicMock()
    response.status_code = status
    if json_error:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


class TestGoogleTranslateCatalog:
    """免费版 Google 翻译目录"""

    def test_list_languages_keeps_order_and_titles_names(self):
        with patch("deep_translator.GoogleTranslator") as translator_class:
            translator_class.return_value.get_supported_languages.return_value = {
                "english": "en",
                "danish": "da",
                "chinese (simplified)": "zh-CN",
            }
            catalog = GoogleTranslateCatalog(CatalogConfig())
            languages = catalog.list_languages()

        assert languages == [
            Language("en", "English"),
            Language("da", "Danish"),
            Language("zh-CN", "Chinese (Simplified)"),
        ]
        translator_class.return_value.get_supported_languages.assert_called_once_with(as_dict=True)

    def test_library_error_is_external_service(self):
        with patch("deep_translator.GoogleTranslator") as translator_class:
            translator_class.return_value.get_supported_languages.side_effect = RuntimeError("boom")
            catalog = GoogleTranslateCatalog(CatalogConfig())
            with pytest.raises(AppException) as exc_info:
                catalog.list_languages()

        assert exc_info.value.error_type == ErrorType.EXTERNAL_SERVICE
        assert isinstance(exc_info.value.cause, RuntimeError)

    def test_unexpected_shape_is_parse_error(self):
        with patch("deep_translator.GoogleTranslator") as translator_class:
            translator_class.return_value.get_supported_languages.return_value = ["en", "da"]
            catalog = GoogleTranslateCatalog(CatalogConfig())
            with pytest.raises(AppException) as exc_info:
                catalog.list_languages()

        assert exc_info.value.error_type == ErrorType.PARSE


class TestGoogleCloudCatalog:
    """Cloud Translation v2 目录"""

    @pytest.fixture
    def cloud_config(self):
        return CatalogConfig(provider="google_cloud", api_key="test-key", display_language="de")

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("CHAT_TRANSLATOR_API_KEY", raising=False)
        with pytest.raises(AppException) as exc_info:
            GoogleCloudCatalog(CatalogConfig(provider="google_cloud"))
        assert exc_info.value.error_type == ErrorType.AUTH

    def test_list_languages(self, cloud_config):
        session = MagicMock()
        session.get.return_value = _response(
            payload={
                "data": {
                    "languages": [
                        {"language": "en", "name": "Englisch"},
                        {"language": "da", "name": "Dänisch"},
                        {"language": "xx"},
                    ]
                }
            }
        )

        languages = GoogleCloudCatalog(cloud_config, session=session).list_languages()

        assert languages == [
            Language("en", "Englisch"),
            Language("da", "Dänisch"),
            Language("xx", "xx"),
        ]
        session.get.assert_called_once_with(
            LANGUAGES_URL,
            params={"key": "test-key", "target": "de"},
            timeout=cloud_config.timeout_seconds,
        )

    @pytest.mark.parametrize(
        "status, error_type",
        [
            (401, ErrorType.AUTH),
            (403, ErrorType.AUTH),
            (429, ErrorType.RATE_LIMIT),
            (500, ErrorType.EXTERNAL_SERVICE),
            (503, ErrorType.EXTERNAL_SERVICE),
            (400, ErrorType.INVALID_INPUT),
        ],
    )
    def test_http_status_mapping(self, cloud_config, status, error_type):
        session = MagicMock()
        session.get.return_value = _response(status=status)

        with pytest.raises(AppException) as exc_info:
            GoogleCloudCatalog(cloud_config, session=session).list_languages()

        assert exc_info.value.error_type == error_type
        assert str(status) in str(exc_info.value)

    def test_timeout(self, cloud_config):
        session = MagicMock()
        session.get.side_effect = requests.exceptions.ReadTimeout("slow")

        with pytest.raises(AppException) as exc_info:
            GoogleCloudCatalog(cloud_config, session=session).list_languages()

        assert exc_info.value.error_type == ErrorType.TIMEOUT

    def test_connection_error(self, cloud_config):
        session = MagicMock()
        session.get.side_effect = requests.exceptions.ConnectionError("dns")

        with pytest.raises(AppException) as exc_info:
            GoogleCloudCatalog(cloud_config, session=session).list_languages()

        assert exc_info.value.error_type == ErrorType.NETWORK

    @pytest.mark.parametrize(
        "response",
        [
            _response(json_error=ValueError("not json")),
            _response(payload={"data": {}}),
            _response(payload={"data": {"languages": [{"name": "no code"}]}}),
            _response(payload=None),
        ],
    )
    def test_bad_payload_is_parse_error(self, cloud_config, response):
        session = MagicMock()
        session.get.return_value = response

        with pytest.raises(AppException) as exc_info:
            GoogleCloudCatalog(cloud_config, session=session).list_languages()

        assert exc_info.value.error_type == ErrorType.PARSE


class TestRegistry:
    """目录注册表 / 工厂"""

    def test_builtin_providers(self):
        assert {"google", "google_translate", "google_cloud"} <= set(list_catalogs())

    def test_unknown_provider(self):
        with pytest.raises(AppException) as exc_info:
            create_language_catalog(CatalogConfig(provider="babelfish"))
        assert exc_info.value.error_type == ErrorType.INVALID_INPUT
        assert "babelfish" in str(exc_info.value)

    def test_register_custom_provider(self):
        class StaticCatalog:
            provider_name = "static"

            def __init__(self, catalog_config):
                self.catalog_config = catalog_config

            def list_languages(self):
                return [Language("en", "English")]

        register_catalog("Static", StaticCatalog)
        catalog = create_language_catalog(CatalogConfig(provider="STATIC"))

        assert isinstance(catalog, StaticCatalog)
        assert catalog.list_languages() == [Language("en", "English")]


class FlakyCatalog:
    """按顺序返回结果或抛出异常的测试目录"""

    provider_name = "flaky"

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0

    def list_languages(self):
        self.calls += 1
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class TestFetchLanguages:
    """重试逻辑"""

    def test_success_first_try(self):
        catalog = FlakyCatalog([Language("en", "English")])
        assert fetch_languages(catalog, retry_delay=0) == [Language("en", "English")]
        assert catalog.calls == 1

    def test_retries_transient_errors(self, log_records):
        catalog = FlakyCatalog(
            AppException("down", error_type=ErrorType.NETWORK),
            AppException("busy", error_type=ErrorType.RATE_LIMIT),
            [Language("da", "Danish")],
        )

        assert fetch_languages(catalog, max_retries=2, retry_delay=0) == [Language("da", "Danish")]
        assert catalog.calls == 3
        assert len([r for r in log_records if r[0] == "WARNING"]) == 2

    def test_non_retryable_error_is_raised_immediately(self):
        error = AppException("bad key", error_type=ErrorType.AUTH)
        catalog = FlakyCatalog(error, [Language("en", "English")])

        with pytest.raises(AppException) as exc_info:
            fetch_languages(catalog, max_retries=3, retry_delay=0)

        assert exc_info.value is error
        assert catalog.calls == 1

    def test_retries_exhausted(self):
        catalog = FlakyCatalog(
            *[AppException("timeout", error_type=ErrorType.TIMEOUT) for _ in range(3)]
        )

        with pytest.raises(CatalogUnavailableError) as exc_info:
            fetch_languages(catalog, max_retries=2, retry_delay=0)

        assert catalog.calls == 3
        assert exc_info.value.error_type == ErrorType.TIMEOUT
        assert exc_info.value.provider == "flaky"

    def test_exponential_backoff(self):
        catalog = FlakyCatalog(
            AppException("a", error_type=ErrorType.NETWORK),
            AppException("b", error_type=ErrorType.NETWORK),
            [],
        )
        with patch("core.catalog.retry.time.sleep") as sleep:
            fetch_languages(catalog, max_retries=2, retry_delay=0.5)

        assert [c.args[0] for c in sleep.call_args_list] == [0.5, 1.0]


def test_should_retry():
    assert should_retry(ErrorType.NETWORK)
    assert should_retry(ErrorType.EXTERNAL_SERVICE)
    assert not should_retry(ErrorType.AUTH)
    assert not should_retry(ErrorType.PARSE)
