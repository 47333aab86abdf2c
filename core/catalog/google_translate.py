"""
Google 翻译语言目录（免费版）

使用 deep-translator 库提供的 Google 翻译支持语言表，不需要 API Key
"""

from typing import List

from config.manager import CatalogConfig
from core.exceptions import AppException, ErrorType
from core.language import Language
from core.logger import get_logger, translate_exception

logger = get_logger()


class GoogleTranslateCatalog:
    """Google 翻译语言目录（免费版）"""

    provider_name = "google_translate"

    def __init__(self, catalog_config: CatalogConfig):
        self.catalog_config = catalog_config

        try:
            from deep_translator import GoogleTranslator

            self._translator_class = GoogleTranslator
        except ImportError as e:
            raise AppException(
                translate_exception("exception.dependency_missing", library="deep-translator"),
                error_type=ErrorType.EXTERNAL_SERVICE,
                cause=e,
            )

    def list_languages(self) -> List[Language]:
        """获取支持的语言列表

        deep-translator 返回 {名称: 代码}，名称为小写（如 "chinese (simplified)"），
        这里转换为标题格式用于显示
        """
        try:
            translator = self._translator_class(source="auto", target="en")
            supported = translator.get_supported_languages(as_dict=True)
        except Exception as e:
            raise AppException(
                translate_exception("exception.catalog_request_failed", provider=self.provider_name),
                error_type=ErrorType.EXTERNAL_SERVICE,
                cause=e,
            )

        if not isinstance(supported, dict):
            raise AppException(
                translate_exception("exception.catalog_parse_failed", provider=self.provider_name),
                error_type=ErrorType.PARSE,
            )

        languages = [Language(code=code, name=name.title()) for name, code in supported.items()]
        logger.debug_i18n(
            "catalog_fetched",
            component="catalog",
            provider=self.provider_name,
            item_count=len(languages),
        )
        return languages
