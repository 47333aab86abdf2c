"""
JSON I18n Provider

从 core/i18n/locales/ 加载 JSON 翻译文件，缺失的 key 回退到英文
"""

import json
from pathlib import Path
from typing import Dict, Optional
import logging

logger = logging.getLogger(__name__)

FALLBACK_LANGUAGE = "en-US"


class JsonI18nProvider:
    """JSON 翻译文件加载器

    Attributes:
        translations: 当前语言的翻译字典（已合并英文 fallback）
        language: 当前语言代码
    """

    def __init__(self, locale_dir: Path, lang_code: str = FALLBACK_LANGUAGE):
        self.locale_dir = locale_dir
        self.language = lang_code
        self.translations: Dict[str, str] = {}
        self._load(lang_code)

    @staticmethod
    def _lang_to_filename(lang_code: str) -> str:
        """zh-CN -> zh_CN.json"""
        return lang_code.replace("-", "_") + ".json"

    def _read(self, lang_code: str) -> Dict[str, str]:
        path = self.locale_dir / self._lang_to_filename(lang_code)
        if not path.exists():
            return {}
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Failed to load translations from {path}: {e}")
            return {}

    def _load(self, lang_code: str) -> None:
        """先加载英文作为 fallback，再用目标语言覆盖"""
        translations = self._read(FALLBACK_LANGUAGE)
        if lang_code != FALLBACK_LANGUAGE:
            translations.update(self._read(lang_code))
        self.translations = translations
        self.language = lang_code

    def reload(self, lang_code: Optional[str] = None) -> None:
        """重新加载翻译文件

        Args:
            lang_code: 新的语言代码，如果为 None 则使用当前语言
        """
        self._load(lang_code or self.language)

    def get(self, key: str, default: Optional[str] = None) -> str:
        """获取翻译文本，key 不存在时返回 default 或 key 本身"""
        return self.translations.get(key, default if default is not None else key)

    def nget(self, singular: str, plural: str, n: int) -> str:
        """获取复数形式的翻译（简单规则：n == 1 用单数）"""
        key = singular if n == 1 else plural
        return self.translations.get(key, key)

    def get_language(self) -> str:
        return self.language
