"""
Language & 语言选择相关的数据模型
语言配置模块
"""
from typing import Optional
from dataclasses import dataclass
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Language:
    """翻译服务支持的一种语言

    由语言目录（core.catalog）创建，选择面板只读取不修改
    """
    code: str  # 语言代码，如 "en", "da", "zh-CN"
    name: str  # 显示名称，如 "English", "Danish"


class LanguageOption:
    """下拉框条目：包装一个 Language，显示其名称

    每个列表为每种语言创建独立实例，源/目标两个列表不共享条目对象
    """

    __slots__ = ("language",)

    def __init__(self, language: Language):
        self.language = language

    @property
    def code(self) -> str:
        return self.language.code

    @property
    def label(self) -> str:
        return self.language.name

    def __str__(self) -> str:
        return self.label

    def __repr__(self) -> str:
        return f"LanguageOption({self.language.code!r}, {self.language.name!r})"


@dataclass
class LanguageConfig:
    """语言选择配置

    保存用户最近一次选择的源语言和目标语言（代码 + 名称），
    启动时用代码恢复选择，名称用于目录加载前的展示
    """
    last_source_language_code: Optional[str] = None
    last_source_language_name: Optional[str] = None
    last_target_language_code: Optional[str] = None
    last_target_language_name: Optional[str] = None

    def to_dict(self) -> dict:
        """转换为字典（用于 JSON 序列化）"""
        return {
            "last_source_language_code": self.last_source_language_code,
            "last_source_language_name": self.last_source_language_name,
            "last_target_language_code": self.last_target_language_code,
            "last_target_language_name": self.last_target_language_name,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LanguageConfig":
        """从字典创建（用于 JSON 反序列化）

        兼容旧版插件配置的驼峰字段名（lastSourceLanguageCode 等）
        """
        values = {}
        for field_name in cls.__dataclass_fields__:
            legacy_name = _to_camel_case(field_name)
            if field_name in data:
                value = data[field_name]
            elif legacy_name in data:
                value = data[legacy_name]
                logger.debug(f"检测到旧字段名 '{legacy_name}'，已转换为 '{field_name}'")
            else:
                continue

            if value is not None and not isinstance(value, str):
                logger.warning(f"配置字段 '{field_name}' 不是字符串（{value!r}），已忽略")
                value = None
            values[field_name] = value
        return cls(**values)

    def set_slot(self, slot: str, language: Language) -> None:
        """写入 source / target 槽位的代码和名称"""
        if slot not in ("source", "target"):
            raise ValueError(f"unknown language slot: {slot}")
        setattr(self, f"last_{slot}_language_code", language.code)
        setattr(self, f"last_{slot}_language_name", language.name)

    def get_code(self, slot: str) -> Optional[str]:
        return getattr(self, f"last_{slot}_language_code", None)


def _to_camel_case(snake: str) -> str:
    head, *rest = snake.split("_")
    return head + "".join(part.capitalize() for part in rest)


def codes_equal(a: Optional[str], b: Optional[str]) -> bool:
    """语言代码比较（忽略大小写）

    Args:
        a: 语言代码，如 "DA"
        b: 语言代码，如 "da"

    Returns:
        两者都是非空字符串且忽略大小写相等时返回 True
    """
    if not isinstance(a, str) or not isinstance(b, str) or not a or not b:
        return False
    return a.casefold() == b.casefold()
