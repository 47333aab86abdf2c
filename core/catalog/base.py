"""
语言目录接口
"""

from typing import List, Protocol

from core.language import Language


class LanguageCatalog(Protocol):
    """语言目录抽象接口

    所有目录来源都必须实现这个接口
    """

    provider_name: str

    def list_languages(self) -> List[Language]:
        """获取支持的语言列表（保持服务返回的顺序）

        Returns:
            Language 列表

        Raises:
            AppException: 获取失败时抛出，包含错误类型
        """
        ...
