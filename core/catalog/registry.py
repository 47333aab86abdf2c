"""
语言目录注册表 + 工厂函数
根据配置创建对应的目录实例
"""

from typing import Dict, List, Optional, Type

from config.manager import CatalogConfig
from core.exceptions import AppException, ErrorType
from core.logger import translate_exception

# provider 名称 -> 实现类（在 _init_registry() 中初始化，避免循环导入）
_CATALOG_REGISTRY: Dict[str, Type] = {}


def _init_registry() -> None:
    """初始化注册表（延迟导入，google_cloud 依赖 requests）"""
    if _CATALOG_REGISTRY:
        return

    from .google_translate import GoogleTranslateCatalog
    from .google_cloud import GoogleCloudCatalog

    _CATALOG_REGISTRY.update(
        {
            "google_translate": GoogleTranslateCatalog,
            "google": GoogleTranslateCatalog,  # 别名
            "google_cloud": GoogleCloudCatalog,
        }
    )


def register_catalog(name: str, catalog_class: Type) -> None:
    """注册新的目录来源

    Args:
        name: 来源名称（小写）
        catalog_class: 实现类，构造参数为 CatalogConfig
    """
    _init_registry()
    _CATALOG_REGISTRY[name.lower()] = catalog_class


def get_catalog_class(name: str) -> Optional[Type]:
    _init_registry()
    return _CATALOG_REGISTRY.get(name.lower())


def list_catalogs() -> List[str]:
    _init_registry()
    return sorted(_CATALOG_REGISTRY)


def create_language_catalog(catalog_config: CatalogConfig):
    """创建语言目录实例（工厂函数）

    Args:
        catalog_config: 目录配置

    Returns:
        LanguageCatalog 实例

    Raises:
        AppException: provider 不支持（INVALID_INPUT）或初始化失败
    """
    catalog_class = get_catalog_class(catalog_config.provider)
    if catalog_class is None:
        raise AppException(
            translate_exception(
                "exception.catalog_provider_unsupported",
                provider=catalog_config.provider,
                available=", ".join(list_catalogs()),
            ),
            error_type=ErrorType.INVALID_INPUT,
        )
    return catalog_class(catalog_config)
