"""
语言相关命令
列出语言目录、查看/设置上次选择的源语言和目标语言
"""
from pathlib import Path
from typing import Optional

from config.manager import ConfigManager
from core.i18n import t
from core.language_selection import LanguageSelectionModel
from core.logger import get_logger
from ui.business_logic import CatalogLoader


def _config_manager(args) -> ConfigManager:
    config_path: Optional[str] = getattr(args, "config", None)
    return ConfigManager(Path(config_path) if config_path else None)


def list_languages_command(args):
    """列出当前目录来源支持的语言（每行：代码<TAB>名称）

    Returns:
        退出码（0 表示成功）
    """
    config_manager = _config_manager(args)
    app_config = config_manager.load()
    model = LanguageSelectionModel(config_manager, app_config)

    # 只读列表，不恢复上次的选择，避免改写配置文件
    languages = CatalogLoader(model, app_config, restore_selection=False).load_sync()
    if languages is None:
        return 1

    for language in languages:
        print(f"{language.code}\t{language.name}")
    return 0


def show_selection_command(args):
    """显示上次保存的源语言和目标语言"""
    app_config = _config_manager(args).load()
    saved = app_config.language
    not_set = t("cli_not_set")

    print(f"{t('source_language_label')} {saved.last_source_language_code or not_set}"
          f" ({saved.last_source_language_name or not_set})")
    print(f"{t('target_language_label')} {saved.last_target_language_code or not_set}"
          f" ({saved.last_target_language_name or not_set})")
    return 0


def set_source_command(args):
    """按代码设置源语言（加载目录后走正常的选择流程并保存）"""
    return _set_language(args, "source")


def set_target_command(args):
    """按代码设置目标语言"""
    return _set_language(args, "target")


def _set_language(args, slot: str) -> int:
    logger = get_logger()
    config_manager = _config_manager(args)
    app_config = config_manager.load()
    model = LanguageSelectionModel(config_manager, app_config)

    if CatalogLoader(model, app_config).load_sync() is None:
        return 1

    if slot == "source":
        found = model.set_source_language(args.code)
    else:
        found = model.set_target_language(args.code)

    if not found:
        return 1

    selected = model.source.selected if slot == "source" else model.target.selected
    logger.info_i18n("cli_language_set", component="cli", slot=slot, language_code=selected.code,
                     language_name=selected.label)
    return 0
