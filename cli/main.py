"""
CLI 主入口
参数解析和命令分发
"""

import argparse
import sys
import traceback
from pathlib import Path

from config.manager import ConfigManager
from core.i18n import t, set_language
from core.logger import get_logger, translate_log

from cli.languages import (
    list_languages_command,
    show_selection_command,
    set_source_command,
    set_target_command,
)


def gui_command(args):
    """启动图形界面"""
    from ui.main_window import MainWindow

    config_manager = ConfigManager(Path(args.config)) if args.config else None
    MainWindow(config_manager).mainloop()
    return 0


def create_parser() -> argparse.ArgumentParser:
    """创建命令行参数解析器

    Returns:
        配置好的 ArgumentParser 实例
    """
    parser = argparse.ArgumentParser(
        prog="chat-translator",
        description=t("cli_description"),
    )
    parser.add_argument("--config", type=str, help=t("cli_config_help"))
    parser.add_argument("-v", "--verbose", action="store_true", help=t("cli_verbose_help"))

    subparsers = parser.add_subparsers(dest="command", help=t("cli_subparsers_help"))

    gui_parser = subparsers.add_parser("gui", help=t("cli_gui_help"))
    gui_parser.set_defaults(func=gui_command)

    languages_parser = subparsers.add_parser("languages", help=t("cli_languages_help"))
    languages_parser.set_defaults(func=list_languages_command)

    show_parser = subparsers.add_parser("show", help=t("cli_show_help"))
    show_parser.set_defaults(func=show_selection_command)

    _add_set_language_parser(subparsers, "set-source", t("cli_set_source_help"), set_source_command)
    _add_set_language_parser(subparsers, "set-target", t("cli_set_target_help"), set_target_command)

    return parser


def _add_set_language_parser(subparsers, name: str, help_text: str, func):
    """添加 set-source / set-target 子命令解析器"""
    set_parser = subparsers.add_parser(name, help=help_text)
    set_parser.add_argument("code", type=str, help=t("cli_code_help"))
    set_parser.set_defaults(func=func)


def _init_ui_language(argv) -> None:
    """帮助文本依赖界面语言，需要在创建解析器之前读取配置"""
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument("--config", type=str)
    known, _ = pre_parser.parse_known_args(argv)
    config_manager = ConfigManager(Path(known.config) if known.config else None)
    set_language(config_manager.load().ui_language)


def main(argv=None) -> int:
    """CLI 主入口

    Returns:
        退出码（0 表示成功）
    """
    _init_ui_language(argv)
    logger = get_logger()

    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logger.set_level("DEBUG")

    if not args.command:
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except Exception as e:
        logger.error(f"{translate_log('cli_execution_error')}: {e}")
        logger.debug(traceback.format_exc())
        return 1


if __name__ == "__main__":
    sys.exit(main())
