"""
pytest 公共 fixture

测试使用独立的 logger（不写文件、不输出控制台），通过回调收集日志
"""

import sys
from pathlib import Path

import pytest

# 添加项目根目录到路径
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.logger import Logger, set_global_logger  # noqa: E402

# 各模块在导入时调用 get_logger()，必须在导入它们之前替换全局 logger
_test_logger = Logger(
    name="chat-translator-test",
    level="DEBUG",
    console_output=False,
    file_output=False,
    auto_cleanup=False,
)
set_global_logger(_test_logger)

from config.manager import ConfigManager  # noqa: E402
from core.i18n import set_language  # noqa: E402
from core.language import Language  # noqa: E402


@pytest.fixture(autouse=True)
def english_ui():
    """所有测试默认使用英文界面"""
    set_language("en-US")
    yield
    set_language("en-US")


@pytest.fixture
def test_logger():
    return _test_logger


@pytest.fixture
def log_records():
    """收集测试期间的日志：[(level, message, component), ...]"""
    records = []

    def collect(level, message, component):
        records.append((level, message, component))

    _test_logger.add_callback(collect)
    yield records
    _test_logger.remove_callback(collect)


@pytest.fixture
def config_manager(tmp_path):
    return ConfigManager(tmp_path / "config.json")


@pytest.fixture
def app_config(config_manager):
    return config_manager.load()


@pytest.fixture
def catalog():
    return [Language("en", "English"), Language("da", "Danish")]
