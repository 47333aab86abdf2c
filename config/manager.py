"""
配置模型 + 读写逻辑（用户目录）
配置管理器
"""
import json
import logging
import os
import platform
from pathlib import Path
from typing import Optional
from dataclasses import dataclass, field

from core.language import LanguageConfig

APP_DIR_NAME = "chat-translator"

# config 模块在 core.logger 之前加载，这里只能使用标准 logging
_log = logging.getLogger("chat-translator.config")


def get_user_data_dir() -> Path:
    """获取用户数据目录路径（跨平台）

    - Windows: %APPDATA%/chat-translator/
    - Linux: ~/.config/chat-translator/
    - macOS: ~/Library/Application Support/chat-translator/

    Returns:
        用户数据目录的 Path 对象
    """
    system = platform.system()

    if system == "Windows":
        base_dir = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
    elif system == "Darwin":  # macOS
        base_dir = Path.home() / "Library" / "Application Support"
    else:  # Linux 和其他 Unix-like
        base_dir = Path.home() / ".config"

    data_dir = base_dir / APP_DIR_NAME
    data_dir.mkdir(parents=True, exist_ok=True)

    return data_dir


def load_api_key(config_value: Optional[str]) -> Optional[str]:
    """从配置值加载 API Key

    支持格式：
    - "env:CHAT_TRANSLATOR_API_KEY" - 从环境变量读取
    - 直接字符串 - 作为 API Key 使用（不推荐，仅用于测试）

    Returns:
        API Key 字符串，如果无法加载则返回 None
    """
    if not config_value:
        return None

    if config_value.startswith("env:"):
        return os.getenv(config_value[4:]) or None

    return config_value


@dataclass
class CatalogConfig:
    """语言目录配置

    决定下拉框中的语言列表从哪里获取
    """
    provider: str = "google_translate"  # google_translate（免费接口）或 google_cloud（Cloud Translation API）
    api_key: str = "env:CHAT_TRANSLATOR_API_KEY"  # 仅 google_cloud 使用
    display_language: str = "en"  # 语言名称的显示语言（google_cloud 的 target 参数）
    timeout_seconds: int = 10
    max_retries: int = 2  # 可重试错误的最大重试次数

    def to_dict(self) -> dict:
        return {
            "provider": self.provider,
            "api_key": self.api_key,
            "display_language": self.display_language,
            "timeout_seconds": self.timeout_seconds,
            "max_retries": self.max_retries,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CatalogConfig":
        return cls(
            provider=data.get("provider", "google_translate"),
            api_key=data.get("api_key", "env:CHAT_TRANSLATOR_API_KEY"),
            display_language=data.get("display_language", "en"),
            timeout_seconds=data.get("timeout_seconds", 10),
            max_retries=data.get("max_retries", 2),
        )


@dataclass
class AppConfig:
    """应用配置模型

    所有可持久化配置的统一入口
    """
    language: LanguageConfig = field(default_factory=LanguageConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    ui_language: str = "en-US"  # UI 语言（zh-CN / en-US）
    theme: str = "dark_gray"  # UI 主题（dark_gray / light）

    def to_dict(self) -> dict:
        """转换为字典（用于 JSON 序列化）"""
        return {
            "language": self.language.to_dict(),
            "catalog": self.catalog.to_dict(),
            "ui_language": self.ui_language,
            "theme": self.theme,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AppConfig":
        """从字典创建（用于 JSON 反序列化），缺失字段使用默认值"""
        return cls(
            language=LanguageConfig.from_dict(data.get("language", {})),
            catalog=CatalogConfig.from_dict(data.get("catalog", {})),
            ui_language=data.get("ui_language", "en-US"),
            theme=data.get("theme", "dark_gray"),
        )

    @classmethod
    def default(cls) -> "AppConfig":
        """创建默认配置"""
        return cls()


class ConfigManager:
    """配置管理器

    负责在用户数据目录读写 config.json
    """

    def __init__(self, config_file: Optional[Path] = None):
        """初始化配置管理器

        Args:
            config_file: 配置文件路径，如果为 None 则使用默认路径
        """
        if config_file is None:
            self.data_dir = get_user_data_dir()
            self.config_file = self.data_dir / "config.json"
        else:
            self.config_file = Path(config_file)
            self.data_dir = self.config_file.parent

        self.data_dir.mkdir(parents=True, exist_ok=True)
        (self.data_dir / "logs").mkdir(exist_ok=True)

    def load(self) -> AppConfig:
        """加载配置

        Returns:
            AppConfig 对象，如果文件不存在则返回默认配置
        """
        if not self.config_file.exists():
            config = AppConfig.default()
            self.save(config)
            return config

        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("config root must be an object")
            return AppConfig.from_dict(data)
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            # 配置文件损坏，备份旧文件后使用默认配置
            backup_file = self.config_file.with_suffix(".json.bak")
            _log.warning(f"配置文件损坏，已备份到 {backup_file.name}: {e}")
            self.config_file.replace(backup_file)
            config = AppConfig.default()
            self.save(config)
            return config

    def save(self, config: AppConfig) -> bool:
        """保存配置

        先写入临时文件，再重命名（原子操作）。保存失败只记录日志，不抛出异常

        Args:
            config: 要保存的配置对象

        Returns:
            是否保存成功
        """
        temp_file = self.config_file.with_suffix(".json.tmp")
        try:
            with open(temp_file, "w", encoding="utf-8") as f:
                json.dump(config.to_dict(), f, ensure_ascii=False, indent=2)
            temp_file.replace(self.config_file)
            return True
        except OSError as e:
            _log.error(f"保存配置失败 {self.config_file}: {e}")
            return False

    def get_logs_dir(self) -> Path:
        """获取日志目录"""
        return self.data_dir / "logs"
