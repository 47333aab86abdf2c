"""
CatalogLoader 测试

用 LanguageSelectionModel 代替面板（接口一致），不需要显示器
"""

import json
from unittest.mock import MagicMock, patch

from config.manager import ConfigManager
from core.exceptions import AppException, ErrorType
from core.language import Language
from core.language_selection import LanguageSelectionModel
from ui.business_logic import CatalogLoader


def _factory(languages=None, error=None):
    """返回一个目录工厂，创建的目录固定返回 languages 或抛出 error"""
    catalog = MagicMock()
    catalog.provider_name = "fake"
    if error is not None:
        catalog.list_languages.side_effect = error
    else:
        catalog.list_languages.return_value = languages
    return MagicMock(return_value=catalog)


class TestCatalogLoader:

    def test_load_sync_enables_model(self, config_manager, app_config, catalog):
        model = LanguageSelectionModel(config_manager, app_config)
        on_loaded = MagicMock()
        loader = CatalogLoader(model, app_config, catalog_factory=_factory(catalog), on_loaded=on_loaded)

        assert loader.load_sync() == catalog
        assert model.enabled
        assert model.source.labels == ["English", "Danish"]
        on_loaded.assert_called_once_with(catalog)

    def test_restores_saved_selection(self, config_manager, app_config, catalog):
        app_config.language.set_slot("source", Language("EN", "English"))
        app_config.language.set_slot("target", Language("da", "Danish"))
        model = LanguageSelectionModel(config_manager, app_config)

        CatalogLoader(model, app_config, catalog_factory=_factory(catalog)).load_sync()

        assert model.source.selected.code == "en"
        assert model.target.selected.code == "da"

    def test_nothing_saved_selects_nothing(self, config_manager, app_config, catalog):
        model = LanguageSelectionModel(config_manager, app_config)
        with patch.object(config_manager, "save", wraps=config_manager.save) as save:
            CatalogLoader(model, app_config, catalog_factory=_factory(catalog)).load_sync()

        assert model.source.selected is None
        assert model.target.selected is None
        save.assert_not_called()

    def test_saved_code_missing_from_catalog(self, config_manager, app_config, catalog, log_records):
        app_config.language.set_slot("target", Language("fr", "French"))
        model = LanguageSelectionModel(config_manager, app_config)

        CatalogLoader(model, app_config, catalog_factory=_factory(catalog)).load_sync()

        assert model.target.selected is None
        assert any("'fr'" in message for level, message, _ in log_records if level == "WARNING")

    def test_restore_can_be_skipped(self, config_manager, app_config, catalog):
        app_config.language.set_slot("target", Language("da", "Danish"))
        model = LanguageSelectionModel(config_manager, app_config)

        with patch.object(config_manager, "save", wraps=config_manager.save) as save:
            loader = CatalogLoader(
                model, app_config, catalog_factory=_factory(catalog), restore_selection=False
            )
            assert loader.load_sync() == catalog

        assert model.enabled
        assert model.target.selected is None
        save.assert_not_called()

    def test_non_string_saved_code_does_not_break_load(self, tmp_path, catalog):
        """配置中的数字代码不应中断加载，on_loaded 仍然被调用"""
        config_file = tmp_path / "config.json"
        config_file.write_text(
            json.dumps(
                {"language": {"last_source_language_code": 5, "last_target_language_code": "da"}}
            ),
            encoding="utf-8",
        )
        config_manager = ConfigManager(config_file)
        app_config = config_manager.load()
        model = LanguageSelectionModel(config_manager, app_config)
        on_loaded = MagicMock()

        loader = CatalogLoader(
            model, app_config, catalog_factory=_factory(catalog), on_loaded=on_loaded
        )

        assert loader.load_sync() == catalog
        assert model.source.selected is None
        assert model.target.selected.code == "da"
        on_loaded.assert_called_once_with(catalog)

    def test_failure_disables_model(self, config_manager, app_config, catalog, log_records):
        model = LanguageSelectionModel(config_manager, app_config)
        model.enable(catalog)
        on_failed = MagicMock()
        error = AppException("bad key", error_type=ErrorType.AUTH)
        loader = CatalogLoader(
            model, app_config, catalog_factory=_factory(error=error), on_failed=on_failed
        )

        assert loader.load_sync() is None
        assert not model.enabled
        assert model.source.items == []
        on_failed.assert_called_once_with(error)
        assert any(level == "ERROR" for level, _, _ in log_records)

    def test_unexpected_error_is_wrapped(self, config_manager, app_config):
        model = LanguageSelectionModel(config_manager, app_config)
        on_failed = MagicMock()
        factory = MagicMock(side_effect=RuntimeError("boom"))

        CatalogLoader(model, app_config, catalog_factory=factory, on_failed=on_failed).load_sync()

        error = on_failed.call_args.args[0]
        assert isinstance(error, AppException)
        assert error.error_type == ErrorType.UNKNOWN
        assert isinstance(error.cause, RuntimeError)

    def test_factory_receives_catalog_config(self, config_manager, app_config, catalog):
        model = LanguageSelectionModel(config_manager, app_config)
        factory = _factory(catalog)

        CatalogLoader(model, app_config, catalog_factory=factory).load_sync()

        factory.assert_called_once_with(app_config.catalog)

    def test_background_load_uses_scheduler(self, config_manager, app_config, catalog):
        model = LanguageSelectionModel(config_manager, app_config)
        scheduled = []
        loader = CatalogLoader(
            model, app_config, schedule=scheduled.append, catalog_factory=_factory(catalog)
        )

        thread = loader.load()
        thread.join(timeout=5)

        # 后台线程只投递回调，不直接修改模型
        assert not model.enabled
        assert len(scheduled) == 1

        scheduled[0]()
        assert model.enabled
        assert not loader.is_loading

    def test_background_failure_uses_scheduler(self, config_manager, app_config):
        model = LanguageSelectionModel(config_manager, app_config)
        scheduled = []
        on_failed = MagicMock()
        error = AppException("down", error_type=ErrorType.INVALID_INPUT)
        loader = CatalogLoader(
            model,
            app_config,
            schedule=scheduled.append,
            catalog_factory=_factory(error=error),
            on_failed=on_failed,
        )

        loader.load().join(timeout=5)
        on_failed.assert_not_called()

        scheduled[0]()
        on_failed.assert_called_once_with(error)
