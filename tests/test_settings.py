from config import AppSettings, RemoteSettings, StorageSettings, get_settings
from localization import option_label, translate, translate_list


def test_storage_defaults():
    settings = StorageSettings()

    assert settings.key == "solverelab_majanduskava_v1"
    assert settings.autosave_delay_seconds == 0.35


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MAJANDUSKAVA_STORAGE_AUTOSAVE_DELAY_MS", "100")
    monkeypatch.setenv("MAJANDUSKAVA_CORE_ENABLED", "true")
    monkeypatch.setenv("MAJANDUSKAVA_LOG_LEVEL", "debug")

    assert StorageSettings().autosave_delay_seconds == 0.1
    assert RemoteSettings().enabled is True
    assert AppSettings().log_level == "DEBUG"


def test_get_settings_is_cached():
    get_settings.cache_clear()

    assert get_settings() is get_settings()


def test_catalog_lookups():
    assert translate("findings.allocation_basis", basis="pindala").count("pindala") == 1
    assert translate("no.such.key") == "no.such.key"
    assert translate_list("steps.funds.legal")
    assert option_label("funding", "laen") == "Laen"
    assert option_label("funding", "võlg") == "võlg"
