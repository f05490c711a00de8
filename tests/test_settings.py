import pytest

from order_totals.config import settings as settings_module
from order_totals.config.settings import Settings, get_settings, reset_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings()
    yield
    reset_settings()


def test_defaults(tmp_path, monkeypatch):
    for name in ("INCLUDE_LINE_LEVEL", "LOG_LEVEL", "CACHE_SIZE", "DATA_DIR", "API_HOST", "API_PORT"):
        monkeypatch.delenv(settings_module.ENV_PREFIX + name, raising=False)
    settings = Settings.load(tmp_path)
    assert settings.project_root == tmp_path
    assert settings.data_dir == tmp_path / "data"
    assert settings.sample_documents == tmp_path / "data" / "sample_documents.csv"
    assert settings.include_line_level_calculations is True
    assert settings.cache_size == 128
    assert settings.log_level == "INFO"


def test_environment_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("ORDER_TOTALS_INCLUDE_LINE_LEVEL", "false")
    monkeypatch.setenv("ORDER_TOTALS_LOG_LEVEL", "debug")
    monkeypatch.setenv("ORDER_TOTALS_CACHE_SIZE", "16")
    monkeypatch.setenv("ORDER_TOTALS_DATA_DIR", str(tmp_path / "elsewhere"))
    monkeypatch.setenv("ORDER_TOTALS_API_PORT", "9001")
    settings = Settings.load(tmp_path)
    assert settings.include_line_level_calculations is False
    assert settings.log_level == "DEBUG"
    assert settings.cache_size == 16
    assert settings.data_dir == tmp_path / "elsewhere"
    assert settings.output_dir == tmp_path / "elsewhere" / "outputs"
    assert settings.api_port == 9001


def test_bad_integer_raises(tmp_path, monkeypatch):
    monkeypatch.setenv("ORDER_TOTALS_CACHE_SIZE", "many")
    with pytest.raises(ValueError, match="CACHE_SIZE"):
        Settings.load(tmp_path)


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
