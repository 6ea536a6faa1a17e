"""Unit tests that do not require a running API or external services."""
import pytest
from seiva.config import Settings, settings


def test_settings_load():
    """Settings load from environment (e.g. CI env vars)."""
    assert settings.API_V1_PREFIX == "/api/v1"
    assert settings.APP_NAME == "Seiva School Admin"


def test_environment_flag():
    """Environment flags reflect ENVIRONMENT value."""
    assert settings.ENVIRONMENT.lower() in ("development", "test", "production")
    assert settings.is_development == (settings.ENVIRONMENT.lower() == "development")
    assert settings.is_production == (settings.ENVIRONMENT.lower() == "production")


def test_academic_periods_parsed_in_order():
    custom = Settings(ACADEMIC_PERIODS=" 1º Trimestre, 2º Trimestre ,,3º Trimestre ")
    assert custom.ACADEMIC_PERIODS == ["1º Trimestre", "2º Trimestre", "3º Trimestre"]


def test_default_academic_year():
    defaults = Settings(ACADEMIC_PERIODS="February,March,April,May,June,July,August,September,October,November")
    assert defaults.ACADEMIC_PERIODS[0] == "February"
    assert defaults.ACADEMIC_PERIODS[-1] == "November"
    assert len(defaults.ACADEMIC_PERIODS) == 10


@pytest.mark.parametrize("raw", ["local", " Local ", "LOCAL"])
def test_data_backend_normalized(raw):
    assert Settings(DATA_BACKEND=raw).DATA_BACKEND == "local"


def test_allowed_origins_parsed():
    custom = Settings(ALLOWED_ORIGINS="http://a.test, http://b.test")
    assert custom.ALLOWED_ORIGINS == ["http://a.test", "http://b.test"]
