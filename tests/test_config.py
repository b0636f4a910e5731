"""
Tests for environment-driven settings.
"""

from icuwatch.config import DataSourceSettings, GeneratorSettings, Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("ICUWATCH_DATA_SOURCE_TYPE", raising=False)
    config = DataSourceSettings().to_config()
    assert config.type == "mock"
    assert config.api_key is None


def test_data_source_from_env(monkeypatch):
    monkeypatch.setenv("ICUWATCH_DATA_SOURCE_TYPE", "mimic-api")
    monkeypatch.setenv("ICUWATCH_DATA_SOURCE_API_URL", "http://mimic.test")
    monkeypatch.setenv("ICUWATCH_DATA_SOURCE_API_KEY", "secret")

    settings = DataSourceSettings()
    assert "secret" not in repr(settings)

    config = settings.to_config()
    assert config.type == "mimic-api"
    assert config.api_url == "http://mimic.test"
    assert config.api_key == "secret"


def test_generator_settings(monkeypatch):
    monkeypatch.setenv("ICUWATCH_GENERATOR_SEED", "7")
    monkeypatch.setenv("ICUWATCH_GENERATOR_HIGH_RISK_WEIGHT", "0.5")

    settings = GeneratorSettings()
    assert settings.seed == 7
    assert settings.risk_weights == {"low": 0.60, "medium": 0.25, "high": 0.5}


def test_data_source_config_carries_generator_settings(monkeypatch):
    monkeypatch.setenv("ICUWATCH_GENERATOR_SEED", "11")
    monkeypatch.setenv("ICUWATCH_GENERATOR_PATIENT_COUNT", "20")

    config = Settings().data_source_config()
    assert config.seed == 11
    assert config.patient_count == 20
