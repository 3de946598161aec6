"""
Tests for entexc configuration.
"""

import sys

import pytest
from entexc import config as config_module
from entexc.config import EntexcConfig, get_default_config, reset_default_config


@pytest.fixture
def clean_env(monkeypatch):
    """Remove entexc environment variables and the cached config."""
    for name in (
        "ENTEXC_DEFAULT_MULTIPLIER",
        "ENTEXC_GLOBAL_CEILING",
        "ENTEXC_DEFAULT_SECTION",
        "ENTEXC_SYSTEM_LOCALE",
        "ENTEXC_REGISTRY",
        "ENTEXC_STRICT_OPT_OUT",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_default_config()
    yield
    reset_default_config()


def test_defaults(clean_env):
    config = EntexcConfig.from_env()
    assert config.default_multiplier == 100000
    assert config.global_ceiling == sys.maxsize
    assert config.default_section == ""
    assert config.system_locale == "en"
    assert config.registry_path is None
    assert config.strict_opt_out is False


def test_from_env(clean_env, monkeypatch):
    monkeypatch.setenv("ENTEXC_DEFAULT_MULTIPLIER", "1000")
    monkeypatch.setenv("ENTEXC_GLOBAL_CEILING", "2147483647")
    monkeypatch.setenv("ENTEXC_DEFAULT_SECTION", "core")
    monkeypatch.setenv("ENTEXC_SYSTEM_LOCALE", "de")
    monkeypatch.setenv("ENTEXC_REGISTRY", "errors.yaml")
    monkeypatch.setenv("ENTEXC_STRICT_OPT_OUT", "TRUE")

    config = EntexcConfig.from_env()
    assert config.default_multiplier == 1000
    assert config.global_ceiling == 2147483647
    assert config.default_section == "core"
    assert config.system_locale == "de"
    assert config.registry_path == "errors.yaml"
    assert config.strict_opt_out is True


def test_validate_accepts_defaults():
    EntexcConfig().validate()


@pytest.mark.parametrize("multiplier", [0, 7, 250])
def test_validate_rejects_bad_multiplier(multiplier):
    with pytest.raises(ValueError, match="power of ten"):
        EntexcConfig(default_multiplier=multiplier).validate()


def test_validate_rejects_non_positive_ceiling():
    with pytest.raises(ValueError, match="global_ceiling"):
        EntexcConfig(global_ceiling=0).validate()


def test_validate_rejects_multiplier_above_ceiling():
    with pytest.raises(ValueError, match="exceeds"):
        EntexcConfig(default_multiplier=1000, global_ceiling=999).validate()


def test_summary():
    summary = EntexcConfig(global_ceiling=2147483647).get_summary()
    assert "Default Multiplier: 100000" in summary
    assert "Class Code Ceiling: 21474" in summary
    assert "Path: Not set" in summary


def test_default_config_singleton(clean_env):
    first = get_default_config()
    assert get_default_config() is first
    reset_default_config()
    assert config_module._default_config is None


def test_default_config_validates(clean_env, monkeypatch):
    monkeypatch.setenv("ENTEXC_DEFAULT_MULTIPLIER", "12")
    with pytest.raises(ValueError):
        get_default_config()
