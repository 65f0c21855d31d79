import pytest

from pres_def.config import Config, ConfigError
from pres_def.profiles import CredentialProfile


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("PRES_DEF_PROFILE", "PRES_DEF_INDENT", "PRES_DEF_MDOC_NAMESPACE"):
        monkeypatch.delenv(var, raising=False)


def test_defaults():
    assert Config.from_settings() == Config(CredentialProfile.JWT, 2, "")


def test_settings():
    config = Config.from_settings(
        {"profile": "vc+sd-jwt", "indent": 0, "mdoc_namespace": "org.example"}
    )
    assert config == Config(CredentialProfile.SD_JWT, 0, "org.example")


def test_environment(monkeypatch):
    monkeypatch.setenv("PRES_DEF_PROFILE", "mso_mdoc")
    monkeypatch.setenv("PRES_DEF_INDENT", "4")
    monkeypatch.setenv("PRES_DEF_MDOC_NAMESPACE", "org.iso.18013.5.1")
    config = Config.from_settings({"indent": None})
    assert config == Config(CredentialProfile.MSO_MDOC, 4, "org.iso.18013.5.1")


def test_settings_take_precedence(monkeypatch):
    monkeypatch.setenv("PRES_DEF_PROFILE", "mso_mdoc")
    assert Config.from_settings({"profile": "jwt"}).profile is CredentialProfile.JWT


def test_bad_profile(monkeypatch):
    monkeypatch.setenv("PRES_DEF_PROFILE", "ldp_vc")
    with pytest.raises(ConfigError, match="PRES_DEF_PROFILE"):
        Config.from_settings()


@pytest.mark.parametrize("indent", ["two", "-1"])
def test_bad_indent(monkeypatch, indent):
    monkeypatch.setenv("PRES_DEF_INDENT", indent)
    with pytest.raises(ConfigError, match="PRES_DEF_INDENT"):
        Config.from_settings()
