from pwnguard.hibp.admin import (
    CLIENT_FLAG,
    HIBP_CONFIG_VARS,
    SECTION_BREAK,
    SERVER_FLAG,
    ConfigVar,
    apply_saved_settings,
    insert_config_vars,
)
from pwnguard.hibp.config import DEFAULT_RANGE_URL, HIBPSettings
from pwnguard.hibp.messages import MessageCatalog, WARNING_KEY


def test_defaults_are_disabled():
    settings = HIBPSettings()
    assert not settings.server_check_enabled
    assert not settings.client_check_enabled
    assert settings.validate() == []


def test_from_env(monkeypatch):
    monkeypatch.setenv("PWNGUARD_HIBP_ENABLED", "true")
    monkeypatch.setenv("PWNGUARD_HIBP_JS_ENABLED", "1")
    monkeypatch.setenv("PWNGUARD_HIBP_RANGE_URL", "http://mirror.local/range/")
    monkeypatch.setenv("PWNGUARD_HIBP_TIMEOUT", "2.5")

    settings = HIBPSettings.from_env()
    assert settings.server_check_enabled
    assert settings.client_check_enabled
    assert settings.range_url == "http://mirror.local/range/"
    assert settings.timeout == 2.5


def test_from_env_bad_timeout(monkeypatch):
    monkeypatch.delenv("PWNGUARD_HIBP_ENABLED", raising=False)
    monkeypatch.delenv("PWNGUARD_HIBP_RANGE_URL", raising=False)
    monkeypatch.setenv("PWNGUARD_HIBP_TIMEOUT", "soon")
    settings = HIBPSettings.from_env()
    assert settings.timeout == 10.0
    assert settings.range_url == DEFAULT_RANGE_URL
    assert not settings.server_check_enabled


def test_client_without_server_is_invalid():
    settings = HIBPSettings(client_check_enabled=True)
    assert settings.validate()
    normalized = settings.normalized()
    assert normalized.server_check_enabled
    assert normalized.validate() == []


def test_bad_timeout_is_invalid():
    assert HIBPSettings(timeout=0).validate() == ["Timeout must be positive"]


def test_apply_saved_settings():
    assert apply_saved_settings({CLIENT_FLAG: 1, SERVER_FLAG: 0}) == {CLIENT_FLAG: 1, SERVER_FLAG: 1}
    assert apply_saved_settings({CLIENT_FLAG: 1}) == {CLIENT_FLAG: 1, SERVER_FLAG: 1}
    assert apply_saved_settings({SERVER_FLAG: 1}) == {SERVER_FLAG: 1}
    assert apply_saved_settings({}) == {}


def test_insert_after_anchor_with_break():
    config_vars = [
        ConfigVar("check", "password_strength"),
        ConfigVar("check", "enable_password_conversion"),
        SECTION_BREAK,
        ConfigVar("int", "session_timeout"),
    ]

    result = insert_config_vars(config_vars)

    assert result == [
        ConfigVar("check", "password_strength"),
        ConfigVar("check", "enable_password_conversion"),
        SECTION_BREAK,
        *HIBP_CONFIG_VARS,
        SECTION_BREAK,
        ConfigVar("int", "session_timeout"),
    ]
    # Input left untouched
    assert len(config_vars) == 4


def test_insert_after_anchor_without_break():
    config_vars = [ConfigVar("check", "enable_password_conversion"), ConfigVar("int", "x")]
    result = insert_config_vars(config_vars)
    assert result == [
        ConfigVar("check", "enable_password_conversion"),
        SECTION_BREAK,
        *HIBP_CONFIG_VARS,
        ConfigVar("int", "x"),
    ]


def test_insert_missing_anchor_appends():
    config_vars = [ConfigVar("int", "x")]
    result = insert_config_vars(config_vars, after="nope")
    assert result == [ConfigVar("int", "x"), SECTION_BREAK, *HIBP_CONFIG_VARS]


def test_message_catalog():
    messages = MessageCatalog()
    assert WARNING_KEY in messages
    assert messages.warning == messages[WARNING_KEY]
    assert messages.get("missing") == "missing"
    assert MessageCatalog({WARNING_KEY: "pwned"}).warning == "pwned"


def test_from_env_non_positive_timeout_falls_back(monkeypatch):
    for value in ("0", "-3", "nan"):
        monkeypatch.setenv("PWNGUARD_HIBP_TIMEOUT", value)
        settings = HIBPSettings.from_env()
        assert settings.timeout == 10.0
        assert settings.validate() == []
