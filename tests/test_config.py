# tests/test_config.py
import pytest
from pydantic import ValidationError

from telerelay.config import Settings


def test_defaults_match_original_behaviour(monkeypatch):
    for name in (
        "PORT", "CALL_PAUSE_SECONDS", "CONFERENCE_ROOM", "BATCH_POLICY",
        "DISPATCH_MAX_WORKERS", "TEMPLATE_STYLE", "TEMPLATE_SINGLE_SENDS",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.PORT == 1337
    assert settings.CALL_PAUSE_SECONDS == 10
    assert settings.CONFERENCE_ROOM == "MyConferenceRoom"
    assert settings.BATCH_POLICY == "fail_fast"
    assert settings.DISPATCH_MAX_WORKERS == 1
    assert settings.TEMPLATE_STYLE == "literal"
    assert settings.TEMPLATE_SINGLE_SENDS is False


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("TWILIO_ACCOUNT_SID", "AC_ENV")
    monkeypatch.setenv("BATCH_POLICY", "best_effort")
    monkeypatch.setenv("DISPATCH_MAX_WORKERS", "4")

    settings = Settings(_env_file=None)

    assert settings.TWILIO_ACCOUNT_SID == "AC_ENV"
    assert settings.BATCH_POLICY == "best_effort"
    assert settings.DISPATCH_MAX_WORKERS == 4


def test_twilio_missing_lists_unset_settings(monkeypatch):
    for name in ("TWILIO_ACCOUNT_SID", "TWILIO_API_KEY", "TWILIO_API_KEY_SECRET", "TWILIO_PHONE_NUMBER"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None, TWILIO_API_KEY="SK_TEST")

    assert settings.twilio_missing == [
        "TWILIO_ACCOUNT_SID",
        "TWILIO_API_KEY_SECRET",
        "TWILIO_PHONE_NUMBER",
    ]


def test_rejects_unknown_batch_policy():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, BATCH_POLICY="retry_forever")
