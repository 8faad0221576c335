import logging

import Config as config_module
from Config import Config, configure_logging


def test_int_env_falls_back_on_missing_or_bad_values(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    assert config_module._int_env("PORT", 3000) == 3000
    monkeypatch.setenv("PORT", "not-a-port")
    assert config_module._int_env("PORT", 3000) == 3000
    monkeypatch.setenv("PORT", "8080")
    assert config_module._int_env("PORT", 3000) == 8080


def test_configure_logging_accepts_default_and_explicit_level(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))

    configure_logging()
    configure_logging("DEBUG")

    assert calls[0]["level"] == getattr(logging, Config.LOG_LEVEL, logging.INFO)
    assert calls[1]["level"] == logging.DEBUG
