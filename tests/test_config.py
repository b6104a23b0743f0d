"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from loan_payoff.config import Settings


def test_defaults():
    settings = Settings.from_env({})
    assert settings == Settings()
    assert settings.days_in_period == 30
    assert settings.strategy == "sequential"
    assert settings.log_level == "WARNING"
    assert settings.log_json is False
    assert settings.max_rows == 120
    assert settings.max_periods == 1200


def test_overrides():
    settings = Settings.from_env(
        {
            "LOAN_PAYOFF_DAYS_IN_PERIOD": "14",
            "LOAN_PAYOFF_STRATEGY": "Avalanche",
            "LOAN_PAYOFF_LOG_LEVEL": "debug",
            "LOAN_PAYOFF_LOG_JSON": "yes",
            "LOAN_PAYOFF_MAX_ROWS": "10",
            "LOAN_PAYOFF_MAX_PERIODS": "600",
            "FLASK_SECRET_KEY": "s3cret",
        }
    )
    assert settings.days_in_period == 14
    assert settings.strategy == "avalanche"
    assert settings.log_level == "DEBUG"
    assert settings.log_json is True
    assert settings.max_rows == 10
    assert settings.max_periods == 600
    assert settings.secret_key == "s3cret"


@pytest.mark.parametrize(
    "env, variable",
    [
        ({"LOAN_PAYOFF_DAYS_IN_PERIOD": "month"}, "LOAN_PAYOFF_DAYS_IN_PERIOD"),
        ({"LOAN_PAYOFF_DAYS_IN_PERIOD": "0"}, "LOAN_PAYOFF_DAYS_IN_PERIOD"),
        ({"LOAN_PAYOFF_MAX_ROWS": "-1"}, "LOAN_PAYOFF_MAX_ROWS"),
        ({"LOAN_PAYOFF_MAX_PERIODS": "forever"}, "LOAN_PAYOFF_MAX_PERIODS"),
        ({"LOAN_PAYOFF_STRATEGY": "random"}, "LOAN_PAYOFF_STRATEGY"),
        ({"LOAN_PAYOFF_LOG_LEVEL": "LOUD"}, "LOAN_PAYOFF_LOG_LEVEL"),
    ],
)
def test_invalid_values_name_the_variable(env, variable):
    with pytest.raises(ValueError, match=variable):
        Settings.from_env(env)


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("LOAN_PAYOFF_DAYS_IN_PERIOD", "7")
    assert Settings.from_env().days_in_period == 7
