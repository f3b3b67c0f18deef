import logging

import pytest

from probe_service.config import Settings, LOAD_MODE_LEGACY, LOAD_MODE_THREADPOOL


class TestSettingsFromEnv:
    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.port == 3000
        assert settings.hostname == "unknown"
        assert settings.redis_url == "redis://localhost:6379/0"
        assert settings.environment == "development"
        assert settings.log_file is None
        assert settings.load_execution_mode == LOAD_MODE_THREADPOOL
        assert settings.chaos_exit_delay_seconds == pytest.approx(0.1)
        assert settings.is_production is False
        assert settings.log_level_value == logging.INFO
        assert settings.rate_limit_max == 1000
        assert settings.rate_limit_window_minutes == 15

    def test_reads_environment(self):
        settings = Settings.from_env({
            "PORT": "8080",
            "HOSTNAME": "api-7d9f-abcde",
            "REDIS_URL": "redis://redis:6379/1",
            "ENVIRONMENT": "production",
            "LOG_LEVEL": "debug",
            "LOG_FILE": "/var/log/probe/combined.log",
            "LOAD_EXECUTION_MODE": "Legacy",
            "LOAD_BATCH_SIZE": "500",
            "RATE_LIMIT_MAX": "50",
            "RATE_LIMIT_WINDOW_MINUTES": "1",
        })
        assert settings.port == 8080
        assert settings.hostname == "api-7d9f-abcde"
        assert settings.redis_url == "redis://redis:6379/1"
        assert settings.is_production is True
        assert settings.log_level_value == logging.DEBUG
        assert settings.log_file == "/var/log/probe/combined.log"
        assert settings.load_execution_mode == LOAD_MODE_LEGACY
        assert settings.load_batch_size == 500
        assert settings.rate_limit_max == 50
        assert settings.rate_limit_window_minutes == 1

    def test_empty_log_file_means_unset(self):
        assert Settings.from_env({"LOG_FILE": ""}).log_file is None

    def test_rejects_unknown_load_mode(self):
        with pytest.raises(ValueError, match="LOAD_EXECUTION_MODE"):
            Settings.from_env({"LOAD_EXECUTION_MODE": "processes"})

    def test_rejects_bad_batch_size(self):
        with pytest.raises(ValueError):
            Settings.from_env({"LOAD_BATCH_SIZE": "0"})

    def test_rejects_bad_rate_limit(self):
        with pytest.raises(ValueError, match="RATE_LIMIT"):
            Settings.from_env({"RATE_LIMIT_MAX": "0"})

    def test_rejects_bad_port(self):
        with pytest.raises(ValueError):
            Settings.from_env({"PORT": "http"})

    def test_rejects_unknown_log_level(self):
        with pytest.raises(ValueError, match="LOG_LEVEL"):
            Settings.from_env({"LOG_LEVEL": "chatty"})
