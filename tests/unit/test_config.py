import os
from unittest.mock import patch

from sortkey.config import RetryConfig, load_config
from sortkey.errors import ConfigurationError


class TestRetryConfig:
    def test_defaults(self):
        config = RetryConfig()
        assert config.backoff_periods == (1.0, 5.0, 10.0)
        assert config.attempts_per_period == 5
        assert config.total_attempts == 15


class TestLoadConfig:
    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self):
        service_config, retry_config = load_config()
        assert service_config.source_kind == "http"
        assert service_config.source_path == "config"
        assert service_config.port == 5000
        assert retry_config == RetryConfig()

    @patch.dict(
        os.environ,
        {
            "DATA_COLLECTION_METHOD": "file",
            "DATA_COLLECTION_PATH": "snapshots",
            "FETCH_RETRY_ATTEMPTS": "2",
            "FETCH_BACKOFF_PERIODS": "0, 0.5",
            "PORT": "8080",
        },
        clear=True,
    )
    def test_overrides(self):
        service_config, retry_config = load_config()
        assert service_config.source_kind == "file"
        assert service_config.source_path == "snapshots"
        assert service_config.port == 8080
        assert retry_config.attempts_per_period == 2
        assert retry_config.backoff_periods == (0.0, 0.5)

    @patch.dict(os.environ, {"DATA_COLLECTION_METHOD": "carrier-pigeon"}, clear=True)
    def test_invalid_source_kind_does_not_fail(self):
        service_config, _ = load_config()
        assert service_config.source_kind == "http"

    @patch.dict(os.environ, {"FETCH_RETRY_ATTEMPTS": "zero"}, clear=True)
    def test_invalid_attempts(self):
        try:
            load_config()
            assert False, "Should have raised"
        except ConfigurationError as exc:
            assert "FETCH_RETRY_ATTEMPTS" in str(exc)

    @patch.dict(os.environ, {"FETCH_BACKOFF_PERIODS": "1,-5"}, clear=True)
    def test_negative_backoff(self):
        try:
            load_config()
            assert False, "Should have raised"
        except ValueError:
            pass
