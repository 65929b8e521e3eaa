import os
from unittest.mock import patch

from sortkey.config import RetryConfig
from sortkey.errors import ConfigurationError
from sortkey.fetchers import aggregate
from sortkey.models import AggregationResult, UrlStat

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "..", "fixtures")


class TestAggregate:
    def test_file_source(self):
        result = aggregate("file", os.path.join(FIXTURES_DIR, "files", "good"))
        assert isinstance(result, AggregationResult)
        assert len(result.records) == 5

    @patch("sortkey.fetchers.orchestrator.aggregate_endpoints")
    def test_http_source(self, mock_endpoints):
        mock_endpoints.return_value = [UrlStat(url="a", views=1)]
        config = RetryConfig(backoff_periods=(0.0,), attempts_per_period=1)

        result = aggregate("http", "endpoints", config)

        assert result.records == (UrlStat(url="a", views=1),)
        args, kwargs = mock_endpoints.call_args
        assert args == ("endpoints", config)

    @patch("sortkey.fetchers.orchestrator.aggregate_files")
    @patch("sortkey.fetchers.orchestrator.aggregate_endpoints")
    def test_unsupported_kind(self, mock_endpoints, mock_files):
        try:
            aggregate("ftp", "anywhere")
            assert False, "Should have raised ConfigurationError"
        except ConfigurationError as exc:
            assert "ftp" in str(exc)
        mock_endpoints.assert_not_called()
        mock_files.assert_not_called()
