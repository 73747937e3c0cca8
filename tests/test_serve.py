"""Unit tests for chatgate.serve: log timestamps in UTC and uvicorn launch (uvicorn.run is mocked)."""

import logging
import time
import unittest
from unittest.mock import MagicMock, patch

from chatgate import serve


class TestServeLogging(unittest.TestCase):
    """Log records are rendered in UTC to match the trailing Z in datefmt."""

    def test_formatter_uses_gmtime(self) -> None:
        self.assertIs(logging.Formatter.converter, time.gmtime)

    def test_rendered_time_is_utc(self) -> None:
        formatter = logging.Formatter("%(asctime)s", datefmt="%Y-%m-%dT%H:%M:%SZ")
        record = logging.makeLogRecord({"msg": "x"})
        record.created = 0.0
        self.assertEqual(formatter.format(record), "1970-01-01T00:00:00Z")


class TestServeMain(unittest.TestCase):
    """main() starts uvicorn on the configured host and port."""

    @patch("chatgate.serve.uvicorn.run")
    @patch("chatgate.serve.get_settings")
    def test_runs_uvicorn(self, mock_settings: MagicMock, mock_run: MagicMock) -> None:
        mock_settings.return_value = MagicMock(HOST="127.0.0.1", PORT=8123, DEBUG=False)
        self.assertEqual(serve.main(), 0)
        mock_run.assert_called_once_with(
            "chatgate.main:app",
            host="127.0.0.1",
            port=8123,
            log_level="info",
        )
