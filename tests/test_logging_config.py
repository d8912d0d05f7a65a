import io
import shutil
import unittest
from pathlib import Path
from unittest.mock import patch
from uuid import uuid4

from loguru import logger

from heartless_chat.logging_config import setup_logging

PROJECT_ROOT = Path(__file__).resolve().parents[1]


class SetupLoggingTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp_dir = PROJECT_ROOT / ".test-artifacts" / f"logging-{uuid4().hex}"
        self._tmp_dir.mkdir(parents=True, exist_ok=True)

    def tearDown(self) -> None:
        logger.remove()
        shutil.rmtree(self._tmp_dir, ignore_errors=True)

    def test_console_and_file_sinks(self) -> None:
        log_path = self._tmp_dir / "logs" / "chat.log"
        stderr = io.StringIO()

        with patch("heartless_chat.logging_config.sys.stderr", stderr):
            descriptions = setup_logging(console_level="ERROR", log_file=str(log_path), file_level="DEBUG")
            logger.debug("debug detail")
            logger.error("request failed")
        logger.remove()

        self.assertEqual(["console (ERROR)", f"file ({log_path}, DEBUG)"], descriptions)
        self.assertIn("request failed", stderr.getvalue())
        self.assertNotIn("debug detail", stderr.getvalue())
        file_text = log_path.read_text()
        self.assertIn("debug detail", file_text)
        self.assertIn("request failed", file_text)

    def test_sinks_can_be_switched_off(self) -> None:
        descriptions = setup_logging(console_level=None, log_file=None)
        self.assertEqual([], descriptions)

    def test_file_only(self) -> None:
        log_path = self._tmp_dir / "only.log"

        descriptions = setup_logging(console_level="", log_file=str(log_path))

        self.assertEqual([f"file ({log_path}, INFO)"], descriptions)


if __name__ == "__main__":
    unittest.main()
