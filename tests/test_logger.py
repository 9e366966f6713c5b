"""
Tests for logging setup.
"""

import sys

from loguru import logger

from pokechat.utils.logger import setup_logger


def test_errors_are_written_to_file(tmp_path):
    """ERROR records land in errors.log; lower levels do not."""
    log = setup_logger("DEBUG", tmp_path)

    log.info("index built")
    log.error("embedding call failed")

    # Closing the handlers flushes the file
    logger.remove()
    logger.add(sys.stderr)

    content = (tmp_path / "errors.log").read_text(encoding="utf-8")
    assert "embedding call failed" in content
    assert "index built" not in content
