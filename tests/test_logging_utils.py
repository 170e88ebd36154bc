from __future__ import annotations

import pytest
from loguru import logger

from turnbridge import logging_utils


def test_configure_logging_honours_level_and_profile(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.setattr(logging_utils, "_CONFIGURED_PROFILE", None)
    monkeypatch.setenv("TURNBRIDGE_LOG_LEVEL", "warning")

    logging_utils.configure_logging()
    assert logging_utils._CONFIGURED_PROFILE == "default"

    logger.info("hidden.event")
    logger.warning("shown.event")
    err = capsys.readouterr().err
    assert "shown.event" in err
    assert "hidden.event" not in err

    # Same profile again keeps the existing sink.
    logging_utils.configure_logging()
    logger.warning("still.shown")
    assert "still.shown" in capsys.readouterr().err

    logging_utils.configure_logging(profile="console")
    assert logging_utils._CONFIGURED_PROFILE == "console"
