"""Unit tests for logging and error reporting setup."""

import json
import logging
from unittest.mock import patch

import pytest

from voice_admin.platform.observability import (
    configure_logging,
    get_logger,
    initialize_bugsnag,
    new_run_id,
    run_id_ctx,
)
from voice_admin.platform.observability.logging import add_run_id


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    token = run_id_ctx.set(None)
    yield
    run_id_ctx.reset(token)
    root.handlers[:] = handlers
    root.setLevel(level)


class TestRunId:
    def test_new_run_id_is_stamped_on_entries(self):
        run_id = new_run_id()

        assert len(run_id) == 12
        assert add_run_id(None, "info", {"event": "x"}) == {"event": "x", "run_id": run_id}

    def test_no_run_id_outside_a_run(self):
        assert add_run_id(None, "info", {"event": "x"}) == {"event": "x"}


class TestConfigureLogging:
    def test_sets_level_and_single_handler(self):
        configure_logging("DEBUG", json_output=True)

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_json_entries_carry_logger_name_and_run_id(self, capsys):
        configure_logging("INFO", json_output=True)
        run_id = new_run_id()

        get_logger("voice_admin.holidays.writer").info("Updated schedule", schedule="NSW Public Holiday")

        entry = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert entry["event"] == "Updated schedule"
        assert entry["logger"] == "voice_admin.holidays.writer"
        assert entry["run_id"] == run_id
        assert entry["schedule"] == "NSW Public Holiday"


class TestInitializeBugsnag:
    def test_local_stage_is_a_no_op(self):
        with patch("voice_admin.platform.observability.errors.bugsnag.configure") as configure:
            assert initialize_bugsnag("key", "local") is False
        configure.assert_not_called()

    def test_attaches_error_handler(self):
        with patch("voice_admin.platform.observability.errors.bugsnag.configure") as configure:
            assert initialize_bugsnag("key", "production") is True

        configure.assert_called_once_with(api_key="key", release_stage="production", auto_notify=True)
        bugsnag_handlers = [h for h in logging.getLogger().handlers if h.level == logging.ERROR]
        assert len(bugsnag_handlers) == 1
