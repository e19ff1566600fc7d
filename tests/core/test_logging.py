"""
Tests for sllist.core.logging.

Events are rendered as JSON and captured through the stdlib logging
module, which is where structlog hands them off.
"""

import json
import logging
import os
import subprocess
import sys
from pathlib import Path

import pytest
import structlog
from pydantic import ValidationError

from sllist.core.codecs import INT32
from sllist.core.linked_list import SinglyLinkedList
from sllist.core.logging import configure_logging, get_logger
from sllist.core.settings import get_settings

SRC = Path(__file__).resolve().parents[2] / "src"


@pytest.fixture
def debug_logging(caplog):
    """JSON logging at DEBUG for one test, back to unconfigured afterwards."""
    caplog.set_level(logging.DEBUG, logger="sllist")
    configure_logging(level="DEBUG", json_format=True, service="sllist-tests")
    yield caplog
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


def events(caplog) -> list[dict]:
    return [json.loads(record.getMessage()) for record in caplog.records]


def run_python(code: str, tmp_path: Path, **env: str) -> subprocess.CompletedProcess:
    """Run ``code`` in a fresh interpreter with only the given SLLIST_* variables set."""
    environ = {k: v for k, v in os.environ.items() if not k.startswith("SLLIST_")}
    environ["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC), environ.get("PYTHONPATH")]))
    environ.update(env)
    return subprocess.run(
        [sys.executable, "-c", code],
        capture_output=True,
        text=True,
        cwd=tmp_path,
        env=environ,
        timeout=60,
    )


class TestConfigureLogging:
    def test_json_event_shape(self, debug_logging):
        get_logger("sllist.tests").info("hello", answer=42)
        (event,) = events(debug_logging)
        assert event["event"] == "hello"
        assert event["answer"] == 42
        assert event["log.level"] == "info"
        assert event["service.name"] == "sllist-tests"
        assert event["logger"] == "sllist.tests"
        assert "@timestamp" in event

    def test_level_filtering(self, debug_logging):
        configure_logging(level="ERROR", json_format=True)
        get_logger("sllist.tests").warning("dropped")
        assert events(debug_logging) == []

    def test_bad_log_level_raises_on_configure(self, monkeypatch):
        structlog.reset_defaults()
        monkeypatch.setenv("SLLIST_LOG_LEVEL", "verbose")
        with pytest.raises(ValidationError):
            configure_logging()
        assert not structlog.is_configured()


class TestNoImportSideEffects:
    def test_get_logger_leaves_structlog_unconfigured(self):
        structlog.reset_defaults()
        logger = get_logger("sllist.tests")
        logger.debug("quiet")
        assert not structlog.is_configured()

    def test_unconfigured_engine_writes_nothing_to_stdout(self, capsys):
        structlog.reset_defaults()
        lst = SinglyLinkedList(INT32.element_size)
        lst.remove_front()
        lst.print_list(INT32.visitor(lambda v: None))
        lst.destroy()
        assert capsys.readouterr().out == "NULL\n"
        assert not structlog.is_configured()

    def test_import_keeps_application_logging(self, tmp_path):
        code = (
            "import structlog\n"
            "import sllist\n"
            "print('configured', structlog.is_configured())\n"
            "sllist.SinglyLinkedList(4).remove_front()\n"
            "structlog.get_logger('app').info('app_event')\n"
        )
        proc = run_python(code, tmp_path)
        assert proc.returncode == 0, proc.stderr
        assert "configured False" in proc.stdout
        assert "app_event" in proc.stdout
        assert "operation_ignored" not in proc.stdout

    def test_import_with_bad_log_level(self, tmp_path):
        code = (
            "import sllist\n"
            "try:\n"
            "    sllist.get_settings()\n"
            "except Exception as exc:\n"
            "    print('settings', type(exc).__name__)\n"
        )
        proc = run_python(code, tmp_path, SLLIST_LOG_LEVEL="verbose")
        assert proc.returncode == 0, proc.stderr
        assert "settings ValidationError" in proc.stdout

    def test_settings_read_at_call_time(self, monkeypatch):
        monkeypatch.setenv("SLLIST_LOG_LEVEL", "verbose")
        with pytest.raises(ValidationError):
            get_settings()


class TestEngineEvents:
    def test_operation_ignored(self, debug_logging):
        lst = SinglyLinkedList(INT32.element_size)
        debug_logging.clear()

        lst.remove_at_index(3)

        (event,) = events(debug_logging)
        assert event["event"] == "operation_ignored"
        assert event["error_type"] == "EmptyListError"
        assert event["category"] == "EMPTY"
        assert event["context"]["operation"] == "remove_at_index"
        assert event["context"]["element_size"] == 4

    def test_lifecycle_events(self, debug_logging):
        lst = SinglyLinkedList(INT32.element_size)
        lst.insert_end(INT32.encode(1))
        lst.clear()
        lst.insert_end(INT32.encode(2))
        lst.destroy()

        names = [event["event"] for event in events(debug_logging)]
        assert names == ["list_created", "list_cleared", "list_destroyed"]
        assert events(debug_logging)[-1]["nodes_released"] == 1

    def test_no_output_on_stdout(self, debug_logging, capsys):
        lst = SinglyLinkedList(INT32.element_size)
        lst.remove_front()
        lst.print_list(INT32.visitor(lambda v: None))
        assert capsys.readouterr().out == "NULL\n"


class TestContextVars:
    def test_bound_fields_are_merged(self, debug_logging):
        with structlog.contextvars.bound_contextvars(list_name="jobs"):
            get_logger("sllist.tests").info("bound")
        get_logger("sllist.tests").info("unbound")

        bound, unbound = events(debug_logging)
        assert bound["list_name"] == "jobs"
        assert "list_name" not in unbound
