import json
import logging

from shared.config import GlobalConfig
from shared.logger import PescopeLogger


def read_records(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


def test_json_file_log(tmp_path):
    log_path = tmp_path / "logs" / "pescope.log"
    log = PescopeLogger(
        "test-json",
        log_level="DEBUG",
        log_file=log_path,
        json_logs=True,
        console_output=False,
    )

    with log.operation("parse"):
        log.info("Parsed %d sections", 3, machine="x86")
    log.warning("outside")

    records = read_records(log_path)
    assert records[0]["message"] == "Parsed 3 sections"
    assert records[0]["level"] == "INFO"
    assert records[0]["logger"] == "pescope.test-json"
    assert records[0]["tool_name"] == "test-json"
    assert records[0]["operation"] == "parse"
    assert records[0]["extra"] == {"machine": "x86"}

    assert records[1]["message"] == "outside"
    assert "operation" not in records[1]


def test_level_filtering(tmp_path):
    log_path = tmp_path / "pescope.log"
    log = PescopeLogger("test-level", log_file=log_path, json_logs=True, console_output=False)

    log.debug("hidden")
    log.info("hidden")
    log.warning("shown")

    assert [r["message"] for r in read_records(log_path)] == ["shown"]


def test_timed_logs_completion(tmp_path):
    log_path = tmp_path / "pescope.log"
    log = PescopeLogger(
        "test-timed", log_level="DEBUG", log_file=log_path, json_logs=True, console_output=False
    )

    with log.timed("parse"):
        pass

    messages = [r["message"] for r in read_records(log_path)]
    assert messages[0] == "Started: parse"
    assert messages[1].startswith("Completed: parse (")


def test_from_config():
    settings = GlobalConfig(log_level="ERROR")
    assert PescopeLogger.from_config("test-cfg", settings).underlying.level == logging.ERROR

    verbose = PescopeLogger.from_config("test-cfg", settings, verbose=True)
    assert verbose.underlying.level == logging.DEBUG
    assert verbose.tool_name == "test-cfg"


def test_handlers_not_duplicated():
    PescopeLogger("test-dup")
    log = PescopeLogger("test-dup")
    assert len(log.underlying.handlers) == 1
    assert log.underlying.propagate is False
