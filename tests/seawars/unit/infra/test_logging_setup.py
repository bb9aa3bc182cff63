import json
import logging

from seawars.engine.logging import JsonFormatter, LoggingConfig, configure_logging, shutdown_logging
from seawars.infra.app_data import resolve_logs_dir, resolve_results_file
from seawars.infra.logging import build_logging_config


def test_json_formatter_includes_fields_and_message() -> None:
    logger = logging.getLogger("test.json.formatter")
    record = logger.makeRecord(
        name=logger.name,
        level=logging.INFO,
        fn=__file__,
        lno=1,
        msg="hello %s",
        args=("world",),
        exc_info=None,
        extra={"custom": 1},
    )
    payload = json.loads(JsonFormatter().format(record))
    assert payload["msg"] == "hello world"
    assert payload["level"] == "INFO"
    assert payload["fields"] == {"custom": 1}


def test_build_logging_config_reads_env(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("SEAWARS_APP_DATA_DIR", str(tmp_path / "appdata"))
    monkeypatch.delenv("SEAWARS_LOG_DIR", raising=False)
    monkeypatch.delenv("SEAWARS_LOG_LEVEL", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FORMAT", "JSON")
    config = build_logging_config()
    assert config.level_name == "DEBUG"
    assert config.console_format == "json"
    assert config.file_path is not None
    assert config.file_path.startswith(str(tmp_path / "appdata" / "logs"))
    assert config.file_path.endswith(".jsonl")


def test_configure_logging_writes_json_lines_file(tmp_path) -> None:
    log_file = tmp_path / "logs" / "run.jsonl"
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    try:
        configure_logging(
            LoggingConfig(level_name="DEBUG", console_format="text", file_path=str(log_file))
        )
        assert root.level == logging.DEBUG
        logging.getLogger("test.logging.file").info("hello", extra={"shot": "B7"})
        shutdown_logging()
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)

    lines = log_file.read_text(encoding="utf-8").splitlines()
    entry = json.loads(lines[-1])
    assert entry["msg"] == "hello"
    assert entry["fields"]["shot"] == "B7"


def test_app_data_paths_honor_overrides(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("SEAWARS_APP_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("SEAWARS_LOG_DIR", "custom_logs")
    monkeypatch.delenv("SEAWARS_RESULTS_FILE", raising=False)
    assert resolve_logs_dir() == tmp_path / "custom_logs"
    assert resolve_results_file() == tmp_path / "results" / "game_results.jsonl"
    monkeypatch.setenv("SEAWARS_RESULTS_FILE", str(tmp_path / "other.jsonl"))
    assert resolve_results_file() == tmp_path / "other.jsonl"
