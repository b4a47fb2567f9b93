from __future__ import annotations

import logging
from pathlib import Path

from contextgen.logging import configure_logging, get_logger, log_stage


def test_loggers_nest_under_package_root() -> None:
    assert get_logger().name == "contextgen"
    assert get_logger("pipeline").name == "contextgen.pipeline"


def test_quiet_wins_over_verbose(tmp_path: Path) -> None:
    logger = configure_logging(verbose=True, quiet=True)

    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1


def test_repeated_configuration_does_not_stack_handlers(tmp_path: Path) -> None:
    log_file = tmp_path / "run.log"
    configure_logging(verbose=True, log_file=log_file)
    logger = configure_logging(verbose=True, log_file=log_file)

    get_logger("test").debug("hello from test")
    for handler in logger.handlers:
        handler.flush()

    assert len(logger.handlers) == 2
    assert "contextgen.test: hello from test" in log_file.read_text(encoding="utf-8")
    configure_logging()


def test_log_stage_reports_completion(tmp_path: Path) -> None:
    log_file = tmp_path / "stage.log"
    configure_logging(verbose=True, log_file=log_file)

    with log_stage(get_logger("test"), "scan"):
        pass
    for handler in get_logger().handlers:
        handler.flush()

    assert "scan" in log_file.read_text(encoding="utf-8")
    configure_logging()
