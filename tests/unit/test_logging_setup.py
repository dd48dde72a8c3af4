from __future__ import annotations

import logging

import pytest

from backend.app.infra import logging as logging_module
from backend.app.infra.logging import KeyValueFormatter, configure_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "backend.app.test", logging.INFO, __file__, 1, "entry_created", None, None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_sorted_extras():
    formatter = KeyValueFormatter("%(levelname)s %(message)s")

    rendered = formatter.format(_record(entry_id=7, category="Food"))

    assert rendered == "INFO entry_created | category='Food' entry_id=7"


def test_formatter_without_extras_is_plain():
    formatter = KeyValueFormatter("%(message)s")

    assert formatter.format(_record()) == "entry_created"


@pytest.fixture
def restore_root_logger(monkeypatch):
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    monkeypatch.setattr(logging_module, "_configured", False)
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_configure_logging_is_idempotent(restore_root_logger):
    root = restore_root_logger

    configure_logging("debug")
    configure_logging("error")

    ours = [h for h in root.handlers if getattr(h, "_budget_ledger_handler", False)]
    assert len(ours) == 1
    assert root.level == logging.DEBUG


def test_configure_logging_force_replaces_handler(restore_root_logger):
    root = restore_root_logger

    configure_logging("INFO")
    configure_logging(logging.WARNING, force=True)

    ours = [h for h in root.handlers if getattr(h, "_budget_ledger_handler", False)]
    assert len(ours) == 1
    assert isinstance(ours[0].formatter, KeyValueFormatter)
    assert root.level == logging.WARNING
