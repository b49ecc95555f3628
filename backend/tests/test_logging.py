# ruff: noqa: INP001

from __future__ import annotations

import json
import logging

from staff_alias.core.logging import JsonFormatter, KeyValueFormatter


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="staff_alias.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="staff_alias.audit.write_failed",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_key_value_formatter_appends_extras() -> None:
    formatter = KeyValueFormatter("%(levelname)s %(message)s")
    line = formatter.format(_record(post_id="p1", action="create"))
    assert line == "WARNING staff_alias.audit.write_failed action=create post_id=p1"


def test_json_formatter_includes_extras() -> None:
    payload = json.loads(JsonFormatter().format(_record(actor_id="a1")))
    assert payload["message"] == "staff_alias.audit.write_failed"
    assert payload["level"] == "WARNING"
    assert payload["actor_id"] == "a1"
