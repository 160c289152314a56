from __future__ import annotations

import logging

import pytest

from docxref.core.diagnostics import LoggingEmitter, NullEmitter, format_event_message
from docxref.core.exceptions import (
    DocxrefError,
    FragmentLoadError,
    exception_hint,
    exception_messages,
)
from docxref.ui.cli.diagnostics import CliEmitter
from docxref.ui.cli.state import emit_error, set_cli_state


def _raise_nested_load_error() -> None:
    try:
        raise ValueError("Expecting value: line 1 column 9")
    except ValueError as exc:
        raise FragmentLoadError("Invalid JSON payload") from exc


def test_null_emitter_is_noop(caplog: pytest.LogCaptureFixture) -> None:
    emitter = NullEmitter()
    with caplog.at_level(logging.WARNING):
        emitter.warning("nothing to see")
        emitter.error("still quiet")
    assert not caplog.records
    emitter.event("ignored", {"value": 1})
    assert emitter.debug_enabled is False


def test_logging_emitter_logs_messages(caplog: pytest.LogCaptureFixture) -> None:
    emitter = LoggingEmitter(debug_enabled=True)
    with caplog.at_level(logging.ERROR):
        emitter.error("boom")
    assert any(record.message == "boom" for record in caplog.records)
    assert emitter.debug_enabled is True


def test_logging_emitter_formats_known_events(caplog: pytest.LogCaptureFixture) -> None:
    emitter = LoggingEmitter()
    with caplog.at_level(logging.DEBUG, logger="docxref"):
        emitter.event("fragment_delivered", {"namespaces": ["gdk", "pango"]})
        emitter.event("custom", {"flag": True})
    messages = [record.getMessage() for record in caplog.records]
    assert "Delivered fragments: gdk, pango" in messages
    assert "diagnostic event custom: {'flag': True}" in messages


@pytest.mark.parametrize(
    ("name", "payload", "expected"),
    [
        (
            "fragment_buffered",
            {"namespaces": ["libA"], "pending": 2},
            "Buffered fragments: libA (2 pending)",
        ),
        ("fragment_delivered", {"namespaces": []}, "Delivered fragments: <none>"),
        ("consumer_attached", {"replaced": True}, "Replaced registry consumer"),
        (
            "consumer_attached",
            {"replaced": False, "delivered": 3},
            "Attached registry consumer (3 pending namespaces flushed)",
        ),
        (
            "fragment_loaded",
            {"path": "doc/extra.json", "kind": "json", "namespaces": ["zbus"]},
            "Loaded json fragment doc/extra.json: zbus",
        ),
        ("unknown", {}, None),
    ],
)
def test_format_event_message(name: str, payload: dict, expected: str | None) -> None:
    assert format_event_message(name, payload) == expected


def test_cli_emitter_records_events_and_prints_when_verbose(
    capsys: pytest.CaptureFixture[str],
) -> None:
    state = set_cli_state(verbosity=1, debug=False)
    emitter = CliEmitter(state=state)

    emitter.warning("Heads up", exc=None)
    emitter.error("Boom", exc=None)
    emitter.event("fragment_delivered", {"namespaces": ["gdk"]})

    captured = capsys.readouterr()
    combined_output = f"{captured.out}\n{captured.err}"
    assert "Heads up" in combined_output
    assert "Boom" in combined_output
    assert "Delivered fragments: gdk" in combined_output
    assert state.consume_events("fragment_delivered") == [{"namespaces": ["gdk"]}]
    assert state.consume_events("fragment_delivered") == []


def test_cli_emitter_stays_quiet_without_verbosity(capsys: pytest.CaptureFixture[str]) -> None:
    state = set_cli_state(verbosity=0, debug=True)
    emitter = CliEmitter(state=state)
    assert emitter.debug_enabled is True

    emitter.event("fragment_buffered", {"namespaces": ["libA"], "pending": 1})

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""
    assert state.events["fragment_buffered"] == [{"namespaces": ["libA"], "pending": 1}]


def test_exception_helpers_walk_the_cause_chain() -> None:
    with pytest.raises(FragmentLoadError) as excinfo:
        _raise_nested_load_error()

    assert isinstance(excinfo.value, DocxrefError)
    assert exception_messages(excinfo.value) == [
        "Invalid JSON payload",
        "Expecting value: line 1 column 9",
    ]
    assert exception_hint(excinfo.value) == "Expecting value: line 1 column 9"
    assert exception_hint(RuntimeError("")) is None


def test_cli_error_reports_root_cause_and_chain(capsys: pytest.CaptureFixture[str]) -> None:
    set_cli_state(verbosity=2)
    with pytest.raises(FragmentLoadError) as excinfo:
        _raise_nested_load_error()

    emit_error("Unable to load fragments", exception=excinfo.value)

    err = capsys.readouterr().err
    assert "root cause: Expecting value: line 1 column 9" in err
    assert "type: FragmentLoadError" in err
    assert "caused by:" in err
    assert err.count("Expecting value: line 1 column 9") == 2


def test_cli_error_hides_chain_without_verbosity(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(FragmentLoadError) as excinfo:
        _raise_nested_load_error()

    emit_error("Unable to load fragments", exception=excinfo.value)

    err = capsys.readouterr().err
    assert "Unable to load fragments" in err
    assert "root cause" not in err
    assert "caused by" not in err
