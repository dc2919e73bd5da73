"""
Formatter unit tests.
"""

from __future__ import annotations

from datetime import datetime, timezone

import orjson

from neolog.formatters import LineFormatter, LogstashFormatter, format_long_date
from neolog.levels import Level
from neolog.record import LogRecord


def make_record(**overrides) -> LogRecord:
    values = dict(
        level=Level.DEBUG,
        channel="neo",
        type="jobs",
        message="started",
        logger_id="abc123",
        datetime=datetime(2024, 1, 2, 3, 4, 5, 678901, tzinfo=timezone.utc),
        logger_time="2024-01-02 03:04:05.678901",
        context={"user": "a"},
        extra={},
        line="No.0/app.py:7",
    )
    values.update(overrides)
    return LogRecord(**values)


class TestLineFormatter:
    def test_simple_format(self) -> None:
        line = LineFormatter().format(make_record())
        assert line == '[2024-01-02 03:04:05.678901] neo.DEBUG abc123 started {"user":"a"} [] No.0/app.py:7\n'

    def test_empty_context_renders_as_brackets(self) -> None:
        line = LineFormatter().format(make_record(context={}, extra={"host": "web-1"}))
        assert ' started [] {"host":"web-1"} ' in line

    def test_newlines_are_flattened(self) -> None:
        line = LineFormatter().format(make_record(message="two\nlines", context={"trace": "a\r\nb"}))
        assert line.count("\n") == 1
        assert "two lines" in line
        assert '"trace":"a b"' in line

    def test_unicode_is_not_escaped(self) -> None:
        line = LineFormatter().format(make_record(context={"name": "日志"}))
        assert '{"name":"日志"}' in line

    def test_custom_format(self) -> None:
        assert LineFormatter("%level_name%|%message%").format(make_record(level=Level.ALERT)) == "ALERT|started"

    def test_stringify_scalars(self) -> None:
        assert LineFormatter.stringify(None) == "NULL"
        assert LineFormatter.stringify(True) == "true"
        assert LineFormatter.stringify(3) == "3"


class TestLogstashFormatter:
    def test_v0_layout(self) -> None:
        formatter = LogstashFormatter(application_name="jobs", system_name="neologstash", tz=timezone.utc)
        message = orjson.loads(formatter.format(make_record(extra={"host": "web-1"})))

        assert message["@timestamp"] == "2024-01-02T03:04:05.678901+00:00"
        assert message["@source"] == "neologstash"
        assert message["@type"] == "jobs"
        assert message["@message"] == "started"
        assert message["@tags"] == ["neo"]
        assert message["@fields"] == {"channel": "neo", "level": 100, "host": "web-1", "user": "a"}
        assert message["@loggerid"] == "abc123"
        assert message["@fileline"] == "No.0/app.py:7"

    def test_loggertime_is_stamped_at_format_time(self) -> None:
        formatter = LogstashFormatter(application_name="jobs", system_name="k", tz=timezone.utc)
        message = formatter.to_dict(make_record())
        assert message["@loggertime"] != "2024-01-02 03:04:05.678901"
        assert datetime.strptime(message["@loggertime"], "%Y-%m-%d %H:%M:%S.%f")

    def test_fileline_omitted_without_line(self) -> None:
        formatter = LogstashFormatter(application_name="", system_name="k")
        message = formatter.to_dict(make_record(line=None))
        assert "@fileline" not in message
        assert "@type" not in message

    def test_prefixes(self) -> None:
        formatter = LogstashFormatter("jobs", "k", extra_prefix="x_", context_prefix="ctxt_")
        fields = formatter.to_dict(make_record(extra={"host": "h"}))["@fields"]
        assert fields["x_host"] == "h"
        assert fields["ctxt_user"] == "a"


def test_format_long_date() -> None:
    assert format_long_date(86400, timezone.utc) == "1970-01-02 00:00:00"


def test_placeholder_tokens_in_user_text_are_kept() -> None:
    record = make_record(message="disk at 95%line% full", context={"note": "50%extra%"})
    line = LineFormatter().format(record)
    assert line == (
        "[2024-01-02 03:04:05.678901] neo.DEBUG abc123 disk at 95%line% full "
        '{"note":"50%extra%"} [] No.0/app.py:7\n'
    )


def test_unknown_placeholder_is_left_alone() -> None:
    assert LineFormatter("%message% %nope%").format(make_record()) == "started %nope%"
