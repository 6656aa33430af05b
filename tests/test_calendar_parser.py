"""Tests for integrations.calendar_parser."""

import logging
from datetime import datetime

from integrations.calendar_parser import (
    CalendarEvent,
    parse_calendar_names,
    parse_event_line,
    parse_event_lines,
    parse_timestamp,
)


SAMPLE = (
    "Work|Standup|Mon Jan 1 2025 9:00:00 AM|Mon Jan 1 2025 9:30:00 AM|Room 1\n"
    "Home|Dentist|Mon Jan 1 2025 2:00:00 PM|Mon Jan 1 2025 3:00:00 PM|\n"
)


class TestParseEventLines:
    def test_two_records_in_order(self):
        events = parse_event_lines(SAMPLE)
        assert [e.title for e in events] == ["Standup", "Dentist"]
        assert events[0].to_dict() == {
            "calendar": "Work",
            "title": "Standup",
            "start": "Mon Jan 1 2025 9:00:00 AM",
            "end": "Mon Jan 1 2025 9:30:00 AM",
            "location": "Room 1",
        }
        assert events[1].location == ""

    def test_reverse_input_sorted_ascending(self):
        raw = (
            "Work|Late|Friday, January 3, 2025 at 5:00:00 PM|Friday, January 3, 2025 at 6:00:00 PM|\n"
            "Work|Middle|Thursday, January 2, 2025 at 10:00:00 AM|Thursday, January 2, 2025 at 11:00:00 AM|\n"
            "Home|Early|Wednesday, January 1, 2025 at 8:00:00 AM|Wednesday, January 1, 2025 at 9:00:00 AM|\n"
        )
        assert [e.title for e in parse_event_lines(raw)] == ["Early", "Middle", "Late"]

    def test_ties_keep_input_order(self):
        raw = (
            "A|First|Jan 1 2025 9:00 AM|Jan 1 2025 10:00 AM|\n"
            "B|Second|Jan 1 2025 9:00 AM|Jan 1 2025 9:30 AM|\n"
        )
        assert [e.title for e in parse_event_lines(raw)] == ["First", "Second"]

    def test_blank_and_whitespace_lines_dropped(self):
        events = parse_event_lines("\n   \nWork|X|t1|t2|\n")
        assert len(events) == 1
        assert events[0].calendar == "Work"
        assert events[0].title == "X"

    def test_empty_output(self):
        assert parse_event_lines("") == []

    def test_line_without_delimiter_degrades(self, caplog):
        with caplog.at_level(logging.WARNING):
            events = parse_event_lines("garbage")
        assert len(events) == 1
        assert events[0].to_dict() == {
            "calendar": "garbage", "title": "", "start": "", "end": "", "location": "",
        }
        assert "fewer than 5 fields" in caplog.text

    def test_unparseable_start_sorts_last(self):
        raw = (
            "Work|Unknown|sometime soon|later|\n"
            "Work|Known|Jan 2 2025 9:00 AM|Jan 2 2025 10:00 AM|\n"
        )
        assert [e.title for e in parse_event_lines(raw)] == ["Known", "Unknown"]

    def test_extra_fields_ignored(self):
        event = parse_event_line("Work|T|Jan 1 2025 9:00 AM|Jan 1 2025 10:00 AM|Room|extra")
        assert event.location == "Room"


class TestParseTimestamp:
    def test_applescript_long_format(self):
        parsed = parse_timestamp("Wednesday, January 1, 2025 at 9:30:00 AM")
        assert parsed == datetime(2025, 1, 1, 9, 30)

    def test_blank(self):
        assert parse_timestamp("   ") is None

    def test_nonsense(self):
        assert parse_timestamp("sometime soon") is None


class TestCalendarEvent:
    def test_timestamp_not_serialized(self):
        event = CalendarEvent("Work", "T", "s", "e", start_timestamp=datetime(2025, 1, 1))
        assert "start_timestamp" not in event.to_dict()


class TestParseCalendarNames:
    def test_names(self):
        assert parse_calendar_names("Work\n\nHome\n  \n") == [{"name": "Work"}, {"name": "Home"}]
