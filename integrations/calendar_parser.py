#!/usr/bin/env python3
"""
Parsing of Calendar AppleScript output into structured events
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from dateutil import parser as date_parser

from integrations.calendar_scripts import FIELD_DELIMITER

EVENT_FIELDS = ("calendar", "title", "start", "end", "location")

logger = logging.getLogger("FantasticalMCP_Parser")


@dataclass
class CalendarEvent:
    calendar: str
    title: str
    start: str
    end: str
    location: str = ""
    start_timestamp: Optional[datetime] = field(default=None, compare=False, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "calendar": self.calendar,
            "title": self.title,
            "start": self.start,
            "end": self.end,
            "location": self.location,
        }


def parse_timestamp(text: str) -> Optional[datetime]:
    """Best-effort parse of an AppleScript date string, None if unreadable"""
    if not text or not text.strip():
        return None
    try:
        parsed = date_parser.parse(text)
    except (ValueError, OverflowError):
        return None
    # Mixed aware/naive values cannot be compared while sorting
    return parsed.replace(tzinfo=None)


def _non_blank_lines(raw_text: str) -> List[str]:
    return [line for line in raw_text.split("\n") if line.strip()]


def parse_event_line(line: str) -> CalendarEvent:
    """Split one output line into an event; missing fields become ''"""
    parts = line.split(FIELD_DELIMITER)
    values = (parts + [""] * len(EVENT_FIELDS))[:len(EVENT_FIELDS)]
    event = CalendarEvent(*values)
    event.start_timestamp = parse_timestamp(event.start)
    return event


def parse_event_lines(raw_text: str) -> List[CalendarEvent]:
    """Parse delimited event lines, sorted by start time.

    The sort is stable. Events whose start cannot be parsed go last in
    their original order. Short lines are kept with empty trailing fields.
    """
    events = []
    short_lines = 0
    for line in _non_blank_lines(raw_text):
        if line.count(FIELD_DELIMITER) < len(EVENT_FIELDS) - 1:
            short_lines += 1
        events.append(parse_event_line(line))

    if short_lines:
        logger.warning(f"{short_lines} event line(s) had fewer than {len(EVENT_FIELDS)} fields")

    return sorted(
        events,
        key=lambda e: (e.start_timestamp is None, e.start_timestamp or datetime.min),
    )


def parse_calendar_names(raw_text: str) -> List[Dict[str, str]]:
    """One calendar name per non-blank line"""
    return [{"name": line} for line in _non_blank_lines(raw_text)]
