#!/usr/bin/env python3
"""
Fantastical URL-scheme builders
All dynamic segments are percent-encoded here; the runner opens URLs verbatim
"""

from typing import Optional
from urllib.parse import quote, urlencode

DEFAULT_SCHEME = "x-fantastical3"

# Characters encodeURIComponent leaves alone besides the unreserved set
_COMPONENT_SAFE = "!'()*"


def encode_component(value: str) -> str:
    return quote(value, safe=_COMPONENT_SAFE)


def parse_url(sentence: str, calendar: Optional[str] = None, notes: Optional[str] = None,
              add_immediately: bool = True, scheme: str = DEFAULT_SCHEME) -> str:
    """Event-creation URL: parse?s=&add=&calendarName=&n="""
    params = [("s", sentence)]
    if add_immediately:
        params.append(("add", "1"))
    if calendar:
        params.append(("calendarName", calendar))
    if notes:
        params.append(("n", notes))
    return f"{scheme}://parse?{urlencode(params)}"


def show_date_url(date: str, scheme: str = DEFAULT_SCHEME) -> str:
    """Navigate to a date; the date text is passed through unvalidated"""
    return f"{scheme}://show/calendar/{encode_component(date)}"


def show_today_url(scheme: str = DEFAULT_SCHEME) -> str:
    return f"{scheme}://show/calendar/today"


def search_url(query: str, scheme: str = DEFAULT_SCHEME) -> str:
    return f"{scheme}://search?query={encode_component(query)}"
