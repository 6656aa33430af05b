#!/usr/bin/env python3
"""
AppleScript programs sent to Calendar and Fantastical.

Event queries compute their range from the scripting host's own clock
(`current date`) so no locale-dependent date literal is ever parsed.
Each output line is `calendar|title|start|end|location`.
"""

FIELD_DELIMITER = "|"

_EVENT_RANGE_TEMPLATE = """
set output to ""
set rangeStart to current date
set hours of rangeStart to 0
set minutes of rangeStart to 0
set seconds of rangeStart to 0
set rangeEnd to rangeStart + ({days} * days)

tell application "{calendar_app}"
  repeat with cal in calendars
    set calName to name of cal
    try
      set calEvents to (every event of cal whose start date >= rangeStart and start date < rangeEnd)
      repeat with evt in calEvents
        set evtTitle to summary of evt
        set evtStart to start date of evt
        set evtEnd to end date of evt
        set evtLoc to location of evt
        if evtLoc is missing value then set evtLoc to ""
        set output to output & calName & "|" & evtTitle & "|" & (evtStart as string) & "|" & (evtEnd as string) & "|" & evtLoc & "\\n"
      end repeat
    end try
  end repeat
end tell
return output"""

_CALENDAR_LIST_TEMPLATE = """
set output to ""
tell application "{calendar_app}"
  repeat with cal in calendars
    set calName to name of cal
    set calColor to color of cal
    set output to output & calName & "\\n"
  end repeat
end tell
return output"""


def _format_days(days) -> str:
    if isinstance(days, float) and days.is_integer():
        return str(int(days))
    return str(days)


def event_range_script(days=1, calendar_app: str = "Calendar") -> str:
    """Program listing events starting in [today 00:00, today + days)"""
    return _EVENT_RANGE_TEMPLATE.format(days=_format_days(days), calendar_app=calendar_app)


def calendar_list_script(calendar_app: str = "Calendar") -> str:
    """Program listing calendar names, one per line"""
    return _CALENDAR_LIST_TEMPLATE.format(calendar_app=calendar_app)


def _escape_string_literal(text: str) -> str:
    return text.replace('"', '\\"')


def parse_sentence_statement(sentence: str, calendar: str = None, notes: str = None,
                             add_immediately: bool = True, app: str = "Fantastical") -> str:
    """Fantastical `parse sentence` statement for event creation only.

    Calendar and notes ride along as `/calendar` and `/note` suffixes that
    Fantastical's parser understands.
    """
    text = sentence
    if calendar:
        text += f" /calendar {calendar}"
    if notes:
        text += f" /note {notes}"
    statement = f'tell application "{app}" to parse sentence "{_escape_string_literal(text)}"'
    if add_immediately:
        statement += " with add immediately"
    return statement
