#!/usr/bin/env python3
"""
Tool Dispatcher for the Fantastical MCP server

Maps each tool invocation to an AppleScript program or a Fantastical URL,
runs it, and packages the outcome as a ToolResult. Holds no state between
calls. Nothing raised inside a handler escapes dispatch(): failures come
back as error-flagged results.
"""

import json
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from core.tool_catalog import ToolName
from fantastical_mcp import config as fm_config
from integrations import applescript_runner as runner
from integrations import calendar_scripts, fantastical_urls
from integrations.calendar_parser import parse_calendar_names, parse_event_lines
from security.automation_permissions import permission_message

logger = logging.getLogger("fantastical-mcp.dispatcher")


@dataclass
class ToolResult:
    payload: Union[Dict[str, Any], str]
    is_error: bool = False

    @property
    def text(self) -> str:
        if isinstance(self.payload, str):
            return self.payload
        return json.dumps(self.payload, indent=2, ensure_ascii=False)


def _today() -> date:
    return date.today()


def _require_string(arguments: Dict[str, Any], key: str) -> str:
    value = arguments.get(key)
    if not isinstance(value, str):
        raise ValueError(f"Missing required argument: {key}")
    return value


def _optional_string(arguments: Dict[str, Any], key: str) -> Optional[str]:
    value = arguments.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"Argument '{key}' must be a string")
    return value


def _optional_bool(arguments: Dict[str, Any], key: str, default: bool) -> bool:
    value = arguments.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValueError(f"Argument '{key}' must be a boolean")
    return value


def _days_argument(arguments: Dict[str, Any]):
    days = arguments.get("days")
    if days is None:
        return fm_config.get_settings()["default_days"]
    if isinstance(days, bool) or not isinstance(days, (int, float)):
        raise ValueError("Argument 'days' must be a number")
    if days < 0:
        raise ValueError("Argument 'days' must not be negative")
    if isinstance(days, float) and days.is_integer():
        return int(days)
    return days


async def _read_events(days) -> list:
    settings = fm_config.get_settings()
    script = calendar_scripts.event_range_script(days, calendar_app=settings["calendar_app"])
    output = await runner.run_applescript_multiline(script)
    return [event.to_dict() for event in parse_event_lines(output)]


async def _permission_fallback() -> ToolResult:
    """Open Fantastical on today's view when Calendar cannot be read"""
    scheme = fm_config.get_settings()["url_scheme"]
    await runner.open_url(fantastical_urls.show_today_url(scheme))
    return ToolResult(permission_message(with_fallback=True), is_error=True)


async def create_event(arguments: Dict[str, Any]) -> ToolResult:
    sentence = _require_string(arguments, "sentence")
    calendar = _optional_string(arguments, "calendar")
    notes = _optional_string(arguments, "notes")
    add_immediately = _optional_bool(arguments, "addImmediately", default=True)

    settings = fm_config.get_settings()
    if settings["create_event_strategy"] == "applescript":
        statement = calendar_scripts.parse_sentence_statement(
            sentence, calendar, notes, add_immediately, app=settings["companion_app"]
        )
        await runner.run_applescript(statement)
    else:
        url = fantastical_urls.parse_url(
            sentence, calendar, notes, add_immediately, scheme=settings["url_scheme"]
        )
        await runner.open_url(url)

    # Fantastical reports real failures in its own UI; nothing comes back here
    return ToolResult({
        "success": True,
        "message": f'Event created: "{sentence}"',
        "calendar": calendar or "default",
        "addedImmediately": add_immediately,
    })


async def get_today(arguments: Dict[str, Any]) -> ToolResult:
    try:
        events = await _read_events(1)
    except runner.AutomationError as e:
        if e.is_permission_denied:
            return await _permission_fallback()
        raise

    return ToolResult({
        "date": _today().isoformat(),
        "count": len(events),
        "events": events,
    })


async def get_upcoming(arguments: Dict[str, Any]) -> ToolResult:
    days = _days_argument(arguments)
    start = _today()
    end = start + timedelta(days=days)

    try:
        events = await _read_events(days)
    except runner.AutomationError as e:
        if e.is_permission_denied:
            return await _permission_fallback()
        raise

    return ToolResult({
        "range": {
            "start": start.isoformat(),
            "end": end.isoformat(),
            "days": days,
        },
        "count": len(events),
        "events": events,
    })


async def show_date(arguments: Dict[str, Any]) -> ToolResult:
    target = _require_string(arguments, "date")
    scheme = fm_config.get_settings()["url_scheme"]
    await runner.open_url(fantastical_urls.show_date_url(target, scheme))
    return ToolResult({
        "success": True,
        "message": f"Opened Fantastical to date: {target}",
    })


async def get_calendars(arguments: Dict[str, Any]) -> ToolResult:
    settings = fm_config.get_settings()
    script = calendar_scripts.calendar_list_script(calendar_app=settings["calendar_app"])
    try:
        output = await runner.run_applescript_multiline(script)
    except runner.AutomationError as e:
        if e.is_permission_denied:
            return ToolResult(permission_message(), is_error=True)
        raise

    calendars = parse_calendar_names(output)
    return ToolResult({
        "count": len(calendars),
        "calendars": calendars,
    })


async def search(arguments: Dict[str, Any]) -> ToolResult:
    query = _require_string(arguments, "query")
    scheme = fm_config.get_settings()["url_scheme"]
    # Only drives Fantastical's search UI; no results are read back
    await runner.open_url(fantastical_urls.search_url(query, scheme))
    return ToolResult({
        "success": True,
        "message": f'Opened Fantastical search for: "{query}"',
    })


HANDLERS: Dict[ToolName, Callable[[Dict[str, Any]], Awaitable[ToolResult]]] = {
    ToolName.CREATE_EVENT: create_event,
    ToolName.GET_TODAY: get_today,
    ToolName.GET_UPCOMING: get_upcoming,
    ToolName.SHOW_DATE: show_date,
    ToolName.GET_CALENDARS: get_calendars,
    ToolName.SEARCH: search,
}

_missing = set(ToolName) - set(HANDLERS)
if _missing:
    raise RuntimeError(f"Tools without handlers: {sorted(t.value for t in _missing)}")


def resolve_tool(name: str) -> ToolName:
    try:
        return ToolName(name)
    except ValueError:
        raise ValueError(f"Unknown tool: {name}") from None


async def dispatch(name: str, arguments: Optional[Dict[str, Any]]) -> ToolResult:
    """Run one tool invocation, always returning a ToolResult"""
    try:
        tool = resolve_tool(name)
        logger.info(f"Calling tool {tool.value}")
        return await HANDLERS[tool](dict(arguments or {}))
    except Exception as e:
        logger.error(f"Error in tool {name}: {e}")
        return ToolResult(f"Error: {e}", is_error=True)
