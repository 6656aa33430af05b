#!/usr/bin/env python3
"""
Tool Catalog for the Fantastical MCP server
Static, ordered tool descriptors returned verbatim for list_tools
"""

from enum import Enum
from typing import Tuple

from mcp.types import Tool


class ToolName(str, Enum):
    CREATE_EVENT = "fantastical_create_event"
    GET_TODAY = "fantastical_get_today"
    GET_UPCOMING = "fantastical_get_upcoming"
    SHOW_DATE = "fantastical_show_date"
    GET_CALENDARS = "fantastical_get_calendars"
    SEARCH = "fantastical_search"


DEFAULT_UPCOMING_DAYS = 7

TOOLS: Tuple[Tool, ...] = (
    Tool(
        name=ToolName.CREATE_EVENT.value,
        description=(
            "Create a calendar event using Fantastical's natural language parsing. "
            "Examples: 'Meeting with John tomorrow at 3pm', 'Dentist appointment Friday 10am', "
            "'Call with team every Monday at 9am'"
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "sentence": {
                    "type": "string",
                    "description": "Natural language description of the event (e.g., 'Lunch with Sarah tomorrow at noon')"
                },
                "calendar": {
                    "type": "string",
                    "description": "Optional: Target calendar name (e.g., 'Work', 'Personal')"
                },
                "notes": {
                    "type": "string",
                    "description": "Optional: Additional notes for the event"
                },
                "addImmediately": {
                    "type": "boolean",
                    "description": "Add immediately without showing Fantastical UI (default: true)",
                    "default": True
                }
            },
            "required": ["sentence"]
        }
    ),
    Tool(
        name=ToolName.GET_TODAY.value,
        description=(
            "Get today's calendar events. Note: Reads from macOS Calendar app (synced with Fantastical). "
            "Requires Calendar automation permission."
        ),
        inputSchema={
            "type": "object",
            "properties": {},
            "required": []
        }
    ),
    Tool(
        name=ToolName.GET_UPCOMING.value,
        description=(
            "Get upcoming calendar events. Note: Reads from macOS Calendar app (synced with Fantastical). "
            "Requires Calendar automation permission."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "days": {
                    "type": "number",
                    "description": "Number of days to look ahead (default: 7)",
                    "default": DEFAULT_UPCOMING_DAYS
                }
            },
            "required": []
        }
    ),
    Tool(
        name=ToolName.SHOW_DATE.value,
        description="Open Fantastical and navigate to a specific date",
        inputSchema={
            "type": "object",
            "properties": {
                "date": {
                    "type": "string",
                    "description": "Date to show (e.g., '2025-01-15', 'tomorrow', 'next monday')"
                }
            },
            "required": ["date"]
        }
    ),
    Tool(
        name=ToolName.GET_CALENDARS.value,
        description=(
            "List all available calendars. Note: Reads from macOS Calendar app (synced with Fantastical). "
            "Requires Calendar automation permission."
        ),
        inputSchema={
            "type": "object",
            "properties": {},
            "required": []
        }
    ),
    Tool(
        name=ToolName.SEARCH.value,
        description="Search for events by text in Fantastical",
        inputSchema={
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Search query (event title, location, or notes)"
                }
            },
            "required": ["query"]
        }
    ),
)


def get_tools() -> list:
    """Catalog as a fresh list, in declaration order"""
    return list(TOOLS)
