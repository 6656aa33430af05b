#!/usr/bin/env python3
"""
Fantastical MCP Server
Exposes Fantastical and macOS Calendar operations as MCP tools over stdio

Requirements:
- macOS only, with Fantastical installed
- Reading events needs Calendar automation permission
  (System Settings → Privacy & Security → Automation → [your terminal/app] → Calendar)
"""

import asyncio
import logging
import sys
from typing import Any, Dict, List

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, TextContent, Tool

from core.dispatcher import dispatch
from core.tool_catalog import get_tools
from fantastical_mcp import config as fm_config
from integrations.applescript_runner import is_fantastical_running

SERVER_NAME = "mcp-fantastical"
SERVER_VERSION = "1.0.0"

logger = logging.getLogger("fantastical-mcp")

server = Server(SERVER_NAME, version=SERVER_VERSION)


@server.list_tools()
async def list_tools() -> List[Tool]:
    """List all available Fantastical tools"""
    return get_tools()


@server.call_tool(validate_input=False)
async def call_tool(name: str, arguments: Dict[str, Any]) -> CallToolResult:
    """Route a tool call through the dispatcher, which owns argument checks"""
    result = await dispatch(name, arguments)
    return CallToolResult(
        content=[TextContent(type="text", text=result.text)],
        isError=result.is_error,
    )


async def check_installation() -> None:
    if await is_fantastical_running():
        logger.info("Fantastical is running")
    else:
        logger.warning("Fantastical does not appear to be running; URL actions may fail")


async def main():
    """Main entry point"""
    if sys.platform != "darwin":
        logger.error("Error: This MCP server only works on macOS (Fantastical is macOS-only)")
        sys.exit(1)

    if fm_config.get_settings().get("check_installation"):
        await check_installation()

    async with stdio_server() as (read_stream, write_stream):
        logger.info("Fantastical MCP server running")
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run():
    """Console-script entry point"""
    try:
        fm_config.setup_logging()
        asyncio.run(main())
    except SystemExit:
        raise
    except KeyboardInterrupt:
        logger.info("Fantastical MCP server stopped")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    run()
