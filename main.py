# =============================================================================
# main.py  —  Entry Point for the Dumpling AI MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py                   # serve MCP over stdio
#   uv run python main.py --list-tools      # print every tool schema, exit
#   uv run python main.py --describe scrape # print one tool schema, exit
#
# HOST CONFIGURATION (e.g. an MCP client's server list):
#   {
#     "command": "uv",
#     "args": ["run", "python", "/path/to/main.py"],
#     "env": {"DUMPLING_API_KEY": "<your key>"}
#   }
#
# WHAT HAPPENS:
#   1. .env is loaded (python-dotenv), then Settings are read
#   2. Logging goes to stderr; stdout belongs to the MCP protocol
#   3. The FastMCP server is built and runs until the host closes stdin
#
# EXIT CODES:
#   0 → the host closed the connection
#   1 → startup failed (bad configuration, transport error); the reason is
#       logged to stderr
#
# The API key is NOT required to start.  Hosts list tools before any key is
# configured; each tool call checks the key itself.
# =============================================================================

import argparse
import asyncio
import json
import logging
import sys

from dotenv import load_dotenv

# Load .env BEFORE reading Settings so file-based values are visible.
load_dotenv()

from dumpling.config import Settings
from dumpling.errors import DumplingError
from dumpling_mcp.server import configure_logging, create_server, describe_tool, describe_tools


logger = logging.getLogger("dumpling_mcp")


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Dumpling AI MCP server (stdio).")
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--list-tools", action="store_true", help="Print all tool schemas as JSON and exit."
    )
    group.add_argument("--describe", metavar="TOOL", help="Print one tool schema as JSON and exit.")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Start the server, or answer an introspection flag.

    Returns the process exit code.
    """
    args = _parse_args(argv)

    try:
        settings = Settings.from_env()
    except DumplingError as exc:
        # Logging is not configured yet; fall back to the default format.
        configure_logging()
        logger.error(f"Invalid configuration: {exc}")
        return 1

    configure_logging(settings.log_level)

    try:
        mcp = create_server(settings)
    except Exception:
        logger.exception("Could not build the MCP server")
        return 1

    # Introspection prints to stdout: no MCP session is running in this mode.
    if args.list_tools:
        print(json.dumps(asyncio.run(describe_tools(mcp)), indent=2))
        return 0
    if args.describe:
        try:
            print(json.dumps(asyncio.run(describe_tool(mcp, args.describe)), indent=2))
        except DumplingError as exc:
            logger.error(str(exc))
            return 1
        return 0

    logger.info(f"Dumpling AI MCP server running on stdio (upstream {settings.base_url})")
    try:
        mcp.run()
    except KeyboardInterrupt:
        return 0
    except Exception:
        logger.exception("Fatal error in MCP transport")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
