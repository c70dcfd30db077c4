# =============================================================================
# dumpling_mcp/server.py  —  FastMCP Server Factory & Tool Gateway
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds the FastMCP server that exposes every Dumpling AI endpoint as an
#   MCP tool, and provides the one code path all tools share.
#
# HOW A TOOL CALL FLOWS:
#   1. The host sends tools/call over stdio
#   2. FastMCP finds the tool and validates the arguments against the
#      schema it built from the function's type hints (pydantic)
#   3. The tool function hands its arguments to UpstreamGateway.call()
#   4. The gateway checks "one of" preconditions, POSTs via DumplingClient
#      and shapes the JSON response into text
#   5. Any DumplingError is turned into a ToolError, so the host gets a
#      readable error result instead of a dead server
#
# NO GLOBAL SERVER:
#   create_server() returns a fresh FastMCP instance each time.  main.py
#   builds one at startup; tests build their own with a stub transport.
# =============================================================================

import logging
import sys
from typing import Any, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from dumpling.client import DumplingClient
from dumpling.config import Settings
from dumpling.errors import DumplingError, UnknownToolError, UpstreamError
from dumpling.models import OutboundRequest, endpoint, require_one_of
from dumpling.shaping import shape_response

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because stdout carries the MCP JSON-RPC stream.  A single
# stray print() to stdout would corrupt a frame and break the host.
#
# Colour coding, same as the rest of our MCP servers:
#   CYAN   → incoming tool call
#   YELLOW → intermediate status
#   GREEN  → response summary
#   RED    → tool failure
# =============================================================================

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_RESET = "\033[0m"

# Longest argument value echoed in the request log; base64 and code bodies
# get cut here.
_MAX_LOGGED_VALUE = 80

logger = logging.getLogger("dumpling_mcp")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _abbreviate(value: Any) -> str:
    text = repr(value)
    if len(text) > _MAX_LOGGED_VALUE:
        return text[:_MAX_LOGGED_VALUE] + "..."
    return text


def log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with the parameters that were supplied."""
    param_str = ", ".join(f"{k}={_abbreviate(v)}" for k, v in params.items() if v is not None)
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def log_status(message: str) -> None:
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def log_response(tool_name: str, text: str) -> str:
    """Log the size of a tool's result, then return it unchanged."""
    logger.info(f"{_GREEN}  ← {tool_name} response: {len(text)} chars{_RESET}")
    return text


def log_failure(tool_name: str, error: Exception) -> None:
    logger.warning(f"{_RED}  ✗ {tool_name} failed: {error}{_RESET}")


# =============================================================================
# UpstreamGateway — the shared body of every tool
# =============================================================================
class UpstreamGateway:
    """Validated arguments in, shaped text out.

    Tools call this instead of touching the HTTP client, so the order
    precondition → credential → HTTP → shaping is the same everywhere.
    """

    def __init__(self, client: DumplingClient, settings: Settings):
        self.client = client
        self.settings = settings

    async def call(
        self,
        tool_name: str,
        action: str,
        arguments: dict[str, Any],
        one_of: tuple[str, ...] = (),
    ) -> str:
        """Forward one tool call to the Dumpling API.

        Args:
            tool_name: Public tool name; also the upstream path segment.
            action: Phrase for error messages ("Failed to <action>: ...").
            arguments: Validated arguments; None values are not sent.
            one_of: Argument names of which at least one must be supplied.

        Raises:
            ToolError: wrapping any DumplingError, for the host to read.
        """
        log_request(tool_name, **arguments)
        try:
            if one_of:
                require_one_of(**{name: arguments.get(name) for name in one_of})
            request = OutboundRequest.build(endpoint(tool_name), **arguments)
            data = await self.client.post(request, action)
            log_status(f"upstream answered {tool_name}")
            text = self._shape(tool_name, action, data)
        except DumplingError as exc:
            log_failure(tool_name, exc)
            raise ToolError(str(exc)) from exc

        return log_response(tool_name, text)

    def _shape(self, tool_name: str, action: str, data: Any) -> str:
        # A 2xx body the shaper cannot read is reported as an upstream error.
        try:
            return shape_response(tool_name, data, self.settings.preview_length)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise UpstreamError(action, 200, f"unexpected response shape: {exc}") from exc


# =============================================================================
# Server factory
# =============================================================================
SERVER_NAME = "dumplingai"

# Tool annotations.  Every tool reaches the open web through the Dumpling
# API.  The knowledge-base insert and the PDF metadata writer change state
# upstream; the code runners execute arbitrary code in the sandbox.
READ_ONLY = {"readOnlyHint": True, "openWorldHint": True}
MUTATING = {"readOnlyHint": False, "openWorldHint": True}
RUNS_CODE = {"readOnlyHint": False, "destructiveHint": False, "openWorldHint": True}

SERVER_INSTRUCTIONS = (
    "Tools backed by the Dumpling AI API: web and Google search, scraping "
    "and crawling, document/image/audio/video extraction, PDF utilities, "
    "knowledge bases, AI completions and image generation, and sandboxed "
    "JavaScript/Python execution. Large binary outputs are returned as short "
    "base64 previews."
)


def create_server(
    settings: Optional[Settings] = None,
    client: Optional[DumplingClient] = None,
) -> FastMCP:
    """Build a FastMCP server with every Dumpling tool registered.

    Args:
        settings: Configuration; read from the environment when omitted.
        client: HTTP forwarder; built from `settings` when omitted.

    Returns:
        A ready-to-run FastMCP instance.  Listing its tools never needs the
        API key; calling one does.
    """
    # Imported here: the tool modules import this module for the gateway.
    from dumpling_mcp import ai_tools, code_tools, document_tools, search_tools, web_tools

    settings = settings or Settings.from_env()
    client = client or DumplingClient(settings)
    gateway = UpstreamGateway(client, settings)

    mcp = FastMCP(SERVER_NAME, instructions=SERVER_INSTRUCTIONS, on_duplicate_tools="warn")
    for module in (search_tools, web_tools, document_tools, ai_tools, code_tools):
        module.register(mcp, gateway)
    return mcp


async def describe_tools(mcp: FastMCP) -> list[dict[str, Any]]:
    """Return {name, description, inputSchema} for every registered tool."""
    tools = await mcp.get_tools()
    return [
        {
            "name": tool.name,
            "description": tool.description,
            "inputSchema": tool.parameters,
        }
        for tool in sorted(tools.values(), key=lambda t: t.name)
    ]


async def describe_tool(mcp: FastMCP, name: str) -> dict[str, Any]:
    """Describe a single tool.

    Raises:
        UnknownToolError: no tool is registered under `name`.
    """
    for description in await describe_tools(mcp):
        if description["name"] == name:
            return description
    raise UnknownToolError(name)


# =============================================================================
# Server entry point
# =============================================================================
# python -m dumpling_mcp.server starts the stdio server directly; main.py
# does the same with .env loading and a non-zero exit on startup failure.
# =============================================================================
if __name__ == "__main__":
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    create_server(settings).run()
