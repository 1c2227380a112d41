# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the generate_image_with_gemini tool over MCP.  The tool function
#   is a thin wrapper around core/image_generation.py — it builds an
#   InvocationRequest, awaits the handler, and maps the outcome onto what
#   FastMCP expects:
#
#     Ok(non-error ToolResult)  →  return the text (MCP content block)
#     Ok(error ToolResult)      →  raise ToolError  (MCP result, isError=true)
#     TransportFault            →  raise NotFoundError (unknown capability)
#
# HOW IT WORKS (the flow):
#   1. Claude Desktop lists tools and sees generate_image_with_gemini
#   2. It calls the tool with image_base64 + prompt over stdio
#   3. FastMCP routes the call to the function registered in create_server()
#   4. The handler validates, POSTs to n8n, and translates the reply
#   5. Claude receives one text result, flagged as error or not
#
# RUNNING THIS SERVER:
#   main.py builds the config and calls create_server(config).run().
# =============================================================================

import logging
import sys
from typing import Annotated, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import NotFoundError, ToolError
from pydantic import Field

from core.config import SERVER_NAME, SERVER_VERSION, ServerConfig
from core.image_generation import (
    IMAGE_BASE64_DESCRIPTION,
    PROMPT_DESCRIPTION,
    TOOL_DESCRIPTION,
    TOOL_NAME,
    ImageGenerationHandler,
)
from core.models import InvocationRequest, ToolResult, TransportFault
from core.webhook import WebhookClient

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because the MCP server talks to Claude Desktop over
# STDOUT.  Anything printed to stdout would corrupt the JSON-RPC stream.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for responses
#     - YELLOW for intermediate status/progress messages
#     - RED for error results
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses
_YELLOW = "\033[33m"   # Status/progress messages
_RED = "\033[31m"      # Error results
_RESET = "\033[0m"     # Reset to default terminal color


def configure_logging(debug: bool = False) -> None:
    """Send all log output to stderr; DEBUG adds verbose diagnostics."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
    # httpx logs every request at INFO; keep the stream focused on tool calls
    logging.getLogger("httpx").setLevel(logging.DEBUG if debug else logging.WARNING)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: ToolResult) -> ToolResult:
    """Log the tool result in GREEN (or RED when it is an error), then return it."""
    color = _RED if result.is_error else _GREEN
    first_line = (result.joined_text.splitlines() or [""])[0]
    logging.info(f"{color}  ← {tool_name} response: {first_line}{_RESET}")
    return result


# =============================================================================
# Server factory
# =============================================================================
# The config is passed in rather than read here so tests can build a server
# around a fake webhook transport.  The name "n8n-gemini-image" is the
# server identity Claude Desktop sees during the MCP handshake.
# =============================================================================
def create_server(config: ServerConfig, webhook: Optional[WebhookClient] = None) -> FastMCP:
    handler = ImageGenerationHandler(config, webhook=webhook)
    mcp = FastMCP(SERVER_NAME, version=SERVER_VERSION)

    # =========================================================================
    # TOOL: generate_image_with_gemini
    # =========================================================================
    # The description and parameter descriptions are the same text reported
    # by core.image_generation.list_tools(), so the MCP listing and the core
    # descriptor never drift apart.
    # =========================================================================
    @mcp.tool(name=TOOL_NAME, description=TOOL_DESCRIPTION)
    async def generate_image_with_gemini(
        image_base64: Annotated[str, Field(description=IMAGE_BASE64_DESCRIPTION)],
        prompt: Annotated[str, Field(description=PROMPT_DESCRIPTION)],
    ) -> str:
        _log_request(TOOL_NAME, image_length=len(image_base64), prompt=prompt)

        outcome = await handler.invoke(
            InvocationRequest(
                name=TOOL_NAME,
                arguments={"image_base64": image_base64, "prompt": prompt},
            )
        )
        # FastMCP resolves unknown names before this function runs, so this
        # branch only mirrors the handler contract for direct callers.
        if isinstance(outcome, TransportFault):
            _log_status(outcome.message)
            raise NotFoundError(outcome.message)

        result = _log_response(TOOL_NAME, outcome.result)
        if result.is_error:
            raise ToolError(result.joined_text)
        return result.joined_text

    return mcp
