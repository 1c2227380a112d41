# =============================================================================
# main.py  —  Entry Point for the n8n Gemini image MCP server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py          (or the n8n-gemini-mcp console script)
#
#   Claude Desktop normally starts this process itself, using a
#   claude_desktop_config.json entry such as:
#
#     "n8n-gemini-image": {
#       "command": "uv",
#       "args": ["run", "python", "/path/to/main.py"],
#       "env": {"N8N_WEBHOOK_URL": "https://n8n.example.com/webhook/gemini-image-gen"}
#     }
#
# WHAT HAPPENS:
#   1. Reads N8N_WEBHOOK_URL and DEBUG (a .env file is honored)
#   2. Configures stderr logging (stdout belongs to the MCP protocol)
#   3. Builds the FastMCP server around the image-generation handler
#   4. Installs SIGINT/SIGTERM handlers that shut down with exit status 0
#   5. Serves MCP over stdio until the client disconnects or a signal arrives
#
#   If the server cannot start, the error is logged and the process exits
#   with status 1.
# =============================================================================

import logging
import os
import signal
import sys

from core.config import ServerConfig
from tools.mcp_server import configure_logging, create_server


logger = logging.getLogger("mcp_server")


def _shutdown(signum, frame) -> None:
    # the stdio reader thread may still be blocked on stdin; exit without joining it
    logger.info("Shutting down...")
    logging.shutdown()
    os._exit(0)


def main() -> None:
    config = ServerConfig.from_env()
    configure_logging(config.debug)

    signal.signal(signal.SIGINT, _shutdown)
    signal.signal(signal.SIGTERM, _shutdown)

    try:
        mcp = create_server(config)
        logger.info("N8N Gemini MCP server running on stdio")
        logger.info(f"Webhook URL: {config.webhook_url}")
        logger.info(f"Debug mode: {config.debug}")
        mcp.run(transport="stdio")
    except Exception as e:
        logger.error(f"Failed to start server: {e}")
        logger.debug("Full error", exc_info=e)
        sys.exit(1)


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    main()
