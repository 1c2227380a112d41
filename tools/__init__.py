# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP wiring for the image-generation tool.
#
# ARCHITECTURAL ROLE:
#   tools/ is the translation layer between the MCP protocol and core/.
#   It registers the tool with FastMCP, logs each call to stderr, and turns
#   the handler's Ok / TransportFault outcome into an MCP result or error.
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT validate input or call n8n (that's core/)
#   - They do NOT read environment variables (main.py builds the config)
# =============================================================================
