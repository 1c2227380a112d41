# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL of the image-generation tool's logic: the data
# model, input validation, the outbound webhook call, and the translation
# of webhook responses into tool results.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or knows about stdio framing.
#   The tools/ layer wires these pieces into an MCP server; the handler in
#   core/image_generation.py can be driven directly from a test with a fake
#   HTTP transport and no running server.
# =============================================================================
