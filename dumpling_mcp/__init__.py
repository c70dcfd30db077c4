# =============================================================================
# dumpling_mcp/__init__.py
# =============================================================================
# FastMCP tool layer for the Dumpling AI API.
#
# ARCHITECTURAL ROLE:
#   This package is the translation layer between an MCP host and the
#   framework-free core in dumpling/.  Each *_tools.py module:
#     1. Declares its tools with typed, described parameters (the schema the
#        host sees and FastMCP validates against)
#     2. Passes the validated arguments to the shared UpstreamGateway
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT speak HTTP (dumpling/client.py does)
#   - They do NOT decide output shape (dumpling/shaping.py does)
#   - They do NOT read the environment (dumpling/config.py does)
# =============================================================================

