# =============================================================================
# dumpling/__init__.py
# =============================================================================
# Framework-free core of the Dumpling AI adapter: configuration, errors,
# argument shapes, the HTTP forwarder and response shaping.
#
# CRITICAL ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP.  The MCP layer (dumpling_mcp/)
#   depends on this package, never the other way round, so every piece here
#   can be tested with a stub HTTP transport and no protocol in sight.
# =============================================================================
