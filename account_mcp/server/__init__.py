"""
MCP server wiring: result schemas, tool dispatch and FastMCP assembly.
"""
