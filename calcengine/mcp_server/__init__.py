"""MCP server exposing the expression engine as tools."""
