"""MCP server exposing sell-to-cover calculations as tools."""
