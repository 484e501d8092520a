"""Code traceability MCP server: links C# symbols to their tests and docs."""

__version__ = "0.1.0"
