"""
Tasker MCP Test Suite

Covers the path from tool definitions to Tasker calls:
- Loading and translating tool definitions
- Handler dispatch, argument validation and error mapping
- The Tasker HTTP client against a mocked backend
- MCP and HTTP surfaces, CLI and the Tasker XML converter
"""
