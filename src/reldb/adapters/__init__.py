"""Adapters layer - concrete implementations at the system boundary.

Inbound adapters handle incoming requests:
- sql_parser: Turns statement text into plans
- rest_api: HTTP boundary for running scripts (requires fastapi)
"""
