"""
Presentation Layer - API endpoints and request/response handling.

This layer contains:
- api/: FastAPI routers (messages, users, /ws event stream, /metrics)
"""
