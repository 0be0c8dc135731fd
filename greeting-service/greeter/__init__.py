"""Greeting Service Application Package.

This package contains the core application components:
- models: Pydantic models for routes, server configuration and error bodies
- routers: the ordered handler chain and its 404/500 fallbacks
- services: request handlers and the uvicorn-backed server object
- utils: logging setup
"""

__version__ = "0.1.0"
