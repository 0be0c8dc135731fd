"""Pydantic models for the route table, server configuration and error bodies."""

from greeter.models.routes import DEFAULT_ROUTES, ErrorBody, Route, ServerConfig

__all__ = ["DEFAULT_ROUTES", "ErrorBody", "Route", "ServerConfig"]
