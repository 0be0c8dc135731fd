"""Request handling services.

This module contains:
- handlers: the request context, handler results and the chain stages
  (body parsing, request logging, route matching)
- server: the ASGI application factory and the uvicorn-backed HttpServer
"""
