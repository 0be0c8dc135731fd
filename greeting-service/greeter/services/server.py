"""ASGI application factory and the uvicorn-backed server object."""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI, Request

from greeter import __version__
from greeter.models import ServerConfig
from greeter.routers import Dispatcher, internal_error_response
from greeter.services.handlers import RequestContext

logger = logging.getLogger("greeter")

# TRACE, CONNECT and other methods are left to the framework's defaults.
SUPPORTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(config: ServerConfig, dispatcher: Dispatcher | None = None) -> FastAPI:
    """Build the ASGI application serving ``config.routes``.

    All requests go through one catch-all endpoint into the dispatcher, so
    route matching, the 404 fallback and error mapping live in one place.
    The interactive docs are disabled since their paths would otherwise
    shadow the 404 fallback.
    """
    if dispatcher is None:
        dispatcher = Dispatcher.for_routes(config.routes)

    app = FastAPI(
        title="Greeting Service",
        description="Static greeting endpoints with JSON 404/500 fallbacks",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.config = config
    app.state.dispatcher = dispatcher

    @app.api_route(
        "/{path:path}", methods=SUPPORTED_METHODS, include_in_schema=False
    )
    async def dispatch(request: Request):
        return await dispatcher.dispatch(RequestContext.from_request(request))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Backstop for errors raised outside the handler chain.

        If the response has already started, Starlette re-raises instead of
        calling this, so nothing is written twice.
        """
        logger.error(
            f"Unhandled exception: {type(exc).__name__}",
            extra={
                "path": request.url.path,
                "method": request.method,
            },
            exc_info=exc,
        )
        return internal_error_response()

    return app


class _Listener(uvicorn.Server):
    """uvicorn server that announces itself once the socket is bound."""

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        if self.started:
            logger.info("Server running on port %d", self.bound_port)

    @property
    def bound_port(self) -> int:
        for server in self.servers:
            for sock in server.sockets:
                return sock.getsockname()[1]
        return self.config.port


class HttpServer:
    """Owns the application for one ServerConfig and runs it under uvicorn."""

    def __init__(self, config: ServerConfig, dispatcher: Dispatcher | None = None):
        self.config = config
        self.app = create_app(config, dispatcher)
        self._listener: _Listener | None = None

    def _build_listener(self) -> _Listener:
        return _Listener(
            uvicorn.Config(
                self.app,
                host=self.config.host,
                port=self.config.port,
                log_config=None,
                log_level="warning",
                access_log=False,
                server_header=False,
            )
        )

    def run(self) -> None:
        """Serve until an external signal arrives.

        A failure to bind makes uvicorn exit the process with a non-zero status.
        """
        self._listener = self._build_listener()
        self._listener.run()

    async def serve(self) -> None:
        self._listener = self._build_listener()
        await self._listener.serve()

    def stop(self) -> None:
        if self._listener is not None:
            self._listener.should_exit = True

    @property
    def started(self) -> bool:
        return self._listener is not None and self._listener.started

    @property
    def port(self) -> int:
        if self._listener is None:
            return self.config.port
        return self._listener.bound_port
