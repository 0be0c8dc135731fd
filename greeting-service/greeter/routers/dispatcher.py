"""Ordered handler chain with the 404 fallback and 500 error mapping."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from fastapi import Response, status
from fastapi.responses import JSONResponse

from greeter.models import ErrorBody, Route
from greeter.services.handlers import (
    Handler,
    HandlerResult,
    RequestContext,
    log_request,
    parse_body,
    route_handler,
)

logger = logging.getLogger("greeter.dispatch")

NOT_FOUND = ErrorBody(error="Not Found")
INTERNAL_SERVER_ERROR = ErrorBody(error="Internal Server Error")


def not_found_response() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=NOT_FOUND.model_dump(),
    )


def internal_error_response() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=INTERNAL_SERVER_ERROR.model_dump(),
    )


async def not_found(ctx: RequestContext) -> HandlerResult:
    """Fallback handler for requests no route answered."""
    return HandlerResult.respond(not_found_response())


class Dispatcher:
    """Runs handlers in order until one responds or fails.

    A handler that raises is treated the same as one returning
    ``HandlerResult.fail``: the error is logged and the request is answered
    with the 500 JSON body. Remaining handlers are skipped.
    """

    def __init__(self, handlers: Sequence[Handler], fallback: Handler = not_found):
        self.handlers: tuple[Handler, ...] = tuple(handlers)
        self.fallback = fallback

    @classmethod
    def for_routes(cls, routes: Iterable[Route]) -> Dispatcher:
        return cls([parse_body, log_request, route_handler(routes)])

    async def dispatch(self, ctx: RequestContext) -> Response:
        for handler in (*self.handlers, self.fallback):
            result = await self._invoke(handler, ctx)
            if result.error is not None:
                return self._handle_error(ctx, result.error)
            if result.response is not None:
                return result.response
        # fallback declined too
        return not_found_response()

    async def _invoke(self, handler: Handler, ctx: RequestContext) -> HandlerResult:
        try:
            result = await handler(ctx)
        except Exception as exc:
            return HandlerResult.fail(exc)
        if not isinstance(result, HandlerResult):
            return HandlerResult.fail(
                TypeError(
                    f"handler {getattr(handler, '__name__', handler)!r} returned "
                    f"{type(result).__name__}, expected HandlerResult"
                )
            )
        return result

    def _handle_error(self, ctx: RequestContext, error: Exception) -> Response:
        logger.error(
            "Error handling %s %s: %s: %s",
            ctx.method,
            ctx.target,
            type(error).__name__,
            error,
            exc_info=error,
        )
        return internal_error_response()
