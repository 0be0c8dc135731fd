"""Request context, handler results and the stages of the dispatch chain.

Every stage is an async callable taking a RequestContext and returning a
HandlerResult. A stage either lets the request through to the next stage
(``HandlerResult.proceed()``), answers it (``HandlerResult.respond(...)``)
or reports a failure (``HandlerResult.fail(...)``).
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Any

from fastapi import Request, Response

from greeter.models import Route

logger = logging.getLogger("greeter.requests")

JSON_MEDIA_TYPE = "application/json"
FORM_MEDIA_TYPE = "application/x-www-form-urlencoded"


@dataclass
class RequestContext:
    """Per-request state handed to every handler in the chain."""

    request: Request
    method: str
    path: str
    query: str = ""
    body: dict[str, Any] | None = None

    @classmethod
    def from_request(cls, request: Request) -> RequestContext:
        return cls(
            request=request,
            method=request.method.upper(),
            path=request.scope["path"],
            query=request.scope.get("query_string", b"").decode("latin-1"),
        )

    @property
    def target(self) -> str:
        """Path plus query string, as it appears on the request line."""
        if self.query:
            return f"{self.path}?{self.query}"
        return self.path


@dataclass(frozen=True)
class HandlerResult:
    """Outcome of a single handler call."""

    response: Response | None = None
    error: Exception | None = None

    @classmethod
    def proceed(cls) -> HandlerResult:
        return cls()

    @classmethod
    def respond(cls, response: Response) -> HandlerResult:
        return cls(response=response)

    @classmethod
    def fail(cls, error: Exception) -> HandlerResult:
        return cls(error=error)

    @property
    def is_continue(self) -> bool:
        return self.response is None and self.error is None


Handler = Callable[[RequestContext], Awaitable[HandlerResult]]


def _media_type(request: Request) -> str:
    content_type = request.headers.get("content-type", "")
    return content_type.split(";", 1)[0].strip().lower()


async def _decode_json(request: Request) -> dict[str, Any] | None:
    try:
        payload = await request.json()
    except ValueError as exc:
        logger.debug("Ignoring malformed JSON body: %s", exc)
        return None
    if not isinstance(payload, dict):
        return None
    return payload


async def _decode_form(request: Request) -> dict[str, Any] | None:
    try:
        async with request.form() as form:
            parsed: dict[str, Any] = {}
            for key in form.keys():
                values = form.getlist(key)
                parsed[key] = values[0] if len(values) == 1 else list(values)
    except ValueError as exc:
        logger.debug("Ignoring malformed form body: %s", exc)
        return None
    return parsed


async def parse_body(ctx: RequestContext) -> HandlerResult:
    """Decode JSON objects and URL-encoded forms into ``ctx.body``.

    Bodies of any other type, empty bodies and bodies that fail to decode
    leave ``ctx.body`` as None. Parsing never stops the request.
    """
    media_type = _media_type(ctx.request)
    is_json = media_type == JSON_MEDIA_TYPE or media_type.endswith("+json")
    if not (is_json or media_type == FORM_MEDIA_TYPE):
        return HandlerResult.proceed()

    if not await ctx.request.body():
        return HandlerResult.proceed()

    if is_json:
        ctx.body = await _decode_json(ctx.request)
    else:
        ctx.body = await _decode_form(ctx.request)
    return HandlerResult.proceed()


async def log_request(ctx: RequestContext) -> HandlerResult:
    logger.info("%s %s", ctx.method, ctx.target)
    return HandlerResult.proceed()


def route_handler(routes: Iterable[Route]) -> Handler:
    """Build the handler answering exact (method, path) matches from ``routes``."""
    table = {route.key: route for route in routes}

    async def match_route(ctx: RequestContext) -> HandlerResult:
        route = table.get((ctx.method, ctx.path))
        if route is None:
            return HandlerResult.proceed()
        return HandlerResult.respond(
            Response(
                content=route.body,
                status_code=route.status_code,
                media_type=route.media_type,
            )
        )

    return match_route
