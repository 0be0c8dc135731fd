"""Route table and server configuration models."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from config import Settings


class Route(BaseModel):
    """A fixed response served for one exact (method, path) pair."""

    model_config = ConfigDict(frozen=True)

    method: str
    path: str
    body: str
    media_type: str = "text/plain"
    status_code: int = 200

    @field_validator("method")
    @classmethod
    def normalize_method(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("path")
    @classmethod
    def check_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("route path must start with '/'")
        return value

    @property
    def key(self) -> tuple[str, str]:
        return (self.method, self.path)


DEFAULT_ROUTES: tuple[Route, ...] = (
    Route(method="GET", path="/", body="Hello world"),
    Route(method="GET", path="/evening", body="Good evening"),
)


class ServerConfig(BaseModel):
    """Everything the server needs to bind and answer requests."""

    model_config = ConfigDict(frozen=True)

    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=0, le=65535)
    routes: tuple[Route, ...] = DEFAULT_ROUTES

    @field_validator("routes")
    @classmethod
    def unique_routes(cls, value: tuple[Route, ...]) -> tuple[Route, ...]:
        seen: set[tuple[str, str]] = set()
        for route in value:
            if route.key in seen:
                raise ValueError(f"duplicate route: {route.method} {route.path}")
            seen.add(route.key)
        return value

    @classmethod
    def from_settings(cls, settings: Settings) -> ServerConfig:
        return cls(host=settings.host, port=settings.port)


class ErrorBody(BaseModel):
    """JSON body of the 404 and 500 responses."""

    error: str
