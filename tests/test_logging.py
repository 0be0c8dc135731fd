"""Request logging and the stdout/stderr split."""

import logging

from fastapi.testclient import TestClient

from greeter.models import DEFAULT_ROUTES, ServerConfig
from greeter.routers import Dispatcher
from greeter.services.handlers import log_request, parse_body, route_handler
from greeter.services.server import create_app
from greeter.utils.log_config import configure_logging


def test_every_request_is_logged(client, caplog):
    caplog.set_level(logging.INFO, logger="greeter.requests")

    client.get("/")
    client.post("/missing", params={"x": "1"})

    lines = [r.getMessage() for r in caplog.records if r.name == "greeter.requests"]
    assert lines == ["GET /", "POST /missing?x=1"]


def test_request_line_goes_to_stdout(capsys, restore_root_logging):
    configure_logging("INFO")
    client = TestClient(create_app(ServerConfig()))

    client.get("/evening")

    out, err = capsys.readouterr()
    assert "GET /evening\n" in out
    assert err == ""


def test_errors_go_to_stderr(capsys, restore_root_logging):
    async def explode(ctx):
        raise RuntimeError("broken handler")

    configure_logging("INFO")
    dispatcher = Dispatcher(
        [parse_body, log_request, explode, route_handler(DEFAULT_ROUTES)]
    )
    client = TestClient(create_app(ServerConfig(), dispatcher=dispatcher))

    resp = client.get("/")

    out, err = capsys.readouterr()
    assert resp.status_code == 500
    assert "GET /\n" in out
    assert "broken handler" not in out
    assert "RuntimeError: broken handler" in err
    assert "Traceback" in err


def test_level_filters_info(capsys, restore_root_logging):
    configure_logging("WARNING")
    logging.getLogger("greeter.requests").info("GET /")
    out, _ = capsys.readouterr()
    assert out == ""
