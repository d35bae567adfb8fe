"""Tests for the aiohttp import/export client against a local test server."""

import asyncio

import pytest
from aiohttp import web
from aiohttp import test_utils

from services.sync_client import SyncClient, TransportError
from shared.models import Day, blank_month


def make_app(requests, import_handler=None, export_handler=None):
    async def handle_import(request):
        body = await request.json()
        requests.append(("import", body))
        return web.json_response({"days": [day.to_wire() for day in blank_month(body["year"], body["month"])]})

    async def handle_export(request):
        body = await request.json()
        requests.append(("export", body))
        return web.json_response({"ok": True})

    app = web.Application()
    app.add_routes([
        web.post("/api/import", import_handler or handle_import),
        web.post("/api/export", export_handler or handle_export),
    ])
    return app


def run_with_server(app, body):
    async def scenario():
        server = test_utils.TestServer(app)
        await server.start_server()
        try:
            async with SyncClient(str(server.make_url("/api")), timeout=5) as client:
                return await body(client)
        finally:
            await server.close()

    return asyncio.run(scenario())


def test_import_days():
    requests = []
    days = run_with_server(make_app(requests), lambda client: client.import_days(2024, 1))
    assert requests == [("import", {"year": 2024, "month": 1})]
    assert len(days) == 29
    assert all(isinstance(day, Day) for day in days)


def test_export_sends_whole_month_with_wire_names():
    requests = []
    days = blank_month(2024, 3)
    days[0].hours_slept = 8
    days[0].checks = [2]

    response = run_with_server(make_app(requests), lambda client: client.export_days(2024, 3, days))

    assert response.ok is True
    kind, body = requests[0]
    assert kind == "export"
    assert (body["year"], body["month"]) == (2024, 3)
    assert len(body["days"]) == 30
    assert body["days"][0] == {"date": 1, "checks": [2], "anxiety": None, "hoursSlept": 8, "comment": None}


def test_server_error_is_transport_error():
    async def failing(request):
        return web.Response(status=500, text="boom")

    with pytest.raises(TransportError) as excinfo:
        run_with_server(make_app([], import_handler=failing), lambda client: client.import_days(2024, 1))
    assert excinfo.value.status == 500


def test_malformed_body_is_transport_error():
    async def garbage(request):
        return web.Response(text="not json")

    with pytest.raises(TransportError):
        run_with_server(make_app([], import_handler=garbage), lambda client: client.import_days(2024, 1))


def test_invalid_month_is_transport_error():
    async def short_month(request):
        return web.json_response({"days": [{"date": 1, "checks": [42]}]})

    with pytest.raises(TransportError):
        run_with_server(make_app([], import_handler=short_month), lambda client: client.import_days(2024, 1))


def test_bad_acknowledgment_is_transport_error():
    async def odd_ack(request):
        return web.json_response({"ok": "maybe"})

    with pytest.raises(TransportError):
        run_with_server(
            make_app([], export_handler=odd_ack),
            lambda client: client.export_days(2024, 1, blank_month(2024, 1)),
        )


def test_unreachable_server_is_transport_error():
    async def scenario():
        async with SyncClient("http://127.0.0.1:9/api", timeout=2) as client:
            await client.import_days(2024, 1)

    with pytest.raises(TransportError):
        asyncio.run(scenario())


def test_import_with_missing_dates_is_transport_error():
    async def gappy(request):
        days = [day.to_wire() for day in blank_month(2024, 1)]
        del days[10]
        return web.json_response({"days": days})

    with pytest.raises(TransportError):
        run_with_server(make_app([], import_handler=gappy), lambda client: client.import_days(2024, 1))


@pytest.mark.parametrize("ack", [{"ok": False}, {}])
def test_export_needs_positive_acknowledgment(ack):
    async def refused(request):
        return web.json_response(ack)

    with pytest.raises(TransportError):
        run_with_server(
            make_app([], export_handler=refused),
            lambda client: client.export_days(2024, 1, blank_month(2024, 1)),
        )


# ---- retries ----


def test_error_status_is_not_retried():
    calls = []

    async def failing(request):
        calls.append(request.path)
        return web.Response(status=500, text="boom")

    with pytest.raises(TransportError):
        run_with_server(make_app([], import_handler=failing), lambda client: client.import_days(2024, 1))
    assert calls == ["/api/import"]


def test_malformed_body_is_not_retried():
    calls = []

    async def garbage(request):
        calls.append(request.path)
        return web.Response(text="not json")

    with pytest.raises(TransportError):
        run_with_server(make_app([], import_handler=garbage), lambda client: client.import_days(2024, 1))
    assert len(calls) == 1


def test_timeout_is_retried_until_success():
    calls = []

    async def slow_once(request):
        calls.append(request.path)
        if len(calls) == 1:
            await asyncio.sleep(0.8)
        body = await request.json()
        return web.json_response({"days": [day.to_wire() for day in blank_month(body["year"], body["month"])]})

    async def scenario():
        server = test_utils.TestServer(make_app([], import_handler=slow_once))
        await server.start_server()
        try:
            async with SyncClient(str(server.make_url("/api")), timeout=0.3) as client:
                return await client.import_days(2024, 1)
        finally:
            await server.close()

    days = asyncio.run(scenario())
    assert len(calls) == 2
    assert len(days) == 29


def test_connection_failure_is_tried_three_times(caplog):
    async def scenario():
        async with SyncClient("http://127.0.0.1:9/api", timeout=2) as client:
            await client.import_days(2024, 1)

    with caplog.at_level("WARNING", logger="utils.decorators"):
        with pytest.raises(TransportError):
            asyncio.run(scenario())

    attempts = [record.getMessage() for record in caplog.records if record.name == "utils.decorators"]
    assert len(attempts) == 2
    assert attempts[0].startswith("Attempt 1/3 of _send failed")
    assert attempts[1].startswith("Attempt 2/3 of _send failed")
