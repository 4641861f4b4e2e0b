import pytest
from fastapi import status
from httpx import ASGITransport, AsyncClient

from hamcall.config import Settings
from hamcall.main import create_app


def _client(parser, api_key=None) -> AsyncClient:
    app = create_app(settings=Settings(_env_file=None, api_key=api_key), parser=parser)
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_health_ok(parser) -> None:
    async with _client(parser) as ac:
        resp = await ac.get("/health")
    assert resp.status_code == status.HTTP_200_OK
    assert resp.json() == {"ok": True}
    assert resp.headers["x-request-id"]


@pytest.mark.asyncio
async def test_parse_callsign(parser) -> None:
    async with _client(parser) as ac:
        resp = await ac.get("/api/callsign/yv5/n0call/p-7")
    assert resp.status_code == status.HTTP_200_OK
    assert resp.json() == {
        "record": {
            "call": "YV5/N0CALL/P",
            "baseCall": "N0CALL",
            "prefix": "YV5",
            "ituPrefix": "YV",
            "digit": "5",
            "preindicator": "YV5",
            "postindicators": ["P"],
            "prefixOverride": "YV5",
            "indicators": ["P"],
            "ssid": "7",
        }
    }


@pytest.mark.asyncio
async def test_parse_not_a_callsign(parser) -> None:
    async with _client(parser) as ac:
        resp = await ac.get("/api/callsign/10N")
    assert resp.status_code == status.HTTP_404_NOT_FOUND
    assert resp.json() == {"detail": "Not a callsign"}


@pytest.mark.asyncio
async def test_resolve_prefix(parser) -> None:
    async with _client(parser) as ac:
        ok = await ac.get("/api/prefix/KH6")
        missing = await ac.get("/api/prefix/10")
    assert ok.json() == {"record": {"prefix": "KH6", "ituPrefix": "KH", "digit": "6"}}
    assert missing.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_merge(parser) -> None:
    previous = {"call": "R1155RW", "prefix": "R1", "extendedPrefix": "R1155", "note": "keep"}
    async with _client(parser) as ac:
        resp = await ac.post("/api/callsign/merge", json={"callsign": "R1ABC/P", "previous": previous})
    assert resp.status_code == status.HTTP_200_OK
    record = resp.json()["record"]
    assert record["note"] == "keep"
    assert record["indicators"] == ["P"]
    assert "extendedPrefix" not in record


@pytest.mark.asyncio
async def test_entity_lookup(parser) -> None:
    async with _client(parser) as ac:
        known = await ac.get("/api/entities/kh0")
        unknown = await ac.get("/api/entities/NA")
    assert known.json() == {"candidate": "KH0", "known": True}
    assert unknown.json() == {"candidate": "NA", "known": False}


@pytest.mark.asyncio
async def test_api_key(parser) -> None:
    async with _client(parser, api_key="secret") as ac:
        denied = await ac.get("/api/callsign/N0CALL")
        allowed = await ac.get("/api/callsign/N0CALL", headers={"x-api-key": "secret"})
        health = await ac.get("/health")
    assert denied.status_code == status.HTTP_401_UNAUTHORIZED
    assert allowed.status_code == status.HTTP_200_OK
    assert health.status_code == status.HTTP_200_OK
