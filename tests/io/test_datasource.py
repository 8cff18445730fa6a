from __future__ import annotations

import asyncio
import io
import json
from pathlib import Path

import httpx
import pytest

from aigit.core.errors import AigitError, DataSourceError
from aigit.io.datasource import NO_CACHE_HEADERS, is_url, load, load_from_file, load_from_url, parse_json, validate


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


async def _fetch(url: str, handler):
    async with _client(handler) as client:
        return await load_from_url(url, client=client)


# ----------------------------
# validate / parse_json
# ----------------------------


def test_validate_returns_input_unchanged(sample_data) -> None:
    assert validate(sample_data) is sample_data


def test_validate_accepts_empty_entries_and_any_schema_version() -> None:
    raw = {"schema_version": 99, "entries": []}
    assert validate(raw) is raw


def test_validate_missing_keys_lists_all_of_them() -> None:
    with pytest.raises(DataSourceError) as ei:
        validate({"foo": 1})
    msg = str(ei.value)
    assert msg == "data.json: missing schema_version, entries"
    assert "entries" in msg


def test_validate_missing_entries_only() -> None:
    with pytest.raises(DataSourceError, match=r"^data.json: missing entries$"):
        validate({"schema_version": "aigit-dashboard/0.1"})


def test_validate_rejects_non_object_and_non_array_entries() -> None:
    with pytest.raises(DataSourceError, match="expected object"):
        validate([1, 2, 3])
    with pytest.raises(DataSourceError, match="entries must be an array"):
        validate({"schema_version": "x", "entries": {"a": 1}})


def test_parse_json_error_is_data_source_error() -> None:
    with pytest.raises(DataSourceError, match="invalid JSON") as ei:
        parse_json("{not json")
    assert isinstance(ei.value, AigitError)


@pytest.mark.parametrize("token", ["NaN", "Infinity", "-Infinity"])
def test_parse_json_rejects_non_standard_constants(token: str) -> None:
    with pytest.raises(DataSourceError, match=f"invalid JSON: {token} is not valid JSON"):
        parse_json(f'{{"schema_version": "x", "entries": [], "n": {token}}}')


def test_parse_json_drops_leading_bom() -> None:
    assert parse_json("\ufeff{\"entries\": []}") == {"entries": []}


# ----------------------------
# load_from_url
# ----------------------------


def test_load_from_url_success_sends_no_cache_headers(sample_data) -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["cache"] = request.headers.get("cache-control")
        return httpx.Response(200, json=sample_data)

    data = asyncio.run(_fetch("https://ci.example/data.json", handler))
    assert data == sample_data
    assert seen["cache"] == NO_CACHE_HEADERS["Cache-Control"]


def test_load_from_url_non_success_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404)

    with pytest.raises(DataSourceError, match=r"failed to fetch https://ci.example/data.json: 404 Not Found"):
        asyncio.run(_fetch("https://ci.example/data.json", handler))


def test_load_from_url_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(DataSourceError, match="failed to fetch"):
        asyncio.run(_fetch("https://ci.example/data.json", handler))


def test_load_from_url_invalid_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>oops</html>")

    with pytest.raises(DataSourceError, match="invalid JSON"):
        asyncio.run(_fetch("https://ci.example/data.json", handler))


def test_load_from_url_shape_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"foo": 1})

    with pytest.raises(DataSourceError, match="missing schema_version, entries"):
        asyncio.run(_fetch("https://ci.example/data.json", handler))


# ----------------------------
# load_from_file
# ----------------------------


def test_file_round_trip_yields_equal_value(tmp_path: Path, sample_data) -> None:
    p = tmp_path / "data.json"
    p.write_text(json.dumps(sample_data), encoding="utf-8")
    assert asyncio.run(load_from_file(p)) == sample_data
    assert asyncio.run(load_from_file(str(p))) == sample_data


def test_load_from_file_accepts_file_like_objects(sample_data) -> None:
    payload = json.dumps(sample_data).encode("utf-8")
    assert asyncio.run(load_from_file(io.BytesIO(payload))) == sample_data
    assert asyncio.run(load_from_file(io.StringIO(payload.decode("utf-8")))) == sample_data


def test_load_from_file_errors(tmp_path: Path) -> None:
    with pytest.raises(DataSourceError, match="failed to read"):
        asyncio.run(load_from_file(tmp_path / "missing.json"))
    with pytest.raises(DataSourceError, match="invalid UTF-8"):
        asyncio.run(load_from_file(io.BytesIO(b"\xff\xfe\x00")))
    with pytest.raises(DataSourceError, match="invalid JSON"):
        asyncio.run(load_from_file(io.BytesIO(b"{")))
    with pytest.raises(DataSourceError, match="missing"):
        asyncio.run(load_from_file(io.BytesIO(b'{"foo": 1}')))


# ----------------------------
# load
# ----------------------------


def test_is_url() -> None:
    assert is_url("http://x/data.json")
    assert is_url("https://x/data.json")
    assert not is_url("./data.json")
    assert not is_url("/srv/data.json")


def test_load_dispatches_on_source(tmp_path: Path, sample_data) -> None:
    p = tmp_path / "data.json"
    p.write_text(json.dumps(sample_data), encoding="utf-8")

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"schema_version": "net", "entries": []})

    async def run():
        async with _client(handler) as client:
            return await load("https://ci.example/data.json", client=client), await load(str(p), client=client)

    from_net, from_disk = asyncio.run(run())
    assert from_net["schema_version"] == "net"
    assert from_disk == sample_data


# ----------------------------
# Byte-order mark
# ----------------------------

BOM_BODY = b'\xef\xbb\xbf{"schema_version": "aigit-dashboard/0.1", "entries": []}'


def test_load_from_file_accepts_utf8_bom(tmp_path: Path) -> None:
    p = tmp_path / "data.json"
    p.write_bytes(BOM_BODY)
    expected = {"schema_version": "aigit-dashboard/0.1", "entries": []}
    assert asyncio.run(load_from_file(p)) == expected
    assert asyncio.run(load_from_file(io.BytesIO(BOM_BODY))) == expected
    assert asyncio.run(load_from_file(io.StringIO(BOM_BODY.decode("utf-8")))) == expected


def test_load_from_url_accepts_utf8_bom() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=BOM_BODY, headers={"content-type": "application/json"})

    data = asyncio.run(_fetch("https://ci.example/data.json", handler))
    assert data == {"schema_version": "aigit-dashboard/0.1", "entries": []}


def test_load_from_file_rejects_nan_scores() -> None:
    body = b'{"schema_version": "x", "entries": [{"transcript": {"score": {"total_score": NaN}}}]}'
    with pytest.raises(DataSourceError, match="invalid JSON"):
        asyncio.run(load_from_file(io.BytesIO(body)))
