"""
Data source for the dashboard export.

Loads ``data.json`` from the network (httpx) or a local file and checks the
top-level bundle shape with a Pydantic envelope model. Nested transcript shape is
deliberately not validated: sparse entries load fine and read as empty/zero through
aigit.core.model accessors.

Responsibilities
- load_from_url: async GET with caching disabled; non-2xx status is an error.
- load_from_file: async read of a path or file-like object (e.g. a Streamlit upload).
- validate: structural check producing DataSourceError with a readable message.
- load: dispatch on the source string (http(s) URL or local path).

Notes:
    - No retries and no timeout unless the caller passes one. A failed load is retried
      by calling again.
    - Every failure surfaces as aigit.core.errors.DataSourceError.
"""

from __future__ import annotations

import asyncio
import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import IO, Any

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from aigit.core.errors import DataSourceError

__all__ = [
    "DashboardEnvelope",
    "validate",
    "parse_json",
    "load_from_url",
    "load_from_file",
    "load",
    "is_url",
]

NO_CACHE_HEADERS: dict[str, str] = {"Cache-Control": "no-store", "Pragma": "no-cache"}

FileSource = str | os.PathLike[str] | IO[Any]


class DashboardEnvelope(BaseModel):
    """Top-level shape of ``data.json``.

    Attributes:
        schema_version (Any): Required to be present; its value is not enforced so
            producers stay free to evolve it.
        entries (list[Any]): Required array of entries; may be empty. Items are not
            inspected.

    Notes:
        Extra keys (generated_at, repo_id, ...) are allowed and ignored here.
    """

    model_config = ConfigDict(extra="allow")

    schema_version: Any
    entries: list[Any]


def _describe(err: ValidationError) -> str:
    missing: list[str] = []
    bad_entries = False
    for item in err.errors():
        loc = item.get("loc") or ()
        field = str(loc[0]) if loc else ""
        if item.get("type") == "missing":
            missing.append(field)
        elif field == "entries":
            bad_entries = True
    if missing:
        return "data.json: missing " + ", ".join(missing)
    if bad_entries:
        return "data.json: entries must be an array"
    return f"data.json: invalid bundle: {err.error_count()} error(s)"


def validate(raw: Any) -> Any:
    """Check that ``raw`` has the top-level shape of a dashboard export.

    Args:
        raw (Any): Parsed JSON value.

    Returns:
        Any: ``raw`` itself, unchanged.

    Raises:
        DataSourceError: If raw is not an object, lacks ``schema_version`` or
            ``entries``, or ``entries`` is not an array.

    Examples:
        >>> validate({"schema_version": "aigit-dashboard/0.1", "entries": []})["entries"]
        []
    """
    if not isinstance(raw, Mapping):
        raise DataSourceError("data.json: expected object")
    try:
        DashboardEnvelope.model_validate(dict(raw))
    except ValidationError as e:
        raise DataSourceError(_describe(e)) from e
    return raw


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _decode(data: bytes) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise DataSourceError(f"invalid UTF-8: {e}") from e


def parse_json(text: str) -> Any:
    """Strict JSON: a leading BOM is dropped, NaN and Infinity are rejected."""
    try:
        return json.loads(text.removeprefix("\ufeff"), parse_constant=_reject_constant)
    except ValueError as e:
        raise DataSourceError(f"invalid JSON: {e}") from e


async def load_from_url(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> Any:
    """Fetch and validate an export over HTTP.

    Args:
        url (str): Absolute http(s) URL.
        client (httpx.AsyncClient | None): Optional shared client (tests pass one
            backed by httpx.MockTransport). When omitted a short-lived client is used.
        timeout (float | None): Seconds; None disables the timeout. Ignored when a
            client is supplied.

    Returns:
        Any: The validated bundle.

    Raises:
        DataSourceError: Transport failure, non-success status, invalid JSON or shape.
    """
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout) as own:
                res = await own.get(url, headers=NO_CACHE_HEADERS)
        else:
            res = await client.get(url, headers=NO_CACHE_HEADERS)
    except httpx.HTTPError as e:
        raise DataSourceError(f"failed to fetch {url}: {e}") from e

    if not res.is_success:
        raise DataSourceError(f"failed to fetch {url}: {res.status_code} {res.reason_phrase}")
    return validate(parse_json(_decode(res.content)))


def _read_text(file: FileSource) -> str:
    if hasattr(file, "read"):
        getvalue = getattr(file, "getvalue", None)
        data = getvalue() if callable(getvalue) else file.read()  # type: ignore[union-attr]
    else:
        path = Path(os.fspath(file))
        try:
            data = path.read_bytes()
        except OSError as e:
            raise DataSourceError(f"failed to read {path}: {e.strerror or e}") from e
    if isinstance(data, bytes):
        return _decode(data)
    return str(data)


async def load_from_file(file: FileSource) -> Any:
    """Read, parse and validate an export from a local file.

    Args:
        file (FileSource): Filesystem path, or a binary/text file-like object such as
            a Streamlit ``UploadedFile``.

    Returns:
        Any: The validated bundle.

    Raises:
        DataSourceError: Unreadable file, invalid UTF-8/JSON, or wrong shape.
    """
    text = await asyncio.to_thread(_read_text, file)
    return validate(parse_json(text))


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


async def load(
    source: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> Any:
    """Load from an http(s) URL or, for any other string, a local path."""
    if is_url(source):
        return await load_from_url(source, client=client, timeout=timeout)
    return await load_from_file(source)
