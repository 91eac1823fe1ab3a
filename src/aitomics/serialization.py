"""Reading and writing response chains as tagged JSON snapshots.

A snapshot may be loaded in a session that never registered the callers that
produced it. Such responses are bound to an ``UnresolvedCaller`` and recorded in
the registry's pending lookups; registering a caller with the same id later
binds them to it. Until then the chain can be printed, inspected and written
again, but not re-run.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import aiofiles
from loguru import logger

from aitomics.callers.base import UnresolvedCaller
from aitomics.exceptions import InvalidFormatError, ValidationError
from aitomics.registry import CallerRegistry
from aitomics.response import GeneratingType, Response

FILE_HEADER = "AITOMICS_RESPONSE_FILE_v1"
REQUIRED_KEYS = ("caller", "input", "output")


def dump_snapshot(responses: Response | Iterable[Response]) -> dict[str, Any]:
    """Wrap one or more responses in the tagged snapshot structure."""
    items = [responses] if isinstance(responses, Response) else list(responses)
    for position, item in enumerate(items):
        if not isinstance(item, Response):
            raise ValidationError(
                f"Element at index {position} is not a Response", field="responses", value=item
            )
    return {
        "_header": FILE_HEADER,
        "timestamp": datetime.now(UTC).isoformat(),
        "responses": [item.to_json() for item in items],
    }


def _is_response_node(value: Any) -> bool:
    return isinstance(value, dict) and "caller" in value


def _parse_generator(tag: Any) -> GeneratingType:
    try:
        return GeneratingType(tag)
    except ValueError:
        return GeneratingType.PROGRAMMATIC


def parse_response(node: Any, registry: CallerRegistry) -> Response:
    """Rebuild a response chain from its ``to_json`` form.

    Callers are looked up in ``registry``; unknown ids get an
    ``UnresolvedCaller`` and the response is queued in ``registry.pending``.
    """
    if not isinstance(node, dict) or any(key not in node for key in REQUIRED_KEYS):
        raise InvalidFormatError("Response structure has been tampered with")
    caller_id = node["caller"]
    if not isinstance(caller_id, str):
        raise InvalidFormatError(f"Caller reference must be an id string, got {caller_id!r}")

    input_value = node["input"]
    if _is_response_node(input_value):
        input_value = parse_response(input_value, registry)

    generator = _parse_generator(node.get("generator"))
    caller = registry.get(caller_id)
    if caller is not None:
        return Response(node["output"], caller, input_value, generator)

    response = Response(node["output"], UnresolvedCaller(caller_id), input_value, generator)
    registry.pending.add(caller_id, response)
    return response


def load_snapshot(data: Any, registry: CallerRegistry, source: str | None = None) -> list[Response]:
    """Validate a parsed snapshot and rebuild its responses."""
    if not isinstance(data, dict) or data.get("_header") != FILE_HEADER:
        raise InvalidFormatError("Not an aitomics response file", path=source)
    responses = data.get("responses")
    if not isinstance(responses, list):
        raise InvalidFormatError("'responses' must be a list", path=source)
    return [parse_response(node, registry) for node in responses]


async def write_responses(path: str | Path, responses: Response | Iterable[Response]) -> None:
    """Write one or more responses to ``path`` as a snapshot file."""
    snapshot = dump_snapshot(responses)
    async with aiofiles.open(path, "w", encoding="utf-8") as f:
        await f.write(json.dumps(snapshot, indent=2, ensure_ascii=False, default=str))
    logger.info(f"Wrote {len(snapshot['responses'])} response(s) to {path}")


async def read_responses(path: str | Path, registry: CallerRegistry) -> list[Response]:
    """Read the responses stored in a snapshot file.

    Raises:
        InvalidFormatError: If the file is not valid JSON, carries the wrong
            header or contains a response without caller, input or output
    """
    async with aiofiles.open(path, encoding="utf-8") as f:
        content = await f.read()
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise InvalidFormatError(f"Not valid JSON: {e}", path=str(path)) from e

    responses = load_snapshot(data, registry, source=str(path))
    unresolved = sum(
        1 for response in responses for node in response.iter_lineage() if not node.is_resolved
    )
    logger.info(
        f"Read {len(responses)} response(s) from {path} ({unresolved} step(s) awaiting their caller)"
    )
    return responses
