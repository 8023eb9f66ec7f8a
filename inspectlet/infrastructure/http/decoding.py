"""Interpretation of dashboard response bodies."""

from __future__ import annotations

import json

from inspectlet.domain.models import ResponseFormat, Result

# Decoder error codes reported in "JSON Error [<code>]" messages.
JSON_ERROR_DEPTH = 1
JSON_ERROR_SYNTAX = 4
JSON_ERROR_UTF8 = 5

# Deepest array/object nesting accepted in a response.
MAX_DEPTH = 512


def _reject_constant(name: str) -> None:
    raise ValueError(f"Invalid JSON constant: {name}")


def _nesting_depth(value) -> int:
    """Return how many arrays/objects are nested at the deepest point."""
    deepest = 0
    stack = [(value, 1)]
    while stack:
        item, depth = stack.pop()
        if isinstance(item, dict):
            children = item.values()
        elif isinstance(item, list):
            children = item
        else:
            continue
        deepest = max(deepest, depth)
        stack.extend((child, depth + 1) for child in children)
    return deepest


def decode_json(body: str | bytes) -> Result:
    """Strictly decode ``body``; ``null`` is a valid, successful payload."""
    try:
        if isinstance(body, bytes):
            body = body.decode("utf-8")
        parsed = json.loads(body, parse_constant=_reject_constant)
    except UnicodeDecodeError:
        return Result.fail(f"JSON Error [{JSON_ERROR_UTF8}]")
    except RecursionError:
        return Result.fail(f"JSON Error [{JSON_ERROR_DEPTH}]")
    except ValueError:
        return Result.fail(f"JSON Error [{JSON_ERROR_SYNTAX}]")
    if _nesting_depth(parsed) > MAX_DEPTH:
        return Result.fail(f"JSON Error [{JSON_ERROR_DEPTH}]")
    return Result.ok(parsed)


def passthrough(body: str) -> Result:
    return Result.ok(body)


def interpret(body: str, response_format: ResponseFormat) -> Result:
    """Turn a response body into a :class:`Result` according to its format."""
    if response_format == ResponseFormat.JSON:
        return decode_json(body)
    return passthrough(body)


__all__ = [
    "JSON_ERROR_DEPTH",
    "JSON_ERROR_SYNTAX",
    "JSON_ERROR_UTF8",
    "MAX_DEPTH",
    "decode_json",
    "interpret",
    "passthrough",
]
