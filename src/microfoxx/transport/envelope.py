"""
Response decoding and error classification.

Error envelope on failure: {"exception": "..."} or {"errorMessage": "..."}.
The HTTP status decides the error kind; the envelope only supplies the message.
"""

import json
import logging
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, TypeVar, Union

import httpx

from microfoxx.errors import (
    BadRequestError,
    DecodeError,
    GeneralError,
    MicroFoxxError,
    NotFoundError,
)
from microfoxx.models.results import OperationResult

logger = logging.getLogger(__name__)

SUCCESS_CODES = (200, 201)
MESSAGE_FIELDS = ("exception", "errorMessage")

R = TypeVar("R", bound=OperationResult)


def decode_json(raw: Union[bytes, str]) -> Any:
    """Decode a body. Non-integer numbers come back as Decimal."""
    try:
        return json.loads(raw, parse_float=Decimal)
    except json.JSONDecodeError as e:
        raise DecodeError(f"JSON error: {e.msg} at line {e.lineno}, column {e.colno}")
    except UnicodeDecodeError as e:
        raise DecodeError(f"Response body is not valid UTF-8: {e}")


def decode_object(raw: Union[bytes, str]) -> dict[str, Any]:
    data = decode_json(raw)
    if not isinstance(data, dict):
        raise DecodeError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def decode_array(raw: Union[bytes, str]) -> list[Any]:
    data = decode_json(raw)
    if not isinstance(data, list):
        raise DecodeError(f"Expected a JSON array, got {type(data).__name__}")
    return data


def error_for_status(status: int, message: str = "") -> MicroFoxxError:
    if status == 400:
        return BadRequestError(message) if message else BadRequestError()
    if status == 404:
        return NotFoundError(message) if message else NotFoundError()
    return GeneralError(message) if message else GeneralError()


def classify(status: int, body: Union[Mapping[str, Any], bytes, str]) -> tuple[str, MicroFoxxError]:
    """Map a non-2xx response to (message, error).

    ``body`` may already be decoded. Undecodable bodies classify as a
    DecodeError with an empty message.
    """
    if 200 <= status < 300:
        raise ValueError(f"Refusing to classify success status {status}")
    if not isinstance(body, Mapping):
        try:
            body = decode_object(body)
        except DecodeError as e:
            logger.warning("HTTP %d with undecodable error body: %s", status, e.message)
            return "", e

    message = ""
    for field in MESSAGE_FIELDS:
        value = body.get(field)
        if isinstance(value, str) and value:
            message = value
            break

    error = error_for_status(status, message)
    logger.warning("HTTP %d classified as %s: %s", status, error.kind.value, message or "(no message)")
    return message, error


def failure(result_cls: type[R], resp: httpx.Response, body: Union[Mapping[str, Any], None] = None) -> R:
    """Build a failed result of ``result_cls`` from a response the endpoint rejects."""
    if 200 <= resp.status_code < 300:
        # 2xx, but not one this endpoint answers with.
        return result_cls(
            status_code=resp.status_code,
            error=GeneralError(f"Unexpected status {resp.status_code}"),
        )
    message, error = classify(resp.status_code, resp.content if body is None else body)
    return result_cls(status_code=resp.status_code, message=message or None, error=error)
