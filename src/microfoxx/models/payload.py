"""
JsonPayload: opaque JSON bytes handed back for documents and events.

Records decoded from a response are re-encoded here so callers can decode
them into whatever type their application uses.
"""

from __future__ import annotations

import io
import json
from decimal import Decimal
from typing import Any, TypeVar

from pydantic import TypeAdapter

from microfoxx.errors import DecodeError

T = TypeVar("T")


def _dump(value: Any) -> str:
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"{value} is not a JSON number")
        return str(value)
    if isinstance(value, dict):
        items = []
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError(f"keys must be str, not {type(key).__name__}")
            items.append(json.dumps(key, ensure_ascii=False) + ":" + _dump(item))
        return "{" + ",".join(items) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(_dump(item) for item in value) + "]"
    return json.dumps(value, ensure_ascii=False, allow_nan=False)


class JsonPayload:
    __slots__ = ("_raw",)

    def __init__(self, raw: bytes):
        self._raw = raw

    @classmethod
    def encode(cls, value: Any) -> JsonPayload:
        """Encode a decoded JSON value. Key order is kept as received.

        Decimals are written as bare numbers with every digit they hold.
        """
        try:
            raw = _dump(value)
        except (TypeError, ValueError) as e:
            raise DecodeError(f"Failed to encode payload: {e}")
        return cls(raw.encode("utf-8"))

    @property
    def raw(self) -> bytes:
        return self._raw

    def stream(self) -> io.BytesIO:
        """A fresh reader over the payload; each call starts at the beginning."""
        return io.BytesIO(self._raw)

    def json(self) -> Any:
        """Decode with plain floats. Use raw for every digit."""
        return json.loads(self._raw)

    def parse(self, type_: type[T]) -> T:
        """Decode into an application type, e.g. ``list[MyDoc]``."""
        return TypeAdapter(type_).validate_json(self._raw)

    def __bytes__(self) -> bytes:
        return self._raw

    def __len__(self) -> int:
        return len(self._raw)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, JsonPayload):
            return self._raw == other._raw
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._raw)

    def __repr__(self) -> str:
        preview = self._raw[:60].decode("utf-8", errors="replace")
        return f"JsonPayload({preview!r}{'...' if len(self._raw) > 60 else ''})"
