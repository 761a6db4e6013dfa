"""Wire encoding for discovery payloads.

Payloads are flat JSON objects. A field is written only when it differs
from its default: ``None`` options, empty sequences and enums sitting on their
default member are left out. Decoding fills the same defaults back in,
ignores keys it does not know and rejects malformed values with a
``DecodeError`` naming the field.

Each dataclass field declares how it is read through ``wire()`` metadata::

    state_topic: Optional[Topic] = field(default=None, metadata=text(Topic))
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import MISSING, Field, fields, is_dataclass
from enum import Enum
import json
import logging
from typing import Any, Optional, TypeVar, Union

from . import abbreviations
from .errors import DecodeError, ShapeError
from .primitives import is_encodable

logger = logging.getLogger(__name__)

_M = TypeVar("_M")

Decoder = Callable[[Any], Any]
RawPayload = Union[bytes, bytearray, memoryview, str, Mapping[str, Any]]


def wire(
    decode: Optional[Decoder] = None,
    *,
    coerce: Optional[Decoder] = None,
    flatten: Optional[type] = None,
) -> dict[str, Any]:
    """Field metadata describing how a field travels on the wire.

    decode: turns the raw JSON value into the field value (raises ShapeError)
    coerce: normalises caller-supplied values at construction time
    flatten: the field is a nested model whose keys live at this level
    """
    return {"decode": decode, "coerce": coerce, "flatten": flatten}


def text(cls: Any) -> dict[str, Any]:
    """Metadata for a text primitive field (Topic, Payload...)."""
    return wire(cls, coerce=cls.coerce)


def plain() -> dict[str, Any]:
    """Metadata for a free-form string field (model, unit_of_measurement...)."""
    return wire(parse_str, coerce=parse_str)


def choice(cls: Any) -> dict[str, Any]:
    """Metadata for an enum field (QoS, DeviceClass...)."""
    return wire(cls.parse, coerce=cls.parse)


def parse_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    raise ShapeError("WrongTypeBool", raw, f"expected true or false, got {raw!r}")


def parse_str(raw: Any) -> str:
    if not isinstance(raw, str):
        raise ShapeError("WrongTypeStr", raw, f"expected a string, got {raw!r}")
    if not is_encodable(raw):
        raise ShapeError("UnencodableStr", raw, "string cannot be encoded as UTF-8")
    return raw


def parse_positive_int(raw: Any) -> int:
    if isinstance(raw, int) and not isinstance(raw, bool) and raw > 0:
        return raw
    raise ShapeError("NotPositiveInt", raw, f"expected a positive integer, got {raw!r}")


def nested(cls: type[_M]) -> Callable[[Any], _M]:
    """Decoder for a nested JSON object."""

    def decode_nested(raw: Any) -> _M:
        if isinstance(raw, cls):
            return raw
        return from_dict(cls, raw)

    return decode_nested


def sequence(item: Decoder) -> Decoder:
    """Decoder for a JSON array; errors carry the item index."""

    def decode_sequence(raw: Any) -> tuple[Any, ...]:
        if not isinstance(raw, (list, tuple)):
            raise ShapeError("WrongTypeList", raw, f"expected a list, got {raw!r}")
        values = []
        for index, value in enumerate(raw):
            try:
                values.append(item(value))
            except DecodeError as err:
                raise err.nested_under(f"[{index}]") from err.__cause__
            except ShapeError as err:
                raise DecodeError(f"[{index}]", str(err)) from err
        return tuple(values)

    return decode_sequence


class WireModel:
    """Base for the dataclasses that make up a discovery payload.

    Runs each field's ``coerce`` hook after construction so plain strings,
    lists and ints given by callers become the declared primitive types.
    """

    __slots__ = ()

    def __post_init__(self) -> None:
        for f in fields(self):  # type: ignore[arg-type]
            coerce = f.metadata.get("coerce")
            if coerce is None:
                continue
            value = getattr(self, f.name)
            if value is None:
                continue
            object.__setattr__(self, f.name, coerce(value))


def is_absent(value: Any) -> bool:
    """True when ``value`` is its type's default and must not be encoded."""
    if value is None:
        return True
    is_default = getattr(value, "is_default", None)
    if callable(is_default) and is_default():
        return True
    if isinstance(value, (tuple, list)) and not value:
        return True
    return False


def _encode_value(value: Any, abbreviate: bool) -> Any:
    if is_dataclass(value):
        return to_dict(value, abbreviate=abbreviate)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (tuple, list)):
        return [_encode_value(v, abbreviate) for v in value]
    if isinstance(value, str):
        return str(value)
    return value


def _encode_into(obj: Any, out: dict[str, Any], abbreviate: bool) -> None:
    for f in fields(obj):
        value = getattr(obj, f.name)
        if f.metadata.get("flatten") is not None:
            _encode_into(value, out, abbreviate)
            continue
        if is_absent(value):
            continue
        out[f.name] = _encode_value(value, abbreviate)


def to_dict(obj: Any, *, abbreviate: bool = False) -> dict[str, Any]:
    """Encode a model into a plain mapping, omitting default-valued fields."""
    out: dict[str, Any] = {}
    _encode_into(obj, out, abbreviate)
    if abbreviate:
        table = abbreviations.for_type(type(obj))
        out = {table.get(key, key): value for key, value in out.items()}
    return out


def encode(obj: Any, *, abbreviate: bool = False) -> bytes:
    """Encode a model as compact UTF-8 JSON."""
    data = to_dict(obj, abbreviate=abbreviate)
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def wire_names(cls: type) -> set[str]:
    """Every key ``cls`` reads, including flattened members."""
    names: set[str] = set()
    for f in fields(cls):
        flatten = f.metadata.get("flatten")
        if flatten is not None:
            names |= wire_names(flatten)
        else:
            names.add(f.name)
    return names


def _expand_keys(cls: type, data: Mapping[str, Any]) -> dict[str, Any]:
    table = abbreviations.for_type(cls)
    longhand = abbreviations.expanded(table)
    out: dict[str, Any] = {}
    for key, value in data.items():
        full = longhand.get(key, key)
        if full in out:
            raise DecodeError(
                full,
                f"mutually exclusive keys {table[full]!r} and {full!r} are both set",
            )
        out[full] = value
    return out


def _is_required(f: Field) -> bool:
    return f.default is MISSING and f.default_factory is MISSING


def _build(cls: type[_M], data: Mapping[str, Any]) -> _M:
    kwargs: dict[str, Any] = {}
    for f in fields(cls):
        flatten = f.metadata.get("flatten")
        if flatten is not None:
            kwargs[f.name] = _build(flatten, data)
            continue
        raw = data.get(f.name)
        if raw is None:
            if _is_required(f):
                raise DecodeError(f.name, "required field is missing")
            continue
        decoder = f.metadata.get("decode")
        try:
            kwargs[f.name] = decoder(raw) if decoder is not None else raw
        except DecodeError as err:
            raise err.nested_under(f.name) from err.__cause__
        except ShapeError as err:
            raise DecodeError(f.name, str(err)) from err
    try:
        return cls(**kwargs)
    except ShapeError as err:
        raise DecodeError(None, str(err)) from err


def from_dict(cls: type[_M], data: Any) -> _M:
    """Build ``cls`` from an already parsed JSON object."""
    if not isinstance(data, Mapping):
        raise DecodeError(None, f"expected a JSON object, got {type(data).__name__}")
    data = _expand_keys(cls, data)
    unknown = set(data) - wire_names(cls)
    if unknown:
        logger.debug(
            "ignoring unknown %s keys: %s", cls.__name__, sorted(map(str, unknown))
        )
    return _build(cls, data)


def decode(cls: type[_M], raw: RawPayload) -> _M:
    """Decode a raw discovery payload (bytes, str or mapping) into ``cls``."""
    if isinstance(raw, memoryview):
        raw = raw.tobytes()
    try:
        data = raw if isinstance(raw, Mapping) else json.loads(raw)
    except RecursionError as err:
        raise DecodeError(None, "JSON nested too deeply") from err
    except (TypeError, ValueError) as err:
        raise DecodeError(None, f"invalid JSON: {err}") from err
    try:
        return from_dict(cls, data)
    except RecursionError as err:
        raise DecodeError(None, "payload nested too deeply") from err


__all__ = [
    "RawPayload",
    "WireModel",
    "choice",
    "decode",
    "encode",
    "from_dict",
    "is_absent",
    "nested",
    "parse_bool",
    "parse_positive_int",
    "parse_str",
    "plain",
    "sequence",
    "text",
    "to_dict",
    "wire",
    "wire_names",
]
