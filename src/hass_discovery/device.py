"""Device registry information shared by the entities of one device."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .codec import WireModel, parse_str, plain, text, wire
from .errors import ShapeError
from .primitives import Name, NameInvalidity


class DeviceInvalidity(Enum):
    MISSING_IDENTIFICATION = "MissingIdentification"
    EMPTY_IDENTIFIER = "EmptyIdentifier"
    MALFORMED_CONNECTION = "MalformedConnection"
    EMPTY_NAME = "EmptyName"
    UNENCODABLE_NAME = "UnencodableName"


def parse_identifiers(raw: Any) -> tuple[str, ...]:
    """Identifiers may be given as a single string or a list of strings."""
    if isinstance(raw, str):
        return (parse_str(raw),)
    if isinstance(raw, (list, tuple)):
        return tuple(parse_str(item) for item in raw)
    raise ShapeError("WrongTypeIdentifiers", raw, f"expected string or list, got {raw!r}")


def parse_connections(raw: Any) -> tuple[tuple[str, str], ...]:
    """Connections are ``[type, value]`` pairs, e.g. ``["mac", "02:5b:..."]``."""
    if not isinstance(raw, (list, tuple)):
        raise ShapeError("WrongTypeConnections", raw, f"expected a list, got {raw!r}")
    pairs = []
    for item in raw:
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            raise ShapeError(
                "WrongTypeConnections", item, f"expected a [type, value] pair, got {item!r}"
            )
        pairs.append((parse_str(item[0]), parse_str(item[1])))
    return tuple(pairs)


@dataclass(frozen=True, slots=True, kw_only=True)
class Device(WireModel):
    """Ties an entity to a device registry entry.

    At least one of ``identifiers`` or ``connections`` is required.
    """

    configuration_url: Optional[str] = field(default=None, metadata=plain())
    connections: tuple[tuple[str, str], ...] = field(
        default=(), metadata=wire(parse_connections, coerce=parse_connections)
    )
    hw_version: Optional[str] = field(default=None, metadata=plain())
    identifiers: tuple[str, ...] = field(
        default=(), metadata=wire(parse_identifiers, coerce=parse_identifiers)
    )
    manufacturer: Optional[str] = field(default=None, metadata=plain())
    model: Optional[str] = field(default=None, metadata=plain())
    name: Optional[Name] = field(default=None, metadata=text(Name))
    serial_number: Optional[str] = field(default=None, metadata=plain())
    suggested_area: Optional[str] = field(default=None, metadata=plain())
    sw_version: Optional[str] = field(default=None, metadata=plain())
    via_device: Optional[str] = field(default=None, metadata=plain())

    def validate(self) -> tuple[DeviceInvalidity, ...]:
        problems: list[DeviceInvalidity] = []
        if not self.identifiers and not self.connections:
            problems.append(DeviceInvalidity.MISSING_IDENTIFICATION)
        if any(not identifier for identifier in self.identifiers):
            problems.append(DeviceInvalidity.EMPTY_IDENTIFIER)
        if any(not kind or not value for kind, value in self.connections):
            problems.append(DeviceInvalidity.MALFORMED_CONNECTION)
        if self.name is not None:
            name_problems = self.name.validate()
            if NameInvalidity.EMPTY in name_problems:
                problems.append(DeviceInvalidity.EMPTY_NAME)
            elif NameInvalidity.UNENCODABLE in name_problems:
                problems.append(DeviceInvalidity.UNENCODABLE_NAME)
        return tuple(problems)


__all__ = ["Device", "DeviceInvalidity", "parse_connections", "parse_identifiers"]
