"""Accumulating validation.

Entity validation never stops at the first problem. Every check appends to a
``ValidationContext`` and the caller receives the whole list, in the order
the fields were checked, so an author can fix a descriptor in one go.

Usage::

    return (
        ValidationContext()
        .merge(self.entity.validate())
        .validate_with_opt("command_topic", self.command_topic, EntityInvalidity.TOPIC)
        .into_result()
    )
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Protocol

from .errors import ValidationError


class EntityInvalidity(Enum):
    """Kinds of entity-level violations."""

    TOPIC = "Topic"
    PAYLOAD = "Payload"
    TEMPLATE = "Template"
    NAME = "Name"
    ICON = "Icon"
    UNIQUE_ID = "UniqueId"
    AVAILABILITY = "Availability"
    AVAILABILITY_CONFLICT = "AvailabilityConflict"
    DEVICE = "Device"
    LAST_RESET_WITHOUT_TOTAL = "LastResetWithoutTotal"


@dataclass(frozen=True, slots=True)
class Invalidity:
    """One violation, attached to the field that caused it.

    ``causes`` holds the checked value's own violations: primitive cause
    enums (``TopicInvalidity.EMPTY``), device causes, or nested
    ``Invalidity`` records for compound values such as availability entries.
    """

    kind: EntityInvalidity
    field: str
    causes: tuple[Any, ...] = ()

    def __str__(self) -> str:
        if not self.causes:
            return f"{self.field}: {self.kind.value}"
        inner = ", ".join(
            c.value if isinstance(c, Enum) else str(c) for c in self.causes
        )
        return f"{self.field}: {self.kind.value} ({inner})"


Invalidities = tuple[Invalidity, ...]


class SupportsValidate(Protocol):
    def validate(self) -> Sequence[Any]: ...


class ValidationContext:
    """Collects ``Invalidity`` records across nested checks."""

    def __init__(self) -> None:
        self._invalidities: list[Invalidity] = []

    def invalidate(
        self, kind: EntityInvalidity, field: str, causes: Iterable[Any] = ()
    ) -> ValidationContext:
        self._invalidities.append(Invalidity(kind, field, tuple(causes)))
        return self

    def invalidate_if(
        self, condition: bool, kind: EntityInvalidity, field: str
    ) -> ValidationContext:
        if condition:
            self.invalidate(kind, field)
        return self

    def validate_with(
        self, field: str, value: SupportsValidate, kind: EntityInvalidity
    ) -> ValidationContext:
        """Validate ``value`` and record its violations under ``kind``."""
        causes = value.validate()
        if causes:
            self.invalidate(kind, field, causes)
        return self

    def validate_with_opt(
        self,
        field: str,
        value: Optional[SupportsValidate],
        kind: EntityInvalidity,
    ) -> ValidationContext:
        """Like ``validate_with``; an absent value is always valid."""
        if value is None:
            return self
        return self.validate_with(field, value, kind)

    def merge(self, invalidities: Iterable[Invalidity]) -> ValidationContext:
        """Append already wrapped violations unchanged (embedded values)."""
        self._invalidities.extend(invalidities)
        return self

    def is_valid(self) -> bool:
        return not self._invalidities

    def into_result(self) -> Invalidities:
        return tuple(self._invalidities)


class Validatable:
    """Mixin for values exposing ``validate() -> Invalidities``."""

    __slots__ = ()

    def validate(self) -> Invalidities:
        raise NotImplementedError

    def is_valid(self) -> bool:
        return not self.validate()

    def ensure_valid(self) -> None:
        """Raise ``ValidationError`` listing every violation, if any."""
        invalidities = self.validate()
        if invalidities:
            raise ValidationError(invalidities)


__all__ = [
    "EntityInvalidity",
    "Invalidities",
    "Invalidity",
    "SupportsValidate",
    "Validatable",
    "ValidationContext",
]
