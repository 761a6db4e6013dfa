"""Error types raised by hass_discovery.

Two families are kept apart:

* ``ShapeError`` / ``DecodeError``: a single value (or a single wire payload)
  is malformed. Raised immediately to the caller.
* ``ValidationError``: a fully constructed entity breaks one or more rules.
  Carries every violation found in one pass.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .validation import Invalidity


class ShapeError(ValueError):
    """A primitive value does not have the required shape.

    ``kind`` is a short machine-readable tag such as ``EmptyTopic`` or
    ``InvalidQoS``.
    """

    def __init__(self, kind: str, value: Any = None, message: Optional[str] = None):
        self.kind = kind
        self.value = value
        super().__init__(message or f"{kind}: {value!r}")


class DecodeError(ValueError):
    """A wire payload could not be decoded into an entity.

    ``field`` names the offending key (dotted for nested values, ``None`` when
    the payload as a whole is unreadable).
    """

    def __init__(self, field: Optional[str], reason: str):
        self.field = field
        self.reason = reason
        where = field if field is not None else "<payload>"
        super().__init__(f"{where}: {reason}")

    def nested_under(self, parent: str) -> DecodeError:
        """Return a copy whose field path is prefixed with ``parent``."""
        if self.field is None:
            path = parent
        elif self.field.startswith("["):
            path = f"{parent}{self.field}"
        else:
            path = f"{parent}.{self.field}"
        err = DecodeError(path, self.reason)
        err.__cause__ = self.__cause__
        return err


class ValidationError(ValueError):
    """An entity failed validation; ``invalidities`` lists every violation."""

    def __init__(self, invalidities: Sequence[Invalidity]):
        self.invalidities = tuple(invalidities)
        summary = "; ".join(str(i) for i in self.invalidities)
        super().__init__(
            f"{len(self.invalidities)} validation error(s): {summary}"
        )


__all__ = ["DecodeError", "ShapeError", "ValidationError"]
