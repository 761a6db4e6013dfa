"""String-shaped primitive values used in discovery payloads.

Each primitive is an immutable ``str`` subclass. Calling the class is the
strict constructor and raises ``ShapeError`` when the value is malformed;
``unchecked`` wraps a value as-is so that entity authors can build a
descriptor and get every problem back from ``validate()`` in one report.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, TypeVar

from .errors import ShapeError

_T = TypeVar("_T", bound="_Text")

# MQTT length prefix is a 16-bit integer
MAX_TOPIC_BYTES = 65535


class TopicInvalidity(Enum):
    EMPTY = "Empty"
    WILDCARD = "Wildcard"
    NULL_CHARACTER = "NullCharacter"
    TOO_LONG = "TooLong"
    UNENCODABLE = "Unencodable"


class PayloadInvalidity(Enum):
    EMPTY = "Empty"
    UNENCODABLE = "Unencodable"


class TemplateInvalidity(Enum):
    EMPTY = "Empty"
    UNENCODABLE = "Unencodable"


class NameInvalidity(Enum):
    EMPTY = "Empty"
    UNENCODABLE = "Unencodable"


class IconInvalidity(Enum):
    EMPTY = "Empty"
    MALFORMED = "Malformed"
    UNENCODABLE = "Unencodable"


class UniqueIdInvalidity(Enum):
    EMPTY = "Empty"
    UNENCODABLE = "Unencodable"


def is_encodable(value: str) -> bool:
    """False for strings holding lone surrogates, which UTF-8 cannot carry."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


class _Text(str):
    """Common construction logic for the text primitives."""

    __slots__ = ()

    def __new__(cls: type[_T], value: Any) -> _T:
        if not isinstance(value, str):
            raise ShapeError(
                f"WrongType{cls.__name__}",
                value,
                f"{cls.__name__} must be a string, got {type(value).__name__}",
            )
        text = str.__new__(cls, value)
        problems = text.validate()
        if problems:
            first = problems[0]
            raise ShapeError(f"{first.value}{cls.__name__}", value)
        return text

    @classmethod
    def unchecked(cls: type[_T], value: str) -> _T:
        """Wrap ``value`` without checking its shape."""
        return str.__new__(cls, value)

    @classmethod
    def coerce(cls: type[_T], value: Any) -> Any:
        """Wrap plain strings unchecked; leave ``None`` and instances alone."""
        if value is None or isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.unchecked(value)
        raise ShapeError(
            f"WrongType{cls.__name__}",
            value,
            f"{cls.__name__} must be a string, got {type(value).__name__}",
        )

    def validate(self) -> list[Enum]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str.__repr__(self)})"


class Topic(_Text):
    """An MQTT topic used as a publish target or plain subscription.

    Wildcards are subscribe-only, so they are rejected here.
    """

    __slots__ = ()

    def validate(self) -> list[TopicInvalidity]:
        problems: list[TopicInvalidity] = []
        if not self:
            problems.append(TopicInvalidity.EMPTY)
            return problems
        if "+" in self or "#" in self:
            problems.append(TopicInvalidity.WILDCARD)
        if "\x00" in self:
            problems.append(TopicInvalidity.NULL_CHARACTER)
        if not is_encodable(self):
            problems.append(TopicInvalidity.UNENCODABLE)
        elif len(self.encode("utf-8")) > MAX_TOPIC_BYTES:
            problems.append(TopicInvalidity.TOO_LONG)
        return problems


class Payload(_Text):
    """Literal value compared against message bodies (``ON``, ``online``...)."""

    __slots__ = ()

    def validate(self) -> list[PayloadInvalidity]:
        if not self:
            return [PayloadInvalidity.EMPTY]
        if not is_encodable(self):
            return [PayloadInvalidity.UNENCODABLE]
        return []


class Template(_Text):
    """Jinja template rendered by Home Assistant; opaque here."""

    __slots__ = ()

    def validate(self) -> list[TemplateInvalidity]:
        if not self:
            return [TemplateInvalidity.EMPTY]
        if not is_encodable(self):
            return [TemplateInvalidity.UNENCODABLE]
        return []


class Name(_Text):
    __slots__ = ()

    def validate(self) -> list[NameInvalidity]:
        if not self:
            return [NameInvalidity.EMPTY]
        if not is_encodable(self):
            return [NameInvalidity.UNENCODABLE]
        return []


class Icon(_Text):
    """Icon reference in ``prefix:name`` form, e.g. ``mdi:thermometer``."""

    __slots__ = ()

    def validate(self) -> list[IconInvalidity]:
        if not self:
            return [IconInvalidity.EMPTY]
        prefix, sep, name = self.partition(":")
        if not sep or not prefix or not name or " " in self:
            return [IconInvalidity.MALFORMED]
        if not is_encodable(self):
            return [IconInvalidity.UNENCODABLE]
        return []


class UniqueId(_Text):
    __slots__ = ()

    def validate(self) -> list[UniqueIdInvalidity]:
        if not self:
            return [UniqueIdInvalidity.EMPTY]
        if not is_encodable(self):
            return [UniqueIdInvalidity.UNENCODABLE]
        return []


__all__ = [
    "Icon",
    "IconInvalidity",
    "MAX_TOPIC_BYTES",
    "Name",
    "NameInvalidity",
    "Payload",
    "PayloadInvalidity",
    "Template",
    "TemplateInvalidity",
    "Topic",
    "TopicInvalidity",
    "UniqueId",
    "UniqueIdInvalidity",
    "is_encodable",
]
