"""One entry of an entity's ``availability`` list."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .codec import WireModel, text
from .primitives import Payload, Template, Topic
from .validation import EntityInvalidity, Invalidities, Validatable, ValidationContext


@dataclass(frozen=True, slots=True, kw_only=True)
class Availability(WireModel, Validatable):
    """Topic on which the entity reports online/offline.

    ``payload_available`` / ``payload_not_available`` default to
    ``online`` / ``offline`` on the Home Assistant side.
    """

    payload_available: Optional[Payload] = field(default=None, metadata=text(Payload))
    payload_not_available: Optional[Payload] = field(
        default=None, metadata=text(Payload)
    )
    topic: Topic = field(metadata=text(Topic))
    value_template: Optional[Template] = field(default=None, metadata=text(Template))

    def validate(self) -> Invalidities:
        return (
            ValidationContext()
            .validate_with("topic", self.topic, EntityInvalidity.TOPIC)
            .validate_with_opt("value_template", self.value_template, EntityInvalidity.TEMPLATE)
            .validate_with_opt(
                "payload_available", self.payload_available, EntityInvalidity.PAYLOAD
            )
            .validate_with_opt(
                "payload_not_available", self.payload_not_available, EntityInvalidity.PAYLOAD
            )
            .into_result()
        )


__all__ = ["Availability"]
