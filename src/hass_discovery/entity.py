"""Attributes shared by every platform entity.

Platform classes (``Sensor``, ``Switch``...) embed an ``Entity`` in their
``entity`` field instead of inheriting from it. On the wire its keys are
flattened into the platform's own payload.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .availability import Availability
from .codec import (
    WireModel,
    choice,
    nested,
    parse_bool,
    plain,
    sequence,
    text,
    wire,
)
from .device import Device
from .enums import AvailabilityMode, EntityCategory, QoS
from .primitives import Icon, Name, Payload, Template, Topic, UniqueId
from .validation import EntityInvalidity, Invalidities, Validatable, ValidationContext

_AVAILABILITY_LIST = sequence(nested(Availability))


@dataclass(frozen=True, slots=True, kw_only=True)
class Entity(WireModel, Validatable):
    availability: tuple[Availability, ...] = field(
        default=(),
        metadata=wire(_AVAILABILITY_LIST, coerce=_AVAILABILITY_LIST),
    )
    availability_mode: AvailabilityMode = field(
        default=AvailabilityMode.LATEST, metadata=choice(AvailabilityMode)
    )
    availability_template: Optional[Template] = field(
        default=None, metadata=text(Template)
    )
    availability_topic: Optional[Topic] = field(default=None, metadata=text(Topic))
    device: Optional[Device] = field(
        default=None, metadata=wire(nested(Device), coerce=nested(Device))
    )
    enabled_by_default: Optional[bool] = field(
        default=None, metadata=wire(parse_bool, coerce=parse_bool)
    )
    entity_category: EntityCategory = field(
        default=EntityCategory.NONE, metadata=choice(EntityCategory)
    )
    icon: Optional[Icon] = field(default=None, metadata=text(Icon))
    json_attributes_template: Optional[Template] = field(
        default=None, metadata=text(Template)
    )
    json_attributes_topic: Optional[Topic] = field(default=None, metadata=text(Topic))
    name: Optional[Name] = field(default=None, metadata=text(Name))
    object_id: Optional[str] = field(default=None, metadata=plain())
    payload_available: Optional[Payload] = field(default=None, metadata=text(Payload))
    payload_not_available: Optional[Payload] = field(
        default=None, metadata=text(Payload)
    )
    qos: QoS = field(default=QoS.AT_MOST_ONCE, metadata=choice(QoS))
    unique_id: Optional[UniqueId] = field(default=None, metadata=text(UniqueId))

    def validate(self) -> Invalidities:
        ctx = ValidationContext()
        for index, item in enumerate(self.availability):
            ctx.validate_with(
                f"availability[{index}]", item, EntityInvalidity.AVAILABILITY
            )
        # the list form and the single-topic form describe the same thing
        ctx.invalidate_if(
            bool(self.availability) and self.availability_topic is not None,
            EntityInvalidity.AVAILABILITY_CONFLICT,
            "availability_topic",
        )
        return (
            ctx.validate_with_opt(
                "availability_topic", self.availability_topic, EntityInvalidity.TOPIC
            )
            .validate_with_opt(
                "availability_template", self.availability_template, EntityInvalidity.TEMPLATE
            )
            .validate_with_opt(
                "payload_available", self.payload_available, EntityInvalidity.PAYLOAD
            )
            .validate_with_opt(
                "payload_not_available", self.payload_not_available, EntityInvalidity.PAYLOAD
            )
            .validate_with_opt("device", self.device, EntityInvalidity.DEVICE)
            .validate_with_opt("icon", self.icon, EntityInvalidity.ICON)
            .validate_with_opt(
                "json_attributes_topic", self.json_attributes_topic, EntityInvalidity.TOPIC
            )
            .validate_with_opt(
                "json_attributes_template",
                self.json_attributes_template,
                EntityInvalidity.TEMPLATE,
            )
            .validate_with_opt("name", self.name, EntityInvalidity.NAME)
            .validate_with_opt("unique_id", self.unique_id, EntityInvalidity.UNIQUE_ID)
            .into_result()
        )

    def availability_topics(self) -> list[Topic]:
        """Topics the transport subscribes to for online/offline updates."""
        if self.availability:
            return [item.topic for item in self.availability]
        if self.availability_topic is not None:
            return [self.availability_topic]
        return []


__all__ = ["Entity"]
