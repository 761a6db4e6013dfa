"""MQTT button platform: a stateless trigger publishing to ``command_topic``.

See: https://www.home-assistant.io/integrations/button.mqtt/
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional

from ..codec import choice, parse_bool, text, wire
from ..entity import Entity
from ..enums import ButtonDeviceClass
from ..primitives import Payload, Topic
from ..validation import EntityInvalidity, Invalidities, ValidationContext
from .base import Platform


@dataclass(frozen=True, slots=True, kw_only=True)
class Button(Platform):
    component: ClassVar[str] = "button"

    entity: Entity = field(default_factory=Entity, metadata=wire(flatten=Entity))

    command_topic: Topic = field(metadata=text(Topic))
    device_class: ButtonDeviceClass = field(
        default=ButtonDeviceClass.NONE, metadata=choice(ButtonDeviceClass)
    )
    payload_press: Optional[Payload] = field(default=None, metadata=text(Payload))
    retain: Optional[bool] = field(default=None, metadata=wire(parse_bool, coerce=parse_bool))

    def validate(self) -> Invalidities:
        return (
            ValidationContext()
            .merge(self.entity.validate())
            .validate_with("command_topic", self.command_topic, EntityInvalidity.TOPIC)
            .validate_with_opt("payload_press", self.payload_press, EntityInvalidity.PAYLOAD)
            .into_result()
        )

    def command_topics(self) -> list[Topic]:
        return [self.command_topic]


__all__ = ["Button"]
