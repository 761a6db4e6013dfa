"""MQTT switch platform.

See: https://www.home-assistant.io/integrations/switch.mqtt/
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional

from ..codec import choice, parse_bool, text, wire
from ..entity import Entity
from ..enums import SwitchDeviceClass
from ..primitives import Payload, Template, Topic
from ..validation import EntityInvalidity, Invalidities, ValidationContext
from .base import Platform


@dataclass(frozen=True, slots=True, kw_only=True)
class Switch(Platform):
    """A switch controlled through ``command_topic``.

    Without a ``state_topic`` Home Assistant runs the switch optimistically.
    ``state_on``/``state_off`` default to ``payload_on``/``payload_off``.
    """

    component: ClassVar[str] = "switch"

    entity: Entity = field(default_factory=Entity, metadata=wire(flatten=Entity))

    command_topic: Optional[Topic] = field(default=None, metadata=text(Topic))
    device_class: SwitchDeviceClass = field(
        default=SwitchDeviceClass.NONE, metadata=choice(SwitchDeviceClass)
    )
    optimistic: Optional[bool] = field(
        default=None, metadata=wire(parse_bool, coerce=parse_bool)
    )
    payload_off: Optional[Payload] = field(default=None, metadata=text(Payload))
    payload_on: Optional[Payload] = field(default=None, metadata=text(Payload))
    retain: Optional[bool] = field(default=None, metadata=wire(parse_bool, coerce=parse_bool))
    state_off: Optional[Payload] = field(default=None, metadata=text(Payload))
    state_on: Optional[Payload] = field(default=None, metadata=text(Payload))
    state_topic: Optional[Topic] = field(default=None, metadata=text(Topic))
    value_template: Optional[Template] = field(default=None, metadata=text(Template))

    def validate(self) -> Invalidities:
        return (
            ValidationContext()
            .merge(self.entity.validate())
            .validate_with_opt("command_topic", self.command_topic, EntityInvalidity.TOPIC)
            .validate_with_opt("payload_on", self.payload_on, EntityInvalidity.PAYLOAD)
            .validate_with_opt("payload_off", self.payload_off, EntityInvalidity.PAYLOAD)
            .validate_with_opt("state_topic", self.state_topic, EntityInvalidity.TOPIC)
            .validate_with_opt("state_on", self.state_on, EntityInvalidity.PAYLOAD)
            .validate_with_opt("state_off", self.state_off, EntityInvalidity.PAYLOAD)
            .validate_with_opt("value_template", self.value_template, EntityInvalidity.TEMPLATE)
            .into_result()
        )

    def state_topics(self) -> list[Topic]:
        return [self.state_topic] if self.state_topic is not None else []

    def command_topics(self) -> list[Topic]:
        return [self.command_topic] if self.command_topic is not None else []


__all__ = ["Switch"]
