"""MQTT binary sensor platform.

See: https://www.home-assistant.io/integrations/binary_sensor.mqtt/
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional

from ..codec import choice, parse_bool, parse_positive_int, text, wire
from ..entity import Entity
from ..enums import BinarySensorDeviceClass
from ..primitives import Payload, Template, Topic
from ..validation import EntityInvalidity, Invalidities, ValidationContext
from .base import Platform


@dataclass(frozen=True, slots=True, kw_only=True)
class BinarySensor(Platform):
    component: ClassVar[str] = "binary_sensor"

    entity: Entity = field(default_factory=Entity, metadata=wire(flatten=Entity))

    device_class: BinarySensorDeviceClass = field(
        default=BinarySensorDeviceClass.NONE, metadata=choice(BinarySensorDeviceClass)
    )
    expire_after: Optional[int] = field(
        default=None, metadata=wire(parse_positive_int, coerce=parse_positive_int)
    )
    force_update: Optional[bool] = field(
        default=None, metadata=wire(parse_bool, coerce=parse_bool)
    )
    # seconds after which the sensor falls back to off (motion sensors)
    off_delay: Optional[int] = field(
        default=None, metadata=wire(parse_positive_int, coerce=parse_positive_int)
    )
    payload_off: Optional[Payload] = field(default=None, metadata=text(Payload))
    payload_on: Optional[Payload] = field(default=None, metadata=text(Payload))
    state_topic: Topic = field(metadata=text(Topic))
    value_template: Optional[Template] = field(default=None, metadata=text(Template))

    def validate(self) -> Invalidities:
        return (
            ValidationContext()
            .merge(self.entity.validate())
            .validate_with("state_topic", self.state_topic, EntityInvalidity.TOPIC)
            .validate_with_opt("payload_on", self.payload_on, EntityInvalidity.PAYLOAD)
            .validate_with_opt("payload_off", self.payload_off, EntityInvalidity.PAYLOAD)
            .validate_with_opt("value_template", self.value_template, EntityInvalidity.TEMPLATE)
            .into_result()
        )

    def state_topics(self) -> list[Topic]:
        return [self.state_topic]


__all__ = ["BinarySensor"]
