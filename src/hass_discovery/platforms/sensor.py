"""MQTT sensor platform.

The sensor value is the payload received on ``state_topic``. When messages
on it are retained the sensor starts with the last known value, otherwise the
initial state is undefined.

See: https://www.home-assistant.io/integrations/sensor.mqtt/
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional

from ..codec import choice, parse_bool, parse_positive_int, plain, text, wire
from ..entity import Entity
from ..enums import DeviceClass, StateClass
from ..primitives import Template, Topic
from ..validation import EntityInvalidity, Invalidities, ValidationContext
from .base import Platform


@dataclass(frozen=True, slots=True, kw_only=True)
class Sensor(Platform):
    component: ClassVar[str] = "sensor"

    entity: Entity = field(default_factory=Entity, metadata=wire(flatten=Entity))

    device_class: DeviceClass = field(
        default=DeviceClass.NONE, metadata=choice(DeviceClass)
    )
    # seconds without an update before the state becomes unavailable
    expire_after: Optional[int] = field(
        default=None, metadata=wire(parse_positive_int, coerce=parse_positive_int)
    )
    force_update: Optional[bool] = field(
        default=None, metadata=wire(parse_bool, coerce=parse_bool)
    )
    last_reset_value_template: Optional[Template] = field(
        default=None, metadata=text(Template)
    )
    state_class: StateClass = field(default=StateClass.NONE, metadata=choice(StateClass))
    state_topic: Topic = field(metadata=text(Topic))
    unit_of_measurement: Optional[str] = field(default=None, metadata=plain())
    value_template: Optional[Template] = field(default=None, metadata=text(Template))

    def validate(self) -> Invalidities:
        return (
            ValidationContext()
            .merge(self.entity.validate())
            .validate_with("state_topic", self.state_topic, EntityInvalidity.TOPIC)
            .validate_with_opt("value_template", self.value_template, EntityInvalidity.TEMPLATE)
            .validate_with_opt(
                "last_reset_value_template",
                self.last_reset_value_template,
                EntityInvalidity.TEMPLATE,
            )
            .invalidate_if(
                self.last_reset_value_template is not None
                and self.state_class is not StateClass.TOTAL,
                EntityInvalidity.LAST_RESET_WITHOUT_TOTAL,
                "last_reset_value_template",
            )
            .into_result()
        )

    def state_topics(self) -> list[Topic]:
        return [self.state_topic]


__all__ = ["Sensor"]
