"""Behaviour common to all platform entity classes."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from paho.mqtt.client import topic_matches_sub

from ..codec import WireModel
from ..validation import Validatable

if TYPE_CHECKING:  # pragma: no cover
    from ..entity import Entity
    from ..primitives import Topic


class Platform(WireModel, Validatable):
    """Mixin for platform dataclasses.

    Subclasses are dataclasses with an ``entity`` field holding the shared
    attributes and set ``component`` to the Home Assistant platform name.
    """

    __slots__ = ()

    component: ClassVar[str] = ""

    if TYPE_CHECKING:  # pragma: no cover
        entity: Entity

    def state_topics(self) -> list[Topic]:
        """Platform topics carrying state (subscribed by the transport)."""
        return []

    def command_topics(self) -> list[Topic]:
        """Platform topics the transport publishes commands on."""
        return []

    def subscribe_topics(self) -> list[Topic]:
        topics = list(self.state_topics())
        if self.entity.json_attributes_topic is not None:
            topics.append(self.entity.json_attributes_topic)
        topics.extend(self.entity.availability_topics())
        # keep first occurrence; a status topic often doubles as attributes topic
        return list(dict.fromkeys(topics))

    def publish_topics(self) -> list[Topic]:
        return list(dict.fromkeys(self.command_topics()))

    def handles(self, topic: str) -> bool:
        """True when an inbound message on ``topic`` concerns this entity."""
        return any(topic_matches_sub(sub, topic) for sub in self.subscribe_topics())

    @property
    def unique_id(self) -> str | None:
        uid = self.entity.unique_id
        return str(uid) if uid is not None else None


__all__ = ["Platform"]
