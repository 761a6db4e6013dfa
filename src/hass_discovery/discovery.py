"""Glue between validated entities and an MQTT client.

The client (typically a connected ``paho.mqtt.client.Client``) owns the
network; this module only decides what to send and how to read what comes
back.

Discovery topic format::

    <discovery_prefix>/<component>/[<node_id>/]<object_id>/config
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
import logging
import re
from typing import TYPE_CHECKING, Any, Optional, Union

from paho.mqtt.client import MQTTMessage

from .codec import RawPayload, decode, encode
from .enums import QoS
from .errors import DecodeError
from .platforms import Platform, platform_for

if TYPE_CHECKING:  # pragma: no cover
    from .config import Config

logger = logging.getLogger(__name__)

DEFAULT_DISCOVERY_PREFIX = "homeassistant"

# Home Assistant only accepts these characters in node and object ids
_ID_RE = re.compile(r"^[a-zA-Z0-9_-]+$")


@dataclass(frozen=True, slots=True)
class DiscoveryMessage:
    """A ready-to-publish discovery announcement."""

    topic: str
    payload: bytes
    qos: int = 0
    retain: bool = True


@dataclass(frozen=True, slots=True)
class DecodeOutcome:
    """Result of decoding one inbound discovery payload.

    Exactly one of ``entity`` and ``error`` is set.
    """

    topic: Optional[str]
    entity: Optional[Platform] = None
    error: Optional[DecodeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _check_id(kind: str, value: str) -> str:
    if not _ID_RE.fullmatch(value):
        raise ValueError(f"{kind} {value!r} is invalid; allowed: [a-zA-Z0-9_-]+")
    return value


def discovery_topic(
    component: str,
    object_id: str,
    prefix: str = DEFAULT_DISCOVERY_PREFIX,
    node_id: Optional[str] = None,
) -> str:
    """Build the config topic an entity announces itself on."""
    _check_id("object_id", object_id)
    if node_id:
        _check_id("node_id", node_id)
        return f"{prefix}/{component}/{node_id}/{object_id}/config"
    return f"{prefix}/{component}/{object_id}/config"


def topic_for(entity: Platform, config: Optional[Config] = None) -> str:
    """Discovery topic for ``entity``, keyed by its unique_id."""
    unique_id = entity.unique_id
    if not unique_id:
        raise ValueError(f"{entity.component} entity has no unique_id; cannot announce it")
    prefix = DEFAULT_DISCOVERY_PREFIX
    node_id = None
    if config is not None:
        prefix = config.discovery_prefix
        node_id = config.discovery_node_id
    return discovery_topic(entity.component, unique_id, prefix, node_id)


def build_discovery_message(
    entity: Platform, config: Optional[Config] = None
) -> DiscoveryMessage:
    """Validate and encode ``entity``.

    Raises ``ValidationError`` listing every violation when the entity is not
    valid; nothing is encoded in that case.
    """
    entity.ensure_valid()
    abbreviate = config.discovery_abbreviate if config is not None else False
    qos = config.discovery_qos if config is not None else QoS.AT_MOST_ONCE
    retain = config.discovery_retain if config is not None else True
    return DiscoveryMessage(
        topic=topic_for(entity, config),
        payload=encode(entity, abbreviate=abbreviate),
        qos=int(qos),
        retain=retain,
    )


def publish_discovery(client: Any, entity: Platform, config: Optional[Config] = None) -> Any:
    """Announce ``entity`` through ``client.publish``; returns the client's result."""
    message = build_discovery_message(entity, config)
    logger.info(
        "announcing %s %s on %s (%d bytes)",
        entity.component,
        entity.unique_id,
        message.topic,
        len(message.payload),
    )
    return client.publish(
        message.topic, message.payload, qos=message.qos, retain=message.retain
    )


def clear_discovery(client: Any, entity: Platform, config: Optional[Config] = None) -> Any:
    """Remove ``entity`` from Home Assistant with an empty retained payload."""
    topic = topic_for(entity, config)
    logger.info("clearing discovery for %s %s", entity.component, entity.unique_id)
    return client.publish(topic, b"", retain=True)


def _platform(component: str) -> type[Platform]:
    try:
        return platform_for(component)
    except KeyError as err:
        raise DecodeError(None, f"unsupported component {component!r}") from err


def _message_topic(message: MQTTMessage, topic: Optional[str]) -> Optional[str]:
    if topic is not None:
        return topic
    try:
        return message.topic
    except UnicodeDecodeError as err:
        raise DecodeError(None, "topic is not valid UTF-8") from err


def decode_message(
    component: str, raw: Union[RawPayload, MQTTMessage], topic: Optional[str] = None
) -> DecodeOutcome:
    """Decode one inbound payload without raising for bad input.

    ``raw`` may be the payload itself or a paho ``MQTTMessage``. An unknown
    ``component`` or a topic that is not valid UTF-8 is reported through the
    outcome like any other malformed message.
    """
    try:
        if isinstance(raw, MQTTMessage):
            raw, topic = raw.payload, _message_topic(raw, topic)
        entity = decode(_platform(component), raw)
    except DecodeError as err:
        logger.warning(
            "rejected %s discovery payload on %s: %s", component, topic or "<unknown>", err
        )
        return DecodeOutcome(topic=topic, error=err)
    return DecodeOutcome(topic=topic, entity=entity)


def decode_messages(
    component: str, messages: Iterable[Union[RawPayload, MQTTMessage]]
) -> list[DecodeOutcome]:
    """Decode a batch; a malformed message only affects its own outcome."""
    return [decode_message(component, raw) for raw in messages]


__all__ = [
    "DEFAULT_DISCOVERY_PREFIX",
    "DecodeOutcome",
    "DiscoveryMessage",
    "build_discovery_message",
    "clear_discovery",
    "decode_message",
    "decode_messages",
    "discovery_topic",
    "publish_discovery",
    "topic_for",
]
