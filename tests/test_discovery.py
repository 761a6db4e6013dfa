"""Tests for discovery topics, announcements and the receive path."""

import json
import logging

from paho.mqtt.client import MQTTMessage
import pytest

from hass_discovery.config import Config
from hass_discovery.discovery import (
    DiscoveryMessage,
    build_discovery_message,
    clear_discovery,
    decode_message,
    decode_messages,
    discovery_topic,
    publish_discovery,
    topic_for,
)
from hass_discovery.entity import Entity
from hass_discovery.errors import DecodeError, ValidationError
from hass_discovery.platforms import Sensor, Switch
from hass_discovery.validation import EntityInvalidity


class FakeClient:
    def __init__(self):
        self.published = []

    def publish(self, topic, payload, qos=0, retain=False):
        self.published.append((topic, payload, qos, retain))

        class R:
            rc = 0

        return R()


@pytest.fixture
def temp_sensor():
    return Sensor(
        entity=Entity(name="Temperature", unique_id="kitchen_temp"),
        state_topic="kitchen/temp/state",
        device_class="temperature",
        unit_of_measurement="°C",
    )


def test_discovery_topic_format():
    assert discovery_topic("sensor", "kitchen_temp") == (
        "homeassistant/sensor/kitchen_temp/config"
    )
    assert discovery_topic("switch", "lamp", prefix="ha", node_id="node-1") == (
        "ha/switch/node-1/lamp/config"
    )


@pytest.mark.parametrize("object_id", ["", "a/b", "with space", "x+y"])
def test_discovery_topic_rejects_bad_ids(object_id):
    with pytest.raises(ValueError):
        discovery_topic("sensor", object_id)


def test_topic_for_uses_config():
    cfg = Config({"discovery": {"prefix": "custom", "node_id": "pi"}})
    switch = Switch(entity=Entity(unique_id="pump"), command_topic="pump/set")
    assert topic_for(switch, cfg) == "custom/switch/pi/pump/config"
    assert topic_for(switch) == "homeassistant/switch/pump/config"


def test_entity_without_unique_id_cannot_be_announced():
    with pytest.raises(ValueError, match="unique_id"):
        topic_for(Sensor(state_topic="a/b"))


def test_build_discovery_message(temp_sensor):
    message = build_discovery_message(temp_sensor, Config.from_defaults())
    assert isinstance(message, DiscoveryMessage)
    assert message.topic == "homeassistant/sensor/kitchen_temp/config"
    assert message.retain is True
    assert message.qos == 0
    assert json.loads(message.payload) == {
        "device_class": "temperature",
        "name": "Temperature",
        "state_topic": "kitchen/temp/state",
        "unique_id": "kitchen_temp",
        "unit_of_measurement": "°C",
    }


def test_build_discovery_message_abbreviates_when_configured(temp_sensor):
    cfg = Config({"discovery": {"abbreviate": True, "qos": 1, "retain": False}})
    message = build_discovery_message(temp_sensor, cfg)
    data = json.loads(message.payload)
    assert data["stat_t"] == "kitchen/temp/state"
    assert data["uniq_id"] == "kitchen_temp"
    assert message.qos == 1
    assert message.retain is False


def test_invalid_entity_is_not_encoded():
    switch = Switch(
        entity=Entity(unique_id="broken"), command_topic="", state_on=""
    )
    with pytest.raises(ValidationError) as exc:
        build_discovery_message(switch)
    assert [i.kind for i in exc.value.invalidities] == [
        EntityInvalidity.TOPIC,
        EntityInvalidity.PAYLOAD,
    ]


def test_publish_discovery_uses_client(temp_sensor, caplog):
    client = FakeClient()
    with caplog.at_level(logging.INFO, logger="hass_discovery.discovery"):
        result = publish_discovery(client, temp_sensor)
    assert result.rc == 0
    ((topic, payload, qos, retain),) = client.published
    assert topic == "homeassistant/sensor/kitchen_temp/config"
    assert json.loads(payload)["state_topic"] == "kitchen/temp/state"
    assert (qos, retain) == (0, True)
    assert "kitchen_temp" in caplog.text


def test_clear_discovery_publishes_empty_retained_payload(temp_sensor):
    client = FakeClient()
    clear_discovery(client, temp_sensor)
    assert client.published == [
        ("homeassistant/sensor/kitchen_temp/config", b"", 0, True)
    ]


def test_decode_message_success():
    outcome = decode_message("switch", b'{"command_topic": "a/set", "unique_id": "a"}')
    assert outcome.ok
    assert outcome.entity == Switch(entity=Entity(unique_id="a"), command_topic="a/set")
    assert outcome.error is None


def test_decode_message_failure_is_reported_not_raised(caplog):
    with caplog.at_level(logging.WARNING, logger="hass_discovery.discovery"):
        outcome = decode_message(
            "switch", b'{"command_topic": "a/set", "qos": 5}', topic="ha/switch/a/config"
        )
    assert not outcome.ok
    assert outcome.entity is None
    assert isinstance(outcome.error, DecodeError)
    assert outcome.error.field == "qos"
    assert "ha/switch/a/config" in caplog.text


def test_decode_message_accepts_paho_message():
    msg = MQTTMessage(topic=b"homeassistant/sensor/t/config")
    msg.payload = b'{"state_topic": "t/state"}'
    outcome = decode_message("sensor", msg)
    assert outcome.ok
    assert outcome.topic == "homeassistant/sensor/t/config"
    assert outcome.entity.state_topic == "t/state"


def test_one_bad_message_does_not_affect_the_batch():
    outcomes = decode_messages(
        "sensor",
        [
            b'{"state_topic": "a/state"}',
            b"{broken",
            b'{"state_topic": "c/state", "device_class": "temperature"}',
        ],
    )
    assert [o.ok for o in outcomes] == [True, False, True]
    assert outcomes[2].entity.state_topic == "c/state"


def test_sensor_round_trip_through_discovery(temp_sensor):
    message = build_discovery_message(temp_sensor)
    outcome = decode_message("sensor", message.payload)
    assert outcome.entity == temp_sensor
    assert outcome.entity.validate() == ()


def test_deeply_nested_payload_is_a_decode_error_not_a_crash():
    nested = b'{"state_topic": "a", "x": ' + b"[" * 200000 + b"]" * 200000 + b"}"
    outcomes = decode_messages("sensor", [nested, b'{"state_topic": "b/state"}'])
    assert not outcomes[0].ok
    assert isinstance(outcomes[0].error, DecodeError)
    assert outcomes[1].entity.state_topic == "b/state"


def test_message_topic_that_is_not_utf8_is_reported():
    msg = MQTTMessage(topic=b"homeassistant/sensor/\xff/config")
    msg.payload = b'{"state_topic": "t/state"}'
    outcome = decode_message("sensor", msg)
    assert not outcome.ok
    assert outcome.topic is None
    assert "UTF-8" in str(outcome.error)


def test_unknown_component_is_reported_through_outcome(caplog):
    with caplog.at_level(logging.WARNING, logger="hass_discovery.discovery"):
        outcome = decode_message("vacuum", b'{"state_topic": "t/state"}')
    assert not outcome.ok
    assert "unsupported component" in str(outcome.error)
    assert "rejected vacuum" in caplog.text


def test_topic_with_lone_surrogate_fails_validation_before_encoding():
    switch = Switch(entity=Entity(unique_id="lamp"), command_topic="lamp/\ud800")
    (inv,) = switch.validate()
    assert inv.field == "command_topic"
    assert inv.kind is EntityInvalidity.TOPIC
    with pytest.raises(ValidationError):
        build_discovery_message(switch)
