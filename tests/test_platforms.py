"""Tests for the platform entity types and their validation rules."""

import pytest

from hass_discovery.availability import Availability
from hass_discovery.device import Device
from hass_discovery.entity import Entity
from hass_discovery.enums import (
    BinarySensorDeviceClass,
    DeviceClass,
    StateClass,
    SwitchDeviceClass,
)
from hass_discovery.errors import ShapeError
from hass_discovery.platforms import (
    PLATFORMS,
    BinarySensor,
    Button,
    Sensor,
    Switch,
    platform_for,
)
from hass_discovery.primitives import PayloadInvalidity, TopicInvalidity
from hass_discovery.validation import EntityInvalidity


@pytest.fixture
def lamp_entity():
    return Entity(
        name="Lamp",
        unique_id="living_room_lamp",
        device=Device(identifiers=["living_room"], name="Living Room"),
        availability=[Availability(topic="living_room/availability")],
    )


def test_registry_maps_components():
    assert PLATFORMS == {
        "binary_sensor": BinarySensor,
        "button": Button,
        "sensor": Sensor,
        "switch": Switch,
    }
    assert platform_for("switch") is Switch
    with pytest.raises(KeyError):
        platform_for("vacuum")


def test_sensor_requires_state_topic():
    with pytest.raises(TypeError):
        Sensor()


def test_minimal_sensor_is_valid():
    sensor = Sensor(state_topic="home/sensor/temp/state")
    assert sensor.validate() == ()
    assert sensor.is_valid()
    assert sensor.component == "sensor"


def test_sensor_validates_shared_attributes_first():
    sensor = Sensor(
        entity=Entity(name="", availability_topic="a/av", availability=[{"topic": "b/av"}]),
        state_topic="",
        value_template="",
    )
    assert [(i.field, i.kind) for i in sensor.validate()] == [
        ("availability_topic", EntityInvalidity.AVAILABILITY_CONFLICT),
        ("name", EntityInvalidity.NAME),
        ("state_topic", EntityInvalidity.TOPIC),
        ("value_template", EntityInvalidity.TEMPLATE),
    ]


def test_sensor_last_reset_needs_total_state_class():
    bad = Sensor(
        state_topic="meter/energy",
        state_class=StateClass.MEASUREMENT,
        last_reset_value_template="{{ value_json.last_reset }}",
    )
    (inv,) = bad.validate()
    assert inv.kind is EntityInvalidity.LAST_RESET_WITHOUT_TOTAL
    good = Sensor(
        state_topic="meter/energy",
        state_class="total",
        device_class="energy",
        last_reset_value_template="{{ value_json.last_reset }}",
    )
    assert good.validate() == ()
    assert good.device_class is DeviceClass.ENERGY


def test_sensor_expire_after_must_be_positive():
    assert Sensor(state_topic="a/b", expire_after=30).expire_after == 30
    with pytest.raises(ShapeError):
        Sensor(state_topic="a/b", expire_after=0)


def test_sensor_topics():
    sensor = Sensor(
        entity=Entity(
            json_attributes_topic="home/temp/state",
            availability_topic="home/availability",
        ),
        state_topic="home/temp/state",
    )
    assert sensor.subscribe_topics() == ["home/temp/state", "home/availability"]
    assert sensor.publish_topics() == []
    assert sensor.handles("home/temp/state")
    assert not sensor.handles("home/other")


def test_valid_switch(lamp_entity):
    switch = Switch(
        entity=lamp_entity,
        command_topic="living_room/lamp/set",
        state_topic="living_room/lamp/state",
        payload_on="ON",
        payload_off="OFF",
        device_class=SwitchDeviceClass.OUTLET,
    )
    assert switch.validate() == ()
    assert switch.unique_id == "living_room_lamp"
    assert switch.publish_topics() == ["living_room/lamp/set"]
    assert switch.subscribe_topics() == [
        "living_room/lamp/state",
        "living_room/availability",
    ]


def test_optimistic_switch_with_command_topic_only():
    switch = Switch(command_topic="garden/pump/set", optimistic=True)
    assert switch.validate() == ()
    assert switch.state_topics() == []


def test_switch_reports_command_topic_and_state_on_together():
    switch = Switch(command_topic="", state_on="")
    result = switch.validate()
    assert [(i.field, i.kind) for i in result] == [
        ("command_topic", EntityInvalidity.TOPIC),
        ("state_on", EntityInvalidity.PAYLOAD),
    ]
    assert result[0].causes == (TopicInvalidity.EMPTY,)
    assert result[1].causes == (PayloadInvalidity.EMPTY,)


def test_switch_checks_every_field_in_order():
    switch = Switch(
        entity=Entity(device=Device(name="nothing to identify")),
        command_topic="x/+/set",
        payload_on="",
        payload_off="",
        state_topic="#",
        state_on="",
        state_off="",
        value_template="",
    )
    assert [i.field for i in switch.validate()] == [
        "device",
        "command_topic",
        "payload_on",
        "payload_off",
        "state_topic",
        "state_on",
        "state_off",
        "value_template",
    ]


def test_binary_sensor():
    sensor = BinarySensor(
        state_topic="hall/motion",
        device_class="motion",
        payload_on="1",
        payload_off="",
        off_delay=30,
    )
    assert sensor.device_class is BinarySensorDeviceClass.MOTION
    (inv,) = sensor.validate()
    assert (inv.field, inv.kind) == ("payload_off", EntityInvalidity.PAYLOAD)
    assert sensor.subscribe_topics() == ["hall/motion"]


def test_button():
    button = Button(command_topic="device/cmd/restart", device_class="restart")
    assert button.validate() == ()
    assert button.publish_topics() == ["device/cmd/restart"]
    assert button.subscribe_topics() == []
    assert Button(command_topic="").validate()[0].kind is EntityInvalidity.TOPIC
