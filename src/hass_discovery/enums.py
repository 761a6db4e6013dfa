"""Closed enumerations carried in discovery payloads.

The first member of every ``WireEnum`` is its default. A field sitting at the
default is left out of the encoded payload, and an absent field decodes back
to it.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Any, TypeVar

from .errors import ShapeError

_E = TypeVar("_E", bound="WireEnum")


class WireEnum(str, Enum):
    """String enum with a default member and a strict ``parse``."""

    @classmethod
    def default(cls: type[_E]) -> _E:
        return next(iter(cls))

    def is_default(self) -> bool:
        return self is type(self).default()

    @classmethod
    def parse(cls: type[_E], token: Any) -> _E:
        if isinstance(token, cls):
            return token
        if isinstance(token, str):
            try:
                return cls(token)
            except ValueError:
                pass
        raise ShapeError(
            f"Unknown{cls.__name__}",
            token,
            f"{token!r} is not a valid {cls.__name__}",
        )

    def __str__(self) -> str:
        return self.value


class QoS(IntEnum):
    """MQTT delivery guarantee. Ordered by level."""

    AT_MOST_ONCE = 0
    AT_LEAST_ONCE = 1
    EXACTLY_ONCE = 2

    @classmethod
    def default(cls) -> QoS:
        return cls.AT_MOST_ONCE

    def is_default(self) -> bool:
        return self is QoS.AT_MOST_ONCE

    @classmethod
    def parse(cls, level: Any) -> QoS:
        # bool is an int subclass; True must not pass as QoS 1
        if isinstance(level, int) and not isinstance(level, bool):
            try:
                return cls(level)
            except ValueError:
                pass
        raise ShapeError("InvalidQoS", level, f"QoS must be 0, 1 or 2, got {level!r}")


class AvailabilityMode(WireEnum):
    """How several availability topics combine into one state."""

    LATEST = "latest"
    ALL = "all"
    ANY = "any"


class EntityCategory(WireEnum):
    NONE = "none"
    CONFIG = "config"
    DIAGNOSTIC = "diagnostic"


class StateClass(WireEnum):
    NONE = "none"
    MEASUREMENT = "measurement"
    TOTAL = "total"
    TOTAL_INCREASING = "total_increasing"


class DeviceClass(WireEnum):
    """Sensor device classes."""

    NONE = "none"
    APPARENT_POWER = "apparent_power"
    AQI = "aqi"
    ATMOSPHERIC_PRESSURE = "atmospheric_pressure"
    BATTERY = "battery"
    CARBON_DIOXIDE = "carbon_dioxide"
    CARBON_MONOXIDE = "carbon_monoxide"
    CURRENT = "current"
    DATA_RATE = "data_rate"
    DATA_SIZE = "data_size"
    DATE = "date"
    DISTANCE = "distance"
    DURATION = "duration"
    ENERGY = "energy"
    ENERGY_STORAGE = "energy_storage"
    ENUM = "enum"
    FREQUENCY = "frequency"
    GAS = "gas"
    HUMIDITY = "humidity"
    ILLUMINANCE = "illuminance"
    IRRADIANCE = "irradiance"
    MOISTURE = "moisture"
    MONETARY = "monetary"
    NITROGEN_DIOXIDE = "nitrogen_dioxide"
    NITROGEN_MONOXIDE = "nitrogen_monoxide"
    NITROUS_OXIDE = "nitrous_oxide"
    OZONE = "ozone"
    PH = "ph"
    PM1 = "pm1"
    PM10 = "pm10"
    PM25 = "pm25"
    POWER = "power"
    POWER_FACTOR = "power_factor"
    PRECIPITATION = "precipitation"
    PRECIPITATION_INTENSITY = "precipitation_intensity"
    PRESSURE = "pressure"
    REACTIVE_POWER = "reactive_power"
    SIGNAL_STRENGTH = "signal_strength"
    SOUND_PRESSURE = "sound_pressure"
    SPEED = "speed"
    SULPHUR_DIOXIDE = "sulphur_dioxide"
    TEMPERATURE = "temperature"
    TIMESTAMP = "timestamp"
    VOLATILE_ORGANIC_COMPOUNDS = "volatile_organic_compounds"
    VOLATILE_ORGANIC_COMPOUNDS_PARTS = "volatile_organic_compounds_parts"
    VOLTAGE = "voltage"
    VOLUME = "volume"
    VOLUME_FLOW_RATE = "volume_flow_rate"
    VOLUME_STORAGE = "volume_storage"
    WATER = "water"
    WEIGHT = "weight"
    WIND_SPEED = "wind_speed"


class BinarySensorDeviceClass(WireEnum):
    NONE = "none"
    BATTERY = "battery"
    BATTERY_CHARGING = "battery_charging"
    CARBON_MONOXIDE = "carbon_monoxide"
    COLD = "cold"
    CONNECTIVITY = "connectivity"
    DOOR = "door"
    GARAGE_DOOR = "garage_door"
    GAS = "gas"
    HEAT = "heat"
    LIGHT = "light"
    LOCK = "lock"
    MOISTURE = "moisture"
    MOTION = "motion"
    MOVING = "moving"
    OCCUPANCY = "occupancy"
    OPENING = "opening"
    PLUG = "plug"
    POWER = "power"
    PRESENCE = "presence"
    PROBLEM = "problem"
    RUNNING = "running"
    SAFETY = "safety"
    SMOKE = "smoke"
    SOUND = "sound"
    TAMPER = "tamper"
    UPDATE = "update"
    VIBRATION = "vibration"
    WINDOW = "window"


class SwitchDeviceClass(WireEnum):
    NONE = "none"
    OUTLET = "outlet"
    SWITCH = "switch"


class ButtonDeviceClass(WireEnum):
    NONE = "none"
    IDENTIFY = "identify"
    RESTART = "restart"
    UPDATE = "update"


__all__ = [
    "AvailabilityMode",
    "BinarySensorDeviceClass",
    "ButtonDeviceClass",
    "DeviceClass",
    "EntityCategory",
    "QoS",
    "StateClass",
    "SwitchDeviceClass",
    "WireEnum",
]
