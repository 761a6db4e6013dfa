"""
hass_discovery - typed Home Assistant MQTT discovery descriptors.

Build entity descriptors (sensors, switches...), validate them in one pass
that reports every problem, and encode them into the compact JSON payloads
Home Assistant reads from its discovery topics. The receive path decodes
such payloads back into the same types.
"""

from importlib.metadata import PackageNotFoundError, version

from .availability import Availability
from .codec import decode, encode, from_dict, to_dict
from .device import Device, DeviceInvalidity
from .entity import Entity
from .enums import (
    AvailabilityMode,
    BinarySensorDeviceClass,
    ButtonDeviceClass,
    DeviceClass,
    EntityCategory,
    QoS,
    StateClass,
    SwitchDeviceClass,
)
from .errors import DecodeError, ShapeError, ValidationError
from .platforms import (
    PLATFORMS,
    BinarySensor,
    Button,
    Platform,
    Sensor,
    Switch,
    platform_for,
)
from .primitives import Icon, Name, Payload, Template, Topic, UniqueId
from .validation import EntityInvalidity, Invalidity, ValidationContext

try:
    __version__ = version("hass-discovery")
except PackageNotFoundError:
    # Package is not installed
    __version__ = "0.0.0-dev"

__all__ = [
    "PLATFORMS",
    "Availability",
    "AvailabilityMode",
    "BinarySensor",
    "BinarySensorDeviceClass",
    "Button",
    "ButtonDeviceClass",
    "DecodeError",
    "Device",
    "DeviceClass",
    "DeviceInvalidity",
    "Entity",
    "EntityCategory",
    "EntityInvalidity",
    "Icon",
    "Invalidity",
    "Name",
    "Payload",
    "Platform",
    "QoS",
    "Sensor",
    "ShapeError",
    "StateClass",
    "Switch",
    "SwitchDeviceClass",
    "Template",
    "Topic",
    "UniqueId",
    "ValidationContext",
    "ValidationError",
    "__version__",
    "decode",
    "encode",
    "from_dict",
    "platform_for",
    "to_dict",
]
