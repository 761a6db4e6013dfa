"""Platform entity types and the component registry."""

from __future__ import annotations

from .base import Platform
from .binary_sensor import BinarySensor
from .button import Button
from .sensor import Sensor
from .switch import Switch

PLATFORMS: dict[str, type[Platform]] = {
    cls.component: cls for cls in (BinarySensor, Button, Sensor, Switch)
}


def platform_for(component: str) -> type[Platform]:
    """Return the entity class for a Home Assistant component name."""
    try:
        return PLATFORMS[component]
    except KeyError:
        raise KeyError(f"unsupported component: {component!r}") from None


__all__ = [
    "BinarySensor",
    "Button",
    "PLATFORMS",
    "Platform",
    "Sensor",
    "Switch",
    "platform_for",
]
