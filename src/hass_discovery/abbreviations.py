"""Home Assistant discovery key abbreviations.

Home Assistant accepts short keys (``stat_t`` for ``state_topic``) to keep
retained discovery payloads small. Decoding expands them; encoding can emit
them on request.
"""

from __future__ import annotations

from collections.abc import Mapping

# full name -> abbreviation
ENTITY: Mapping[str, str] = {
    "availability": "avty",
    "availability_mode": "avty_mode",
    "availability_template": "avty_tpl",
    "availability_topic": "avty_t",
    "command_topic": "cmd_t",
    "device": "dev",
    "device_class": "dev_cla",
    "enabled_by_default": "en",
    "entity_category": "ent_cat",
    "expire_after": "exp_aft",
    "force_update": "frc_upd",
    "icon": "ic",
    "json_attributes_template": "json_attr_tpl",
    "json_attributes_topic": "json_attr_t",
    "last_reset_value_template": "lrst_val_tpl",
    "object_id": "obj_id",
    "off_delay": "off_dly",
    "optimistic": "opt",
    "payload_available": "pl_avail",
    "payload_not_available": "pl_not_avail",
    "payload_off": "pl_off",
    "payload_on": "pl_on",
    "payload_press": "pl_prs",
    "retain": "ret",
    "state_class": "stat_cla",
    "state_off": "stat_off",
    "state_on": "stat_on",
    "state_topic": "stat_t",
    "unique_id": "uniq_id",
    "unit_of_measurement": "unit_of_meas",
    "value_template": "val_tpl",
}

DEVICE: Mapping[str, str] = {
    "configuration_url": "cu",
    "connections": "cns",
    "hw_version": "hw",
    "identifiers": "ids",
    "manufacturer": "mf",
    "model": "mdl",
    "serial_number": "sn",
    "suggested_area": "sa",
    "sw_version": "sw",
}

AVAILABILITY: Mapping[str, str] = {
    "payload_available": "pl_avail",
    "payload_not_available": "pl_not_avail",
    "topic": "t",
    "value_template": "val_tpl",
}

_BY_TYPE: Mapping[str, Mapping[str, str]] = {
    "Availability": AVAILABILITY,
    "Device": DEVICE,
}


def for_type(cls: type) -> Mapping[str, str]:
    """Abbreviation table used for the mapping that encodes ``cls``."""
    return _BY_TYPE.get(cls.__name__, ENTITY)


def expanded(table: Mapping[str, str]) -> dict[str, str]:
    """Reverse table: abbreviation -> full name."""
    return {short: full for full, short in table.items()}


__all__ = ["AVAILABILITY", "DEVICE", "ENTITY", "expanded", "for_type"]
