"""Tests for the accumulating validation context."""

import pytest

from hass_discovery.errors import ValidationError
from hass_discovery.primitives import Payload, Topic, TopicInvalidity
from hass_discovery.validation import (
    EntityInvalidity,
    Invalidity,
    Validatable,
    ValidationContext,
)


def test_empty_context_is_valid():
    ctx = ValidationContext()
    assert ctx.is_valid()
    assert ctx.into_result() == ()


def test_context_keeps_going_after_failures():
    result = (
        ValidationContext()
        .validate_with("a", Topic.unchecked(""), EntityInvalidity.TOPIC)
        .validate_with("b", Topic("ok/topic"), EntityInvalidity.TOPIC)
        .validate_with("c", Payload.unchecked(""), EntityInvalidity.PAYLOAD)
        .into_result()
    )
    assert [(i.field, i.kind) for i in result] == [
        ("a", EntityInvalidity.TOPIC),
        ("c", EntityInvalidity.PAYLOAD),
    ]
    assert result[0].causes == (TopicInvalidity.EMPTY,)


def test_one_record_per_field_with_all_causes():
    result = (
        ValidationContext()
        .validate_with("t", Topic.unchecked("a/+/\x00"), EntityInvalidity.TOPIC)
        .into_result()
    )
    assert len(result) == 1
    assert result[0].causes == (TopicInvalidity.WILDCARD, TopicInvalidity.NULL_CHARACTER)


def test_optional_absent_value_is_valid():
    ctx = ValidationContext().validate_with_opt("t", None, EntityInvalidity.TOPIC)
    assert ctx.is_valid()


def test_invalidate_if_and_merge_preserve_order():
    nested = (Invalidity(EntityInvalidity.NAME, "name"),)
    result = (
        ValidationContext()
        .invalidate_if(False, EntityInvalidity.AVAILABILITY_CONFLICT, "x")
        .merge(nested)
        .invalidate_if(True, EntityInvalidity.AVAILABILITY_CONFLICT, "y")
        .into_result()
    )
    assert result == (
        Invalidity(EntityInvalidity.NAME, "name"),
        Invalidity(EntityInvalidity.AVAILABILITY_CONFLICT, "y"),
    )


def test_invalidity_str_is_readable():
    inv = Invalidity(EntityInvalidity.TOPIC, "state_topic", (TopicInvalidity.EMPTY,))
    assert str(inv) == "state_topic: Topic (Empty)"
    assert str(Invalidity(EntityInvalidity.AVAILABILITY_CONFLICT, "availability_topic")) == (
        "availability_topic: AvailabilityConflict"
    )


class _AlwaysBroken(Validatable):
    def validate(self):
        return (
            Invalidity(EntityInvalidity.TOPIC, "a"),
            Invalidity(EntityInvalidity.PAYLOAD, "b"),
        )


def test_ensure_valid_raises_with_every_violation():
    with pytest.raises(ValidationError) as exc:
        _AlwaysBroken().ensure_valid()
    assert len(exc.value.invalidities) == 2
    assert "2 validation error(s)" in str(exc.value)
    assert not _AlwaysBroken().is_valid()
