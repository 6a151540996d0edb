"""Field normalization: raw submitted values -> flat name/value pairs.

Raw values arrive in three shapes: plain strings, lists of strings
(multi-select) and labeled options ({label, value}). ``coerce_value``
turns loosely typed input into the FieldValue tagged union, checking
sequences before mappings before scalars. ``normalize`` then flattens each
value into the string the submission endpoint expects.

The normalizer is purely mechanical: one output entry per input key,
in input order. Nothing is dropped, merged or validated.
"""

from collections.abc import Mapping
from typing import Any

from hubform.fields.models import (
    FieldValue,
    LabeledOption,
    LabeledOptionValue,
    NormalizedField,
    ScalarValue,
    SequenceValue,
    scalar_text,
)

SEQUENCE_SEPARATOR = "; "

_FIELD_VALUE_TYPES = (ScalarValue, SequenceValue, LabeledOptionValue)


def coerce_value(raw: Any) -> FieldValue:
    """Build a FieldValue from a loosely typed raw value.

    Precedence:
        1. list/tuple -> SequenceValue
        2. LabeledOption or mapping -> LabeledOptionValue
        3. anything else -> ScalarValue

    Args:
        raw: A raw value as collected from a form (or an existing FieldValue).

    Returns:
        The tagged FieldValue.
    """
    if isinstance(raw, _FIELD_VALUE_TYPES):
        return raw

    if isinstance(raw, (list, tuple)):
        return SequenceValue(items=["" if item is None else str(item) for item in raw])

    if isinstance(raw, LabeledOption):
        return LabeledOptionValue(option=raw)

    if isinstance(raw, Mapping):
        label = raw.get("label")
        value = raw.get("value")
        return LabeledOptionValue(
            option=LabeledOption(
                label=None if label is None else str(label),
                value=None if value is None else str(value),
            )
        )

    return ScalarValue(value=scalar_text(raw))


def normalize_value(value: FieldValue) -> str:
    """Flatten a single FieldValue to its submission string."""
    if isinstance(value, SequenceValue):
        return SEQUENCE_SEPARATOR.join(value.items)
    if isinstance(value, LabeledOptionValue):
        return value.option.label or ""
    if isinstance(value, ScalarValue):
        return value.value or ""
    raise TypeError(f"Unsupported field value: {type(value).__name__}")


def normalize(raw: Mapping[str, Any]) -> list[NormalizedField]:
    """Flatten raw field values into an ordered list of name/value pairs.

    Args:
        raw: Mapping of field name -> raw value (string, list of strings,
            labeled option, or FieldValue).

    Returns:
        One NormalizedField per key of ``raw``, in iteration order.
    """
    return [
        NormalizedField(name=name, value=normalize_value(coerce_value(value)))
        for name, value in raw.items()
    ]
