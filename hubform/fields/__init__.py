"""Form schema models and field-value normalization."""

from hubform.fields.collect import collect_values
from hubform.fields.models import (
    FieldGroup,
    FieldOption,
    FieldValue,
    FormDefinition,
    FormField,
    LabeledOption,
    LabeledOptionValue,
    NormalizedField,
    ScalarValue,
    SequenceValue,
)
from hubform.fields.normalizer import (
    SEQUENCE_SEPARATOR,
    coerce_value,
    normalize,
    normalize_value,
)

__all__ = [
    # Schema
    "FieldGroup",
    "FieldOption",
    "FormDefinition",
    "FormField",
    # Values
    "FieldValue",
    "LabeledOption",
    "LabeledOptionValue",
    "NormalizedField",
    "ScalarValue",
    "SequenceValue",
    # Normalization
    "SEQUENCE_SEPARATOR",
    "coerce_value",
    "collect_values",
    "normalize",
    "normalize_value",
]
