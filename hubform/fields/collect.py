"""Collect submitted HTML form data into typed field values.

The renderer knows which field type produced each input, so values are
tagged here instead of being inferred from their runtime shape later:
multi-value fields always become sequences (even with one box checked),
dropdowns and radios become labeled options resolved against the schema.
"""

from collections.abc import Iterable

from hubform.fields.models import (
    FieldValue,
    FormDefinition,
    LabeledOption,
    LabeledOptionValue,
    ScalarValue,
    SequenceValue,
)


def collect_values(
    items: Iterable[tuple[str, str]],
    definition: FormDefinition,
) -> dict[str, FieldValue]:
    """Group submitted (name, value) pairs into a FieldValue per field.

    Keys keep the order in which they were first submitted. Fields that
    are not part of the schema are kept as scalars, or as sequences when
    the key was submitted more than once.

    Args:
        items: Submitted form pairs, e.g. ``FormData.multi_items()``.
        definition: The form definition the page was rendered from.

    Returns:
        Ordered mapping of field name -> FieldValue.
    """
    grouped: dict[str, list[str]] = {}
    for name, value in items:
        grouped.setdefault(name, []).append(value)

    collected: dict[str, FieldValue] = {}
    for name, values in grouped.items():
        field = definition.get_field(name)

        if field is not None and field.is_multi_value:
            collected[name] = SequenceValue(items=[v for v in values if v != ""])
        elif field is not None and field.is_option:
            selected = values[-1]
            label = field.option_label(selected) if selected else None
            collected[name] = LabeledOptionValue(
                option=LabeledOption(label=label, value=selected or None)
            )
        elif field is None and len(values) > 1:
            collected[name] = SequenceValue(items=[v for v in values if v != ""])
        else:
            collected[name] = ScalarValue(value=values[-1])

    return collected
