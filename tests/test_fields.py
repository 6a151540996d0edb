"""Tests for schema models and HTML form value collection."""

import pytest

from hubform.client.fetcher import parse_form_definition
from hubform.fields import (
    FormDefinition,
    LabeledOption,
    LabeledOptionValue,
    ScalarValue,
    SequenceValue,
    collect_values,
    normalize,
)


@pytest.fixture
def definition(schema_payload: dict) -> FormDefinition:
    """The sample form definition."""
    return parse_form_definition(schema_payload)


class TestFormDefinition:
    """Tests for FormDefinition and the schema models."""

    def test_iter_fields_in_schema_order(self, definition: FormDefinition) -> None:
        names = [field.name for field in definition.iter_fields()]

        assert names == ["firstname", "email", "interests", "country"]

    def test_get_field(self, definition: FormDefinition) -> None:
        field = definition.get_field("country")

        assert field is not None
        assert field.field_type == "dropdown"
        assert field.is_option
        assert not field.is_multi_value
        assert field.option_label("FR") == "France"
        assert field.option_label("XX") is None

    def test_get_missing_field(self, definition: FormDefinition) -> None:
        assert definition.get_field("nope") is None

    def test_payload_passes_groups_through(
        self, definition: FormDefinition, schema_payload: dict
    ) -> None:
        """Test that unknown schema keys survive the round trip."""
        payload = definition.to_payload()

        assert payload["submitButtonText"] == "Send message"
        assert payload["fieldGroups"] == schema_payload["fieldGroups"]

    def test_empty_definition_payload(self) -> None:
        assert FormDefinition().to_payload() == {"fieldGroups": [], "submitButtonText": ""}


class TestCollectValues:
    """Tests for collect_values()."""

    def test_multi_value_field_is_always_sequence(self, definition: FormDefinition) -> None:
        """Test that one checked box still yields a sequence."""
        values = collect_values([("interests", "product")], definition)

        assert values["interests"] == SequenceValue(items=["product"])

    def test_multi_value_field_collects_all(self, definition: FormDefinition) -> None:
        values = collect_values(
            [("interests", "product"), ("interests", "pricing")],
            definition,
        )

        assert values["interests"] == SequenceValue(items=["product", "pricing"])

    def test_option_field_resolves_label(self, definition: FormDefinition) -> None:
        values = collect_values([("country", "CA")], definition)

        assert values["country"] == LabeledOptionValue(
            option=LabeledOption(label="Canada", value="CA")
        )

    def test_option_field_not_selected(self, definition: FormDefinition) -> None:
        values = collect_values([("country", "")], definition)

        assert normalize(values)[0].value == ""

    def test_text_and_unknown_fields_are_scalars(self, definition: FormDefinition) -> None:
        values = collect_values(
            [("firstname", "Ada"), ("utm_source", "newsletter")],
            definition,
        )

        assert values["firstname"] == ScalarValue(value="Ada")
        assert values["utm_source"] == ScalarValue(value="newsletter")

    def test_repeated_unknown_field_keeps_every_value(self) -> None:
        """Test that repeated keys are never collapsed, even without a schema."""
        values = collect_values(
            [("interests", "product"), ("interests", "pricing"), ("country", "FR")],
            FormDefinition(),
        )

        assert values["interests"] == SequenceValue(items=["product", "pricing"])
        assert values["country"] == ScalarValue(value="FR")

    def test_keeps_submission_order(self, definition: FormDefinition) -> None:
        values = collect_values(
            [("email", "ada@example.com"), ("interests", "pricing"), ("firstname", "Ada")],
            definition,
        )

        assert list(values) == ["email", "interests", "firstname"]

    def test_normalizes_end_to_end(self, definition: FormDefinition) -> None:
        """Test collected values normalize to the submission shape."""
        values = collect_values(
            [
                ("firstname", "Ada"),
                ("interests", "product"),
                ("interests", "pricing"),
                ("country", "FR"),
            ],
            definition,
        )

        assert [f.model_dump() for f in normalize(values)] == [
            {"name": "firstname", "value": "Ada"},
            {"name": "interests", "value": "product; pricing"},
            {"name": "country", "value": "France"},
        ]
