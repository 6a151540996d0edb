"""Pydantic models for form schemas and field values.

Schema models (FieldGroup, FormField, FieldOption) mirror the HubSpot
marketing-forms v3 shape loosely: unknown keys are kept so field groups
pass through to the renderer and the proxy unchanged.

Field values are a tagged union over scalar, sequence and labeled-option
shapes, discriminated on ``kind``.
"""

from collections.abc import Iterator
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# HubSpot field types whose submitted value is a list of choices
MULTI_VALUE_FIELD_TYPES = ("multiple_checkboxes", "multi_select")

# HubSpot field types whose submitted value is one labeled choice
OPTION_FIELD_TYPES = ("dropdown", "radio")


def scalar_text(value: Any) -> str:
    """Render a scalar as submission text; falsy input becomes ""."""
    if not value:
        return ""
    if value is True:
        return "true"
    return str(value)


class FieldOption(BaseModel):
    """A selectable option of a choice field."""

    label: str = ""
    value: str = ""

    model_config = ConfigDict(extra="allow")


class FormField(BaseModel):
    """A single field descriptor inside a field group."""

    name: str = ""
    label: str = ""
    field_type: str = Field(default="single_line_text", alias="fieldType")
    required: bool = False
    placeholder: str | None = None
    default_value: str | None = Field(default=None, alias="defaultValue")
    hidden: bool = False
    options: list[FieldOption] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @property
    def is_multi_value(self) -> bool:
        return self.field_type in MULTI_VALUE_FIELD_TYPES

    @property
    def is_option(self) -> bool:
        return self.field_type in OPTION_FIELD_TYPES

    def option_label(self, value: str) -> str | None:
        """Return the label of the option with this value, if any."""
        for option in self.options:
            if option.value == value:
                return option.label
        return None


class FieldGroup(BaseModel):
    """An ordered cluster of fields as defined by the form schema."""

    group_type: str | None = Field(default=None, alias="groupType")
    rich_text: str | None = Field(default=None, alias="richText")
    fields: list[FormField] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class FormDefinition(BaseModel):
    """The renderable part of a form schema."""

    field_groups: list[FieldGroup] = Field(default_factory=list)
    submit_button_text: str = ""

    def iter_fields(self) -> Iterator[FormField]:
        """Yield every field across all groups, in schema order."""
        for group in self.field_groups:
            yield from group.fields

    def get_field(self, name: str) -> FormField | None:
        """Get a field by its name."""
        for field in self.iter_fields():
            if field.name == name:
                return field
        return None

    def to_payload(self) -> dict:
        """Serialize to the proxy response shape."""
        return {
            "fieldGroups": [
                group.model_dump(by_alias=True, exclude_unset=True)
                for group in self.field_groups
            ],
            "submitButtonText": self.submit_button_text,
        }


class LabeledOption(BaseModel):
    """A choice as reported by an option widget: display label plus value."""

    label: str | None = None
    value: str | None = None


class ScalarValue(BaseModel):
    """A plain text value."""

    kind: Literal["scalar"] = "scalar"
    value: str = ""


class SequenceValue(BaseModel):
    """An ordered list of selected values (multi-select)."""

    kind: Literal["sequence"] = "sequence"
    items: list[str] = Field(default_factory=list)


class LabeledOptionValue(BaseModel):
    """A single selected option carrying its label."""

    kind: Literal["labeled_option"] = "labeled_option"
    option: LabeledOption


FieldValue = Annotated[
    ScalarValue | SequenceValue | LabeledOptionValue,
    Field(discriminator="kind"),
]


class NormalizedField(BaseModel):
    """A flat name/value pair ready for submission."""

    name: str
    value: str

    @field_validator("value", mode="before")
    @classmethod
    def _scalar_to_text(cls, value: Any) -> Any:
        if value is None or isinstance(value, (bool, int, float)):
            return scalar_text(value)
        return value
