"""
Record models produced by the decoder.

A Record is one decoded FIT message. Its fields keep the encoded base
type so the table engine can decide how to widen each value.
"""

from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fittables.enums import BaseType


class RecordField(BaseModel):
    """
    A single named measurement within a record.

    Attributes:
        name: Field name from the profile (e.g. "heart_rate")
        units: Unit string, empty when the profile has none
        base_type: Encoded value kind. Unknown kinds are kept as raw strings.
        values: One or more scalar values. None marks an invalid value.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Field name")
    units: str = Field(default="", description="Unit string")
    base_type: Union[BaseType, str] = Field(..., description="Encoded value kind")
    values: tuple[Any, ...] = Field(default=(), description="Scalar values")

    @field_validator("base_type", mode="before")
    @classmethod
    def _coerce_base_type(cls, value: Any) -> Any:
        """Map known kind names onto BaseType, leave the rest untouched."""
        if isinstance(value, BaseType):
            return value
        try:
            return BaseType(value)
        except ValueError:
            return str(value)

    @field_validator("units", mode="before")
    @classmethod
    def _none_units(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def num_values(self) -> int:
        """Multiplicity of this field."""
        return len(self.values)

    @property
    def is_multi_valued(self) -> bool:
        return len(self.values) > 1


class Record(BaseModel):
    """
    One decoded message.

    Attributes:
        type_id: Global message number (e.g. 20 for "record")
        type_name: Friendly message name (e.g. "record", "lap")
        fields: Ordered fields present in this message
    """

    model_config = ConfigDict(frozen=True)

    type_id: int = Field(..., description="Global message number")
    type_name: str = Field(..., description="Friendly message name")
    fields: tuple[RecordField, ...] = Field(default=(), description="Ordered fields")
