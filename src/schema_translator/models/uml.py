"""UML class-model nodes as produced by an object-graph reader (e.g. the XMI reader)."""
from typing import Optional

from pydantic import Field

from .common import BasePydanticModel, Visibility


class UMLAttribute(BasePydanticModel):
    name: str = ""
    datatype: Optional[str] = Field(None, description="Name of the attribute's declared UML datatype.")
    stereotype: Optional[str] = None
    initial_value: Optional[str] = Field(None, description="Declared initial value, if any.")
    visibility: Optional[Visibility] = None

    @property
    def has_initial_value(self) -> bool:
        """True only when the source declared an initial value."""
        return "initial_value" in self.model_fields_set


class UMLClass(BasePydanticModel):
    name: str = ""
    visibility: Optional[Visibility] = None
    stereotype: Optional[str] = None
    attributes: list[UMLAttribute] = Field(default_factory=list)
