"""
Canonical relational schema built by parsers and rendered by producers.
"""
from typing import Any, Optional

import structlog
from pydantic import Field as PydanticField, PrivateAttr

from ..exceptions import SchemaError
from .common import BasePydanticModel

logger = structlog.get_logger(__name__)

_UNSET: Any = object()


class Field(BasePydanticModel):
    """A column of a table."""
    name: str
    data_type: Optional[str] = None
    is_primary_key: bool = False
    default_value: Optional[str] = None

    @property
    def has_default(self) -> bool:
        """Whether a default value was recorded, as opposed to merely defaulting to None."""
        return "default_value" in self.model_fields_set


class Table(BasePydanticModel):
    """A table: ordered fields plus zero or one primary key."""
    name: str
    fields: list[Field] = PydanticField(default_factory=list)
    primary_key_field: Optional[str] = None

    _schema: Optional["Schema"] = PrivateAttr(default=None)

    def get_field(self, name: str) -> Optional[Field]:
        for field in self.fields:
            if field.name == name:
                return field
        return None

    def add_field(
        self,
        name: str,
        data_type: Optional[str] = None,
        is_primary_key: bool = False,
        default_value: Any = _UNSET,
    ) -> Field:
        """Append a field. A default value entry is only created when one is passed."""
        if not name:
            raise self._fail(SchemaError(f"No field name for table '{self.name}'", table=self.name))
        if self.get_field(name) is not None:
            raise self._fail(SchemaError(f"Can't create field: '{name}' exists in table '{self.name}'", table=self.name, field=name))

        field_data: dict[str, Any] = {"name": name, "data_type": data_type, "is_primary_key": is_primary_key}
        if default_value is not _UNSET:
            field_data["default_value"] = default_value
        field = Field(**field_data)
        self.fields.append(field)
        return field

    def primary_key(self, field_name: str) -> Field:
        """Register `field_name` as this table's primary key.

        A later call replaces the registration. Flags on other fields are left as they are.
        """
        field = self.get_field(field_name)
        if field is None:
            raise self._fail(SchemaError(f"Can't set primary key: no field '{field_name}' in table '{self.name}'", table=self.name, field=field_name))

        if self.primary_key_field and self.primary_key_field != field_name:
            logger.warning(
                "Replacing primary key of table.",
                table=self.name,
                previous=self.primary_key_field,
                current=field_name,
            )
        field.is_primary_key = True
        self.primary_key_field = field_name
        return field

    def _fail(self, exc: SchemaError) -> SchemaError:
        if self._schema is not None:
            return self._schema._fail(exc)
        return exc


class Schema(BasePydanticModel):
    """Mutable collection of uniquely named tables."""
    name: str = ""
    tables: list[Table] = PydanticField(default_factory=list)

    _error: str = PrivateAttr(default="")

    def get_table(self, name: str) -> Optional[Table]:
        for table in self.tables:
            if table.name == name:
                return table
        return None

    def add_table(self, name: str) -> Table:
        if not name:
            raise self._fail(SchemaError("No table name"))
        if self.get_table(name) is not None:
            raise self._fail(SchemaError(f"Can't create table: '{name}' exists", table=name))
        table = Table(name=name)
        table._schema = self
        self.tables.append(table)
        return table

    def error(self) -> str:
        """Message of the last rejected operation, empty when none."""
        return self._error

    def _fail(self, exc: SchemaError) -> SchemaError:
        self._error = str(exc)
        return exc
