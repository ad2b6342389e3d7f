"""
Turns a UML class model into relational schema entities.

Every admitted class becomes a table and every admitted attribute a field.
An attribute whose stereotype is the primary key stereotype ("PK") becomes
the table's primary key.
"""
from collections.abc import Mapping
from typing import Any, Iterable, Optional, Union

import structlog

from .exceptions import OptionError
from .models.common import Visibility
from .models.schema import Schema
from .models.uml import UMLAttribute, UMLClass

VisibilityLike = Union[Visibility, str, None]


def _visibility(value: VisibilityLike) -> Optional[Visibility]:
    if value is None or value == "":
        return None
    try:
        return Visibility(value)
    except ValueError as e:
        raise OptionError(f"Unknown visibility {value!r}; expected one of public, protected, private") from e


def is_visible(node: Any, required: VisibilityLike) -> bool:
    """Check a class or attribute (or a bare visibility value) against a filter.

    Everything passes when no filter is set. Otherwise the node passes when
    the filter's rank is at least the node's rank, with
    public(1) < protected(2) < private(3). Nodes without a visibility are
    treated as public.
    """
    required_vis = _visibility(required)
    if required_vis is None:
        return True
    if isinstance(node, Mapping):
        node = node.get("visibility")
    node_vis = _visibility(getattr(node, "visibility", node)) or Visibility.PUBLIC
    return required_vis.rank >= node_vis.rank


class ClassModelExtractor:
    """Populates a Schema from UML classes, applying the visibility filter."""

    def __init__(
        self,
        visibility: VisibilityLike = None,
        primary_key_stereotype: str = "PK",
        logger: Optional[structlog.BoundLogger] = None,
    ):
        self.visibility = _visibility(visibility)
        self.primary_key_stereotype = primary_key_stereotype
        self.logger = (logger or structlog.get_logger(__name__)).bind(component="ClassModelExtractor")

    def admits(self, node: Union[UMLClass, UMLAttribute]) -> bool:
        return bool(node.name) and is_visible(node, self.visibility)

    def extract(self, classes: Iterable[UMLClass], schema: Schema) -> Schema:
        """Add a table per admitted class to `schema` and return it.

        The first SchemaError (duplicate table or field name) stops the pass;
        whatever was already added stays in the schema.
        """
        log = self.logger.bind(visibility=self.visibility.value if self.visibility else None)
        admitted = [c for c in classes if self.admits(c)]
        log.debug("Found classes.", count=len(admitted), names=[c.name for c in admitted])

        for uml_class in admitted:
            log.debug("Adding class.", class_name=uml_class.name)
            table = schema.add_table(uml_class.name)

            for attr in uml_class.attributes:
                if not self.admits(attr):
                    continue

                is_pk = attr.stereotype == self.primary_key_stereotype
                field_data: dict[str, Any] = {
                    "name": attr.name,
                    "data_type": attr.datatype,
                    "is_primary_key": is_pk,
                }
                if attr.has_initial_value:
                    field_data["default_value"] = attr.initial_value

                log.debug("Adding field.", table=table.name, **field_data)
                field = table.add_field(**field_data)
                if is_pk:
                    table.primary_key(field.name)

        return schema
