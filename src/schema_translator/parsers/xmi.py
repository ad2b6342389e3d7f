"""
Parser creating a Schema from UML class diagrams stored as XMI.

Every class becomes a table and every attribute a field, using the
attribute's datatype name as the field's data type.

Options (``translator.options``):
    visibility: public|protected|private. Classes and attributes are checked
        against it; when unset, everything is translated.
"""
from typing import Any

from ..extractor import ClassModelExtractor
from ..models.schema import Schema
from ..plugins import register_parser
from ..xmi import XMIReader


@register_parser("xmi", "xml-xmi")
def parse(translator: Any, data: str) -> Schema:
    extraction = translator.config.extraction
    visibility = translator.options.get("visibility", extraction.visibility)
    translator.logger.debug("Parsing XMI.", visibility=visibility)

    reader = XMIReader(data)
    extractor = ClassModelExtractor(
        visibility=visibility,
        primary_key_stereotype=extraction.primary_key_stereotype,
        logger=translator.logger,
    )
    return extractor.extract(reader.get_classes(), translator.schema)
