"""
Reader for UML class models stored as XMI 1.x.

Built against XMI 1.2 as written by Poseidon UML (``UML:`` namespaced
elements with XML attributes) and the element-per-property style of XMI 1.0
(``Foundation.Core.Class`` with ``Foundation.Core.ModelElement.name``
children). Only classes and their attributes are read.
"""
import xml.etree.ElementTree as ET
from typing import Dict, Iterator, List, Optional, Union

import structlog

from .exceptions import XMIError
from .models.common import Visibility
from .models.uml import UMLAttribute, UMLClass

logger = structlog.get_logger(__name__)

# XMI 1.0 qualifies element names with the UML package path.
_PACKAGE_PREFIXES = (
    "Foundation.Core.",
    "Foundation.Data_Types.",
    "Foundation.Extension_Mechanisms.",
    "Model_Management.",
    "Behavioral_Elements.",
)

_VISIBILITIES = {v.value for v in Visibility}


def _short(tag: str) -> str:
    """Tag name without XML namespace, ``UML:`` prefix or XMI 1.0 package path."""
    name = tag.rsplit("}", 1)[-1].rsplit(":", 1)[-1]
    for prefix in _PACKAGE_PREFIXES:
        if name.startswith(prefix):
            return name[len(prefix):]
    return name


class XMIReader:
    """Parses an XMI document and returns its classes as UMLClass nodes."""

    def __init__(self, xml: Union[str, bytes]):
        try:
            self.root = ET.fromstring(xml)
        except ET.ParseError as e:
            raise XMIError(f"Invalid XMI document: {e}") from e

        self._by_id: Dict[str, ET.Element] = {
            el.get("xmi.id"): el for el in self.root.iter() if el.get("xmi.id")
        }

    # -------- Element helpers ----------
    def _definitions(self, kind: str) -> Iterator[ET.Element]:
        """Defining elements (not references) of a given kind, in document order."""
        for el in self.root.iter():
            if _short(el.tag) == kind and el.get("xmi.idref") is None:
                yield el

    def _property(self, el: ET.Element, name: str) -> Optional[str]:
        """A model property given either as an XML attribute or as a ``<X.name>`` child."""
        value = el.get(name)
        if value is not None:
            return value
        for child in el:
            if _short(child.tag).endswith("." + name):
                if child.get("xmi.value") is not None:
                    return child.get("xmi.value")
                if child.text and child.text.strip():
                    return child.text.strip()
        return None

    def _reference_name(self, el: ET.Element, name: str) -> Optional[str]:
        """Name of the element referenced by property `name` (``type``, ``stereotype``)."""
        ref = el.get(name)
        if ref is not None:
            target = self._by_id.get(ref.split()[0]) if ref.strip() else None
            return self._property(target, "name") if target is not None else None

        for child in el:
            if not _short(child.tag).endswith("." + name):
                continue
            for target in child:
                idref = target.get("xmi.idref")
                if idref is not None:
                    target = self._by_id.get(idref)
                if target is not None:
                    return self._property(target, "name")
        return None

    def _visibility(self, el: ET.Element) -> Optional[Visibility]:
        value = self._property(el, "visibility")
        if value in _VISIBILITIES:
            return Visibility(value)
        if value is not None:
            logger.debug("Ignoring unsupported visibility.", visibility=value, element=self._property(el, "name"))
        return None

    def _initial_value(self, el: ET.Element) -> Optional[str]:
        for child in el:
            if not _short(child.tag).endswith(".initialValue"):
                continue
            for expression in child.iter():
                if _short(expression.tag) == "Expression":
                    body = self._property(expression, "body")
                    if body is not None:
                        return body
        return None

    # -------- Model ----------
    def _read_attribute(self, el: ET.Element) -> UMLAttribute:
        data = {
            "name": self._property(el, "name") or "",
            "datatype": self._reference_name(el, "type"),
            "stereotype": self._reference_name(el, "stereotype"),
            "visibility": self._visibility(el),
        }
        initial_value = self._initial_value(el)
        if initial_value is not None:
            data["initial_value"] = initial_value
        return UMLAttribute(**data)

    def _read_class(self, el: ET.Element) -> UMLClass:
        attributes: List[UMLAttribute] = []
        for child in el:
            if _short(child.tag) != "Classifier.feature":
                continue
            for feature in child:
                if _short(feature.tag) == "Attribute":
                    attributes.append(self._read_attribute(feature))

        return UMLClass(
            name=self._property(el, "name") or "",
            visibility=self._visibility(el),
            stereotype=self._reference_name(el, "stereotype"),
            attributes=attributes,
        )

    def get_classes(self) -> List[UMLClass]:
        classes = [self._read_class(el) for el in self._definitions("Class")]
        logger.debug("Read classes from XMI.", count=len(classes))
        return classes
