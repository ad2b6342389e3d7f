"""
Tests for reading UML classes out of XMI documents.
"""
import pytest  # type: ignore[import-not-found]

from schema_translator.exceptions import XMIError
from schema_translator.xmi import XMIReader

XMI_10 = """<?xml version="1.0" encoding="UTF-8"?>
<XMI xmi.version="1.0">
  <XMI.content>
    <Model_Management.Model xmi.id="m1">
      <Foundation.Core.ModelElement.name>Library</Foundation.Core.ModelElement.name>
      <Foundation.Core.Namespace.ownedElement>
        <Foundation.Core.DataType xmi.id="dt1">
          <Foundation.Core.ModelElement.name>int</Foundation.Core.ModelElement.name>
        </Foundation.Core.DataType>
        <Foundation.Extension_Mechanisms.Stereotype xmi.id="st1">
          <Foundation.Core.ModelElement.name>PK</Foundation.Core.ModelElement.name>
        </Foundation.Extension_Mechanisms.Stereotype>
        <Foundation.Core.Class xmi.id="c1">
          <Foundation.Core.ModelElement.name>Book</Foundation.Core.ModelElement.name>
          <Foundation.Core.ModelElement.visibility xmi.value="protected"/>
          <Foundation.Core.Classifier.feature>
            <Foundation.Core.Attribute xmi.id="a1">
              <Foundation.Core.ModelElement.name>isbn</Foundation.Core.ModelElement.name>
              <Foundation.Core.ModelElement.visibility xmi.value="private"/>
              <Foundation.Core.ModelElement.stereotype>
                <Foundation.Extension_Mechanisms.Stereotype xmi.idref="st1"/>
              </Foundation.Core.ModelElement.stereotype>
              <Foundation.Core.StructuralFeature.type>
                <Foundation.Core.DataType xmi.idref="dt1"/>
              </Foundation.Core.StructuralFeature.type>
            </Foundation.Core.Attribute>
          </Foundation.Core.Classifier.feature>
        </Foundation.Core.Class>
      </Foundation.Core.Namespace.ownedElement>
    </Model_Management.Model>
  </XMI.content>
</XMI>
"""


def test_reads_xmi_12_classes(shop_xmi: str) -> None:
    classes = XMIReader(shop_xmi).get_classes()

    assert [c.name for c in classes] == ["Customer", "InternalLog"]
    customer, log = classes
    assert customer.visibility == "public"
    assert log.visibility == "private"

    id_attr, name_attr, status_attr = customer.attributes
    assert id_attr.name == "id"
    assert id_attr.datatype == "integer"
    assert id_attr.stereotype == "PK"
    assert not id_attr.has_initial_value

    assert name_attr.stereotype is None
    assert status_attr.visibility == "private"
    assert status_attr.has_initial_value
    assert status_attr.initial_value == "active"


def test_reads_xmi_10_element_properties() -> None:
    classes = XMIReader(XMI_10.encode("utf-8")).get_classes()

    assert len(classes) == 1
    book = classes[0]
    assert book.name == "Book"
    assert book.visibility == "protected"
    assert len(book.attributes) == 1
    isbn = book.attributes[0]
    assert (isbn.name, isbn.datatype, isbn.stereotype, isbn.visibility) == ("isbn", "int", "PK", "private")


def test_class_references_are_not_definitions() -> None:
    xml = """<XMI xmlns:UML="org.omg.xmi.namespace.UML"><XMI.content>
      <UML:Class xmi.id="c1" name="Real"/>
      <UML:Generalization xmi.id="g1">
        <UML:Generalization.parent><UML:Class xmi.idref="c1"/></UML:Generalization.parent>
      </UML:Generalization>
    </XMI.content></XMI>"""
    assert [c.name for c in XMIReader(xml).get_classes()] == ["Real"]


def test_unsupported_visibility_is_dropped() -> None:
    xml = '<XMI xmlns:UML="u"><UML:Class xmi.id="c1" name="Pkg" visibility="package"/></XMI>'
    classes = XMIReader(xml).get_classes()
    assert classes[0].visibility is None
    assert classes[0].attributes == []


def test_unresolved_type_reference_is_none() -> None:
    xml = """<XMI xmlns:UML="u"><UML:Class xmi.id="c1" name="T"><UML:Classifier.feature>
      <UML:Attribute xmi.id="a1" name="x" type="missing"/>
    </UML:Classifier.feature></UML:Class></XMI>"""
    attr = XMIReader(xml).get_classes()[0].attributes[0]
    assert attr.name == "x"
    assert attr.datatype is None


@pytest.mark.parametrize("document", ["", "not xml at all", "<XMI><UML:Class></XMI>"])
def test_malformed_documents_raise(document: str) -> None:
    with pytest.raises(XMIError, match="Invalid XMI document"):
        XMIReader(document)
