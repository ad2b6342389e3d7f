"""Shared fixtures for the Schema Translator test-suite."""
import logging
import sys

import pytest  # type: ignore[import-not-found]
import structlog

from schema_translator.config import Config
from schema_translator.models.uml import UMLAttribute, UMLClass


SHOP_XMI = """<XMI xmi.version="1.2" xmlns:UML="org.omg.xmi.namespace.UML">
  <XMI.content>
    <UML:Model xmi.id="m1" name="Shop">
      <UML:Namespace.ownedElement>
        <UML:Stereotype xmi.id="st_pk" name="PK"/>
        <UML:DataType xmi.id="dt_int" name="integer"/>
        <UML:DataType xmi.id="dt_str" name="string"/>
        <UML:Class xmi.id="c1" name="Customer" visibility="public">
          <UML:Classifier.feature>
            <UML:Attribute xmi.id="a1" name="id" visibility="public">
              <UML:ModelElement.stereotype>
                <UML:Stereotype xmi.idref="st_pk"/>
              </UML:ModelElement.stereotype>
              <UML:StructuralFeature.type>
                <UML:DataType xmi.idref="dt_int"/>
              </UML:StructuralFeature.type>
            </UML:Attribute>
            <UML:Attribute xmi.id="a2" name="name" visibility="public">
              <UML:StructuralFeature.type>
                <UML:DataType xmi.idref="dt_str"/>
              </UML:StructuralFeature.type>
            </UML:Attribute>
            <UML:Attribute xmi.id="a3" name="status" visibility="private">
              <UML:Attribute.initialValue>
                <UML:Expression xmi.id="e1" body="active"/>
              </UML:Attribute.initialValue>
              <UML:StructuralFeature.type>
                <UML:DataType xmi.idref="dt_str"/>
              </UML:StructuralFeature.type>
            </UML:Attribute>
          </UML:Classifier.feature>
        </UML:Class>
        <UML:Class xmi.id="c2" name="InternalLog" visibility="private">
          <UML:Classifier.feature>
            <UML:Attribute xmi.id="a4" name="message" visibility="public">
              <UML:StructuralFeature.type>
                <UML:DataType xmi.idref="dt_str"/>
              </UML:StructuralFeature.type>
            </UML:Attribute>
          </UML:Classifier.feature>
        </UML:Class>
      </UML:Namespace.ownedElement>
    </UML:Model>
  </XMI.content>
</XMI>
"""


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


@pytest.fixture
def app_config() -> Config:
    return Config()


@pytest.fixture
def shop_xmi() -> str:
    return SHOP_XMI


@pytest.fixture
def shop_xmi_file(tmp_path, shop_xmi):
    path = tmp_path / "shop.xmi"
    path.write_text(shop_xmi, encoding="utf-8")
    return path


@pytest.fixture
def customer_class() -> UMLClass:
    return UMLClass(
        name="Customer",
        visibility="public",
        attributes=[
            UMLAttribute(name="name", datatype="string", visibility="public"),
            UMLAttribute(name="id", datatype="integer", stereotype="PK", visibility="public"),
        ],
    )


@pytest.fixture
def order_and_log_classes() -> list[UMLClass]:
    return [
        UMLClass(name="Order", visibility="public", attributes=[
            UMLAttribute(name="number", datatype="integer", stereotype="PK", visibility="public"),
        ]),
        UMLClass(name="InternalLog", visibility="private", attributes=[
            UMLAttribute(name="message", datatype="string", visibility="public"),
        ]),
    ]


@pytest.fixture
def broken_plugin_package(tmp_path, monkeypatch):
    """An importable package `acme_broken` whose `plugin` module raises at import time."""
    package_dir = tmp_path / "acme_broken"
    package_dir.mkdir()
    (package_dir / "__init__.py").write_text("")
    (package_dir / "plugin.py").write_text("raise RuntimeError('plugin init failed')\n")
    monkeypatch.syspath_prepend(str(tmp_path))
    yield "acme_broken.plugin"
    for name in ("acme_broken.plugin", "acme_broken"):
        sys.modules.pop(name, None)
