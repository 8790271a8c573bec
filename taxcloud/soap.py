"""
SOAP envelope helpers

Builds TaxCloud SOAP 1.1 envelopes with xml.etree.ElementTree and provides
namespace-agnostic lookups for decoding the responses.
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Tuple

from .models import TaxCloudOperation

SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"
TAXCLOUD_NS = "http://taxcloud.net"

ET.register_namespace("soapenv", SOAP_ENV_NS)
ET.register_namespace("tax", TAXCLOUD_NS)

CONTENT_TYPE = "text/xml; charset=utf-8"


@dataclass(frozen=True)
class SoapRequest:
    """Serialized request ready for the transport"""
    operation: TaxCloudOperation
    body: bytes
    headers: Dict[str, str] = field(default_factory=dict)


def soap_action(operation: TaxCloudOperation) -> str:
    """SOAPAction header value, quoted as the service expects."""
    return f'"{TAXCLOUD_NS}/{operation.value}"'


def tax(tag: str) -> str:
    """Qualified name in the TaxCloud namespace."""
    return f"{{{TAXCLOUD_NS}}}{tag}"


def new_envelope(operation: TaxCloudOperation) -> Tuple[ET.Element, ET.Element]:
    """
    Create an envelope with an empty header and the operation element.

    Returns:
        (envelope, operation element) - children are appended to the latter
    """
    envelope = ET.Element(f"{{{SOAP_ENV_NS}}}Envelope")
    ET.SubElement(envelope, f"{{{SOAP_ENV_NS}}}Header")
    body = ET.SubElement(envelope, f"{{{SOAP_ENV_NS}}}Body")
    op_element = ET.SubElement(body, tax(operation.value))
    return envelope, op_element


def add_field(parent: ET.Element, tag: str, value: Any = None) -> ET.Element:
    """Append <tax:tag>value</tax:tag>; None produces an empty element."""
    element = ET.SubElement(parent, tax(tag))
    if value is not None:
        element.text = str(value)
    return element


def to_request(operation: TaxCloudOperation, envelope: ET.Element) -> SoapRequest:
    body = ET.tostring(envelope, encoding="utf-8", xml_declaration=False)
    return SoapRequest(
        operation=operation,
        body=body,
        headers={
            "Content-Type": CONTENT_TYPE,
            "SOAPAction": soap_action(operation),
        },
    )


# =============================================================================
# Response navigation
# =============================================================================


def local_name(tag: str) -> str:
    """Tag without its {namespace} prefix."""
    return tag.rsplit("}", 1)[-1] if "}" in tag else tag


def children(node: ET.Element, name: str) -> Iterator[ET.Element]:
    """Direct children with the given local name, in document order."""
    return (child for child in node if local_name(child.tag) == name)


def child(node: ET.Element, name: str) -> Optional[ET.Element]:
    return next(children(node, name), None)


def child_text(node: ET.Element, name: str) -> Optional[str]:
    """Stripped text of the first matching child; None when absent or empty."""
    element = child(node, name)
    if element is None or element.text is None:
        return None
    text = element.text.strip()
    return text or None


__all__ = [
    "SOAP_ENV_NS",
    "TAXCLOUD_NS",
    "SoapRequest",
    "soap_action",
    "tax",
    "new_envelope",
    "add_field",
    "to_request",
    "local_name",
    "children",
    "child",
    "child_text",
]
