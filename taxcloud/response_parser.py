"""
TaxCloud Response Parser

Decodes SOAP response documents into plain values. Each operation has one
decode function that walks Envelope/Body/<Op>Response/<Op>Result once and
either returns the success value or raises ServiceResponseError with the
service's own message.
"""

import logging
import xml.etree.ElementTree as ET
from decimal import Decimal, InvalidOperation
from typing import List, Tuple, Union

from .models import Address, LookupResult, ResponseType, TaxCloudOperation
from .protocols import ResponseParseError, ServiceResponseError
from .soap import child, child_text, children

logger = logging.getLogger(__name__)

# The service answers AuthorizedWithCaptured with the "Capture" spelling
RESPONSE_NAMES = {
    TaxCloudOperation.AUTHORIZED_WITH_CAPTURED: (
        "AuthorizedWithCapturedResponse",
        "AuthorizedWithCaptureResponse",
    ),
}


def _response_names(operation: TaxCloudOperation) -> Tuple[str, ...]:
    return RESPONSE_NAMES.get(operation, (f"{operation.value}Response",))


def _decode(body: Union[bytes, str], operation: TaxCloudOperation) -> ET.Element:
    try:
        return ET.fromstring(body)
    except ET.ParseError as e:
        raise ResponseParseError(operation.value, f"invalid XML ({e})") from e


def find_result(body: Union[bytes, str], operation: TaxCloudOperation) -> ET.Element:
    """
    Locate the <Op>Result node of a response envelope.

    Raises:
        ServiceResponseError: the body carries a SOAP Fault
        ResponseParseError: the document does not have the expected shape
    """
    envelope = _decode(body, operation)
    soap_body = child(envelope, "Body")
    if soap_body is None:
        raise ResponseParseError(operation.value, "missing Body element")

    fault = child(soap_body, "Fault")
    if fault is not None:
        message = child_text(fault, "faultstring") or "SOAP fault"
        raise ServiceResponseError(operation.value, [message])

    for response_name in _response_names(operation):
        response = child(soap_body, response_name)
        if response is None:
            continue
        result_name = response_name[:-len("Response")] + "Result"
        result = child(response, result_name)
        if result is None:
            raise ResponseParseError(operation.value, f"missing {result_name} element")
        return result

    raise ResponseParseError(operation.value, f"missing {_response_names(operation)[0]} element")


def response_messages(result: ET.Element) -> List[str]:
    """Texts of Messages/ResponseMessage/Message, in document order."""
    messages_node = child(result, "Messages")
    if messages_node is None:
        return []
    messages = []
    for message_node in children(messages_node, "ResponseMessage"):
        text = child_text(message_node, "Message")
        if text:
            messages.append(text)
    if not messages and messages_node.text and messages_node.text.strip():
        messages.append(messages_node.text.strip())
    return messages


def is_ok(result: ET.Element) -> bool:
    return child_text(result, "ResponseType") == ResponseType.OK.value


# =============================================================================
# Per-operation decoders
# =============================================================================


def parse_status_response(body: Union[bytes, str], operation: TaxCloudOperation) -> bool:
    """Ping, Authorized, Captured, AuthorizedWithCaptured and Returned: OK or not."""
    result = find_result(body, operation)
    if is_ok(result):
        return True
    logger.warning(
        f"{operation.value} returned {child_text(result, 'ResponseType')}: "
        f"{response_messages(result)}"
    )
    return False


def parse_lookup_response(body: Union[bytes, str]) -> LookupResult:
    """
    Decode a Lookup response.

    per_item_tax follows the order of the CartItemResponse nodes, which the
    service emits in submitted-item order.
    """
    operation = TaxCloudOperation.LOOKUP
    result = find_result(body, operation)
    if not is_ok(result):
        raise ServiceResponseError(operation.value, response_messages(result))

    cart_id = child_text(result, "CartID")
    if cart_id is None:
        raise ResponseParseError(operation.value, "missing CartID element")

    per_item_tax = []
    items_node = child(result, "CartItemsResponse")
    if items_node is not None:
        for item in children(items_node, "CartItemResponse"):
            amount = child_text(item, "TaxAmount")
            try:
                per_item_tax.append(Decimal(amount))
            except (InvalidOperation, TypeError) as e:
                raise ResponseParseError(operation.value, f"invalid TaxAmount {amount!r}") from e

    return LookupResult(cart_id=cart_id, per_item_tax=per_item_tax)


def parse_verify_address_response(body: Union[bytes, str]) -> Address:
    """Decode a VerifyAddress response into the standardized address."""
    operation = TaxCloudOperation.VERIFY_ADDRESS
    result = find_result(body, operation)

    err_number = child_text(result, "ErrNumber")
    if err_number is not None and err_number != "0":
        description = child_text(result, "ErrDescription") or f"Error {err_number}"
        raise ServiceResponseError(operation.value, [description])

    zip5 = child_text(result, "Zip5")
    zip4 = child_text(result, "Zip4")
    zipcode = f"{zip5}-{zip4}" if zip5 and zip4 else zip5

    return Address(
        address1=child_text(result, "Address1"),
        address2=child_text(result, "Address2"),
        city=child_text(result, "City"),
        state=child_text(result, "State"),
        zipcode=zipcode,
    )


__all__ = [
    "find_result",
    "response_messages",
    "parse_status_response",
    "parse_lookup_response",
    "parse_verify_address_response",
]
