"""
TaxCloud Request Builder

Validates the arguments of each operation in a fixed order and serializes
the SOAP request. The first failing rule raises RequestValidationError with
a message naming the field; nothing is sent in that case.
"""

import logging
from decimal import Decimal
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from .models import Address, Cart, CartItem, Credentials, TaxCloudOperation
from .protocols import RequestValidationError
from .soap import SoapRequest, add_field, new_envelope, to_request
from .validators import (
    is_blank,
    is_decimal,
    is_integer,
    is_recognized_tic,
    is_valid_address,
    normalize_address,
    split_zipcode,
    to_decimal,
    to_int,
)

logger = logging.getLogger(__name__)

MAX_CART_ITEMS = 100

ModelT = TypeVar("ModelT", bound=BaseModel)
AddressInput = Union[Address, Mapping[str, Any]]
CartInput = Union[Cart, Mapping[str, Any]]
CartItemInput = Union[CartItem, Mapping[str, Any]]


# =============================================================================
# Checks
# =============================================================================


def _coerce_model(model: Type[ModelT], value: Any, message: str, field: str) -> ModelT:
    """Accept a model instance or a mapping decodable into it."""
    if isinstance(value, model):
        return value
    if isinstance(value, Mapping):
        try:
            return model.model_validate(dict(value))
        except ValidationError as e:
            logger.debug(f"{field} could not be decoded: {e}")
            raise RequestValidationError(message, field=field) from e
    raise RequestValidationError(message, field=field)


def _require_string(value: Any, label: str, field: str) -> str:
    if is_blank(value):
        raise RequestValidationError(f"{label} is missing.", field=field)
    if not isinstance(value, str):
        raise RequestValidationError(f"{label} must be a string.", field=field)
    return value


def _require_tax_credentials(credentials: Credentials) -> None:
    if is_blank(credentials.api_login_id):
        raise RequestValidationError("API login id is missing.", field="api_login_id")
    if is_blank(credentials.api_key):
        raise RequestValidationError("API key is missing.", field="api_key")


def _require_address(value: Any, message: str, field: str) -> Address:
    address = _coerce_model(Address, value, message, field)
    if not is_valid_address(address):
        raise RequestValidationError(message, field=field)
    return normalize_address(address)


def _split_cart(cart: Any) -> Tuple[Any, Any]:
    """(id, raw items) of a Cart or cart mapping; items are checked later."""
    if isinstance(cart, Cart):
        return cart.id, cart.items
    if isinstance(cart, Mapping):
        return cart.get("id"), cart.get("items")
    raise RequestValidationError("Cart must be an object.", field="cart")


def validate_cart_items(items: Any) -> List[CartItem]:
    """
    Validate a cart item list and return normalized copies.

    Each returned item has a Decimal price, an int quantity and its 0-based
    position as index.
    """
    if not isinstance(items, (list, tuple)):
        raise RequestValidationError("Cart items must be a list.", field="items")
    if len(items) < 1:
        raise RequestValidationError("Cart items list must contain at least 1 item.", field="items")
    if len(items) > MAX_CART_ITEMS:
        raise RequestValidationError(
            f"The maximum items in a cart is {MAX_CART_ITEMS}.", field="items"
        )

    validated = []
    for index, raw in enumerate(items):
        item = _coerce_model(CartItem, raw, "An item must be an object.", "items")
        if not isinstance(item.tic, str):
            raise RequestValidationError("An item tic value must be a string.", field="tic")
        if not is_recognized_tic(item.tic):
            raise RequestValidationError("An item tic value is invalid.", field="tic")
        if not is_decimal(item.price):
            raise RequestValidationError("An item price value is not a float.", field="price")
        price = to_decimal(item.price)
        if price < 0:
            raise RequestValidationError("An item price value must not be negative.", field="price")
        if not is_integer(item.quantity):
            raise RequestValidationError("An item quantity value is not an integer.", field="quantity")
        quantity = to_int(item.quantity)
        if quantity < 0:
            raise RequestValidationError(
                "An item quantity value must not be negative.", field="quantity"
            )
        validated.append(item.model_copy(update={
            "price": price,
            "quantity": quantity,
            "index": index,
        }))
    return validated


# =============================================================================
# Serialization helpers
# =============================================================================


def _format_price(price: Decimal) -> str:
    # Plain notation; Decimal("1E+2") would otherwise serialize as 1E+2
    return format(price, "f")


def _add_cart_items(parent, items: Sequence[CartItem]) -> None:
    cart_items = add_field(parent, "cartItems")
    for item in items:
        cart_item = add_field(cart_items, "CartItem")
        add_field(cart_item, "Index", item.index)
        add_field(cart_item, "ItemID", item.id)
        add_field(cart_item, "TIC", item.tic)
        add_field(cart_item, "Price", _format_price(item.price))
        add_field(cart_item, "Qty", item.quantity)


def _add_lookup_address(parent, tag: str, address: Address) -> None:
    zip5, zip4 = split_zipcode(address.zipcode)
    element = add_field(parent, tag)
    add_field(element, "Address1", address.address1)
    add_field(element, "Address2", address.address2 or None)
    add_field(element, "City", address.city)
    add_field(element, "State", address.state)
    add_field(element, "Zip5", zip5)
    add_field(element, "Zip4", zip4)


def _start(operation: TaxCloudOperation, credentials: Credentials):
    envelope, op_element = new_envelope(operation)
    add_field(op_element, "apiLoginID", credentials.api_login_id)
    add_field(op_element, "apiKey", credentials.api_key)
    return envelope, op_element


# =============================================================================
# Builders
# =============================================================================


def build_ping_request(credentials: Credentials) -> SoapRequest:
    _require_tax_credentials(credentials)
    envelope, _ = _start(TaxCloudOperation.PING, credentials)
    return to_request(TaxCloudOperation.PING, envelope)


def build_lookup_request(
    credentials: Credentials,
    customer_id: Any,
    cart: CartInput,
    origin: AddressInput,
    destination: AddressInput,
) -> SoapRequest:
    """
    Build a Lookup request.

    Validation order: customer id, cart and cart id, origin, destination,
    then the cart items.
    """
    _require_tax_credentials(credentials)
    customer_id = _require_string(customer_id, "Customer id", "customer_id")

    cart_id, raw_items = _split_cart(cart)
    if is_blank(cart_id):
        raise RequestValidationError("Missing cart id.", field="cart_id")
    if not isinstance(cart_id, str):
        raise RequestValidationError("Cart id must be a string.", field="cart_id")

    origin = _require_address(origin, "Source address object is invalid.", "origin")
    destination = _require_address(
        destination, "Destination address object is invalid.", "destination"
    )
    items = validate_cart_items(raw_items)

    envelope, op_element = _start(TaxCloudOperation.LOOKUP, credentials)
    add_field(op_element, "customerID", customer_id)
    add_field(op_element, "cartID", cart_id)
    _add_cart_items(op_element, items)
    _add_lookup_address(op_element, "origin", origin)
    _add_lookup_address(op_element, "destination", destination)
    return to_request(TaxCloudOperation.LOOKUP, envelope)


def build_authorized_request(
    credentials: Credentials,
    customer_id: Any,
    cart_id: Any,
    order_id: Any,
    date_authorized: Any,
) -> SoapRequest:
    _require_tax_credentials(credentials)
    _require_string(customer_id, "Customer id", "customer_id")
    _require_string(cart_id, "Cart id", "cart_id")
    _require_string(order_id, "Order id", "order_id")
    _require_string(date_authorized, "Date authorized", "date_authorized")

    envelope, op_element = _start(TaxCloudOperation.AUTHORIZED, credentials)
    add_field(op_element, "customerID", customer_id)
    add_field(op_element, "cartID", cart_id)
    add_field(op_element, "orderID", order_id)
    add_field(op_element, "dateAuthorized", date_authorized)
    return to_request(TaxCloudOperation.AUTHORIZED, envelope)


def build_captured_request(credentials: Credentials, order_id: Any) -> SoapRequest:
    _require_tax_credentials(credentials)
    _require_string(order_id, "Order id", "order_id")

    envelope, op_element = _start(TaxCloudOperation.CAPTURED, credentials)
    add_field(op_element, "orderID", order_id)
    return to_request(TaxCloudOperation.CAPTURED, envelope)


def build_authorized_with_captured_request(
    credentials: Credentials,
    customer_id: Any,
    cart_id: Any,
    order_id: Any,
    date_authorized: Any,
    date_captured: Any,
) -> SoapRequest:
    _require_tax_credentials(credentials)
    _require_string(customer_id, "Customer id", "customer_id")
    _require_string(cart_id, "Cart id", "cart_id")
    _require_string(order_id, "Order id", "order_id")
    _require_string(date_authorized, "Date authorized", "date_authorized")
    _require_string(date_captured, "Date captured", "date_captured")

    envelope, op_element = _start(TaxCloudOperation.AUTHORIZED_WITH_CAPTURED, credentials)
    add_field(op_element, "customerID", customer_id)
    add_field(op_element, "cartID", cart_id)
    add_field(op_element, "orderID", order_id)
    add_field(op_element, "dateAuthorized", date_authorized)
    add_field(op_element, "dateCaptured", date_captured)
    return to_request(TaxCloudOperation.AUTHORIZED_WITH_CAPTURED, envelope)


def build_returned_request(
    credentials: Credentials,
    order_id: Any,
    cart_items: Sequence[CartItemInput],
    returned_date: Any,
) -> SoapRequest:
    """Build a Returned request: order id, returned date, then the items."""
    _require_tax_credentials(credentials)
    _require_string(order_id, "Order id", "order_id")
    _require_string(returned_date, "Returned date", "returned_date")
    items = validate_cart_items(cart_items)

    envelope, op_element = _start(TaxCloudOperation.RETURNED, credentials)
    add_field(op_element, "orderID", order_id)
    add_field(op_element, "returnedDate", returned_date)
    _add_cart_items(op_element, items)
    return to_request(TaxCloudOperation.RETURNED, envelope)


def build_verify_address_request(
    credentials: Credentials,
    address: Optional[AddressInput],
) -> SoapRequest:
    """
    Build a VerifyAddress request.

    Authenticates with the USPS user id only and uses the lowercase field
    names of the USPS form.
    """
    if is_blank(credentials.usps_user_id):
        raise RequestValidationError("USPS user id is missing.", field="usps_user_id")
    address = _require_address(address, "Address object is invalid.", "address")
    zip5, zip4 = split_zipcode(address.zipcode)

    envelope, op_element = new_envelope(TaxCloudOperation.VERIFY_ADDRESS)
    add_field(op_element, "uspsUserID", credentials.usps_user_id)
    add_field(op_element, "address1", address.address1)
    add_field(op_element, "address2", address.address2 or None)
    add_field(op_element, "city", address.city)
    add_field(op_element, "state", address.state)
    add_field(op_element, "zip5", zip5)
    add_field(op_element, "zip4", zip4)
    return to_request(TaxCloudOperation.VERIFY_ADDRESS, envelope)


__all__ = [
    "MAX_CART_ITEMS",
    "validate_cart_items",
    "build_ping_request",
    "build_lookup_request",
    "build_authorized_request",
    "build_captured_request",
    "build_authorized_with_captured_request",
    "build_returned_request",
    "build_verify_address_request",
]
