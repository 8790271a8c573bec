"""
TaxCloud Models

Value objects passed to and returned from the TaxCloud operations.
"""

from decimal import Decimal
from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class TaxCloudOperation(str, Enum):
    """SOAP operations exposed by the TaxCloud endpoint"""
    PING = "Ping"
    LOOKUP = "Lookup"
    AUTHORIZED = "Authorized"
    CAPTURED = "Captured"
    AUTHORIZED_WITH_CAPTURED = "AuthorizedWithCaptured"
    RETURNED = "Returned"
    VERIFY_ADDRESS = "VerifyAddress"


class ResponseType(str, Enum):
    """Value of the ResponseType node in TaxCloud results"""
    OK = "OK"
    ERROR = "Error"
    WARNING = "Warning"
    INFORMATIONAL = "Informational"


class Credentials(BaseModel):
    """TaxCloud API credentials plus the USPS Web Tools user id"""
    model_config = ConfigDict(frozen=True)

    api_login_id: str = Field("", description="TaxCloud API login id")
    api_key: str = Field("", description="TaxCloud API key")
    usps_user_id: str = Field("", description="USPS Web Tools user id")

    def __repr__(self) -> str:
        return f"Credentials(api_login_id={self.api_login_id!r}, api_key='***', usps_user_id='***')"

    __str__ = __repr__


class Address(BaseModel):
    """
    US street address.

    Fields are optional at the model level so that incomplete addresses can
    be represented and rejected by the address validator with a specific
    message instead of a schema error.
    """
    address1: Optional[str] = Field(None, description="Street line")
    address2: Optional[str] = Field(None, description="Secondary line (suite, apt)")
    city: Optional[str] = None
    state: Optional[str] = Field(None, description="Two-letter abbreviation or full state name")
    zipcode: Optional[Union[str, int]] = Field(None, description="ZIP+4, e.g. 85004-4403")


class CartItem(BaseModel):
    """
    Line item of a cart.

    price and quantity accept numeric-like input (numbers or numeric
    strings); the request builder coerces them and assigns index.
    """
    id: Optional[Union[str, int]] = Field(None, description="Caller item id (ItemID)")
    tic: Optional[Union[str, int]] = Field(None, description="Taxability Information Code")
    price: Optional[Union[Decimal, int, float, str]] = None
    quantity: Optional[Union[int, float, str]] = None
    index: Optional[int] = Field(None, ge=0, description="Position in the submitted list")


class Cart(BaseModel):
    """Ordered collection of line items submitted for a tax lookup"""
    id: Optional[str] = Field(None, description="Cart id (cartID)")
    items: List[CartItem] = Field(default_factory=list)


class LookupResult(BaseModel):
    """
    Result of a Lookup call.

    per_item_tax is positionally aligned with the submitted cart items.
    """
    cart_id: str
    per_item_tax: List[Decimal] = Field(default_factory=list)

    @property
    def total_tax(self) -> Decimal:
        return sum(self.per_item_tax, Decimal("0"))


class TaxabilityCode(BaseModel):
    """
    TIC catalog entry.

    The catalog wraps entries as {"tic": {...}}; both the wrapped and the
    bare shape are accepted at every level.
    """
    id: str
    description: Optional[str] = None
    ssuta: Optional[Any] = None
    children: List["TaxabilityCode"] = Field(default_factory=list)

    @model_validator(mode='before')
    @classmethod
    def unwrap_tic(cls, data: Any) -> Any:
        if isinstance(data, dict) and "tic" in data and isinstance(data["tic"], dict):
            return data["tic"]
        return data

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator('children', mode='before')
    @classmethod
    def default_children(cls, v: Any) -> Any:
        return v or []


TaxabilityCode.model_rebuild()


__all__ = [
    "TaxCloudOperation",
    "ResponseType",
    "Credentials",
    "Address",
    "CartItem",
    "Cart",
    "LookupResult",
    "TaxabilityCode",
]
