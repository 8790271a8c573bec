"""
TaxCloud Validation Primitives

Pure predicates and coercions used before any request is built.
"""

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Tuple

from .models import Address

# Two-letter USPS abbreviations and full names accepted by TaxCloud
US_STATES = {
    "AL": "ALABAMA",
    "AK": "ALASKA",
    "AS": "AMERICAN SAMOA",
    "AZ": "ARIZONA",
    "AR": "ARKANSAS",
    "CA": "CALIFORNIA",
    "CO": "COLORADO",
    "CT": "CONNECTICUT",
    "DE": "DELAWARE",
    "DC": "DISTRICT OF COLUMBIA",
    "FM": "FEDERATED STATES OF MICRONESIA",
    "FL": "FLORIDA",
    "GA": "GEORGIA",
    "GU": "GUAM",
    "HI": "HAWAII",
    "ID": "IDAHO",
    "IL": "ILLINOIS",
    "IN": "INDIANA",
    "IA": "IOWA",
    "KS": "KANSAS",
    "KY": "KENTUCKY",
    "LA": "LOUISIANA",
    "ME": "MAINE",
    "MH": "MARSHALL ISLANDS",
    "MD": "MARYLAND",
    "MA": "MASSACHUSETTS",
    "MI": "MICHIGAN",
    "MN": "MINNESOTA",
    "MS": "MISSISSIPPI",
    "MO": "MISSOURI",
    "MT": "MONTANA",
    "NE": "NEBRASKA",
    "NV": "NEVADA",
    "NH": "NEW HAMPSHIRE",
    "NJ": "NEW JERSEY",
    "NM": "NEW MEXICO",
    "NY": "NEW YORK",
    "NC": "NORTH CAROLINA",
    "ND": "NORTH DAKOTA",
    "MP": "NORTHERN MARIANA ISLANDS",
    "OH": "OHIO",
    "OK": "OKLAHOMA",
    "OR": "OREGON",
    "PW": "PALAU",
    "PA": "PENNSYLVANIA",
    "PR": "PUERTO RICO",
    "RI": "RHODE ISLAND",
    "SC": "SOUTH CAROLINA",
    "SD": "SOUTH DAKOTA",
    "TN": "TENNESSEE",
    "TX": "TEXAS",
    "UT": "UTAH",
    "VT": "VERMONT",
    "VI": "VIRGIN ISLANDS",
    "VA": "VIRGINIA",
    "WA": "WASHINGTON",
    "WV": "WEST VIRGINIA",
    "WI": "WISCONSIN",
    "WY": "WYOMING",
}

_STATE_NAMES = frozenset(US_STATES.values())

# Closed set: codes outside it are rejected, whatever their format
KNOWN_TICS = frozenset([
    "00000", "10000", "10001", "10005", "10010", "10040", "10060", "10070",
    "11010", "11099", "20000", "20010", "20015", "20020", "20030", "20040",
    "20050", "20060", "20070", "20080", "20090", "20100", "20110", "20120",
    "20150", "20160", "20170", "20180", "20190", "30000", "30015", "30040",
    "30100", "31000", "40000", "40010", "40020", "40030", "40040", "40050",
    "40060", "41000", "41010", "41020", "41030", "50000", "51000", "52000",
    "52125", "52245", "52365", "52490", "53000", "54000", "54065", "54125",
    "54185", "54245", "60000", "60010", "60020", "60030", "60040", "60050",
    "60060", "61000", "61010", "61020", "61325", "61330", "61340", "61350",
    "90010", "90011", "90012", "90100", "90101", "90102", "90118", "90119",
    "90200", "91000", "91010", "91011", "91020", "91030", "91040", "91041",
    "91050", "91051", "91060", "92010", "92016", "94000", "94001", "94002",
    "94003",
])

US_ZIP_RE = re.compile(r"^\d{5}[-\s]\d{4}$", re.ASCII)
_ZIP_SEPARATOR_RE = re.compile(r"[-\s]", re.ASCII)
_DECIMAL_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$", re.ASCII)
_INTEGER_RE = re.compile(r"^[+-]?\d+$", re.ASCII)


# =============================================================================
# Scalar predicates
# =============================================================================


def is_blank(value: Any) -> bool:
    """True for None and for empty or whitespace-only strings."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def is_recognized_state(value: Any) -> bool:
    """
    Case-insensitive state check.

    A two-character input is matched against the abbreviations, anything
    longer against the full names ("az", "Arizona" and "ARIZONA" all pass).
    """
    if not isinstance(value, str):
        return False
    candidate = value.upper()
    if len(candidate) == 2:
        return candidate in US_STATES
    return candidate in _STATE_NAMES


def is_us_zip(value: Any) -> bool:
    """True iff value is a ZIP+4 such as 85004-4403 (5-digit ZIPs are rejected)."""
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        return False
    return bool(US_ZIP_RE.fullmatch(str(value)))


def is_recognized_tic(value: Any) -> bool:
    """True iff value is one of the known Taxability Information Codes."""
    return isinstance(value, str) and value in KNOWN_TICS


def is_decimal(value: Any) -> bool:
    """True for finite numbers and numeric strings ("18", "18.00", "1e2")."""
    if isinstance(value, bool):
        return False
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, str):
        return bool(_DECIMAL_RE.match(value.strip()))
    return False


def to_decimal(value: Any) -> Decimal:
    """Coerce a numeric-like value to Decimal; raises ValueError otherwise."""
    if not is_decimal(value):
        raise ValueError(f"{value!r} is not a decimal number")
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValueError(f"{value!r} is not a decimal number") from e


def is_integer(value: Any) -> bool:
    """True for ints, integral floats and integer strings ("3", "+3")."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value) and value.is_integer()
    if isinstance(value, Decimal):
        return value.is_finite() and value == value.to_integral_value()
    if isinstance(value, str):
        return bool(_INTEGER_RE.match(value.strip()))
    return False


def to_int(value: Any) -> int:
    """Coerce an integer-like value to int; raises ValueError otherwise."""
    if not is_integer(value):
        raise ValueError(f"{value!r} is not an integer")
    if isinstance(value, str):
        return int(value.strip())
    return int(value)


# =============================================================================
# Addresses
# =============================================================================


def is_valid_address(address: Optional[Address]) -> bool:
    """
    Check that an address can be submitted.

    Requires address1, city, a recognized state and a ZIP+4 zipcode.
    """
    if address is None:
        return False
    if is_blank(address.address1):
        return False
    if is_blank(address.city):
        return False
    if is_blank(address.state) or not is_recognized_state(address.state):
        return False
    if is_blank(address.zipcode) or not is_us_zip(address.zipcode):
        return False
    return True


def normalize_address(address: Address) -> Address:
    """Copy of a validated address with the state upper-cased and zipcode as str."""
    return address.model_copy(update={
        "state": address.state.upper(),
        "zipcode": str(address.zipcode),
    })


def split_zipcode(zipcode: Any) -> Tuple[str, Optional[str]]:
    """Split a ZIP+4 into (zip5, zip4); zip4 is None when there is no extension."""
    parts = _ZIP_SEPARATOR_RE.split(str(zipcode).strip(), maxsplit=1)
    zip5 = parts[0]
    zip4 = parts[1] if len(parts) > 1 else None
    return zip5, zip4


__all__ = [
    "US_STATES",
    "KNOWN_TICS",
    "is_blank",
    "is_recognized_state",
    "is_us_zip",
    "is_recognized_tic",
    "is_decimal",
    "to_decimal",
    "is_integer",
    "to_int",
    "is_valid_address",
    "normalize_address",
    "split_zipcode",
]
