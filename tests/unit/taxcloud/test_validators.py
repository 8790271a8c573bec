"""
Unit Tests: TaxCloud validation primitives and address validator
"""

from decimal import Decimal

import pytest

from taxcloud.models import Address
from taxcloud.validators import (
    KNOWN_TICS,
    US_STATES,
    is_blank,
    is_decimal,
    is_integer,
    is_recognized_state,
    is_recognized_tic,
    is_us_zip,
    is_valid_address,
    normalize_address,
    split_zipcode,
    to_decimal,
    to_int,
)

pytestmark = pytest.mark.unit


class TestIsBlank:

    @pytest.mark.parametrize("value", [None, "", " ", "\t\n"])
    def test_blank_values(self, value):
        assert is_blank(value) is True

    @pytest.mark.parametrize("value", ["a", " a ", 0, 12345])
    def test_non_blank_values(self, value):
        assert is_blank(value) is False


class TestRecognizedState:

    def test_every_abbreviation_any_case(self):
        for abbreviation in US_STATES:
            assert is_recognized_state(abbreviation)
            assert is_recognized_state(abbreviation.lower())

    def test_every_full_name_any_case(self):
        for name in US_STATES.values():
            assert is_recognized_state(name)
            assert is_recognized_state(name.lower())
            assert is_recognized_state(name.title())

    def test_table_covers_states_and_dc(self):
        assert "DC" in US_STATES
        assert len(US_STATES) >= 51

    @pytest.mark.parametrize("value", ["ZZ", "A", "ARIZ", "Arizonia", "", "AZ ", None, 12])
    def test_unrecognized(self, value):
        assert is_recognized_state(value) is False

    def test_abbreviation_and_name_are_not_mixed(self):
        # A two-letter input is only compared with abbreviations
        assert is_recognized_state("Io") is False
        assert is_recognized_state("IA") is True


class TestUSZip:

    @pytest.mark.parametrize("value", ["85004-4403", "85004 4403", "00000-0000"])
    def test_zip_plus_four(self, value):
        assert is_us_zip(value) is True

    @pytest.mark.parametrize("value", [
        "85004", "850044403", "8500-44403", "85004-440", "85004-44030",
        "A5004-4403", " 85004-4403", "85004--4403", "", None, 85004, True,
        "85004-4403\n", "٨٥٠٠٤-٤٤٠٣",
        "85004\u20034403",
    ])
    def test_rejected(self, value):
        assert is_us_zip(value) is False

    def test_non_ascii_digits_not_numeric(self):
        assert is_decimal("٣") is False
        assert is_integer("٣") is False


class TestRecognizedTic:

    def test_every_known_code(self):
        for tic in KNOWN_TICS:
            assert is_recognized_tic(tic) is True

    @pytest.mark.parametrize("value", ["", "0000", "000000", "100000", "1000", "20010 ", "99999", None, 0, 20010])
    def test_rejected(self, value):
        assert is_recognized_tic(value) is False

    def test_prefix_and_suffix_of_valid_code(self):
        for tic in ["20010", "91041"]:
            assert is_recognized_tic(tic[:-1]) is False
            assert is_recognized_tic(tic + "1") is False
            assert is_recognized_tic("1" + tic) is False


class TestNumericCoercion:

    @pytest.mark.parametrize("value,expected", [
        (18, Decimal("18")),
        (18.5, Decimal("18.5")),
        ("18.00", Decimal("18.00")),
        (" 7 ", Decimal("7")),
        (".5", Decimal(".5")),
        (Decimal("3.10"), Decimal("3.10")),
        ("-2", Decimal("-2")),
    ])
    def test_to_decimal(self, value, expected):
        assert is_decimal(value) is True
        assert to_decimal(value) == expected

    @pytest.mark.parametrize("value", ["abc", "", "1.2.3", None, True, float("nan"), float("inf"), [1]])
    def test_not_decimal(self, value):
        assert is_decimal(value) is False
        with pytest.raises(ValueError):
            to_decimal(value)

    @pytest.mark.parametrize("value,expected", [(3, 3), ("3", 3), ("+4", 4), (2.0, 2), ("-1", -1)])
    def test_to_int(self, value, expected):
        assert is_integer(value) is True
        assert to_int(value) == expected

    @pytest.mark.parametrize("value", ["1.5", 1.5, "one", "", None, False])
    def test_not_integer(self, value):
        assert is_integer(value) is False
        with pytest.raises(ValueError):
            to_int(value)


class TestAddressValidator:

    def test_complete_address_is_valid(self, factory):
        assert is_valid_address(Address(**factory.make_address())) is True

    def test_full_state_name_is_valid(self, factory):
        assert is_valid_address(Address(**factory.make_address(state="arizona"))) is True

    def test_each_failing_rule(self, factory):
        for data in factory.make_invalid_addresses():
            assert is_valid_address(Address(**data)) is False, data

    def test_none_is_invalid(self):
        assert is_valid_address(None) is False

    def test_normalize_uppercases_state_and_stringifies_zip(self, factory):
        original = Address(**factory.make_address(state="az"))
        normalized = normalize_address(original)
        assert normalized.state == "AZ"
        assert isinstance(normalized.zipcode, str)
        assert original.state == "az"


class TestSplitZipcode:

    def test_hyphen(self):
        assert split_zipcode("85004-4403") == ("85004", "4403")

    def test_space(self):
        assert split_zipcode("85004 4403") == ("85004", "4403")

    def test_without_extension(self):
        assert split_zipcode("85004") == ("85004", None)
