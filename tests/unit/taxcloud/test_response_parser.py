"""
Unit Tests: TaxCloud response parser
"""

from decimal import Decimal

import pytest

from taxcloud.models import TaxCloudOperation
from taxcloud.protocols import ResponseParseError, ServiceResponseError
from taxcloud.response_parser import (
    find_result,
    parse_lookup_response,
    parse_status_response,
    parse_verify_address_response,
    response_messages,
)

pytestmark = pytest.mark.unit


STATUS_OPERATIONS = [
    TaxCloudOperation.PING,
    TaxCloudOperation.AUTHORIZED,
    TaxCloudOperation.CAPTURED,
    TaxCloudOperation.AUTHORIZED_WITH_CAPTURED,
    TaxCloudOperation.RETURNED,
]


class TestFindResult:

    def test_locates_result_node(self, factory):
        body = factory.make_status_response(TaxCloudOperation.PING)
        result = find_result(body, TaxCloudOperation.PING)
        assert result.tag.endswith("PingResult")

    def test_accepts_text_body(self, factory):
        body = factory.make_status_response(TaxCloudOperation.PING).decode("utf-8")
        assert find_result(body, TaxCloudOperation.PING) is not None

    def test_invalid_xml(self):
        with pytest.raises(ResponseParseError) as excinfo:
            find_result(b"<html><body>Service Unavailable", TaxCloudOperation.PING)
        assert excinfo.value.operation == "Ping"

    def test_empty_body(self):
        with pytest.raises(ResponseParseError):
            find_result(b"", TaxCloudOperation.PING)

    def test_missing_body_element(self):
        with pytest.raises(ResponseParseError) as excinfo:
            find_result(b"<Envelope />", TaxCloudOperation.PING)
        assert "Body" in excinfo.value.reason

    def test_response_for_other_operation(self, factory):
        body = factory.make_status_response(TaxCloudOperation.CAPTURED)
        with pytest.raises(ResponseParseError) as excinfo:
            find_result(body, TaxCloudOperation.AUTHORIZED)
        assert "AuthorizedResponse" in excinfo.value.reason

    def test_soap_fault(self, factory):
        body = factory.make_fault_response("Server was unable to read request.")
        with pytest.raises(ServiceResponseError) as excinfo:
            find_result(body, TaxCloudOperation.LOOKUP)
        assert str(excinfo.value) == "Server was unable to read request."
        assert excinfo.value.operation == "Lookup"


class TestStatusResponses:

    @pytest.mark.parametrize("operation", STATUS_OPERATIONS)
    def test_ok(self, factory, operation):
        assert parse_status_response(factory.make_status_response(operation), operation) is True

    @pytest.mark.parametrize("operation", STATUS_OPERATIONS)
    def test_error(self, factory, operation):
        body = factory.make_status_response(operation, ok=False, messages=["Invalid order"])
        assert parse_status_response(body, operation) is False

    def test_authorized_with_capture_spelling(self, factory):
        body = factory.make_status_response(
            TaxCloudOperation.AUTHORIZED_WITH_CAPTURED,
            response_name="AuthorizedWithCapture",
        )
        assert parse_status_response(body, TaxCloudOperation.AUTHORIZED_WITH_CAPTURED) is True

    def test_failure_is_logged(self, factory, caplog):
        body = factory.make_status_response(
            TaxCloudOperation.CAPTURED, ok=False, messages=["Order not authorized"]
        )
        with caplog.at_level("WARNING", logger="taxcloud.response_parser"):
            parse_status_response(body, TaxCloudOperation.CAPTURED)
        assert "Order not authorized" in caplog.text

    def test_messages_in_order(self, factory):
        body = factory.make_status_response(
            TaxCloudOperation.RETURNED, ok=False, messages=["first", "second"]
        )
        result = find_result(body, TaxCloudOperation.RETURNED)
        assert response_messages(result) == ["first", "second"]


class TestLookupResponse:

    def test_amounts_in_document_order(self, factory):
        body = factory.make_lookup_response("cart-1", ["1.0575", "0", "2.10"])
        result = parse_lookup_response(body)
        assert result.cart_id == "cart-1"
        assert result.per_item_tax == [Decimal("1.0575"), Decimal("0"), Decimal("2.10")]
        assert result.total_tax == Decimal("3.1575")

    def test_error_carries_service_message(self, factory):
        body = factory.make_lookup_error_response(["Invalid apiLoginID."])
        with pytest.raises(ServiceResponseError) as excinfo:
            parse_lookup_response(body)
        assert str(excinfo.value) == "Invalid apiLoginID."
        assert excinfo.value.messages == ["Invalid apiLoginID."]

    def test_error_joins_messages(self, factory):
        body = factory.make_lookup_error_response(["Bad origin.", "Bad destination."])
        with pytest.raises(ServiceResponseError) as excinfo:
            parse_lookup_response(body)
        assert str(excinfo.value) == "Bad origin.; Bad destination."

    def test_missing_cart_id(self, factory):
        body = factory.make_lookup_response("", ["1.00"])
        with pytest.raises(ResponseParseError):
            parse_lookup_response(body)

    def test_invalid_amount(self, factory):
        body = factory.make_lookup_response("cart-1", ["n/a"])
        with pytest.raises(ResponseParseError):
            parse_lookup_response(body)


class TestVerifyAddressResponse:

    def test_standardized_address(self, factory):
        body = factory.make_verify_address_response(
            address1="400 N CENTRAL AVE", city="PHOENIX", state="AZ", zip5="85004", zip4="4403"
        )
        address = parse_verify_address_response(body)
        assert address.address1 == "400 N CENTRAL AVE"
        assert address.address2 is None
        assert address.city == "PHOENIX"
        assert address.state == "AZ"
        assert address.zipcode == "85004-4403"

    def test_without_zip4(self, factory):
        address = parse_verify_address_response(factory.make_verify_address_response(zip4=None))
        assert address.zipcode == "85004"

    def test_secondary_line(self, factory):
        address = parse_verify_address_response(
            factory.make_verify_address_response(address2="STE 200")
        )
        assert address.address2 == "STE 200"

    def test_usps_error(self, factory):
        body = factory.make_verify_address_error_response("97", "Address Not Found.")
        with pytest.raises(ServiceResponseError) as excinfo:
            parse_verify_address_response(body)
        assert str(excinfo.value) == "Address Not Found."
        assert excinfo.value.operation == "VerifyAddress"
