"""Tests for the operation table, the resource tree builder and the classic API facades."""

import pytest
from pydantic import BaseModel

from psp_client.endpoints import CHECKOUT
from psp_client.exceptions import ConfigurationError, InvalidRequestError, PSPClientError, ServerError
from psp_client.services import SERVICES, Payment, Recurring
from psp_client.services.resource import Operation, Resource, Service, build_resource_tree


class Widget(BaseModel):
    id: str
    colour: str


class WidgetService(Service):
    family = CHECKOUT
    operations = (
        Operation("widgets.post", "POST", "/widgets"),
        Operation("widgets.get", "GET", "/widgets/{id}"),
        Operation("widgets.delete", "DELETE", "/widgets/{id}"),
        Operation("widgets.parts.get", "GET", "/widgets/{id}/parts/{part_id}"),
    )


class TestOperation:
    """Tests for Operation."""

    def test_parts(self):
        """Test the derived resource path, verb and path parameters."""
        operation = Operation("widgets.parts.get", "GET", "/widgets/{id}/parts/{part_id}")
        assert operation.resource_path == ("widgets", "parts")
        assert operation.verb == "get"
        assert operation.path_params == ["id", "part_id"]


class TestBuildResourceTree:
    """Tests for build_resource_tree."""

    def test_nested_resources(self, client):
        """Test that dotted names become nested Resource attributes."""
        service = WidgetService(client)
        assert isinstance(service.widgets, Resource)
        assert isinstance(service.widgets.parts, Resource)
        assert service.widgets.get.__doc__ == "GET /widgets/{id}"

    def test_duplicate_operation_rejected(self, client):
        """Test that the same operation can't be bound twice."""
        service = WidgetService(client)
        with pytest.raises(ValueError):
            build_resource_tree(service, [Operation("widgets.post", "POST", "/widgets")])

    def test_segment_clashing_with_attribute_rejected(self, client):
        """Test that a segment can't shadow a service attribute."""
        service = WidgetService(client)
        with pytest.raises(ValueError):
            build_resource_tree(service, [Operation("client.post", "POST", "/client")])

    def test_services_are_independent(self, client):
        """Test that two instances don't share bound operations."""
        first = WidgetService(client)
        second = WidgetService(client, version="v1")
        assert first.widgets is not second.widgets


class TestBuildEnvelope:
    """Tests for Service.build_envelope."""

    @pytest.fixture
    def service(self, client):
        return WidgetService(client)

    def test_path_params_removed_from_body(self, service):
        """Test that path parameters are substituted and not sent in the body."""
        operation = Operation("widgets.put", "PATCH", "/widgets/{id}")
        envelope = service.build_envelope(operation, {"id": "w1", "colour": "red"})
        assert envelope.path == "/widgets/w1"
        assert envelope.body == {"colour": "red"}

    def test_path_params_are_quoted(self, service):
        """Test that path parameter values are URL-quoted."""
        envelope = service.build_envelope(service.operations[1], {"id": "a/b c"})
        assert envelope.path == "/widgets/a%2Fb%20c"

    def test_get_sends_remaining_fields_as_query(self, service):
        """Test that GET requests have no body."""
        envelope = service.build_envelope(service.operations[1], {"id": "w1", "expand": "parts"})
        assert envelope.body is None
        assert dict(envelope.query) == {"expand": "parts"}

    def test_multiple_path_params(self, service):
        """Test substitution of several path parameters."""
        envelope = service.build_envelope(service.operations[3], {"id": "w1", "part_id": 7})
        assert envelope.path == "/widgets/w1/parts/7"

    def test_model_request(self, service):
        """Test that pydantic models are accepted as requests."""
        envelope = service.build_envelope(service.operations[0], Widget(id="w1", colour="blue"))
        assert envelope.body == {"id": "w1", "colour": "blue"}

    def test_missing_path_param(self, service):
        """Test that a missing path parameter raises InvalidRequestError."""
        with pytest.raises(InvalidRequestError) as exc_info:
            service.build_envelope(service.operations[3], {"id": "w1"})
        assert "part_id" in str(exc_info.value)
        assert isinstance(exc_info.value, PSPClientError)

    def test_request_not_mapping(self, service):
        """Test that unsupported request types raise InvalidRequestError."""
        with pytest.raises(InvalidRequestError):
            service.build_envelope(service.operations[0], ["not", "a", "mapping"])

    def test_no_request(self, service):
        """Test that POST without a request sends an empty object."""
        envelope = service.build_envelope(service.operations[0])
        assert envelope.body == {}

    def test_version_and_family(self, client):
        """Test that the envelope carries the service family and version."""
        service = WidgetService(client, version="v1")
        envelope = service.build_envelope(service.operations[0], {})
        assert envelope.api_family == "checkout"
        assert envelope.version == "v1"


class TestWidgetCalls:
    """Tests for calls made through bound operations."""

    async def test_delete(self, client, platform):
        """Test a DELETE call with a path parameter."""
        platform.reply("DELETE", "/checkout/v68/widgets/w1", status=204)
        result = await WidgetService(client).widgets.delete({"id": "w1"})
        assert result == {}
        assert platform.last_request.method == "DELETE"

    async def test_errors_propagate(self, client, platform):
        """Test that classified errors reach the caller of a bound operation."""
        platform.reply("POST", "/checkout/v68/widgets", status=500)
        with pytest.raises(ServerError):
            await WidgetService(client).widgets.post({"colour": "red"})


class TestClassicFacades:
    """Tests for the Payment and Recurring facades."""

    def test_registry(self):
        """Test that every family has a facade."""
        assert SERVICES["payment"] is Payment
        assert SERVICES["recurring"] is Recurring

    async def test_authorise(self, client, platform):
        """Test a classic authorisation returning a plain dict."""
        platform.reply("POST", "/pal/servlet/Payment/v64/authorise", json_body={
            "pspReference": "8514836072314693", "resultCode": "Authorised",
        })
        response = await Payment(client).authorise.post({
            "amount": {"currency": "EUR", "value": 1500},
            "reference": "order-1",
            "merchantAccount": "TestMerchant",
        })
        assert response["resultCode"] == "Authorised"
        assert platform.last_request.url.host == "pal-test.adyen.com"

    async def test_modifications(self, client, platform):
        """Test capture and refund modifications."""
        for name in ("capture", "refund", "cancelOrRefund"):
            platform.reply("POST", f"/pal/servlet/Payment/v64/{name}", json_body={
                "pspReference": "8814836072314693", "response": f"[{name}-received]",
            })
        payment = Payment(client)
        assert (await payment.capture.post({"originalReference": "1"}))["response"] == "[capture-received]"
        assert (await payment.refund.post({"originalReference": "1"}))["response"] == "[refund-received]"
        cancelled = await payment.cancel_or_refund.post({"originalReference": "1"})
        assert cancelled["response"] == "[cancelOrRefund-received]"

    async def test_list_recurring_details(self, client, platform):
        """Test listing stored payment details."""
        platform.reply("POST", "/pal/servlet/Recurring/v49/listRecurringDetails", json_body={
            "details": [{"RecurringDetail": {"recurringDetailReference": "8314442372419167"}}],
            "shopperReference": "shopper-1",
        })
        response = await Recurring(client).list_recurring_details.post({
            "merchantAccount": "TestMerchant", "shopperReference": "shopper-1",
        })
        assert response["details"][0]["RecurringDetail"]["recurringDetailReference"]

    def test_live_requires_prefix_per_family(self, client):
        """Test that the LIVE check names the family's endpoint setting."""
        client.set_environment("LIVE")
        with pytest.raises(ConfigurationError) as exc_info:
            Payment(client)
        assert "paymentEndpoint" in str(exc_info.value)
