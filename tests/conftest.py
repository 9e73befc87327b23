"""Shared test fixtures and configuration."""

import json
import os
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest

from psp_client import Client, Config, HttpTransport

# Keep the developer's real credentials out of the tests
for _key in [k for k in os.environ if k.startswith("PSP_")]:
    del os.environ[_key]

CHECKOUT_VERSION = Client.CHECKOUT_API_VERSION
MERCHANT_ACCOUNT = "TestMerchantAccount"
REFERENCE = "Your order number"


def checkout_path(path: str) -> str:
    """Full URL path of a Checkout resource on the default version."""
    return f"/checkout/{CHECKOUT_VERSION}{path}"


class MockPlatform:
    """
    Canned responses for httpx.MockTransport, keyed by method and URL path.

    Every request is recorded so tests can inspect headers and bodies.
    """

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Any] = {}
        self.requests: List[httpx.Request] = []

    def reply(
        self,
        method: str,
        path: str,
        status: int = 200,
        json_body: Any = None,
        text: Optional[str] = None,
    ) -> None:
        self.routes[(method.upper(), path)] = (status, json_body, text)

    def raise_error(self, method: str, path: str, exc_type: type, message: str) -> None:
        self.routes[(method.upper(), path)] = (exc_type, message)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, text=f"No route for {request.method} {request.url.path}")
        if len(route) == 2:
            exc_type, message = route
            raise exc_type(message, request=request)
        status, json_body, text = route
        if text is not None:
            return httpx.Response(status, text=text)
        if json_body is not None:
            return httpx.Response(status, json=json_body)
        return httpx.Response(status)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.last_request.content)


@pytest.fixture
def platform() -> MockPlatform:
    return MockPlatform()


@pytest.fixture
def config() -> Config:
    return Config(api_key="test_api_key_12345", environment="TEST")


@pytest.fixture
async def client(config, platform):
    """Client whose network calls are served by ``platform``."""
    transport = HttpTransport(transport=httpx.MockTransport(platform.handler))
    client = Client(config, transport=transport)
    yield client
    await client.aclose()


def amount(currency: str = "USD", value: int = 1000) -> Dict[str, Any]:
    return {"currency": currency, "value": value}


@pytest.fixture
def payments_request() -> Dict[str, Any]:
    """Card payment request."""
    return {
        "amount": amount(),
        "merchantAccount": MERCHANT_ACCOUNT,
        "paymentMethod": {
            "cvc": "737",
            "expiryMonth": "03",
            "expiryYear": "2030",
            "holderName": "John Smith",
            "number": "4111111111111111",
            "type": "scheme",
        },
        "reference": REFERENCE,
        "returnUrl": "https://your-company.com/...",
        "shopperReference": "shopperReference",
        "storePaymentMethod": True,
    }


@pytest.fixture
def payments_success() -> Dict[str, Any]:
    return {
        "additionalData": {
            "expiryDate": "3/2030",
            "cardSummary": "1111",
            "paymentMethod": "visa",
        },
        "pspReference": "8535296650153317",
        "resultCode": "Authorised",
        "merchantReference": REFERENCE,
        "amount": amount(),
    }


@pytest.fixture
def payments_multibanco_success() -> Dict[str, Any]:
    return {
        "additionalData": {
            "comprovanteDePagamento": "1",
            "entity": "12101",
        },
        "pspReference": "8111111111111111",
        "resultCode": "PresentToShopper",
        "action": {
            "entity": "12101",
            "expiresAt": "2020-01-12T09:37:49",
            "paymentMethodType": "multibanco",
            "reference": "501 422 944",
            "totalAmount": amount("EUR", 1000),
            "type": "voucher",
        },
    }


@pytest.fixture
def payment_methods_success() -> Dict[str, Any]:
    return {
        "paymentMethods": [
            {"name": "Credit Card", "type": "scheme", "brands": ["visa", "mc", "amex"]},
            {"name": "iDEAL", "type": "ideal"},
        ],
    }


@pytest.fixture
def payment_link_request() -> Dict[str, Any]:
    address = {
        "street": "Roque Petroni Jr",
        "postalCode": "59000060",
        "city": "São Paulo",
        "houseNumberOrName": "999",
        "country": "BR",
        "stateOrProvince": "SP",
    }
    return {
        "allowedPaymentMethods": ["scheme", "boletobancario"],
        "amount": amount(),
        "countryCode": "BR",
        "merchantAccount": MERCHANT_ACCOUNT,
        "shopperReference": "shopperReference",
        "shopperEmail": "test@email.com",
        "shopperLocale": "pt_BR",
        "billingAddress": dict(address),
        "deliveryAddress": dict(address),
        "reference": REFERENCE,
    }


@pytest.fixture
def payment_link_success() -> Dict[str, Any]:
    return {
        "amount": amount(),
        "expiresAt": "2019-12-17T10:05:29Z",
        "reference": REFERENCE,
        "url": "https://test.payment.link/PL6DB3157D27FFBBCF",
        "id": "PL6DB3157D27FFBBCF",
        "merchantAccount": MERCHANT_ACCOUNT,
        "status": "active",
    }
