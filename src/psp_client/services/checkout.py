"""Checkout API: payments, payment methods, payment links, orders and sessions."""

from ..endpoints import CHECKOUT
from .checkout_models import (
    CheckoutBalanceCheckRequest,
    CheckoutBalanceCheckResponse,
    CheckoutCancelOrderRequest,
    CheckoutCancelOrderResponse,
    CheckoutCreateOrderRequest,
    CheckoutCreateOrderResponse,
    CheckoutUtilityRequest,
    CheckoutUtilityResponse,
    CreateCheckoutSessionRequest,
    CreateCheckoutSessionResponse,
    CreatePaymentLinkRequest,
    DetailsRequest,
    PaymentDetailsResponse,
    PaymentLinkResource,
    PaymentMethodsRequest,
    PaymentMethodsResponse,
    PaymentRequest,
    PaymentResponse,
    PaymentSetupRequest,
    PaymentSetupResponse,
    PaymentVerificationRequest,
    PaymentVerificationResponse,
    UpdatePaymentLinkRequest,
)
from .resource import Operation, Service

CHECKOUT_OPERATIONS = (
    Operation("payments.post", "POST", "/payments", PaymentRequest, PaymentResponse),
    Operation("payments.details.post", "POST", "/payments/details", DetailsRequest, PaymentDetailsResponse),
    Operation("payments.result.post", "POST", "/payments/result",
              PaymentVerificationRequest, PaymentVerificationResponse),
    Operation("payment_methods.post", "POST", "/paymentMethods", PaymentMethodsRequest, PaymentMethodsResponse),
    Operation("payment_methods.balance.post", "POST", "/paymentMethods/balance",
              CheckoutBalanceCheckRequest, CheckoutBalanceCheckResponse),
    Operation("payment_links.post", "POST", "/paymentLinks", CreatePaymentLinkRequest, PaymentLinkResource),
    Operation("payment_links.get", "GET", "/paymentLinks/{id}", None, PaymentLinkResource),
    Operation("payment_links.patch", "PATCH", "/paymentLinks/{id}", UpdatePaymentLinkRequest, PaymentLinkResource),
    Operation("payment_session.post", "POST", "/paymentSession", PaymentSetupRequest, PaymentSetupResponse),
    Operation("origin_keys.post", "POST", "/originKeys", CheckoutUtilityRequest, CheckoutUtilityResponse),
    Operation("orders.post", "POST", "/orders", CheckoutCreateOrderRequest, CheckoutCreateOrderResponse),
    Operation("orders.cancel.post", "POST", "/orders/cancel",
              CheckoutCancelOrderRequest, CheckoutCancelOrderResponse),
    Operation("sessions.post", "POST", "/sessions", CreateCheckoutSessionRequest, CreateCheckoutSessionResponse),
)


class Checkout(Service):
    """
    Checkout API facade.

    Raises :class:`~psp_client.exceptions.ConfigurationError` on
    construction when the client is set to LIVE without a live URL prefix
    or a ``checkout`` endpoint override.

    Example::

        checkout = Checkout(client)
        link = await checkout.payment_links.post(request)
        link = await checkout.payment_links.patch({"id": link.id, "status": "expired"})
    """

    family = CHECKOUT
    operations = CHECKOUT_OPERATIONS
