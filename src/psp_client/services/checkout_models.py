"""Payload models for the Checkout API.

Field names are snake_case in Python and camelCase on the wire. Unknown
fields are kept, so responses carrying attributes added in newer API
versions still round-trip.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CheckoutModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class Amount(CheckoutModel):
    currency: str = Field(..., min_length=3, max_length=3)
    value: int  # minor units


class Address(CheckoutModel):
    city: str
    country: str
    house_number_or_name: str
    postal_code: str
    street: str
    state_or_province: Optional[str] = None


# payments

class PaymentRequest(CheckoutModel):
    amount: Amount
    merchant_account: str
    payment_method: Dict[str, Any]
    reference: str
    return_url: Optional[str] = None
    channel: Optional[str] = None
    country_code: Optional[str] = None
    shopper_reference: Optional[str] = None
    shopper_email: Optional[str] = None
    shopper_locale: Optional[str] = None
    store_payment_method: Optional[bool] = None
    billing_address: Optional[Address] = None
    delivery_address: Optional[Address] = None
    additional_data: Optional[Dict[str, str]] = None
    metadata: Optional[Dict[str, str]] = None


class PaymentResponse(CheckoutModel):
    psp_reference: Optional[str] = None
    result_code: Optional[str] = None
    merchant_reference: Optional[str] = None
    refusal_reason: Optional[str] = None
    refusal_reason_code: Optional[str] = None
    action: Optional[Dict[str, Any]] = None
    additional_data: Optional[Dict[str, Any]] = None
    amount: Optional[Amount] = None
    order: Optional[Dict[str, Any]] = None


class DetailsRequest(CheckoutModel):
    details: Dict[str, Any]
    payment_data: Optional[str] = None
    three_d_s_authentication_only: Optional[bool] = None


class PaymentDetailsResponse(CheckoutModel):
    psp_reference: Optional[str] = None
    result_code: Optional[str] = None
    merchant_reference: Optional[str] = None
    refusal_reason: Optional[str] = None
    additional_data: Optional[Dict[str, Any]] = None
    action: Optional[Dict[str, Any]] = None


class PaymentVerificationRequest(CheckoutModel):
    payload: str


class PaymentVerificationResponse(CheckoutModel):
    merchant_reference: Optional[str] = None
    psp_reference: Optional[str] = None
    result_code: Optional[str] = None
    shopper_locale: Optional[str] = None
    additional_data: Optional[Dict[str, Any]] = None


# payment methods

class PaymentMethodsRequest(CheckoutModel):
    merchant_account: str
    amount: Optional[Amount] = None
    channel: Optional[str] = None
    country_code: Optional[str] = None
    shopper_locale: Optional[str] = None
    shopper_reference: Optional[str] = None
    allowed_payment_methods: Optional[List[str]] = None
    blocked_payment_methods: Optional[List[str]] = None


class PaymentMethod(CheckoutModel):
    name: Optional[str] = None
    type: Optional[str] = None
    brands: Optional[List[str]] = None
    details: Optional[List[Dict[str, Any]]] = None


class PaymentMethodsResponse(CheckoutModel):
    payment_methods: List[PaymentMethod] = Field(default_factory=list)
    stored_payment_methods: List[Dict[str, Any]] = Field(default_factory=list)
    groups: Optional[List[Dict[str, Any]]] = None


class CheckoutBalanceCheckRequest(CheckoutModel):
    merchant_account: str
    amount: Amount
    payment_method: Dict[str, Any]
    reference: Optional[str] = None


class CheckoutBalanceCheckResponse(CheckoutModel):
    balance: Amount
    psp_reference: Optional[str] = None
    result_code: Optional[str] = None
    refusal_reason: Optional[str] = None
    transaction_limit: Optional[Amount] = None


# payment links

class CreatePaymentLinkRequest(CheckoutModel):
    amount: Amount
    merchant_account: str
    reference: str
    allowed_payment_methods: Optional[List[str]] = None
    blocked_payment_methods: Optional[List[str]] = None
    country_code: Optional[str] = None
    description: Optional[str] = None
    expires_at: Optional[str] = None
    return_url: Optional[str] = None
    shopper_reference: Optional[str] = None
    shopper_email: Optional[str] = None
    shopper_locale: Optional[str] = None
    billing_address: Optional[Address] = None
    delivery_address: Optional[Address] = None


class PaymentLinkResource(CheckoutModel):
    id: str
    amount: Amount
    merchant_account: str
    reference: str
    url: str
    status: str  # active|completed|expired|paid|paymentPending
    expires_at: Optional[str] = None
    description: Optional[str] = None
    country_code: Optional[str] = None
    shopper_reference: Optional[str] = None


class UpdatePaymentLinkRequest(CheckoutModel):
    # only expiring a link is supported by the platform
    status: Literal["expired"]


# payment session (SDK v1 flow)

class PaymentSetupRequest(CheckoutModel):
    amount: Amount
    country_code: str
    merchant_account: str
    reference: str
    return_url: str
    channel: Optional[str] = None
    sdk_version: Optional[str] = None
    origin: Optional[str] = None
    shopper_locale: Optional[str] = None
    shopper_reference: Optional[str] = None


class PaymentSetupResponse(CheckoutModel):
    payment_session: Optional[str] = None
    recurring_details: Optional[List[Dict[str, Any]]] = None


class CheckoutUtilityRequest(CheckoutModel):
    origin_domains: List[str]


class CheckoutUtilityResponse(CheckoutModel):
    origin_keys: Optional[Dict[str, str]] = None


# orders

class CheckoutCreateOrderRequest(CheckoutModel):
    amount: Amount
    merchant_account: str
    reference: str
    expires_at: Optional[str] = None


class CheckoutCreateOrderResponse(CheckoutModel):
    remaining_amount: Amount
    expires_at: Optional[str] = None
    order_data: Optional[str] = None
    psp_reference: Optional[str] = None
    reference: Optional[str] = None
    result_code: Optional[str] = None
    amount: Optional[Amount] = None


class CheckoutOrder(CheckoutModel):
    order_data: str
    psp_reference: Optional[str] = None


class CheckoutCancelOrderRequest(CheckoutModel):
    merchant_account: str
    order: CheckoutOrder


class CheckoutCancelOrderResponse(CheckoutModel):
    psp_reference: str
    result_code: str


# sessions (Drop-in / Components v5 flow)

class CreateCheckoutSessionRequest(CheckoutModel):
    amount: Amount
    merchant_account: str
    reference: str
    return_url: str
    country_code: Optional[str] = None
    channel: Optional[str] = None
    expires_at: Optional[str] = None
    shopper_locale: Optional[str] = None
    shopper_reference: Optional[str] = None


class CreateCheckoutSessionResponse(CheckoutModel):
    id: str
    amount: Amount
    merchant_account: str
    reference: str
    return_url: str
    expires_at: str
    session_data: Optional[str] = None
