"""API family facades."""

from .resource import Operation, Resource, Service, build_resource_tree
from .checkout import CHECKOUT_OPERATIONS, Checkout
from .payment import PAYMENT_OPERATIONS, Payment
from .recurring import RECURRING_OPERATIONS, Recurring

SERVICES = {
    "checkout": Checkout,
    "payment": Payment,
    "recurring": Recurring,
}

__all__ = [
    "Operation",
    "Resource",
    "Service",
    "build_resource_tree",
    "Checkout",
    "Payment",
    "Recurring",
    "CHECKOUT_OPERATIONS",
    "PAYMENT_OPERATIONS",
    "RECURRING_OPERATIONS",
    "SERVICES",
]
