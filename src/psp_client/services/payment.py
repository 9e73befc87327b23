"""Classic Payment API (authorise and modifications). Bodies are plain dicts."""

from ..endpoints import PAYMENT
from .resource import Operation, Service

PAYMENT_OPERATIONS = (
    Operation("authorise.post", "POST", "/authorise"),
    Operation("authorise3d.post", "POST", "/authorise3d"),
    Operation("capture.post", "POST", "/capture"),
    Operation("cancel.post", "POST", "/cancel"),
    Operation("refund.post", "POST", "/refund"),
    Operation("cancel_or_refund.post", "POST", "/cancelOrRefund"),
)


class Payment(Service):
    family = PAYMENT
    operations = PAYMENT_OPERATIONS
