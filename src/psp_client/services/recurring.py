"""Recurring API: stored payment details. Bodies are plain dicts."""

from ..endpoints import RECURRING
from .resource import Operation, Service

RECURRING_OPERATIONS = (
    Operation("list_recurring_details.post", "POST", "/listRecurringDetails"),
    Operation("disable.post", "POST", "/disable"),
)


class Recurring(Service):
    family = RECURRING
    operations = RECURRING_OPERATIONS
