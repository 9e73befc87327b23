"""API family descriptors and base URL resolution."""

from dataclasses import dataclass
from typing import Dict, Optional, Union

from .config import Config, Environment
from .exceptions import ConfigurationError

LIVE_PREFIX_REQUIRED_MESSAGE = (
    "Please provide your unique live url prefix on the setEnvironment() call "
    "on the Client or provide {endpoint_name} in your config object."
)


@dataclass(frozen=True)
class ApiFamily:
    """A group of resources sharing a base URL and a version scheme."""
    name: str
    endpoint_name: str  # name of the override in messages, e.g. checkoutEndpoint
    default_version: str
    test_url: str
    live_suffix: str
    requires_live_prefix: bool = True

    def live_url(self, prefix: str) -> str:
        return f"https://{prefix}-{self.live_suffix}"


CHECKOUT = ApiFamily(
    name="checkout",
    endpoint_name="checkoutEndpoint",
    default_version="v68",
    test_url="https://checkout-test.adyen.com/checkout",
    live_suffix="checkout-live.adyenpayments.com/checkout",
)

PAYMENT = ApiFamily(
    name="payment",
    endpoint_name="paymentEndpoint",
    default_version="v64",
    test_url="https://pal-test.adyen.com/pal/servlet/Payment",
    live_suffix="pal-live.adyenpayments.com/pal/servlet/Payment",
)

RECURRING = ApiFamily(
    name="recurring",
    endpoint_name="recurringEndpoint",
    default_version="v49",
    test_url="https://pal-test.adyen.com/pal/servlet/Recurring",
    live_suffix="pal-live.adyenpayments.com/pal/servlet/Recurring",
)

API_FAMILIES: Dict[str, ApiFamily] = {
    family.name: family for family in (CHECKOUT, PAYMENT, RECURRING)
}


def get_family(family: Union[str, ApiFamily]) -> ApiFamily:
    """Look up a registered family by name.

    Raises:
        ConfigurationError: If the family is not registered.
    """
    if isinstance(family, ApiFamily):
        return family
    try:
        return API_FAMILIES[family.lower()]
    except KeyError as e:
        raise ConfigurationError(
            f"Unknown API family '{family}', expected one of: {', '.join(sorted(API_FAMILIES))}"
        ) from e


def _base_url(family: ApiFamily, config: Config) -> str:
    override = config.endpoint_override(family.name)
    if override:
        return override.rstrip("/")
    if config.environment == Environment.TEST:
        return family.test_url
    prefix = (config.live_endpoint_url_prefix or "").strip()
    if family.requires_live_prefix and not prefix:
        raise ConfigurationError(
            LIVE_PREFIX_REQUIRED_MESSAGE.format(endpoint_name=family.endpoint_name)
        )
    return family.live_url(prefix)


def validate_family(family: Union[str, ApiFamily], config: Config) -> ApiFamily:
    """Check that ``config`` can address ``family`` in its current environment."""
    descriptor = get_family(family)
    _base_url(descriptor, config)
    return descriptor


def resolve_endpoint(
    family: Union[str, ApiFamily],
    config: Config,
    version: Optional[str] = None,
) -> str:
    """
    Build the versioned base URL of an API family.

    An endpoint override is treated as a base URL without a version, so the
    version is appended to it like to the built-in URLs. Nothing is cached:
    the result always reflects the current state of ``config``.

    Args:
        family: Family name or descriptor.
        config: Client configuration.
        version: API version, defaults to the family's default version.

    Returns:
        The base URL, e.g. ``https://checkout-test.adyen.com/checkout/v68``.

    Raises:
        ConfigurationError: Unknown family, empty version, or LIVE without a
            URL prefix or override.
    """
    descriptor = get_family(family)
    version = descriptor.default_version if version is None else version.strip().strip("/")
    if not version:
        raise ConfigurationError("API version must not be empty")
    return f"{_base_url(descriptor, config)}/{version}"
