"""Client configuration: credentials, environment and endpoint overrides."""

import os
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Optional, Union

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

_ENV_PREFIX = "PSP_"
_ENDPOINT_ENV_SUFFIX = "_ENDPOINT"


class Environment(str, Enum):
    """Deployment target of the platform."""
    TEST = "TEST"
    LIVE = "LIVE"

    @classmethod
    def parse(cls, value: Union["Environment", str]) -> "Environment":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError as e:
            raise ConfigurationError(
                f"Unknown environment '{value}', expected one of: TEST, LIVE"
            ) from e


@dataclass
class Config:
    """
    Configuration shared by a :class:`~psp_client.client.Client` and every
    service built from it.

    Only :meth:`set_environment` mutates an instance. Endpoints are resolved
    again on every request, so a change is seen by the next call. Requests
    already in flight while another task switches the environment may see
    either value; serialising that is up to the caller.
    """
    api_key: Optional[str] = field(default=None, repr=False)
    username: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)
    environment: Environment = Environment.TEST
    live_endpoint_url_prefix: Optional[str] = None
    endpoint_overrides: Dict[str, str] = field(default_factory=dict)
    timeout: float = DEFAULT_TIMEOUT
    application_name: Optional[str] = None

    def __post_init__(self):
        self.environment = Environment.parse(self.environment)
        if not self.api_key and not (self.username and self.password):
            raise ConfigurationError(
                "Provide an api_key, or a username and password, to authenticate requests"
            )
        try:
            timeout = float(self.timeout)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"timeout must be a number of seconds, got '{self.timeout}'"
            ) from e
        if timeout <= 0:
            raise ConfigurationError("timeout must be a positive number of seconds")
        self.timeout = timeout
        # copied; family names are matched case-insensitively
        self.endpoint_overrides = {
            name.lower(): url for name, url in (self.endpoint_overrides or {}).items() if url
        }

    def set_environment(
        self,
        environment: Union[Environment, str],
        live_endpoint_url_prefix: Optional[str] = None,
    ) -> None:
        """Switch between TEST and LIVE.

        Args:
            environment: Target environment.
            live_endpoint_url_prefix: Merchant specific prefix used to build
                LIVE URLs. Required for LIVE unless an endpoint override is
                configured for the family being called. Always replaces the
                previous prefix, so switching without one clears it.
        """
        self.environment = Environment.parse(environment)
        self.live_endpoint_url_prefix = live_endpoint_url_prefix
        logger.info(f"Environment set to {self.environment.value}")

    def endpoint_override(self, family: str) -> Optional[str]:
        """Return the explicit base URL configured for ``family``, if any."""
        return self.endpoint_overrides.get(family.lower())

    @property
    def is_live(self) -> bool:
        return self.environment == Environment.LIVE

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        **overrides,
    ) -> "Config":
        """Build a configuration from ``PSP_*`` environment variables.

        Keyword arguments take precedence over the environment.

        Recognised variables: ``PSP_API_KEY``, ``PSP_USERNAME``,
        ``PSP_PASSWORD``, ``PSP_ENVIRONMENT``, ``PSP_LIVE_URL_PREFIX``,
        ``PSP_TIMEOUT``, ``PSP_APPLICATION_NAME`` and one
        ``PSP_<FAMILY>_ENDPOINT`` per API family (e.g.
        ``PSP_CHECKOUT_ENDPOINT``).
        """
        env = os.environ if environ is None else environ

        endpoint_overrides: Dict[str, str] = {}
        for key, value in env.items():
            if key.startswith(_ENV_PREFIX) and key.endswith(_ENDPOINT_ENV_SUFFIX) and value:
                family = key[len(_ENV_PREFIX):-len(_ENDPOINT_ENV_SUFFIX)].lower()
                if family:
                    endpoint_overrides[family] = value
        endpoint_overrides.update(overrides.pop("endpoint_overrides", None) or {})

        timeout_raw = env.get("PSP_TIMEOUT")
        try:
            timeout = float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT
        except ValueError as e:
            raise ConfigurationError(
                f"PSP_TIMEOUT must be a number of seconds, got '{timeout_raw}'"
            ) from e

        values = {
            "api_key": env.get("PSP_API_KEY"),
            "username": env.get("PSP_USERNAME"),
            "password": env.get("PSP_PASSWORD"),
            "environment": env.get("PSP_ENVIRONMENT") or Environment.TEST,
            "live_endpoint_url_prefix": env.get("PSP_LIVE_URL_PREFIX"),
            "timeout": timeout,
            "application_name": env.get("PSP_APPLICATION_NAME"),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(endpoint_overrides=endpoint_overrides, **values)
