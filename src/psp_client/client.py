"""Client and request executor shared by every API service."""

import json
import logging
from typing import Any, Optional, Type, Union

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from . import __version__
from .classifier import classify
from .config import Config, Environment
from .endpoints import CHECKOUT, PAYMENT, RECURRING, resolve_endpoint
from .exceptions import MalformedResponseError
from .models import ApiResponse, RequestEnvelope, RequestOptions
from .transport import HttpTransport, TransportResponse

logger = logging.getLogger(__name__)

LIBRARY_NAME = "psp-client-python"
JSON_CONTENT_TYPE = "application/json"


def serialize_body(body: Any) -> Optional[bytes]:
    """Encode a request body as JSON. Models are dumped by alias without unset fields."""
    if body is None:
        return None
    if isinstance(body, BaseModel):
        body = body.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(body).encode("utf-8")


class Client:
    """
    Holds the configuration and the HTTP transport, and executes requests
    built by the service facades.

    Either pass a ready :class:`Config` or the keyword arguments to build
    one, not both::

        client = Client(api_key="...", environment="TEST")
        checkout = Checkout(client)
        response = await checkout.payments.post(request)
    """

    CHECKOUT_API_VERSION = CHECKOUT.default_version
    PAYMENT_API_VERSION = PAYMENT.default_version
    RECURRING_API_VERSION = RECURRING.default_version

    def __init__(
        self,
        config: Optional[Config] = None,
        *,
        transport: Optional[HttpTransport] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        **config_values,
    ):
        if config is not None and config_values:
            raise ValueError("Provide either a Config or individual settings, not both.")
        self.config = config if config is not None else Config(**config_values)
        if transport is not None and http_client is not None:
            raise ValueError("Provide either a transport or an http_client, not both.")
        self.transport = transport or HttpTransport(http_client=http_client)

    def set_environment(
        self,
        environment: Union[Environment, str],
        live_endpoint_url_prefix: Optional[str] = None,
    ) -> None:
        """Switch environment; takes effect on the next request."""
        self.config.set_environment(environment, live_endpoint_url_prefix)

    @property
    def user_agent(self) -> str:
        agent = f"{LIBRARY_NAME}/{__version__}"
        if self.config.application_name:
            agent = f"{self.config.application_name} {agent}"
        return agent

    def _build_headers(
        self,
        envelope: RequestEnvelope,
        options: RequestOptions,
        has_body: bool,
    ) -> httpx.Headers:
        headers = httpx.Headers({"User-Agent": self.user_agent, "Accept": JSON_CONTENT_TYPE})
        if self.config.api_key:
            headers["X-API-Key"] = self.config.api_key
        if has_body:
            headers["Content-Type"] = JSON_CONTENT_TYPE
        if options.idempotency_key:
            headers["Idempotency-Key"] = options.idempotency_key
        # caller supplied headers win, case-insensitively
        for name, value in envelope.headers.items():
            headers[name] = value
        for name, value in options.headers.items():
            headers[name] = value
        return headers

    def _auth(self, headers: httpx.Headers) -> Optional[httpx.Auth]:
        if "X-API-Key" in headers or "Authorization" in headers:
            return None
        if self.config.username and self.config.password:
            return httpx.BasicAuth(self.config.username, self.config.password)
        return None

    def _parse_success(
        self,
        response: TransportResponse,
        response_model: Optional[Type[BaseModel]],
    ) -> Any:
        text = response.text
        if not text or not text.strip():
            data: Any = {}
        else:
            try:
                data = json.loads(text)
            except (ValueError, RecursionError) as e:
                raise MalformedResponseError(
                    f"Response body is not valid JSON: {e}",
                    status_code=response.status_code,
                    raw_body=text,
                ) from e
        if response_model is None:
            return data
        try:
            return response_model.model_validate(data)
        except PydanticValidationError as e:
            raise MalformedResponseError(
                f"Response body does not match {response_model.__name__}: "
                f"{e.error_count()} validation error(s)",
                status_code=response.status_code,
                raw_body=text,
            ) from e

    async def execute(
        self,
        envelope: RequestEnvelope,
        response_model: Optional[Type[BaseModel]] = None,
        options: Optional[RequestOptions] = None,
    ) -> ApiResponse:
        """
        Send ``envelope`` and interpret the response.

        Args:
            envelope: What to call.
            response_model: pydantic model the 2xx body is validated into.
                When None the decoded JSON is returned as is.
            options: Idempotency key, extra headers and timeout for this call.

        Returns:
            ApiResponse carrying the parsed body.

        Raises:
            ConfigurationError: The family can't be addressed with the
                current configuration.
            TransportError: No response was received (includes timeouts).
            MalformedResponseError: 2xx response with an unusable body.
            HttpError: Non-2xx response, one of its subclasses when the
                status is recognised.
        """
        options = options or RequestOptions()
        base_url = resolve_endpoint(envelope.api_family, self.config, envelope.version)
        url = f"{base_url}{envelope.path}"
        content = serialize_body(envelope.body)
        headers = self._build_headers(envelope, options, has_body=content is not None)
        timeout = options.timeout if options.timeout is not None else self.config.timeout

        logger.debug(f"{envelope.method} {url}")
        response = await self.transport.send(
            envelope.method,
            url,
            headers=headers,
            content=content,
            params=envelope.query,
            timeout=timeout,
            auth=self._auth(headers),
        )

        if 200 <= response.status_code < 300:
            body = self._parse_success(response, response_model)
            return ApiResponse(
                status_code=response.status_code,
                body=body,
                headers=response.headers,
                raw_body=response.text,
            )

        error = classify(response.status_code, response.text)
        logger.warning(
            f"{envelope.method} {url} failed with {type(error).__name__} "
            f"(status={response.status_code}, error_code={error.error_code})"
        )
        raise error

    async def aclose(self) -> None:
        await self.transport.aclose()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
