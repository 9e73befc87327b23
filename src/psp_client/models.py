"""Request and response containers passed through the request executor."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Generic, Mapping, Optional, TypeVar

T = TypeVar("T")

HTTP_METHODS = frozenset(["GET", "POST", "PATCH", "PUT", "DELETE"])


@dataclass(frozen=True)
class RequestOptions:
    """Per-call options."""
    idempotency_key: Optional[str] = None
    headers: Mapping[str, str] = field(default_factory=dict)
    timeout: Optional[float] = None


@dataclass(frozen=True)
class RequestEnvelope:
    """
    Everything needed to address one API call.

    ``path`` is relative to the family base URL and already has its path
    parameters substituted. ``body`` is a JSON-serialisable mapping or a
    pydantic model; None means no body is sent.
    """
    api_family: str
    method: str
    path: str
    version: Optional[str] = None
    body: Any = None
    headers: Mapping[str, str] = field(default_factory=dict)
    query: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        method = self.method.upper()
        if method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method: {self.method}")
        path = self.path if self.path.startswith("/") else f"/{self.path}"
        object.__setattr__(self, "method", method)
        object.__setattr__(self, "path", path)
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers or {})))
        object.__setattr__(self, "query", MappingProxyType(dict(self.query or {})))


@dataclass(frozen=True)
class ApiResponse(Generic[T]):
    """Successful (2xx) result of an API call."""
    status_code: int
    body: T
    headers: Dict[str, str] = field(default_factory=dict)
    raw_body: str = ""
