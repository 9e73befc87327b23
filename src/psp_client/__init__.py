# psp_client package
__version__ = "0.1.0"

from .config import Config, Environment
from .endpoints import API_FAMILIES, ApiFamily, resolve_endpoint
from .exceptions import (
    PSPClientError,
    ConfigurationError,
    InvalidRequestError,
    ApiError,
    TransportError,
    MalformedResponseError,
    HttpError,
    AuthenticationError,
    ValidationError,
    ServerError,
)
from .classifier import classify
from .models import ApiResponse, RequestEnvelope, RequestOptions
from .transport import HttpTransport, TransportResponse
from .client import Client
from .services import Checkout, Payment, Recurring
