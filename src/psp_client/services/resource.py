"""Operation table and the builder that turns it into nested resource objects."""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Type, Union
from urllib.parse import quote

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..client import Client
from ..endpoints import ApiFamily, validate_family
from ..exceptions import InvalidRequestError
from ..models import RequestEnvelope, RequestOptions

logger = logging.getLogger(__name__)

_PATH_PARAM = re.compile(r"{(\w+)}")
_BODYLESS_METHODS = frozenset(["GET", "DELETE"])


@dataclass(frozen=True)
class Operation:
    """One verb on one resource, e.g. ``payment_links.patch``.

    ``name`` is the dotted attribute path ending with the verb; ``path``
    may contain ``{param}`` placeholders that are filled from the request.
    """
    name: str
    method: str
    path: str
    request_model: Optional[Type[BaseModel]] = None
    response_model: Optional[Type[BaseModel]] = None

    @property
    def resource_path(self) -> Tuple[str, ...]:
        return tuple(self.name.split(".")[:-1])

    @property
    def verb(self) -> str:
        return self.name.rsplit(".", 1)[-1]

    @property
    def path_params(self) -> List[str]:
        return _PATH_PARAM.findall(self.path)


class Resource:
    """Attribute namespace for one level of the resource tree."""

    def __init__(self, path: str):
        self._path = path

    def __repr__(self) -> str:
        return f"<Resource {self._path}>"


def _to_payload(request: Any) -> Dict[str, Any]:
    if request is None:
        return {}
    if isinstance(request, BaseModel):
        return request.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(request, Mapping):
        return dict(request)
    raise InvalidRequestError(
        f"Request must be a mapping or a pydantic model, got {type(request).__name__}"
    )


def _pop_path_param(payload: Dict[str, Any], name: str, operation: Operation) -> str:
    if payload.get(name) is None:
        raise InvalidRequestError(f"Missing path parameter '{name}' for {operation.name}")
    return quote(str(payload.pop(name)), safe="")


class Service:
    """
    Base class of the API family facades.

    Subclasses set ``family`` and ``operations``; construction checks that
    the client configuration can address the family and builds the
    attribute tree, so ``operations`` entry ``payments.details.post`` is
    called as ``service.payments.details.post(request)``.
    """

    family: ApiFamily
    operations: Tuple[Operation, ...] = ()

    def __init__(self, client: Client, version: Optional[str] = None):
        validate_family(self.family, client.config)
        self.client = client
        self.version = version
        build_resource_tree(self, self.operations)

    def build_envelope(self, operation: Operation, request: Any = None) -> RequestEnvelope:
        """Turn a request for ``operation`` into an envelope for the executor."""
        payload = _to_payload(request)
        path = operation.path
        for name in operation.path_params:
            path = path.replace(f"{{{name}}}", _pop_path_param(payload, name, operation))

        if operation.request_model is not None and not isinstance(request, BaseModel):
            try:
                validated = operation.request_model.model_validate(payload)
            except PydanticValidationError as e:
                raise InvalidRequestError(
                    f"Invalid {operation.request_model.__name__} for {operation.name}: "
                    f"{e.error_count()} validation error(s)\n{e}"
                ) from e
            payload = validated.model_dump(mode="json", by_alias=True, exclude_none=True)

        method = operation.method.upper()
        if method in _BODYLESS_METHODS:
            return RequestEnvelope(
                api_family=self.family.name,
                method=method,
                path=path,
                version=self.version,
                query=payload,
            )
        return RequestEnvelope(
            api_family=self.family.name,
            method=method,
            path=path,
            version=self.version,
            body=payload,
        )

    async def call(
        self,
        operation: Operation,
        request: Any = None,
        *,
        idempotency_key: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """Execute ``operation`` and return the parsed response body."""
        envelope = self.build_envelope(operation, request)
        options = RequestOptions(
            idempotency_key=idempotency_key,
            headers=dict(headers or {}),
            timeout=timeout,
        )
        response = await self.client.execute(envelope, operation.response_model, options)
        return response.body


def _bind(service: Service, operation: Operation):
    async def invoke(request: Any = None, **kwargs) -> Any:
        return await service.call(operation, request, **kwargs)

    invoke.__name__ = operation.verb
    invoke.__qualname__ = f"{type(service).__name__}.{operation.name}"
    invoke.__doc__ = f"{operation.method.upper()} {operation.path}"
    return invoke


def build_resource_tree(service: Service, operations: Iterable[Operation]) -> None:
    """Attach one :class:`Resource` per path segment and one coroutine function per verb."""
    operations = tuple(operations)
    for operation in operations:
        node: Union[Service, Resource] = service
        walked: List[str] = []
        for segment in operation.resource_path:
            walked.append(segment)
            child = getattr(node, segment, None)
            if child is None:
                child = Resource(".".join(walked))
                setattr(node, segment, child)
            elif not isinstance(child, Resource):
                raise ValueError(f"'{'.'.join(walked)}' is already bound to {child!r}")
            node = child
        if hasattr(node, operation.verb):
            raise ValueError(f"Duplicate operation {operation.name}")
        setattr(node, operation.verb, _bind(service, operation))
    logger.debug(f"Built {type(service).__name__} with {len(operations)} operations")
