#!/usr/bin/env python3
"""Command-line interface for the PSP client.

Credentials and environment come from the ``PSP_*`` environment variables
(see :meth:`psp_client.config.Config.from_env`); the flags below override them.

Usage:
    psp-client endpoint --family checkout --environment LIVE --live-prefix 1797a841fbb37ca7-AdyenDemo
    psp-client call checkout payment_methods.post --data '{"merchantAccount": "YourMerchant"}'
    psp-client call checkout payments.post --data @payment.json --idempotency-key order-42
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Dict, Optional

from pydantic import BaseModel

from .client import Client
from .config import Config
from .endpoints import API_FAMILIES, resolve_endpoint
from .exceptions import ApiError, ConfigurationError
from .services import SERVICES

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_API_ERROR = 1
EXIT_CONFIG_ERROR = 2


def load_payload(data: Optional[str]) -> Dict[str, Any]:
    """Parse ``--data``: inline JSON, or ``@path`` to read JSON from a file.

    Raises:
        ValueError: If the payload is not a JSON object.
    """
    if not data:
        return {}
    if data.startswith("@"):
        with open(data[1:], encoding="utf-8") as f:
            data = f.read()
    try:
        payload = json.loads(data)
    except json.JSONDecodeError as e:
        raise ValueError(f"--data is not valid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise ValueError("--data must be a JSON object")
    return payload


def render(body: Any) -> str:
    if isinstance(body, BaseModel):
        body = body.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(body, indent=2, sort_keys=True)


def build_config(parsed_args: argparse.Namespace) -> Config:
    overrides: Dict[str, Any] = {
        "environment": parsed_args.environment,
        "live_endpoint_url_prefix": parsed_args.live_prefix,
        "timeout": parsed_args.timeout,
    }
    if parsed_args.endpoint:
        overrides["endpoint_overrides"] = {parsed_args.family: parsed_args.endpoint}
    return Config.from_env(**overrides)


async def run_call_async(
    client: Client,
    family: str,
    operation_name: str,
    payload: Dict[str, Any],
    version: Optional[str] = None,
    idempotency_key: Optional[str] = None,
) -> str:
    """Invoke one operation of a service and return the rendered response.

    Raises:
        ValueError: Unknown family or operation.
        ConfigurationError: The family can't be addressed.
        ApiError: The call failed.
    """
    service_class = SERVICES.get(family.lower())
    if service_class is None:
        raise ValueError(f"Unsupported API family: {family}")
    operations = {op.name: op for op in service_class.operations}
    operation = operations.get(operation_name)
    if operation is None:
        raise ValueError(
            f"Unknown operation '{operation_name}' for {family}. "
            f"Available: {', '.join(sorted(operations))}"
        )
    service = service_class(client, version=version)
    logger.info(f"Calling {family} {operation.method} {operation.path}")
    body = await service.call(operation, payload, idempotency_key=idempotency_key)
    return render(body)


async def _call(parsed_args: argparse.Namespace, config: Config, payload: Dict[str, Any]) -> str:
    async with Client(config) as client:
        return await run_call_async(
            client,
            parsed_args.family,
            parsed_args.operation,
            payload,
            version=parsed_args.api_version,
            idempotency_key=parsed_args.idempotency_key,
        )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="psp-client",
        description="Call payment platform APIs from the command line.",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--environment", choices=["TEST", "LIVE", "test", "live"],
                        help="Environment (default: PSP_ENVIRONMENT or TEST)")
    common.add_argument("--live-prefix", help="Live endpoint URL prefix")
    common.add_argument("--endpoint", help="Explicit base URL for the API family")
    common.add_argument("--api-version", help="API version (default: the family default)")
    common.add_argument("--timeout", type=float, help="Request timeout in seconds")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    endpoint_parser = subparsers.add_parser(
        "endpoint", parents=[common], help="Print the resolved base URL of an API family",
    )
    endpoint_parser.add_argument("--family", "-f", default="checkout",
                                 choices=sorted(API_FAMILIES), help="API family (default: checkout)")

    call_parser = subparsers.add_parser(
        "call", parents=[common], help="Invoke an operation, e.g. payments.post",
    )
    call_parser.add_argument("family", choices=sorted(SERVICES), help="API family")
    call_parser.add_argument("operation", help="Dotted operation name, e.g. payment_links.get")
    call_parser.add_argument("--data", "-d", help="JSON object, or @file containing one")
    call_parser.add_argument("--idempotency-key", help="Idempotency-Key header value")

    return parser


def main(args: Optional[list] = None) -> int:
    """Main entry point for the CLI.

    Args:
        args: Optional list of command-line arguments (for testing).

    Returns:
        Exit code.
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return EXIT_CONFIG_ERROR

    try:
        config = build_config(parsed_args)
        if parsed_args.command == "endpoint":
            print(resolve_endpoint(parsed_args.family, config, parsed_args.api_version))
            return EXIT_OK
        payload = load_payload(parsed_args.data)
        print(asyncio.run(_call(parsed_args, config, payload)))
        return EXIT_OK
    except (ConfigurationError, ValueError, OSError) as e:
        logger.error(str(e))
        return EXIT_CONFIG_ERROR
    except ApiError as e:
        logger.error(f"{type(e).__name__}: {e}")
        if e.raw_body:
            print(e.raw_body, file=sys.stderr)
        return EXIT_API_ERROR


if __name__ == "__main__":
    sys.exit(main())
