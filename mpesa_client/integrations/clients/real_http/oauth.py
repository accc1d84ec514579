"""
Daraja OAuth and authenticated client factory.

- fetch_access_token(): client-credentials exchange, Basic auth with key:secret
- create_authenticated_client(): httpx.AsyncClient bound to the environment's
  base URL with the bearer token preset

Tokens are not cached; every operation performs its own exchange.
"""
from __future__ import annotations

import logging
from typing import Optional

import httpx

from mpesa_client.error_handler import AuthError
from mpesa_client.integrations.contracts.interfaces import Environment
from mpesa_client.integrations.policy.response_wrappers import error_message, response_payload
from mpesa_client.utils.config_loader import DarajaConfig

logger = logging.getLogger(__name__)


async def fetch_access_token(
    key: str,
    secret: str,
    environment: Environment,
    *,
    config: DarajaConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    url = f"{config.base_url(environment)}{config.paths.oauth}"
    logger.debug("[DARAJA] Requesting access token from %s", url)

    try:
        async with httpx.AsyncClient(timeout=config.timeout_seconds, transport=transport) as client:
            response = await client.get(
                url,
                params={"grant_type": "client_credentials"},
                auth=(key, secret),
            )
            response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        payload = response_payload(exc.response)
        logger.error("[DARAJA] Token request rejected status=%s", exc.response.status_code)
        raise AuthError(
            error_message(payload, f"Token request failed with status {exc.response.status_code}"),
            status_code=exc.response.status_code,
            payload=payload,
        ) from exc
    except httpx.HTTPError as exc:
        logger.error("[DARAJA] Token request failed: %s", exc)
        raise AuthError(f"Token request failed: {exc}") from exc

    payload = response_payload(response)
    token = payload.get("access_token") if isinstance(payload, dict) else None
    if not token:
        raise AuthError(
            "Token response did not contain an access_token",
            status_code=response.status_code,
            payload=payload,
        )
    return token


def create_authenticated_client(
    token: str,
    environment: Environment,
    *,
    config: DarajaConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=config.base_url(environment),
        headers={
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        },
        timeout=config.timeout_seconds,
        transport=transport,
    )
