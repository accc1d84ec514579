"""
Daraja configuration loader (base URLs, endpoint paths, transport timeout).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)


class EndpointPaths(BaseModel):
    oauth: str = "/oauth/v1/generate"
    b2c: str = "/mpesa/b2c/v1/paymentrequest"
    b2b: str = "/mpesa/b2b/v1/paymentrequest"
    c2b_register: str = "/mpesa/c2b/v1/registerurl"
    c2b_simulate: str = "/mpesa/c2b/v1/simulate"
    account_balance: str = "/mpesa/accountbalance/v1/query"
    transaction_status: str = "/mpesa/transactionstatus/v1/query"
    reversal: str = "/mpesa/reversal/v1/request"
    stk_push: str = "/mpesa/stkpush/v1/processrequest"
    stk_query: str = "/mpesa/stkpushquery/v1/query"


class DarajaConfig(BaseModel):
    base_urls: Dict[str, str] = Field(
        default_factory=lambda: {
            "sandbox": "https://sandbox.safaricom.co.ke",
            "production": "https://api.safaricom.co.ke",
        }
    )
    paths: EndpointPaths = Field(default_factory=EndpointPaths)
    timeout_seconds: float = Field(default=30.0, gt=0, le=300)
    sandbox_security_credential: str = "Safaricom868!"

    def base_url(self, environment: str) -> str:
        key = getattr(environment, "value", environment)
        try:
            return self.base_urls[key].rstrip("/")
        except KeyError:
            raise ValueError(f"No base URL configured for environment '{key}'") from None


def load_daraja_config(config_path: Optional[Path] = None) -> DarajaConfig:
    """
    Load and validate Daraja configuration.

    Args:
        config_path: Optional YAML file. Without one the built-in defaults are used.

    Raises:
        FileNotFoundError: If an explicit config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    if config_path is None:
        return DarajaConfig()

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Daraja config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    try:
        cfg = DarajaConfig(**data)
        logger.info("Successfully loaded Daraja config from %s", config_path)
        return cfg
    except ValidationError as e:
        logger.error("Daraja config validation failed: %s", e)
        raise
