#!/usr/bin/env python3
"""
Call the Daraja API from the terminal.

Credentials come from the environment (or a .env file):
    MPESA_CONSUMER_KEY, MPESA_CONSUMER_SECRET, MPESA_ENVIRONMENT (sandbox|production),
    MPESA_SECURITY_CREDENTIAL, MPESA_CERTIFICATE_PATH, MPESA_PASS_KEY

Examples:
    python scripts/run_daraja.py stk-push --short-code 174379 --phone 254708374149 --amount 1 \
        --callback-url https://example.com/callback --account-reference INV001
    python scripts/run_daraja.py balance --initiator testapi --party 600000 \
        --result-url https://example.com/result --timeout-url https://example.com/timeout
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from mpesa_client import Credentials, ErrorHandler, IdentifierType, MpesaClient, load_daraja_config


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def build_client(config_path: Path | None) -> MpesaClient:
    credentials = Credentials(
        key=os.environ["MPESA_CONSUMER_KEY"],
        secret=os.environ["MPESA_CONSUMER_SECRET"],
        security_credential=os.getenv("MPESA_SECURITY_CREDENTIAL"),
        certificate_path=os.getenv("MPESA_CERTIFICATE_PATH"),
    )
    return MpesaClient(
        credentials,
        os.getenv("MPESA_ENVIRONMENT", "sandbox"),
        config=load_daraja_config(config_path),
    )


async def run_command(args: argparse.Namespace) -> dict:
    client = build_client(args.config)
    pass_key = args.pass_key or os.getenv("MPESA_PASS_KEY", "")

    if args.command == "stk-push":
        response = await client.stk_push(
            args.short_code,
            args.amount,
            args.phone,
            args.phone,
            args.callback_url,
            args.account_reference,
            pass_key,
        )
    elif args.command == "stk-query":
        response = await client.stk_push_query(args.short_code, args.checkout_request_id, pass_key)
    elif args.command == "balance":
        if not await client.ready():
            logging.getLogger(__name__).warning("Security credential not ready; request will fail")
        response = await client.account_balance(
            args.initiator,
            args.party,
            args.identifier_type,
            args.timeout_url,
            args.result_url,
        )
    elif args.command == "register-urls":
        response = await client.c2b_register(args.short_code, args.confirmation_url, args.validation_url)
    else:
        raise ValueError(f"Unknown command: {args.command}")

    return response.json()


def main() -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(description="M-Pesa Daraja API client")
    parser.add_argument("--config", type=Path, default=None, help="Optional Daraja YAML config")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    stk = sub.add_parser("stk-push", help="Send an STK push prompt")
    stk.add_argument("--short-code", required=True)
    stk.add_argument("--phone", required=True)
    stk.add_argument("--amount", type=int, required=True)
    stk.add_argument("--callback-url", required=True)
    stk.add_argument("--account-reference", required=True)
    stk.add_argument("--pass-key", default=None)

    query = sub.add_parser("stk-query", help="Query an STK push request")
    query.add_argument("--short-code", required=True)
    query.add_argument("--checkout-request-id", required=True)
    query.add_argument("--pass-key", default=None)

    balance = sub.add_parser("balance", help="Query the account balance of a short code")
    balance.add_argument("--initiator", required=True)
    balance.add_argument("--party", required=True)
    balance.add_argument("--identifier-type", type=int, default=int(IdentifierType.SHORT_CODE))
    balance.add_argument("--result-url", required=True)
    balance.add_argument("--timeout-url", required=True)

    register = sub.add_parser("register-urls", help="Register C2B confirmation/validation URLs")
    register.add_argument("--short-code", required=True)
    register.add_argument("--confirmation-url", required=True)
    register.add_argument("--validation-url", required=True)

    args = parser.parse_args()
    setup_logging(args.verbose)

    try:
        result = asyncio.run(run_command(args))
    except Exception as exc:
        result = ErrorHandler().handle_exception(exc, context={"command": args.command})
        print(json.dumps(result, indent=2, default=str))
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
