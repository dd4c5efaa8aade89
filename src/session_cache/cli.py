# src/session_cache/cli.py

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any, Sequence

from .adapters.jwt.decoder import UnverifiedJWTDecoder
from .domain.constants import StorageBackend
from .domain.exceptions import ConfigurationError
from .env import settings_from_env
from .integrations.common.token_store import create_token_store_from_settings
from .logging_config import setup_logging


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="session-cache",
        description="Inspect and maintain cached login tokens",
    )
    parser.add_argument(
        "--account",
        "-a",
        help="Account name (default from env SESSION_CACHE_ACCOUNT_NAME).",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser(
        "status",
        help="Report whether the stored token can be reused.",
    )

    save = sub.add_parser(
        "save",
        help="Store a token for the account, replacing any existing one.",
    )
    save.add_argument("--token", "-t", required=True, help="Token to store.")

    sub.add_parser(
        "invalidate",
        help="Remove the stored token(s) of the account.",
    )

    return parser.parse_args(args=argv)


async def _run(args: argparse.Namespace) -> dict[str, Any]:
    settings = settings_from_env(account_name=args.account)
    if settings.backend is StorageBackend.MEMORY:
        # every CLI run is a fresh process
        raise ConfigurationError(
            "SESSION_CACHE_BACKEND=memory does not persist between runs; use 'file' or 'mongo'"
        )
    setup_logging(settings.log_level, settings.log_format)

    store = create_token_store_from_settings(settings)
    try:
        if args.command == "status":
            token = await store.get_reusable_token()
            claims = UnverifiedJWTDecoder().try_decode(token) if token else None
            return {
                "ok": True,
                "account": store.account_name,
                "reusable": token is not None,
                "expires_at": claims.expires_at.isoformat() if claims else None,
            }

        if args.command == "save":
            ok = await store.save_token(args.token)
        else:
            ok = await store.invalidate_token()
        return {"ok": ok, "account": store.account_name, "command": args.command}
    finally:
        await store.aclose()


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)

    try:
        summary = asyncio.run(_run(args))
        json.dump(summary, sys.stdout, indent=2)
        sys.stdout.write("\n")
    except Exception as exc:  # noqa: BLE001
        json.dump({"ok": False, "error": str(exc)}, sys.stdout, indent=2)
        sys.stdout.write("\n")
        raise


if __name__ == "__main__":
    main()
