"""
Command line access to a SecureWallet account.

Examples:
    securewallet login --email alice@example.com --password secret123
    securewallet wallets
    securewallet deposit --wallet 7 --amount 50.00 --description "paycheck"
    securewallet transactions --page 0 --size 20
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import logging
import sys
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Sequence

from pydantic_core import to_json

from securewallet_client.core.config import Settings, get_settings
from securewallet_client.core.container import ApplicationContainer, build_container
from securewallet_client.domain import Outcome, TransactionFilter, TransactionType, WalletType


def _amount(value: str) -> Decimal:
    try:
        amount = Decimal(value)
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError(f"not a decimal amount: {value}") from exc
    if amount <= 0:
        raise argparse.ArgumentTypeError("amount must be greater than zero")
    return amount


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="securewallet", description="SecureWallet ledger client")
    parser.add_argument("--server", help="ledger service base URL (overrides SECUREWALLET_API__BASE_URL)")
    parser.add_argument("-v", "--verbose", action="store_true", help="log request traffic")
    commands = parser.add_subparsers(dest="command", required=True)

    login = commands.add_parser("login", help="sign in and store credentials")
    login.add_argument("--email", required=True)
    login.add_argument("--password", help="prompted when omitted")

    commands.add_parser("logout", help="sign out and forget stored credentials")
    commands.add_parser("whoami", help="show the signed-in user")
    commands.add_parser("wallets", help="list wallets")

    create = commands.add_parser("create-wallet", help="open a new wallet")
    create.add_argument("--name", required=True)
    create.add_argument("--type", dest="wallet_type", choices=[t.value for t in WalletType], required=True)

    history = commands.add_parser("transactions", help="list transactions")
    history.add_argument("--wallet", type=int)
    history.add_argument("--type", dest="tx_type", choices=[t.value for t in TransactionType])
    history.add_argument("--start-date", type=date.fromisoformat)
    history.add_argument("--end-date", type=date.fromisoformat)
    history.add_argument("--page", type=int, default=0)
    history.add_argument("--size", type=int, default=20)

    for name in ("deposit", "withdraw"):
        sub = commands.add_parser(name, help=f"{name} funds")
        sub.add_argument("--wallet", type=int, required=True)
        sub.add_argument("--amount", type=_amount, required=True)
        sub.add_argument("--description")

    transfer = commands.add_parser("transfer", help="move funds between wallets")
    transfer.add_argument("--from", dest="source", type=int, required=True)
    transfer.add_argument("--to", dest="destination", type=int, required=True)
    transfer.add_argument("--amount", type=_amount, required=True)
    transfer.add_argument("--description")
    return parser


def _emit(value: Any) -> None:
    print(to_json(value, indent=2).decode("utf-8"))


async def _mutate_and_wait(container: ApplicationContainer, outcome: Outcome) -> Outcome:
    if outcome.ok:
        state = await container.ledger.wait_until_consistent()
        return Outcome.fulfilled({"transaction": outcome.value, "wallets": state.wallets})
    return outcome


async def run_command(args: argparse.Namespace, container: ApplicationContainer) -> Outcome:
    session, ledger = container.session, container.ledger

    if args.command == "login":
        password = args.password or getpass.getpass("Password: ")
        return await session.login(args.email, password)
    if args.command == "logout":
        return await session.logout()
    if args.command == "whoami":
        return await session.fetch_current_identity()
    if args.command == "wallets":
        return await ledger.fetch_wallets()
    if args.command == "create-wallet":
        return await ledger.create_wallet(args.name, WalletType(args.wallet_type))
    if args.command == "transactions":
        return await ledger.fetch_transactions(
            TransactionFilter(
                wallet_id=args.wallet,
                type=TransactionType(args.tx_type) if args.tx_type else None,
                start_date=args.start_date,
                end_date=args.end_date,
                page=args.page,
                size=args.size,
            )
        )
    if args.command == "deposit":
        return await _mutate_and_wait(container, await ledger.deposit(args.wallet, args.amount, args.description))
    if args.command == "withdraw":
        return await _mutate_and_wait(container, await ledger.withdraw(args.wallet, args.amount, args.description))
    if args.command == "transfer":
        return await _mutate_and_wait(
            container,
            await ledger.transfer(args.source, args.destination, args.amount, args.description),
        )
    raise SystemExit(f"unknown command: {args.command}")


async def _run(args: argparse.Namespace, settings: Settings) -> int:
    container = build_container(settings, navigator=lambda: print("session expired, please log in again", file=sys.stderr))
    try:
        await container.init_infrastructure()
        outcome = await run_command(args, container)
    finally:
        await container.aclose()

    if not outcome.ok:
        print(f"error: {outcome.error}", file=sys.stderr)
        return 1
    if outcome.value is not None:
        _emit(outcome.value)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    if args.server:
        settings = settings.model_copy(
            update={"api": settings.api.model_copy(update={"base_url": args.server})}
        )

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return asyncio.run(_run(args, settings))


if __name__ == "__main__":
    sys.exit(main())
