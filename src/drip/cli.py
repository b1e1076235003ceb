"""CLI subcommands for DRIP operators.

Provides command-line interface for:
- Key operations (add, show, init)
- Faucet transactions (mint, mintfor, publish)
- Queries (key)

Transaction commands build and validate the unsigned message and print it
with its sign bytes; signing and broadcast belong to the ledger client.
"""

import argparse
import asyncio
import getpass
import json
import sys

from pydantic import SecretStr

from drip.blockchain import NodeClient
from drip.config import DripConfig
from drip.core.keyring import FileKeyring
from drip.faucet.bootstrap import KeyBootstrap
from drip.faucet.errors import FaucetError
from drip.faucet.types import MODULE_NAME, MsgFaucetKey, MsgMint
from drip.faucet.validation import validate_mint


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="drip",
        description="DRIP - Denomination Rate-limited Issuance Protocol",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Output in JSON format",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Keys subcommand
    keys_parser = subparsers.add_parser("keys", help="Local key operations")
    keys_sub = keys_parser.add_subparsers(dest="keys_command")

    add_parser = keys_sub.add_parser("add", help="Create a new encrypted key")
    add_parser.add_argument("name", type=str, help="Key name")

    show_parser = keys_sub.add_parser("show", help="Show a key's address")
    show_parser.add_argument("name", type=str, help="Key name")

    init_parser = keys_sub.add_parser("init", help="Import the published faucet key")
    init_parser.add_argument("--node", type=str, default=None, help="Node URL")

    # Tx subcommand
    tx_parser = subparsers.add_parser("tx", help="Faucet transactions")
    tx_sub = tx_parser.add_subparsers(dest="tx_command")

    mint_parser = tx_sub.add_parser("mint", help="Mint coin to the --from key's address")
    mint_parser.add_argument("denom", type=str, help="Denomination to mint")
    mint_parser.add_argument("--from", dest="from_name", type=str, default=None, help="Key name")

    mintfor_parser = tx_sub.add_parser("mintfor", help="Mint coin for an address")
    mintfor_parser.add_argument("address", type=str, help="Recipient address")
    mintfor_parser.add_argument("denom", type=str, help="Denomination to mint")
    mintfor_parser.add_argument(
        "--from", dest="from_name", type=str, default=None, help="Signing key name"
    )

    publish_parser = tx_sub.add_parser(
        "publish",
        help="Publish a key as the public faucet key. Do NOT keep many coins in it",
    )
    publish_parser.add_argument(
        "--from", dest="from_name", type=str, default=None, help="Key name to publish"
    )

    # Query subcommand
    query_parser = subparsers.add_parser("query", help="Faucet queries")
    query_sub = query_parser.add_subparsers(dest="query_command")

    key_parser = query_sub.add_parser("key", help="Show the published faucet key")
    key_parser.add_argument("--node", type=str, default=None, help="Node URL")

    # Run subcommand (start service)
    subparsers.add_parser(
        "run",
        help=(
            "Start the DRIP query and health server. Without REDIS_URL it serves "
            "an empty in-memory store, so the faucet key query answers unpublished"
        ),
    )

    return parser


class CLIContext:
    """Shared context for CLI commands."""

    def __init__(self, config: DripConfig, json_output: bool = False):
        self.config = config
        self.json_output = json_output
        self._keyring: FileKeyring | None = None

    @property
    def keyring(self) -> FileKeyring:
        """Get the local key ring (lazy loaded)."""
        if self._keyring is None:
            self._keyring = FileKeyring(self.config.keyring_dir)
        return self._keyring

    def node_client(self, node_url: str | None = None) -> NodeClient:
        """Get a node client for ``node_url`` or the configured node."""
        return NodeClient(node_url or self.config.node_url)

    def key_address(self, name: str) -> str:
        """Address of a local key, raising if it does not exist."""
        info = self.keyring.get(name)
        if info is None:
            raise FileNotFoundError(f"Key not found: {name}")
        return info.address

    def password(self) -> SecretStr:
        """Key ring password from config, or prompted."""
        if self.config.keyring_password is not None:
            return self.config.keyring_password
        first = getpass.getpass("Enter keyring password: ")
        second = getpass.getpass("Repeat keyring password: ")
        if first != second:
            raise ValueError("Passwords do not match")
        if not first:
            raise ValueError("Password must not be empty")
        return SecretStr(first)

    def output(self, data: dict) -> None:
        """Output data in the appropriate format."""
        if self.json_output:
            print(json.dumps(data, indent=2, ensure_ascii=False))
        else:
            self._print_formatted(data)

    def error(self, e: Exception) -> int:
        """Output an error and return the failure exit code."""
        if isinstance(e, FaucetError):
            self.output({"error": e.message, "code": e.code.value})
        else:
            self.output({"error": str(e)})
        return 1

    def _print_formatted(self, data: dict, indent: int = 0) -> None:
        """Print data in human-readable format."""
        prefix = "  " * indent
        for key, value in data.items():
            if isinstance(value, dict):
                print(f"{prefix}{key}:")
                self._print_formatted(value, indent + 1)
            else:
                print(f"{prefix}{key}: {value}")


def _msg_output(msg: MsgMint | MsgFaucetKey) -> dict:
    return {
        "type": f"{MODULE_NAME}/{msg.type()}",
        "value": msg.model_dump(),
        "signers": msg.get_signers(),
        "sign_bytes": msg.get_sign_bytes().hex(),
    }


# Key commands


def cmd_keys_add(ctx: CLIContext, name: str) -> int:
    """Create a new encrypted key."""
    try:
        info = ctx.keyring.create(name, ctx.password())
        ctx.output({"name": info.name, "address": info.address})
        return 0
    except Exception as e:
        return ctx.error(e)


def cmd_keys_show(ctx: CLIContext, name: str) -> int:
    """Show a key's address."""
    try:
        ctx.output({"name": name, "address": ctx.key_address(name)})
        return 0
    except Exception as e:
        return ctx.error(e)


def cmd_keys_init(ctx: CLIContext, node_url: str | None) -> int:
    """Import the published faucet key from a node."""
    try:
        client = ctx.node_client(node_url)
        bootstrap = KeyBootstrap(ctx.keyring, ctx.config.key_name)
        info = bootstrap.initialize(lambda: asyncio.run(client.fetch_faucet_key()))
        ctx.output(
            {
                "success": True,
                "action": "init",
                "name": info.name,
                "address": info.address,
                "node": client.node_url,
            }
        )
        return 0
    except Exception as e:
        return ctx.error(e)


# Tx commands


def cmd_tx_mint(ctx: CLIContext, denom: str, from_name: str | None) -> int:
    """Build a mint from the faucet key to the --from key's address."""
    try:
        sender = ctx.key_address(ctx.config.key_name)
        minter = ctx.key_address(from_name or ctx.config.key_name)
        msg = MsgMint(sender=sender, minter=minter, denom=denom)
        validate_mint(msg)
        ctx.output(_msg_output(msg))
        return 0
    except Exception as e:
        return ctx.error(e)


def cmd_tx_mintfor(ctx: CLIContext, address: str, denom: str, from_name: str | None) -> int:
    """Build a mint for an arbitrary address."""
    try:
        sender = ctx.key_address(from_name or ctx.config.key_name)
        msg = MsgMint(sender=sender, minter=address, denom=denom)
        validate_mint(msg)
        ctx.output(_msg_output(msg))
        return 0
    except Exception as e:
        return ctx.error(e)


def cmd_tx_publish(ctx: CLIContext, from_name: str | None) -> int:
    """Build a faucet key publication from a local key."""
    try:
        bootstrap = KeyBootstrap(ctx.keyring, ctx.config.key_name)
        msg = bootstrap.build_publish_msg(from_name or ctx.config.key_name)
        ctx.output(_msg_output(msg))
        return 0
    except Exception as e:
        return ctx.error(e)


# Query commands


def cmd_query_key(ctx: CLIContext, node_url: str | None) -> int:
    """Show the published faucet key."""
    try:
        client = ctx.node_client(node_url)
        faucet_key = asyncio.run(client.fetch_faucet_key())
        ctx.output({"published": faucet_key.published, "armor": faucet_key.armor})
        return 0
    except Exception as e:
        return ctx.error(e)


def run_cli(args: argparse.Namespace) -> int:
    """Execute CLI command based on parsed arguments.

    Returns
    -------
    int
        Exit code: 0 for success, positive for error, -1 signals caller
        to show help (no CLI command specified).
    """
    try:
        config = DripConfig()
    except Exception as e:
        if args.json:
            print(json.dumps({"error": f"Configuration error: {e}"}))
        else:
            print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    ctx = CLIContext(config, json_output=args.json)

    if args.command == "keys":
        if args.keys_command == "add":
            return cmd_keys_add(ctx, args.name)
        elif args.keys_command == "show":
            return cmd_keys_show(ctx, args.name)
        elif args.keys_command == "init":
            return cmd_keys_init(ctx, args.node)
        else:
            print("Usage: drip keys [add|show|init]", file=sys.stderr)
            return 1

    elif args.command == "tx":
        if args.tx_command == "mint":
            return cmd_tx_mint(ctx, args.denom, args.from_name)
        elif args.tx_command == "mintfor":
            return cmd_tx_mintfor(ctx, args.address, args.denom, args.from_name)
        elif args.tx_command == "publish":
            return cmd_tx_publish(ctx, args.from_name)
        else:
            print("Usage: drip tx [mint|mintfor|publish]", file=sys.stderr)
            return 1

    elif args.command == "query":
        if args.query_command == "key":
            return cmd_query_key(ctx, args.node)
        else:
            print("Usage: drip query [key]", file=sys.stderr)
            return 1

    else:
        return -1
