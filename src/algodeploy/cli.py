"""
Command-line interface for the Algorand deployer.

Provides commands for inspecting network parameters and replaying signed transactions.
"""

import argparse
import asyncio
import json
import logging
import sys

import structlog

from algodeploy import __version__
from algodeploy.config import DeployerConfig, NetworkType, set_config
from algodeploy.core.executor import SignedTransactionReplayer
from algodeploy.node.algod import AlgodAdapter
from algodeploy.tx.params import get_suggested_params, mk_tx_params
from algodeploy.tx.types import TxParams


def setup_logging(level: str = "INFO", json_format: bool = False) -> None:
    """Configure structured logging."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if json_format
            else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper()),
        stream=sys.stdout,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="algodeploy",
        description="Transaction tooling for Algorand deployments",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--network",
        choices=[n.value for n in NetworkType],
        default=None,
        help="Algorand network (default: from environment, else private)",
    )
    parser.add_argument(
        "--algod-address",
        help="Algod base URL",
    )
    parser.add_argument(
        "--algod-token",
        help="Algod API token",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Output logs in JSON format",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Params command
    params_parser = subparsers.add_parser(
        "params", help="Show suggested params merged with overrides"
    )
    params_parser.add_argument("--total-fee", type=int, help="Flat fee in microAlgos")
    params_parser.add_argument("--fee-per-byte", type=int, help="Fee per byte in microAlgos")
    params_parser.add_argument("--first-valid", type=int, help="First valid round")
    params_parser.add_argument("--valid-rounds", type=int, help="Rounds the transaction stays valid")

    # Replay command
    replay_parser = subparsers.add_parser(
        "replay", help="Submit a previously signed transaction file"
    )
    replay_parser.add_argument("file", help="Signed transaction file (relative to assets dir)")
    replay_parser.add_argument(
        "--wait-rounds",
        type=int,
        default=None,
        help="Rounds to wait for confirmation",
    )

    return parser


def build_config(args: argparse.Namespace) -> DeployerConfig:
    """Create configuration from environment plus command line overrides."""
    overrides = {
        "log_level": args.log_level,
        "log_json": args.log_json,
    }
    if args.network:
        overrides["network"] = NetworkType(args.network)
    if args.algod_address:
        overrides["algod_address"] = args.algod_address
    if args.algod_token:
        overrides["algod_token"] = args.algod_token
    if getattr(args, "wait_rounds", None):
        overrides["wait_rounds"] = args.wait_rounds
    return DeployerConfig(**overrides)


async def show_params(args: argparse.Namespace, config: DeployerConfig) -> None:
    """Print suggested params after applying overrides."""
    node = AlgodAdapter(config)
    try:
        suggested = await get_suggested_params(node)
        params = mk_tx_params(
            TxParams(
                total_fee=args.total_fee,
                fee_per_byte=args.fee_per_byte,
                first_valid=args.first_valid,
                valid_rounds=args.valid_rounds,
            ),
            suggested,
        )
    finally:
        await node.disconnect()

    print(json.dumps({
        "first_round": params.first,
        "last_round": params.last,
        "fee": params.fee,
        "flat_fee": params.flat_fee,
        "genesis_id": params.gen,
        "genesis_hash": params.gh,
    }, indent=2))


async def replay_file(args: argparse.Namespace, config: DeployerConfig) -> None:
    """Resubmit a signed transaction file."""
    node = AlgodAdapter(config)
    replayer = SignedTransactionReplayer(node, config)
    try:
        confirmed = await replayer.execute_signed_txn_from_file(args.file)
    finally:
        await node.disconnect()

    print(json.dumps(confirmed, indent=2, default=str))


def main() -> None:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    setup_logging(args.log_level, args.log_json)
    config = build_config(args)
    set_config(config)

    if args.command == "params":
        asyncio.run(show_params(args, config))
    elif args.command == "replay":
        asyncio.run(replay_file(args, config))


if __name__ == "__main__":
    main()
