#!/usr/bin/env python3
"""
Demo script to deploy an asset on a private network.

This script demonstrates:
1. Creating an ASA from a definition
2. Opting a second account into the asset
3. An atomic group: asset transfer paid for with ALGO
4. Storing a signed transaction and replaying it later
"""

import argparse
import asyncio
import json

from algosdk import mnemonic

from algodeploy.config import DeployerConfig, NetworkType, set_config
from algodeploy.core.executor import SignedTransactionReplayer, TransactionExecutor
from algodeploy.node.algod import AlgodAdapter
from algodeploy.tx.builder import mk_transaction
from algodeploy.tx.files import write_signed_txn_to_file
from algodeploy.tx.params import get_suggested_params, mk_tx_params
from algodeploy.tx.signer import sign_transaction
from algodeploy.tx.types import (
    ASADef,
    Account,
    AlgoTransferParam,
    AssetTransferParam,
    DeployASAParam,
    OptInASAParam,
    SignType,
    TxParams,
)


def account_from_mnemonic(words: str) -> Account:
    """Restore an account from its 25 word mnemonic."""
    sk = mnemonic.to_private_key(words)
    return Account(addr=mnemonic.to_public_key(words), sk=sk)


async def run_demo(creator: Account, buyer: Account, config: DeployerConfig) -> None:
    node = AlgodAdapter(config)
    executor = TransactionExecutor(node, config)

    try:
        print("Deploying ASA 'gold'...")
        created = await executor.execute_transaction(
            DeployASAParam(
                sign=SignType.SECRET_KEY,
                from_account=creator,
                asa_name="gold",
                asa_def=ASADef(
                    total=1_000_000,
                    decimals=0,
                    unit_name="GLD",
                    url="https://gold.example",
                    note="gold reserve",
                    manager=creator.addr,
                    reserve=creator.addr,
                ),
                pay_flags=TxParams(total_fee=1000),
            )
        )
        asset_id = created["asset-index"]
        print(f"  asset id: {asset_id}, round {created['confirmed-round']}")

        print("Opting buyer in...")
        await executor.execute_transaction(
            OptInASAParam(
                sign=SignType.SECRET_KEY,
                from_account=buyer,
                asset_id=asset_id,
            )
        )

        print("Atomic swap: 10 GLD for 1 ALGO...")
        confirmed = await executor.execute_transaction([
            AssetTransferParam(
                sign=SignType.SECRET_KEY,
                from_account=creator,
                to_account_addr=buyer.addr,
                amount=10,
                asset_id=asset_id,
            ),
            AlgoTransferParam(
                sign=SignType.SECRET_KEY,
                from_account=buyer,
                to_account_addr=creator.addr,
                amount_micro_algos=1_000_000,
            ),
        ])
        print(json.dumps(confirmed, indent=2, default=str))

        print("Storing a signed payment and replaying it...")
        suggested = await get_suggested_params(node)
        payment = AlgoTransferParam(
            sign=SignType.SECRET_KEY,
            from_account=creator,
            to_account_addr=buyer.addr,
            amount_micro_algos=1000,
            pay_flags=TxParams(note="replayed"),
        )
        blob = sign_transaction(
            mk_transaction(payment, mk_tx_params(payment.pay_flags, suggested)),
            payment,
        )
        write_signed_txn_to_file("payment.tx", blob, assets_dir=config.assets_dir)

        replayer = SignedTransactionReplayer(node, config)
        replayed = await replayer.execute_signed_txn_from_file("payment.tx")
        print(f"  replayed in round {replayed['confirmed-round']}")
    finally:
        await node.disconnect()


def main():
    parser = argparse.ArgumentParser(
        description="Deploy an ASA and run an atomic swap on a private network"
    )
    parser.add_argument("--creator-mnemonic", required=True, help="Creator account mnemonic")
    parser.add_argument("--buyer-mnemonic", required=True, help="Buyer account mnemonic")
    parser.add_argument("--algod-address", default="http://localhost:4001")
    parser.add_argument("--algod-token", default="a" * 64)
    args = parser.parse_args()

    config = DeployerConfig(
        network=NetworkType.PRIVATE,
        algod_address=args.algod_address,
        algod_token=args.algod_token,
    )
    set_config(config)

    asyncio.run(run_demo(
        account_from_mnemonic(args.creator_mnemonic),
        account_from_mnemonic(args.buyer_mnemonic),
        config,
    ))


if __name__ == "__main__":
    main()
