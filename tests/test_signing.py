"""
Test suite for transaction signing.
"""

import pytest
from algosdk import encoding
from algosdk.transaction import LogicSigTransaction, SignedTransaction

from algodeploy.tx.builder import mk_transaction
from algodeploy.tx.params import mk_tx_params
from algodeploy.tx.signer import (
    ConflictingCredentialsError,
    MissingLogicSigError,
    MissingSecretKeyError,
    UnknownSignTypeError,
    decode_signed,
    sign_transaction,
)
from algodeploy.tx.types import Account, AlgoTransferParam, SignType, TxParams


def payment(sender: Account, receiver: str, **kwargs) -> AlgoTransferParam:
    kwargs.setdefault("sign", SignType.SECRET_KEY)
    return AlgoTransferParam(
        from_account=sender,
        to_account_addr=receiver,
        amount_micro_algos=1_000_000,
        **kwargs,
    )


@pytest.fixture
def params(suggested_params):
    return mk_tx_params(TxParams(total_fee=1000), suggested_params)


class TestSecretKeySigning:

    def test_sign_and_decode(self, alice, bob, params):
        exec_params = payment(alice, bob.addr)
        txn = mk_transaction(exec_params, params)

        blob = sign_transaction(txn, exec_params)
        decoded = decode_signed(blob)

        assert isinstance(blob, bytes)
        assert isinstance(decoded, SignedTransaction)
        assert decoded.signature is not None
        assert encoding.msgpack_encode(decoded.transaction) == encoding.msgpack_encode(txn)

    def test_missing_secret_key(self, bob, params):
        exec_params = payment(Account(addr=bob.addr), bob.addr)
        txn = mk_transaction(exec_params, params)

        with pytest.raises(MissingSecretKeyError):
            sign_transaction(txn, exec_params)


class TestLogicSignatureSigning:

    def test_contract_account(self, contract_account, contract_lsig, bob, params):
        exec_params = payment(
            contract_account,
            bob.addr,
            sign=SignType.LOGIC_SIGNATURE,
            lsig=contract_lsig,
        )
        txn = mk_transaction(exec_params, params)

        blob = sign_transaction(txn, exec_params)
        decoded = decode_signed(blob)

        assert isinstance(decoded, LogicSigTransaction)
        assert decoded.lsig.logic == contract_lsig.lsig.logic
        assert encoding.msgpack_encode(decoded.transaction) == encoding.msgpack_encode(txn)

    def test_missing_logic_sig(self, contract_account, bob, params):
        exec_params = payment(
            contract_account,
            bob.addr,
            sign=SignType.LOGIC_SIGNATURE,
        )
        txn = mk_transaction(exec_params, params)

        with pytest.raises(MissingLogicSigError):
            sign_transaction(txn, exec_params)

    @pytest.mark.parametrize("sign", [SignType.SECRET_KEY, SignType.LOGIC_SIGNATURE])
    def test_secret_key_and_logic_sig_rejected(self, alice, contract_lsig, bob, params, sign):
        exec_params = payment(alice, bob.addr, sign=sign, lsig=contract_lsig)
        txn = mk_transaction(exec_params, params)

        with pytest.raises(ConflictingCredentialsError, match=alice.addr):
            sign_transaction(txn, exec_params)


class TestUnknownSignType:

    def test_unknown_sign_type(self, alice, bob, params):
        exec_params = payment(alice, bob.addr, sign="multisig")
        txn = mk_transaction(exec_params, params)

        with pytest.raises(UnknownSignTypeError):
            sign_transaction(txn, exec_params)
