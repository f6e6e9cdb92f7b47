"""
Shared fixtures: deterministic keypairs, settings without a .env file, and a
ledger double that never touches the network.
"""

import base64
from typing import List, Tuple

import base58
import pytest
from solders.hash import Hash
from solders.keypair import Keypair
from solders.transaction import Transaction

from bubblegum_tx.config import Settings
from bubblegum_tx.errors import LedgerUnavailable


class FakeLedger:
    def __init__(self, rent: int = 222_000_000, fail: bool = False):
        self.rent = rent
        self.fail = fail
        self.blockhash = Hash.new_unique()
        self.rent_queries: List[int] = []
        self.blockhash_queries = 0

    def get_rent_exemption(self, size: int) -> int:
        if self.fail:
            raise LedgerUnavailable("ledger down")
        self.rent_queries.append(size)
        return self.rent

    def get_recent_blockhash(self) -> Hash:
        if self.fail:
            raise LedgerUnavailable("ledger down")
        self.blockhash_queries += 1
        return self.blockhash


def b58(raw: bytes) -> str:
    return base58.b58encode(raw).decode()


def decode_tx(tx_b64: str) -> Transaction:
    return Transaction.from_bytes(base64.b64decode(tx_b64))


def account_flags(tx: Transaction, index: int) -> Tuple[bool, bool]:
    """(is_signer, is_writable) of a compiled account key."""
    header = tx.message.header
    total = len(tx.message.account_keys)
    signed = header.num_required_signatures
    is_signer = index < signed
    if is_signer:
        is_writable = index < signed - header.num_readonly_signed_accounts
    else:
        is_writable = index < total - header.num_readonly_unsigned_accounts
    return is_signer, is_writable


@pytest.fixture
def payer():
    return Keypair.from_seed(bytes([7] * 32))


@pytest.fixture
def payer_secret(payer):
    return str(payer)


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def programs(settings):
    return settings.program_ids()


@pytest.fixture
def ledger():
    return FakeLedger()


@pytest.fixture
def tree_address():
    return str(Keypair.from_seed(bytes([9] * 32)).pubkey())


@pytest.fixture
def hashes():
    """root, data_hash, creator_hash as base58 strings."""
    return b58(bytes([1] * 32)), b58(bytes([2] * 32)), b58(bytes([3] * 32))


@pytest.fixture
def proof():
    return [b58(bytes([100 + i] * 32)) for i in range(14)]
