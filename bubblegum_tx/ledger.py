import logging
from functools import lru_cache
from typing import Protocol

from solana.rpc.api import Client as SolanaClient
from solders.hash import Hash

from .config import Settings
from .errors import LedgerUnavailable

logger = logging.getLogger("bubblegum_tx")


class Ledger(Protocol):
    def get_rent_exemption(self, size: int) -> int: ...

    def get_recent_blockhash(self) -> Hash: ...


class RpcLedger:
    """Ledger queries over JSON-RPC. No retries; callers own retry policy."""

    def __init__(self, endpoint: str, timeout: float = 10.0):
        self.endpoint = endpoint
        self.client = SolanaClient(endpoint, timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Settings) -> "RpcLedger":
        return cls(settings.solana_rpc, timeout=settings.rpc_timeout)

    def get_rent_exemption(self, size: int) -> int:
        try:
            resp = self.client.get_minimum_balance_for_rent_exemption(size)
        except Exception as exc:  # noqa: BLE001
            logger.warning("rent_exemption_failed rpc=%s size=%s error=%s", self.endpoint, size, exc, exc_info=True)
            raise LedgerUnavailable(f"Failed to fetch rent exemption: {exc}") from exc
        return resp.value

    def get_recent_blockhash(self) -> Hash:
        try:
            resp = self.client.get_latest_blockhash()
        except Exception as exc:  # noqa: BLE001
            logger.warning("blockhash_fetch_failed rpc=%s error=%s", self.endpoint, exc, exc_info=True)
            raise LedgerUnavailable(f"Failed to get recent blockhash: {exc}") from exc
        return resp.value.blockhash


@lru_cache()
def shared_ledger(endpoint: str, timeout: float = 10.0) -> RpcLedger:
    """One ledger (and HTTP session) per endpoint for the whole process."""
    return RpcLedger(endpoint, timeout=timeout)


def default_ledger(settings: Settings) -> RpcLedger:
    return shared_ledger(settings.solana_rpc, settings.rpc_timeout)
