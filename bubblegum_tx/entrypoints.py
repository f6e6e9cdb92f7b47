"""Host-facing entry points. Domain failures come back as ``BuildResult``, never raised."""

import logging
from typing import Callable, List, Optional, Tuple, TypeVar

from pydantic import BaseModel

from .builders import build_create_tree, build_mint_v1, build_transfer
from .config import Settings
from .errors import BuilderError
from .ledger import Ledger

logger = logging.getLogger("bubblegum_tx")

T = TypeVar("T")


class BuildResult(BaseModel):
    ok: bool
    transaction: Optional[str] = None
    tree_address: Optional[str] = None
    error_code: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def failure(cls, exc: BuilderError) -> "BuildResult":
        return cls(ok=False, error_code=exc.code, error=exc.message)


def _run(operation: str, fn: Callable[[], T]) -> Tuple[Optional[T], Optional["BuildResult"]]:
    try:
        return fn(), None
    except BuilderError as exc:
        logger.warning("%s_failed code=%s error=%s", operation, exc.code, exc.message)
        return None, BuildResult.failure(exc)


def create_tree_config(
    payer_secret: str,
    settings: Optional[Settings] = None,
    ledger: Optional[Ledger] = None,
) -> BuildResult:
    value, failed = _run("create_tree", lambda: build_create_tree(payer_secret, settings=settings, ledger=ledger))
    if failed:
        return failed
    tx_b64, tree_address = value
    return BuildResult(ok=True, transaction=tx_b64, tree_address=tree_address)


def mint_v1(
    payer_secret: str,
    tree_address: str,
    name: str,
    symbol: str,
    uri: str,
    royalty_bps: int,
    creator_share: int,
    settings: Optional[Settings] = None,
    ledger: Optional[Ledger] = None,
) -> BuildResult:
    value, failed = _run(
        "mint_v1",
        lambda: build_mint_v1(
            payer_secret,
            tree_address,
            name,
            symbol,
            uri,
            royalty_bps,
            creator_share,
            settings=settings,
            ledger=ledger,
        ),
    )
    return failed or BuildResult(ok=True, transaction=value)


def transfer(
    payer_secret: str,
    new_owner: str,
    asset_id: Optional[str],
    nonce: Optional[int],
    data_hash: Optional[str],
    creator_hash: Optional[str],
    root: Optional[str],
    proof_list: Optional[List[str]],
    tree_address: Optional[str],
    settings: Optional[Settings] = None,
    ledger: Optional[Ledger] = None,
) -> BuildResult:
    """Transfer a leaf owned by the payer. Bubblegum assigns leaf index == nonce at mint."""
    value, failed = _run(
        "transfer",
        lambda: build_transfer(
            payer_secret,
            new_owner,
            asset_id=asset_id,
            nonce=nonce,
            data_hash=data_hash,
            creator_hash=creator_hash,
            root=root,
            proof=proof_list,
            merkle_tree=tree_address,
            index=nonce,
            settings=settings,
            ledger=ledger,
        ),
    )
    return failed or BuildResult(ok=True, transaction=value)
