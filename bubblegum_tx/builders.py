"""
Builder pipelines: decode inputs, derive addresses, assemble instructions,
fetch a blockhash, sign and serialize.

Each builder raises ``BuilderError`` subclasses and returns base64 text.
No keys, addresses or blockhashes are cached between calls.
"""

import logging
from typing import List, Optional, Tuple

from solders.keypair import Keypair

from .config import Settings, get_settings
from .errors import MissingField, UnsupportedProofSource
from .instructions import create_tree, mint_leaf, transfer_leaf
from .keys import decode_address, decode_hash, decode_secret, encode_public
from .ledger import Ledger, default_ledger
from .models import Creator, LeafMetadata, TreeParameters
from .pda import tree_config_pda
from .signer import sign_and_serialize, to_b64

logger = logging.getLogger("bubblegum_tx")


def _resolve(settings: Optional[Settings], ledger: Optional[Ledger]) -> Tuple[Settings, Ledger]:
    settings = settings or get_settings()
    return settings, ledger or default_ledger(settings)


def build_create_tree(
    payer_secret: str,
    params: Optional[TreeParameters] = None,
    tree_keypair: Optional[Keypair] = None,
    settings: Optional[Settings] = None,
    ledger: Optional[Ledger] = None,
) -> Tuple[str, str]:
    """Build a signed create-tree transaction.

    Returns the base64 transaction and the base58 address of the new tree.
    A fresh tree keypair is generated unless one is passed in.
    """
    settings, ledger = _resolve(settings, ledger)
    programs = settings.program_ids()
    payer = decode_secret(payer_secret)
    params = params or TreeParameters(
        max_depth=settings.tree_max_depth,
        max_buffer_size=settings.tree_max_buffer_size,
        canopy_depth=settings.tree_canopy_depth,
    )
    merkle_tree = tree_keypair or Keypair()
    tree_config = tree_config_pda(merkle_tree.pubkey(), programs.bubblegum)

    size = params.account_size()
    rent = ledger.get_rent_exemption(size)
    ixs = create_tree(payer.pubkey(), tree_config, merkle_tree.pubkey(), params, rent, programs)

    blockhash = ledger.get_recent_blockhash()
    raw = sign_and_serialize(list(ixs), payer, [merkle_tree], blockhash)
    tree_address = encode_public(merkle_tree.pubkey())
    logger.info(
        "create_tree_built tree=%s config=%s depth=%s buffer=%s size=%s rent=%s",
        tree_address,
        tree_config,
        params.max_depth,
        params.max_buffer_size,
        size,
        rent,
    )
    return to_b64(raw), tree_address


def build_mint_v1(
    payer_secret: str,
    merkle_tree: str,
    name: str,
    symbol: str,
    uri: str,
    seller_fee_basis_points: int,
    share: int,
    settings: Optional[Settings] = None,
    ledger: Optional[Ledger] = None,
) -> str:
    """Mint one leaf owned by the payer, with the payer as sole verified creator."""
    settings, ledger = _resolve(settings, ledger)
    programs = settings.program_ids()
    payer = decode_secret(payer_secret)
    tree = decode_address(merkle_tree, "merkle_tree")
    tree_config = tree_config_pda(tree, programs.bubblegum)
    metadata = LeafMetadata(
        name=name,
        symbol=symbol,
        uri=uri,
        seller_fee_basis_points=seller_fee_basis_points,
        creators=[Creator(address=payer.pubkey(), share=share, verified=True)],
    )
    ix = mint_leaf(payer.pubkey(), tree_config, tree, metadata, programs)

    blockhash = ledger.get_recent_blockhash()
    raw = sign_and_serialize([ix], payer, [], blockhash)
    logger.info("mint_v1_built tree=%s payer=%s name=%s", tree, payer.pubkey(), name)
    return to_b64(raw)


def _require(value, name: str):
    if value is None:
        raise MissingField(name)
    return value


def build_transfer(
    payer_secret: str,
    new_leaf_owner: str,
    asset_id: Optional[str] = None,
    nonce: Optional[int] = None,
    data_hash: Optional[str] = None,
    creator_hash: Optional[str] = None,
    root: Optional[str] = None,
    proof: Optional[List[str]] = None,
    merkle_tree: Optional[str] = None,
    tree_config: Optional[str] = None,
    index: Optional[int] = None,
    leaf_owner: Optional[str] = None,
    leaf_delegate: Optional[str] = None,
    indexer_proof: Optional[str] = None,
    indexer_asset: Optional[str] = None,
    settings: Optional[Settings] = None,
    ledger: Optional[Ledger] = None,
) -> str:
    """Transfer a leaf to ``new_leaf_owner``.

    ``leaf_owner`` defaults to the payer and ``leaf_delegate`` to the owner.
    Supplying a delegate makes the delegate the signing authority.
    ``indexer_proof``/``indexer_asset`` are raw indexer responses; deriving
    proof data from them is not supported.
    """
    settings, ledger = _resolve(settings, ledger)
    programs = settings.program_ids()
    payer = decode_secret(payer_secret)
    new_owner = decode_address(new_leaf_owner, "new_leaf_owner")
    owner = decode_address(leaf_owner, "leaf_owner") if leaf_owner is not None else payer.pubkey()
    delegate = decode_address(leaf_delegate, "leaf_delegate") if leaf_delegate is not None else None
    asset = decode_address(asset_id, "asset_id") if asset_id is not None else None

    if proof is None:
        if indexer_proof is not None:
            raise UnsupportedProofSource()
        raise MissingField("proof")
    proof_nodes = [decode_hash(node, f"proof[{i}]") for i, node in enumerate(proof)]

    root_bytes = decode_hash(_require(root, "root"), "root")
    data_hash_bytes = decode_hash(_require(data_hash, "data_hash"), "data_hash")
    creator_hash_bytes = decode_hash(_require(creator_hash, "creator_hash"), "creator_hash")
    nonce = _require(nonce, "nonce")
    index = _require(index, "index")
    tree = decode_address(_require(merkle_tree, "merkle_tree"), "merkle_tree")
    if tree_config is not None:
        config = decode_address(tree_config, "tree_config")
    else:
        config = tree_config_pda(tree, programs.bubblegum)

    ix = transfer_leaf(
        new_leaf_owner=new_owner,
        tree_config=config,
        leaf_owner=owner,
        leaf_delegate=delegate,
        merkle_tree=tree,
        root=root_bytes,
        data_hash=data_hash_bytes,
        creator_hash=creator_hash_bytes,
        nonce=nonce,
        index=index,
        proof=proof_nodes,
        program_ids=programs,
    )

    blockhash = ledger.get_recent_blockhash()
    raw = sign_and_serialize([ix], payer, [], blockhash)
    logger.info(
        "transfer_built asset=%s tree=%s to=%s nonce=%s proof_len=%s",
        asset,
        tree,
        new_owner,
        nonce,
        len(proof_nodes),
    )
    return to_b64(raw)
