import hashlib
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from borsh_construct import Bool, CStruct, Enum, Option, String, U16, U32, U64, U8, Vec
from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from solders.system_program import CreateAccountParams, create_account

from .config import ProgramIds
from .errors import InvalidMetadata, SerializationFailure
from .models import LeafMetadata, TreeParameters

MAX_CREATORS = 5
MAX_NAME_LEN = 32
MAX_SYMBOL_LEN = 10
MAX_URI_LEN = 200
MAX_BASIS_POINTS = 10_000


TokenStandardLayout = Enum(
    "NonFungible" / CStruct(),
    "FungibleAsset" / CStruct(),
    "Fungible" / CStruct(),
    "NonFungibleEdition" / CStruct(),
    enum_name="TokenStandard",
)
TokenProgramVersionLayout = Enum(
    "Original" / CStruct(),
    "Token2022" / CStruct(),
    enum_name="TokenProgramVersion",
)
UseMethodLayout = Enum(
    "Burn" / CStruct(),
    "Multiple" / CStruct(),
    "Single" / CStruct(),
    enum_name="UseMethod",
)
CollectionLayout = CStruct("verified" / Bool, "key" / U8[32])
UsesLayout = CStruct("use_method" / UseMethodLayout, "remaining" / U64, "total" / U64)
CreatorLayout = CStruct("address" / U8[32], "verified" / Bool, "share" / U8)
MetadataArgsLayout = CStruct(
    "name" / String,
    "symbol" / String,
    "uri" / String,
    "seller_fee_basis_points" / U16,
    "primary_sale_happened" / Bool,
    "is_mutable" / Bool,
    "edition_nonce" / Option(U8),
    "token_standard" / Option(TokenStandardLayout),
    "collection" / Option(CollectionLayout),
    "uses" / Option(UsesLayout),
    "token_program_version" / TokenProgramVersionLayout,
    "creators" / Vec(CreatorLayout),
)
CreateTreeConfigLayout = CStruct(
    "max_depth" / U32,
    "max_buffer_size" / U32,
    "public" / Option(Bool),
)
MintV1Layout = CStruct("metadata" / MetadataArgsLayout)
TransferLayout = CStruct(
    "root" / U8[32],
    "data_hash" / U8[32],
    "creator_hash" / U8[32],
    "nonce" / U64,
    "index" / U32,
)


class AccountSlot(NamedTuple):
    role: str
    is_signer: bool
    is_writable: bool


# Positional account lists of the Bubblegum program, per instruction.
ACCOUNT_TABLES: Dict[str, Tuple[AccountSlot, ...]] = {
    "create_tree_config": (
        AccountSlot("tree_config", False, True),
        AccountSlot("merkle_tree", False, True),
        AccountSlot("payer", True, True),
        AccountSlot("tree_creator", True, False),
        AccountSlot("log_wrapper", False, False),
        AccountSlot("compression_program", False, False),
        AccountSlot("system_program", False, False),
    ),
    "mint_v1": (
        AccountSlot("tree_config", False, True),
        AccountSlot("leaf_owner", False, False),
        AccountSlot("leaf_delegate", False, False),
        AccountSlot("merkle_tree", False, True),
        AccountSlot("payer", True, False),
        AccountSlot("tree_creator_or_delegate", True, False),
        AccountSlot("log_wrapper", False, False),
        AccountSlot("compression_program", False, False),
        AccountSlot("system_program", False, False),
    ),
    "transfer": (
        AccountSlot("tree_config", False, False),
        AccountSlot("leaf_owner", False, False),
        AccountSlot("leaf_delegate", False, False),
        AccountSlot("new_leaf_owner", False, False),
        AccountSlot("merkle_tree", False, True),
        AccountSlot("log_wrapper", False, False),
        AccountSlot("compression_program", False, False),
        AccountSlot("system_program", False, False),
    ),
}


def sighash(name: str) -> bytes:
    return hashlib.sha256(f"global:{name}".encode()).digest()[:8]


def accounts_for(operation: str, keys: Dict[str, Pubkey], signers: Iterable[str] = ()) -> List[AccountMeta]:
    """Lay out ``keys`` in the positional order of ``operation``.

    ``signers`` names roles that sign in this particular call on top of the
    table's fixed signers (transfer authority is decided per call).
    """
    extra = set(signers)
    return [
        AccountMeta(pubkey=keys[slot.role], is_signer=slot.is_signer or slot.role in extra, is_writable=slot.is_writable)
        for slot in ACCOUNT_TABLES[operation]
    ]


def program_keys(program_ids: ProgramIds) -> Dict[str, Pubkey]:
    return {
        "log_wrapper": program_ids.log_wrapper,
        "compression_program": program_ids.compression,
        "system_program": program_ids.system,
    }


def _encode(name: str, layout, values: dict) -> bytes:
    try:
        return sighash(name) + layout.build(values)
    except Exception as exc:  # noqa: BLE001
        raise SerializationFailure(f"Failed to encode {name} arguments: {exc}") from exc


def check_metadata(metadata: LeafMetadata) -> None:
    if not 0 <= metadata.seller_fee_basis_points <= MAX_BASIS_POINTS:
        raise InvalidMetadata(
            f"seller_fee_basis_points must be within 0..{MAX_BASIS_POINTS}, got {metadata.seller_fee_basis_points}"
        )
    if not metadata.creators:
        raise InvalidMetadata("At least one creator is required")
    if len(metadata.creators) > MAX_CREATORS:
        raise InvalidMetadata(f"Too many creators: {len(metadata.creators)} (max {MAX_CREATORS})")
    total = sum(c.share for c in metadata.creators)
    if total != 100:
        raise InvalidMetadata(f"Creator shares must sum to 100, got {total}")
    for label, value, limit in (
        ("name", metadata.name, MAX_NAME_LEN),
        ("symbol", metadata.symbol, MAX_SYMBOL_LEN),
        ("uri", metadata.uri, MAX_URI_LEN),
    ):
        if len(value.encode()) > limit:
            raise InvalidMetadata(f"{label} exceeds {limit} bytes")


def encode_create_tree_config(params: TreeParameters, public: Optional[bool] = False) -> bytes:
    return _encode(
        "create_tree",
        CreateTreeConfigLayout,
        {"max_depth": params.max_depth, "max_buffer_size": params.max_buffer_size, "public": public},
    )


def encode_mint_v1(metadata: LeafMetadata) -> bytes:
    args = {
        "name": metadata.name,
        "symbol": metadata.symbol,
        "uri": metadata.uri,
        "seller_fee_basis_points": metadata.seller_fee_basis_points,
        "primary_sale_happened": metadata.primary_sale_happened,
        "is_mutable": metadata.is_mutable,
        "edition_nonce": None,
        "token_standard": TokenStandardLayout.enum.NonFungible(),
        "collection": None,
        "uses": None,
        "token_program_version": TokenProgramVersionLayout.enum.Original(),
        "creators": [
            {"address": list(bytes(c.address)), "verified": c.verified, "share": c.share}
            for c in metadata.creators
        ],
    }
    return _encode("mint_v1", MintV1Layout, {"metadata": args})


def encode_transfer(root: bytes, data_hash: bytes, creator_hash: bytes, nonce: int, index: int) -> bytes:
    return _encode(
        "transfer",
        TransferLayout,
        {
            "root": list(root),
            "data_hash": list(data_hash),
            "creator_hash": list(creator_hash),
            "nonce": nonce,
            "index": index,
        },
    )


def create_tree(
    payer: Pubkey,
    tree_config: Pubkey,
    merkle_tree: Pubkey,
    params: TreeParameters,
    rent_lamports: int,
    program_ids: ProgramIds,
) -> Tuple[Instruction, Instruction]:
    """Allocate the tree account and initialise its Bubblegum config."""
    allocate_ix = create_account(
        CreateAccountParams(
            from_pubkey=payer,
            to_pubkey=merkle_tree,
            lamports=rent_lamports,
            space=params.account_size(),
            owner=program_ids.compression,
        )
    )
    keys = {
        "tree_config": tree_config,
        "merkle_tree": merkle_tree,
        "payer": payer,
        "tree_creator": payer,
        **program_keys(program_ids),
    }
    config_ix = Instruction(
        program_id=program_ids.bubblegum,
        data=encode_create_tree_config(params, public=False),
        accounts=accounts_for("create_tree_config", keys),
    )
    return allocate_ix, config_ix


def mint_leaf(
    payer: Pubkey,
    tree_config: Pubkey,
    merkle_tree: Pubkey,
    metadata: LeafMetadata,
    program_ids: ProgramIds,
    leaf_owner: Optional[Pubkey] = None,
    leaf_delegate: Optional[Pubkey] = None,
) -> Instruction:
    check_metadata(metadata)
    owner = leaf_owner or payer
    keys = {
        "tree_config": tree_config,
        "leaf_owner": owner,
        "leaf_delegate": leaf_delegate or owner,
        "merkle_tree": merkle_tree,
        "payer": payer,
        "tree_creator_or_delegate": payer,
        **program_keys(program_ids),
    }
    return Instruction(
        program_id=program_ids.bubblegum,
        data=encode_mint_v1(metadata),
        accounts=accounts_for("mint_v1", keys),
    )


def transfer_leaf(
    new_leaf_owner: Pubkey,
    tree_config: Pubkey,
    leaf_owner: Pubkey,
    leaf_delegate: Optional[Pubkey],
    merkle_tree: Pubkey,
    root: bytes,
    data_hash: bytes,
    creator_hash: bytes,
    nonce: int,
    index: int,
    proof: Sequence[bytes],
    program_ids: ProgramIds,
) -> Instruction:
    """Transfer a leaf; the delegate signs when one is given, otherwise the owner."""
    keys = {
        "tree_config": tree_config,
        "leaf_owner": leaf_owner,
        "leaf_delegate": leaf_delegate or leaf_owner,
        "new_leaf_owner": new_leaf_owner,
        "merkle_tree": merkle_tree,
        **program_keys(program_ids),
    }
    authority = "leaf_delegate" if leaf_delegate is not None else "leaf_owner"
    accounts = accounts_for("transfer", keys, signers=[authority])
    accounts.extend(AccountMeta(pubkey=Pubkey.from_bytes(node), is_signer=False, is_writable=False) for node in proof)
    return Instruction(
        program_id=program_ids.bubblegum,
        data=encode_transfer(root, data_hash, creator_hash, nonce, index),
        accounts=accounts,
    )
