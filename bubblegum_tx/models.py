from dataclasses import dataclass, field
from typing import List

from solders.pubkey import Pubkey

CONCURRENT_MERKLE_TREE_HEADER_SIZE_V1 = 56
NODE_SIZE = 32


@dataclass(frozen=True)
class TreeParameters:
    max_depth: int = 14
    max_buffer_size: int = 64
    canopy_depth: int = 0

    def tree_size(self) -> int:
        # sequence_number, active_index, buffer_size (u64 each), change log ring, rightmost path
        change_log = NODE_SIZE + NODE_SIZE * self.max_depth + 4 + 4
        path = NODE_SIZE * self.max_depth + NODE_SIZE + 4 + 4
        return 8 + 8 + 8 + self.max_buffer_size * change_log + path

    def canopy_size(self) -> int:
        return max(((1 << (self.canopy_depth + 1)) - 2) * NODE_SIZE, 0)

    def account_size(self) -> int:
        return CONCURRENT_MERKLE_TREE_HEADER_SIZE_V1 + self.tree_size() + self.canopy_size()


@dataclass(frozen=True)
class Creator:
    address: Pubkey
    share: int
    verified: bool = True


@dataclass
class LeafMetadata:
    name: str
    symbol: str
    uri: str
    seller_fee_basis_points: int
    creators: List[Creator] = field(default_factory=list)
    is_mutable: bool = False
    primary_sale_happened: bool = False
