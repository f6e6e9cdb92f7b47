"""
Signed transaction builders for Bubblegum compressed NFTs
"""

from .builders import build_create_tree, build_mint_v1, build_transfer
from .entrypoints import BuildResult, create_tree_config, mint_v1, transfer
from .errors import BuilderError

__all__ = [
    # Builders
    "build_create_tree",
    "build_mint_v1",
    "build_transfer",
    # Entry points
    "BuildResult",
    "create_tree_config",
    "mint_v1",
    "transfer",
    "BuilderError",
]
