import hashlib
from typing import Sequence, Tuple

from solders.pubkey import Pubkey

from .errors import NoValidAddress

PDA_MARKER = b"ProgramDerivedAddress"
MAX_SEEDS = 16
MAX_SEED_LEN = 32


def derive_pda(seeds: Sequence[bytes], program_id: Pubkey) -> Tuple[Pubkey, int]:
    """Find the first off-curve address for ``seeds``, trying bumps 255 down to 0."""
    if len(seeds) >= MAX_SEEDS:
        raise NoValidAddress(f"Too many seeds: {len(seeds)} (max {MAX_SEEDS - 1} plus bump)")
    for seed in seeds:
        if len(seed) > MAX_SEED_LEN:
            raise NoValidAddress(f"Seed exceeds {MAX_SEED_LEN} bytes: {len(seed)}")
    prefix = b"".join(bytes(seed) for seed in seeds)
    suffix = bytes(program_id) + PDA_MARKER
    for bump in range(255, -1, -1):
        digest = hashlib.sha256(prefix + bytes([bump]) + suffix).digest()
        candidate = Pubkey.from_bytes(digest)
        if not candidate.is_on_curve():
            return candidate, bump
    raise NoValidAddress(f"No off-curve address for program {program_id}")


def tree_config_pda(merkle_tree: Pubkey, bubblegum_program_id: Pubkey) -> Pubkey:
    return derive_pda([bytes(merkle_tree)], bubblegum_program_id)[0]
