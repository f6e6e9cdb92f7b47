from functools import lru_cache
from typing import NamedTuple

from pydantic_settings import BaseSettings
from solders.pubkey import Pubkey

from .errors import InvalidAddressString

BUBBLEGUM_PROGRAM_ID = "BGUMAp9Gq7iTEuizy4pqaxsTyUCBK68MDfK752saRPUY"
ACCOUNT_COMPRESSION_PROGRAM_ID = "cmtDvXumGCrqC1Age74AVPhSRVXJMd8PJS91L8KbNCK"
NOOP_PROGRAM_ID = "noopb9bkMVfRPU8AsbpTUg8AQkHtKwMYZiFUjNRtMmV"
SYS_PROGRAM_ID = "11111111111111111111111111111111"


class ProgramIds(NamedTuple):
    bubblegum: Pubkey
    compression: Pubkey
    log_wrapper: Pubkey
    system: Pubkey


def load_pubkey(name: str, value: str) -> Pubkey:
    try:
        return Pubkey.from_string(value)
    except Exception as exc:  # noqa: BLE001
        raise InvalidAddressString(name, str(exc)) from exc


class Settings(BaseSettings):
    solana_rpc: str = "https://api.devnet.solana.com"
    rpc_timeout: float = 10.0
    bubblegum_program_id: str = BUBBLEGUM_PROGRAM_ID
    compression_program_id: str = ACCOUNT_COMPRESSION_PROGRAM_ID
    log_wrapper_id: str = NOOP_PROGRAM_ID
    system_program_id: str = SYS_PROGRAM_ID
    tree_max_depth: int = 14
    tree_max_buffer_size: int = 64
    tree_canopy_depth: int = 0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    def program_ids(self) -> ProgramIds:
        return ProgramIds(
            bubblegum=load_pubkey("bubblegum_program_id", self.bubblegum_program_id),
            compression=load_pubkey("compression_program_id", self.compression_program_id),
            log_wrapper=load_pubkey("log_wrapper_id", self.log_wrapper_id),
            system=load_pubkey("system_program_id", self.system_program_id),
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
