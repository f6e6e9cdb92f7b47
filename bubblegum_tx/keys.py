"""Base58 decoding of keypairs, addresses and 32-byte hashes."""

import base58
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from .errors import InvalidAddressString, InvalidHashLength, InvalidKeyLength, MalformedKey

SECRET_KEY_LEN = 64
PUBKEY_LEN = 32
HASH_LEN = 32


def _b58decode(text: str, what: str) -> bytes:
    if not isinstance(text, str) or not text:
        raise MalformedKey(f"Failed to decode the {what}: empty value")
    try:
        return base58.b58decode(text)
    except ValueError as exc:
        # the offending text may be a secret, keep it out of the message
        raise MalformedKey(f"Failed to decode the {what}: invalid base58") from exc


def decode_secret(text: str) -> Keypair:
    """Decode a base58 64-byte secret key (seed followed by public key)."""
    raw = _b58decode(text, "secret key")
    if len(raw) != SECRET_KEY_LEN:
        raise InvalidKeyLength(SECRET_KEY_LEN, len(raw), "secret key")
    keypair = Keypair.from_seed(raw[:32])
    if bytes(keypair.pubkey()) != raw[32:]:
        raise MalformedKey("Not a valid secret key: public half does not match the seed")
    return keypair


def decode_public(text: str) -> Pubkey:
    raw = _b58decode(text, "public key")
    if len(raw) != PUBKEY_LEN:
        raise InvalidKeyLength(PUBKEY_LEN, len(raw), "public key")
    return Pubkey.from_bytes(raw)


def decode_address(text: str, field: str) -> Pubkey:
    """Like ``decode_public`` but failures name the argument they came from."""
    try:
        return decode_public(text)
    except (MalformedKey, InvalidKeyLength) as exc:
        raise InvalidAddressString(field, exc.message) from exc


def decode_hash(text: str, field: str) -> bytes:
    if not isinstance(text, str):
        raise MalformedKey(f"Invalid {field} string: expected base58 text", {"field": field})
    try:
        raw = base58.b58decode(text)
    except ValueError as exc:
        raise MalformedKey(f"Invalid {field} string", {"field": field}) from exc
    if len(raw) != HASH_LEN:
        raise InvalidHashLength(field, len(raw))
    return raw


def encode_public(pubkey: Pubkey) -> str:
    return base58.b58encode(bytes(pubkey)).decode()
