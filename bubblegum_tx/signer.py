import base64
from typing import Dict, Iterable, List

from solders.hash import Hash
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.transaction import Transaction

from .errors import SerializationFailure


def sign_and_serialize(
    instructions: List[Instruction],
    payer: Keypair,
    extra_signers: Iterable[Keypair],
    recent_blockhash: Hash,
) -> bytes:
    """Sign a legacy transaction with ``payer`` as fee payer and return its wire bytes.

    Signature slots follow the message's signer order, so the order in which
    ``extra_signers`` is given does not matter. Keypairs the message does not
    require are not used.
    """
    available: Dict[Pubkey, Keypair] = {payer.pubkey(): payer}
    for kp in extra_signers:
        available.setdefault(kp.pubkey(), kp)
    try:
        message = Message.new_with_blockhash(instructions, payer.pubkey(), recent_blockhash)
    except Exception as exc:  # noqa: BLE001
        raise SerializationFailure(f"Failed to compile the message: {exc}") from exc
    required = list(message.account_keys[: message.header.num_required_signatures])
    missing = [str(key) for key in required if key not in available]
    if missing:
        raise SerializationFailure(f"Transaction missing expected signer keys: {', '.join(missing)}")
    tx = Transaction.new_unsigned(message)
    try:
        tx.sign([available[key] for key in required], recent_blockhash)
        return bytes(tx)
    except Exception as exc:  # noqa: BLE001
        raise SerializationFailure(f"Failed to sign the transaction: {exc}") from exc


def to_b64(raw: bytes) -> str:
    return base64.b64encode(raw).decode()
