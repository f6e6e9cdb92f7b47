import base58
import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from bubblegum_tx.errors import InvalidAddressString, InvalidHashLength, InvalidKeyLength, MalformedKey
from bubblegum_tx.keys import decode_address, decode_hash, decode_public, decode_secret, encode_public


class TestDecodeSecret:
    def test_round_trip(self, payer, payer_secret):
        kp = decode_secret(payer_secret)
        assert kp.pubkey() == payer.pubkey()
        assert decode_public(encode_public(kp.pubkey())) == payer.pubkey()
        assert bytes(decode_public(str(kp.pubkey()))) == bytes(payer.pubkey())

    def test_deterministic(self, payer_secret):
        assert decode_secret(payer_secret).pubkey() == decode_secret(payer_secret).pubkey()

    def test_bad_alphabet(self):
        with pytest.raises(MalformedKey):
            decode_secret("0OIl" * 20)

    def test_empty(self):
        with pytest.raises(MalformedKey):
            decode_secret("")

    def test_wrong_length(self):
        with pytest.raises(InvalidKeyLength) as exc_info:
            decode_secret(base58.b58encode(bytes(32)).decode())
        assert exc_info.value.expected == 64
        assert exc_info.value.actual == 32

    def test_mismatched_public_half(self):
        seed = bytes(Keypair.from_seed(bytes([1] * 32)))[:32]
        other = bytes(Keypair.from_seed(bytes([2] * 32)).pubkey())
        with pytest.raises(MalformedKey):
            decode_secret(base58.b58encode(seed + other).decode())

    def test_secret_not_in_message(self):
        secret = "0" + "1" * 40
        with pytest.raises(MalformedKey) as exc_info:
            decode_secret(secret)
        assert secret not in str(exc_info.value)


class TestDecodePublic:
    def test_system_program(self):
        assert decode_public("11111111111111111111111111111111") == Pubkey.default()

    def test_short(self):
        with pytest.raises(InvalidKeyLength):
            decode_public(base58.b58encode(bytes([5] * 31)).decode())

    def test_address_names_field(self):
        with pytest.raises(InvalidAddressString) as exc_info:
            decode_address("not-a-key!", "new_leaf_owner")
        assert exc_info.value.field == "new_leaf_owner"
        assert "new_leaf_owner" in str(exc_info.value)


class TestDecodeHash:
    def test_ok(self):
        raw = bytes(range(32))
        assert decode_hash(base58.b58encode(raw).decode(), "root") == raw

    @pytest.mark.parametrize("size", [0, 31, 33, 64])
    def test_wrong_length(self, size):
        with pytest.raises(InvalidHashLength) as exc_info:
            decode_hash(base58.b58encode(bytes([9] * size)).decode(), "data_hash")
        assert exc_info.value.field == "data_hash"

    def test_bad_alphabet(self):
        with pytest.raises(MalformedKey) as exc_info:
            decode_hash("I" * 44, "root")
        assert exc_info.value.details == {"field": "root"}

    @pytest.mark.parametrize("value", [None, 123, b"abc"])
    def test_non_text(self, value):
        with pytest.raises(MalformedKey) as exc_info:
            decode_hash(value, "proof[0]")
        assert exc_info.value.details == {"field": "proof[0]"}
