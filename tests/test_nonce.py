from hashlib import sha256

import pytest

from unicurve import nonce
from unicurve.curves import K256, P256, P521
from unicurve.exceptions import NonceGenerationExhausted, UnsupportedHash

# RFC 6979 A.2.5 (P-256, SHA-256, message "sample")
RFC_X = 0xC9AFA9D845BA75166B5C215767B1D6934E50C3DB36E89B127B8A622B120F6721
RFC_K = 0xA6E3C57DD01ABE90086538398355DD4C3B17AA873382B0F24D6129493D8AAD60


def test_int2octets():
  assert nonce.int2octets(0, 4) == bytes(4)
  assert nonce.int2octets(0x0102, 4) == b"\x00\x00\x01\x02"
  assert nonce.int2octets(0x01020304, 4) == b"\x01\x02\x03\x04"
  # Too long values keep their leading bytes
  assert nonce.int2octets(0x0102030405, 4) == b"\x01\x02\x03\x04"


def test_bits2int():
  assert nonce.bits2int(b"\xff", 8) == 0xff
  assert nonce.bits2int(b"\xff", 3) == 7
  assert nonce.bits2int(b"\x12\x34", 12) == 0x123
  # Shorter data is not shifted
  assert nonce.bits2int(b"\x01", 521) == 1
  digest = sha256(b"sample").digest()
  assert nonce.bits2int(digest, 256) == int.from_bytes(digest, "big")


def test_rfc6979_without_hedging(mocker):
  """With no random bytes mixed in, the generator is plain RFC 6979."""
  mocker.patch("unicurve.nonce.token_bytes", return_value=b"")
  h = nonce.bits2int(sha256(b"sample").digest(), 256)
  assert nonce.generate(P256.order, RFC_X, h, "sha256") == RFC_K
  assert nonce.generate(P256.order, RFC_X, h, "sha256") == RFC_K


def test_hedging_consumes_entropy(mocker):
  hedge = mocker.patch("unicurve.nonce.token_bytes", return_value=bytes(32))
  h = nonce.bits2int(sha256(b"sample").digest(), 256)
  k = nonce.generate(P256.order, RFC_X, h, "sha256")
  hedge.assert_called_once_with(32)
  assert k != RFC_K
  # Same hedge, same nonce
  assert nonce.generate(P256.order, RFC_X, h, "sha256") == k


def test_hedged_nonces_differ():
  h = nonce.bits2int(sha256(b"message").digest(), 256)
  k1 = nonce.generate(K256.order, 12345, h, "sha256")
  k2 = nonce.generate(K256.order, 12345, h, "sha256")
  assert k1 != k2
  assert 0 < k1 < K256.order
  assert 0 < k2 < K256.order


def test_range():
  # Three bit candidates 0..7 so that 0 and 7 must be rejected regularly
  seen = {nonce.generate(7, 3, 1234, "sha256") for i in range(300)}
  assert seen == set(range(1, 7))

  for i in range(20):
    assert 0 < nonce.generate(P521.order, P521.order - 1, 1 << 511, "sha512") < P521.order


def test_rejection_sampling(mocker):
  mocker.patch("unicurve.nonce.bits2int", side_effect=[0, P256.order, P256.order + 5, 5])
  assert nonce.generate(P256.order, RFC_X, 1, "sha256") == 5


def test_exhausted(mocker):
  candidate = mocker.patch("unicurve.nonce.bits2int", return_value=0)
  with pytest.raises(NonceGenerationExhausted):
    nonce.generate(P256.order, RFC_X, 1, "sha256")
  assert candidate.call_count == nonce.MAX_TRIES


def test_unsupported_hash():
  with pytest.raises(UnsupportedHash):
    nonce.generate(P256.order, RFC_X, 1, "md5")
