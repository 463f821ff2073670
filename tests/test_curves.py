import pytest
from cryptography.hazmat.primitives.asymmetric import ec

from unicurve import curves
from unicurve.exceptions import UnsupportedCurve, UnsupportedHash


def test_registry():
  assert curves.CURVES == ("Ed25519", "K256", "P256", "P384", "P521")
  assert curves.DEFAULT_CURVE == "Ed25519"
  p384 = curves.get_curve("P384")
  assert p384 is curves.P384
  assert curves.get_curve(p384) is p384
  assert p384.hash_name == "sha384"
  assert p384.order_size == 48
  assert curves.P521.order_size == 66
  assert curves.P521.order.bit_length() == 521
  assert curves.ED25519.family == curves.SODIUM
  assert curves.ED25519.ec is None
  assert repr(p384) == "CurveDescriptor[P384]"

  for name in ("p256", "", None, "secp256k1"):
    with pytest.raises(UnsupportedCurve):
      curves.get_curve(name)


def test_curve_for():
  assert curves.curve_for(ec.SECP256K1()) is curves.K256
  assert curves.curve_for(ec.SECP521R1()) is curves.P521
  with pytest.raises(UnsupportedCurve):
    curves.curve_for(ec.SECP224R1())


def test_sizes_match_curve():
  """Compressed point and signature sizes follow from the field and order sizes."""
  for c in (curves.K256, curves.P256, curves.P384, curves.P521):
    assert c.public_key_size == 1 + (c.ec.key_size + 7) // 8
    assert c.signature_size == 2 * c.order_size
    assert c.order.bit_length() == c.ec.key_size


def test_hashes():
  assert curves.hash_size("sha256") == 32
  assert curves.hash_size("sha512") == 64
  assert curves.digest("sha384", b"") == bytes.fromhex(
    "38b060a751ac96384cd9327eb1b1e36a21fdb71114be07434c0cc7bf63f6e1da274edebfe76f65fbd51ad2f14898b95b"
  )
  assert curves.crypto_hash("sha224").digest_size == 28
  with pytest.raises(UnsupportedHash):
    curves.digest("md5", b"")
