from secrets import randbelow

import pytest

from unicurve.curves import K256, P521
from unicurve.exceptions import MalformedSignature, OddLengthSignature, SignatureRangeError
from unicurve.signature import Signature


def test_fixed_width():
  sig = Signature(0x1234, 0x56)
  assert sig.to_fixed_width() == b"\x12\x34\x00\x56"
  assert sig.to_fixed_width(4) == bytes.fromhex("00001234 00000056")
  assert sig.to_hex(4) == "0000123400000056"
  # Width never truncates
  assert len(Signature(1 << 255, 1).to_fixed_width(8)) == 64

  for width in (0, 32, 40):
    sig = Signature(randbelow(K256.order), randbelow(K256.order))
    assert Signature.from_fixed_width(sig.to_fixed_width(width), K256.order) == sig

  # P-521 halves are 66 bytes
  sig = Signature(P521.order - 1, 1)
  data = sig.to_fixed_width(66)
  assert len(data) == 132
  assert Signature.from_fixed_width(data, P521.order) == sig


def test_fixed_width_errors():
  with pytest.raises(OddLengthSignature):
    Signature.from_fixed_width(bytes(63))
  with pytest.raises(OddLengthSignature):
    Signature.from_hex("abc")
  with pytest.raises(MalformedSignature):
    Signature.from_hex("xyzw")
  # Out of range values are rejected only when the order is known
  data = Signature(K256.order, 1).to_fixed_width(32)
  assert Signature.from_fixed_width(data).r == K256.order
  with pytest.raises(SignatureRangeError):
    Signature.from_fixed_width(data, K256.order)
  with pytest.raises(SignatureRangeError):
    Signature(-1, 1)


def test_der():
  sig = Signature(randbelow(K256.order), randbelow(K256.order))
  der = sig.to_der()
  assert der[0] == 0x30
  assert Signature.from_der(der, K256.order) == sig
  assert Signature.from_hex(sig.to_hex()) == sig

  with pytest.raises(MalformedSignature):
    Signature.from_der(b"\x30\x03\x02\x01")
  with pytest.raises(MalformedSignature):
    Signature.from_der(sig.to_fixed_width(32))
  with pytest.raises(SignatureRangeError):
    Signature.from_der(Signature(1, K256.order + 1).to_der(), K256.order)


def test_equality():
  assert Signature(1, 2) == Signature(1, 2)
  assert Signature(1, 2) != Signature(2, 1)
  assert len({Signature(1, 2), Signature(1, 2)}) == 1
  assert repr(Signature(255, 16)) == "Signature(r=0xff, s=0x10)"
