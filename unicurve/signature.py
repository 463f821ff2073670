from __future__ import annotations

from typing import Optional

from cryptography.hazmat.primitives.asymmetric.utils import decode_dss_signature, encode_dss_signature

from unicurve.exceptions import MalformedSignature, OddLengthSignature, SignatureRangeError


def _size(n: int) -> int:
  return (n.bit_length() + 7) >> 3


class Signature:
  """An ECDSA signature (r, s), not bound to any curve"""

  def __init__(self, r: int, s: int):
    if r < 0 or s < 0:
      raise SignatureRangeError("Signature values must not be negative")
    self.r = r
    self.s = s

  def to_fixed_width(self, width: int = 0) -> bytes:
    """IEEE P1363 r || s, each big-endian in max(width, natural length) bytes."""
    l = max(_size(self.r), _size(self.s), width)
    return self.r.to_bytes(l, "big") + self.s.to_bytes(l, "big")

  @staticmethod
  def from_fixed_width(data: bytes, order: Optional[int] = None) -> Signature:
    l = len(data)
    if l & 1:
      raise OddLengthSignature("IEEE-P1363 signatures must be an even length")
    half = l >> 1
    sig = Signature(int.from_bytes(data[:half], "big"), int.from_bytes(data[half:], "big"))
    return sig.check(order)

  def to_hex(self, width: int = 0) -> str:
    """Hexadecimal fixed-width form (width in bytes per half)"""
    return self.to_fixed_width(width).hex()

  @staticmethod
  def from_hex(hexstr: str, order: Optional[int] = None) -> Signature:
    # An odd number of hex digits is an odd length too (half a byte)
    if len(hexstr) & 1:
      raise OddLengthSignature("IEEE-P1363 signatures must be an even length")
    try:
      data = bytes.fromhex(hexstr)
    except ValueError:
      raise MalformedSignature("Signature is not a hex string") from None
    return Signature.from_fixed_width(data, order)

  def to_der(self) -> bytes:
    return encode_dss_signature(self.r, self.s)

  @staticmethod
  def from_der(data: bytes, order: Optional[int] = None) -> Signature:
    try:
      r, s = decode_dss_signature(bytes(data))
    except ValueError:
      raise MalformedSignature("Invalid DER signature") from None
    return Signature(r, s).check(order)

  def check(self, order: Optional[int]) -> Signature:
    """Reject values that cannot be reduced mod order. Zero is left to verification."""
    if order is not None and (self.r >= order or self.s >= order):
      raise SignatureRangeError("Signature value out of range for the curve order")
    return self

  def __eq__(self, other):
    return isinstance(other, Signature) and (self.r, self.s) == (other.r, other.s)

  def __hash__(self):
    return hash((self.r, self.s))

  def __repr__(self):
    return f"Signature(r={self.r:#x}, s={self.s:#x})"
