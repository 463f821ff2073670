from secrets import randbelow
from typing import Optional, Tuple

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import Prehashed

from unicurve import nonce
from unicurve.curves import CurveDescriptor, crypto_hash, digest
from unicurve.keys import ECPublicKey, ECSecretKey
from unicurve.signature import Signature

# ECDSA over the cryptography package. OpenSSL only signs with its own nonces,
# so signing is composed here: R = k * G is computed by OpenSSL (constant time,
# as a key derivation from k), and the scalar arithmetic mod n is blinded by a
# random factor because Python integers are not constant time.
# Verification involves no secrets and is left to OpenSSL entirely.


def message_hash(curve: CurveDescriptor, message: bytes, hash_name: Optional[str] = None) -> Tuple[bytes, int]:
  """Return the digest and its integer form z (leftmost qlen bits)"""
  h = digest(hash_name or curve.hash_name, message)
  return h, nonce.bits2int(h, curve.order.bit_length())


def sign(sk: ECSecretKey, message: bytes) -> Signature:
  curve = sk.curve
  n = curve.order
  d = sk.secret
  _, z = message_hash(curve, message)
  while True:
    k = nonce.generate(n, d, z, curve.hash_name)
    r = ec.derive_private_key(k, curve.ec).public_key().public_numbers().x % n
    if r == 0:
      continue
    # s = (z + r d) / k  computed as  b (z + r d) / (b k)
    b = randbelow(n - 1) + 1
    s = pow(b * k % n, -1, n) * (b * (z + r * d) % n) % n
    if s == 0:
      continue
    return Signature(r, s)


def verify(pk: ECPublicKey, message: bytes, sig: Signature) -> bool:
  curve = pk.curve
  if not (0 < sig.r < curve.order and 0 < sig.s < curve.order):
    return False
  h, _ = message_hash(curve, message)
  try:
    pk.key.verify(sig.to_der(), h, ec.ECDSA(Prehashed(crypto_hash(curve.hash_name))))
  except InvalidSignature:
    return False
  return True
