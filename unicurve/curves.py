import hashlib
from typing import NamedTuple, Optional

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.ec import EllipticCurve

from unicurve.exceptions import UnsupportedCurve, UnsupportedHash

# Key families: "ecdsa" keys are big integer scalars and Weierstrass points
# handled by the cryptography package, "25519" keys are byte strings handled
# by libsodium (Ed25519 for signatures, X25519 for key agreement).
ECDSA = "ecdsa"
SODIUM = "25519"


class CurveDescriptor(NamedTuple):
  name: str
  family: str
  order: int
  hash_name: str
  public_key_size: int  # Compressed point or raw Ed25519 key
  signature_size: int   # Fixed-width (IEEE P1363) r || s, or Ed25519 signature
  ec: Optional[EllipticCurve] = None

  @property
  def order_size(self) -> int:
    """Bytes needed for any scalar mod order (also the ECDH output size)"""
    return (self.order.bit_length() + 7) >> 3

  def __repr__(self): return f"CurveDescriptor[{self.name}]"


ED25519 = CurveDescriptor(
  "Ed25519", SODIUM, 2**252 + 27742317777372353535851937790883648493, "sha512", 32, 64
)
K256 = CurveDescriptor(
  "K256", ECDSA,
  0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141,
  "sha256", 33, 64, ec.SECP256K1(),
)
P256 = CurveDescriptor(
  "P256", ECDSA,
  0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551,
  "sha256", 33, 64, ec.SECP256R1(),
)
P384 = CurveDescriptor(
  "P384", ECDSA,
  0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFC7634D81F4372DDF581A0DB248B0A77AECEC196ACCC52973,
  "sha384", 49, 96, ec.SECP384R1(),
)
P521 = CurveDescriptor(
  "P521", ECDSA,
  0x01FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFA51868783BF2F966B7FCC0148F709A5D03BB5C9B8899C47AEBB6FB71E91386409,
  "sha512", 67, 132, ec.SECP521R1(),
)

_registry = {c.name: c for c in (ED25519, K256, P256, P384, P521)}

CURVES = tuple(_registry)
DEFAULT_CURVE = ED25519.name

# Hash output sizes in bits, the algorithms usable for nonces and transcripts
HASH_BITS = dict(sha1=160, sha224=224, sha256=256, sha384=384, sha512=512)

_hashclass = dict(
  sha1=hashes.SHA1, sha224=hashes.SHA224, sha256=hashes.SHA256, sha384=hashes.SHA384, sha512=hashes.SHA512
)


def get_curve(name) -> CurveDescriptor:
  if isinstance(name, CurveDescriptor):
    return name
  try:
    return _registry[name]
  except (KeyError, TypeError):
    raise UnsupportedCurve(f"Invalid curve choice {name!r}, supported: {', '.join(CURVES)}") from None


def curve_for(ec_curve: EllipticCurve) -> CurveDescriptor:
  """Find the descriptor of a cryptography curve object (e.g. of a parsed key)"""
  for c in _registry.values():
    if c.ec is not None and c.ec.name == ec_curve.name:
      return c
  raise UnsupportedCurve(f"Unsupported curve {ec_curve.name}")


def check_hash(hash_name: str) -> str:
  if hash_name not in HASH_BITS:
    raise UnsupportedHash(f"Unsupported hashing algorithm {hash_name!r}")
  return hash_name


def hash_size(hash_name: str) -> int:
  """Digest size in bytes"""
  return HASH_BITS[check_hash(hash_name)] >> 3


def digest(hash_name: str, data: bytes) -> bytes:
  return hashlib.new(check_hash(hash_name), data).digest()


def crypto_hash(hash_name: str) -> hashes.HashAlgorithm:
  """The cryptography package's hash object for the name"""
  return _hashclass[check_hash(hash_name)]()
