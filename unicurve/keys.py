from __future__ import annotations

from functools import cached_property
from typing import Tuple, Union

import nacl.bindings as sodium
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding, PrivateFormat, PublicFormat

from unicurve.curves import ECDSA, ED25519, SODIUM, CurveDescriptor, curve_for, get_curve
from unicurve.exceptions import (
  IncompatibleKeyFamily, InvalidKeyLength, MalformedKeyError, MalformedPoint, UnsupportedOperationForFamily
)

# Keys are a tagged variant over two families:
#  - ECDSA keys (K256, P256, P384, P521): an integer scalar and a curve point,
#    with all group operations done by the cryptography package (OpenSSL).
#  - 25519 keys: Ed25519 signing keys and their X25519 (Montgomery) forms as
#    raw byte strings for libsodium.
# Every key has a `family` and a `curve`. Operations that only make sense for
# one family raise UnsupportedOperationForFamily on the other.


def _unsupported(key, what: str):
  raise UnsupportedOperationForFamily(f"{what} is not part of the {key.family} interface ({type(key).__name__})")


class ECSecretKey:
  family = ECDSA

  def __init__(self, secret: int, curve="P256"):
    self.curve = get_curve(curve)
    if self.curve.family != ECDSA:
      raise IncompatibleKeyFamily(f"ECSecretKey cannot be on curve {self.curve.name}")
    if not 0 < secret < self.curve.order:
      raise MalformedKeyError(f"Secret scalar out of range for {self.curve.name}")
    self.key = ec.derive_private_key(secret, self.curve.ec)

  @staticmethod
  def generate(curve="P256") -> ECSecretKey:
    curve = get_curve(curve)
    if curve.family != ECDSA:
      raise IncompatibleKeyFamily(f"ECSecretKey cannot be on curve {curve.name}")
    return ECSecretKey.from_key(ec.generate_private_key(curve.ec))

  @staticmethod
  def from_key(key: ec.EllipticCurvePrivateKey) -> ECSecretKey:
    """Wrap a private key object of the cryptography package."""
    sk = ECSecretKey.__new__(ECSecretKey)
    sk.curve = curve_for(key.curve)
    sk.key = key
    return sk

  @staticmethod
  def import_pem(pem: Union[str, bytes]) -> ECSecretKey:
    if isinstance(pem, str):
      pem = pem.encode()
    try:
      key = serialization.load_pem_private_key(pem, password=None)
    except (ValueError, TypeError) as e:
      raise MalformedKeyError(f"Unable to parse EC private key: {e}") from None
    if not isinstance(key, ec.EllipticCurvePrivateKey):
      raise IncompatibleKeyFamily(f"Not an EC private key: {type(key).__name__}")
    return ECSecretKey.from_key(key)

  def export_pem(self) -> str:
    return self.key.private_bytes(Encoding.PEM, PrivateFormat.TraditionalOpenSSL, serialization.NoEncryption()).decode()

  @property
  def secret(self) -> int:
    return self.key.private_numbers().private_value

  def public_key(self) -> ECPublicKey:
    return self._public

  @cached_property
  def _public(self) -> ECPublicKey:
    return ECPublicKey(self.key.public_key(), self.curve)

  def exchange(self, public: ECPublicKey) -> bytes:
    """Raw ECDH: the x coordinate of secret * public, big-endian, padded to the order size."""
    if not isinstance(public, ECPublicKey) or public.curve != self.curve:
      raise IncompatibleKeyFamily(f"Cannot exchange {self!r} with {public!r}")
    shared = self.key.exchange(ec.ECDH(), public.key)
    return shared.rjust(self.curve.order_size, b"\x00")

  def montgomery(self):
    _unsupported(self, "Montgomery conversion")

  def __eq__(self, other):
    return isinstance(other, ECSecretKey) and self.public_key() == other.public_key()

  def __hash__(self):
    return hash(self.public_key())

  def __repr__(self):
    return f"ECSecretKey[{self.curve.name}:{self.public_key().hex()[:8]}]"


class ECPublicKey:
  family = ECDSA

  def __init__(self, key: ec.EllipticCurvePublicKey, curve=None):
    self.curve = curve_for(key.curve) if curve is None else get_curve(curve)
    if self.curve.family != ECDSA or self.curve.ec.name != key.curve.name:
      raise IncompatibleKeyFamily(f"Public key on {key.curve.name} does not match curve {self.curve.name}")
    self.key = key

  @staticmethod
  def from_bytes(data: bytes, curve="P256") -> ECPublicKey:
    """Decode a compressed (X9.62) point."""
    curve = get_curve(curve)
    if curve.family != ECDSA:
      raise IncompatibleKeyFamily(f"Curve {curve.name} does not use EC points")
    data = bytes(data)
    if len(data) != curve.public_key_size:
      raise InvalidKeyLength(f"Public key is the wrong size for {curve.name} ({len(data)} != {curve.public_key_size})")
    try:
      key = ec.EllipticCurvePublicKey.from_encoded_point(curve.ec, data)
    except ValueError:
      raise MalformedPoint(f"Not a valid {curve.name} point") from None
    return ECPublicKey(key, curve)

  @staticmethod
  def from_hex(hexstr: str, curve="P256") -> ECPublicKey:
    try:
      data = bytes.fromhex(hexstr)
    except ValueError:
      raise MalformedKeyError("Public key is not a hex string") from None
    return ECPublicKey.from_bytes(data, curve)

  @staticmethod
  def import_pem(pem: Union[str, bytes]) -> ECPublicKey:
    if isinstance(pem, str):
      pem = pem.encode()
    try:
      key = serialization.load_pem_public_key(pem)
    except (ValueError, TypeError) as e:
      raise MalformedKeyError(f"Unable to parse EC public key: {e}") from None
    if not isinstance(key, ec.EllipticCurvePublicKey):
      raise IncompatibleKeyFamily(f"Not an EC public key: {type(key).__name__}")
    return ECPublicKey(key)

  def export_pem(self) -> str:
    return self.key.public_bytes(Encoding.PEM, PublicFormat.SubjectPublicKeyInfo).decode()

  def der(self) -> bytes:
    """SubjectPublicKeyInfo DER (uncompressed point), as hashed in key exchange transcripts."""
    return self.key.public_bytes(Encoding.DER, PublicFormat.SubjectPublicKeyInfo)

  @property
  def point(self) -> Tuple[int, int]:
    n = self.key.public_numbers()
    return n.x, n.y

  def montgomery(self):
    _unsupported(self, "Montgomery conversion")

  def hex(self) -> str:
    return bytes(self).hex()

  def __bytes__(self):
    return self.key.public_bytes(Encoding.X962, PublicFormat.CompressedPoint)

  def __str__(self):
    return self.hex()

  def __eq__(self, other):
    return isinstance(other, ECPublicKey) and self.curve == other.curve and bytes(self) == bytes(other)

  def __hash__(self):
    return hash(bytes(self))

  def __repr__(self):
    return f"ECPublicKey[{self.curve.name}:{self.hex()[:8]}]"


class EdwardsSecretKey:
  family = SODIUM
  curve = ED25519

  def __init__(self, key_material: bytes):
    key_material = bytes(key_material)
    l = len(key_material)
    if l == sodium.crypto_sign_SEEDBYTES:
      pk, sk = sodium.crypto_sign_seed_keypair(key_material)
    elif l == sodium.crypto_sign_SECRETKEYBYTES:
      sk = key_material
    elif l == sodium.crypto_sign_SECRETKEYBYTES + sodium.crypto_sign_PUBLICKEYBYTES:
      # PHP/libsodium keypair format: sk || pk (where sk already ends in pk)
      sk = key_material[:sodium.crypto_sign_SECRETKEYBYTES]
      if key_material[sodium.crypto_sign_SECRETKEYBYTES:] != sk[32:]:
        raise MalformedKeyError("Secret and public key mismatch")
    else:
      raise InvalidKeyLength(f"Invalid Ed25519 secret key length {l}")
    self.sk = sk
    if sodium.crypto_sign_seed_keypair(sk[:32])[1] != sk:
      raise MalformedKeyError("Secret and public key mismatch")

  @staticmethod
  def generate() -> EdwardsSecretKey:
    pk, sk = sodium.crypto_sign_keypair()
    return EdwardsSecretKey(sk)

  @property
  def seed(self) -> bytes:
    return self.sk[:32]

  @property
  def secret(self):
    _unsupported(self, "Scalar secret")

  def public_key(self) -> EdwardsPublicKey:
    return EdwardsPublicKey(self.sk[32:])

  @cached_property
  def _montgomery(self) -> MontgomerySecretKey:
    return MontgomerySecretKey(sodium.crypto_sign_ed25519_sk_to_curve25519(self.sk))

  def montgomery(self) -> MontgomerySecretKey:
    """The X25519 secret key (the clamped hashed seed)"""
    return self._montgomery

  def __bytes__(self):
    return self.sk

  def __eq__(self, other):
    return isinstance(other, EdwardsSecretKey) and self.public_key() == other.public_key()

  def __hash__(self):
    return hash(self.public_key())

  def __repr__(self):
    return f"EdwardsSecretKey[{self.sk[32:].hex()[:8]}]"


class EdwardsPublicKey:
  family = SODIUM
  curve = ED25519

  def __init__(self, key_material: bytes):
    key_material = bytes(key_material)
    if len(key_material) != sodium.crypto_sign_PUBLICKEYBYTES:
      raise InvalidKeyLength(f"Invalid Ed25519 public key length {len(key_material)}")
    self.pk = key_material

  @staticmethod
  def from_hex(hexstr: str) -> EdwardsPublicKey:
    try:
      data = bytes.fromhex(hexstr)
    except ValueError:
      raise MalformedKeyError("Public key is not a hex string") from None
    return EdwardsPublicKey(data)

  @cached_property
  def _montgomery(self) -> MontgomeryPublicKey:
    try:
      return MontgomeryPublicKey(sodium.crypto_sign_ed25519_pk_to_curve25519(self.pk))
    except RuntimeError:  # Unexpected library error from nacl.bindings
      raise MalformedPoint("Invalid Ed25519 public key") from None

  def montgomery(self) -> MontgomeryPublicKey:
    """The X25519 public key. The sign of the Edwards x coordinate is lost."""
    return self._montgomery

  def hex(self) -> str:
    return self.pk.hex()

  def __bytes__(self):
    return self.pk

  def __str__(self):
    return self.hex()

  def __eq__(self, other):
    return isinstance(other, EdwardsPublicKey) and self.pk == other.pk

  def __hash__(self):
    return hash(self.pk)

  def __repr__(self):
    return f"EdwardsPublicKey[{self.pk.hex()[:8]}]"


class MontgomerySecretKey:
  family = SODIUM
  curve = ED25519

  def __init__(self, key_material: bytes):
    key_material = bytes(key_material)
    if len(key_material) != sodium.crypto_box_SECRETKEYBYTES:
      raise InvalidKeyLength(f"Invalid X25519 secret key length {len(key_material)}")
    self.sk = key_material

  @staticmethod
  def generate() -> MontgomerySecretKey:
    pk, sk = sodium.crypto_kx_keypair()
    return MontgomerySecretKey(sk)

  @property
  def secret(self):
    _unsupported(self, "Scalar secret")

  def public_key(self) -> MontgomeryPublicKey:
    return self._public

  @cached_property
  def _public(self) -> MontgomeryPublicKey:
    return MontgomeryPublicKey(sodium.crypto_scalarmult_base(self.sk))

  def montgomery(self) -> MontgomerySecretKey:
    return self

  def __bytes__(self):
    return self.sk

  def __eq__(self, other):
    return isinstance(other, MontgomerySecretKey) and self.public_key() == other.public_key()

  def __hash__(self):
    return hash(self.public_key())

  def __repr__(self):
    return f"MontgomerySecretKey[{self.public_key().pk.hex()[:8]}]"


class MontgomeryPublicKey:
  family = SODIUM
  curve = ED25519

  def __init__(self, key_material: bytes):
    key_material = bytes(key_material)
    if len(key_material) != sodium.crypto_box_PUBLICKEYBYTES:
      raise InvalidKeyLength(f"Invalid X25519 public key length {len(key_material)}")
    self.pk = key_material

  def montgomery(self) -> MontgomeryPublicKey:
    return self

  def hex(self) -> str:
    return self.pk.hex()

  def __bytes__(self):
    return self.pk

  def __eq__(self, other):
    return isinstance(other, MontgomeryPublicKey) and self.pk == other.pk

  def __hash__(self):
    return hash(self.pk)

  def __repr__(self):
    return f"MontgomeryPublicKey[{self.pk.hex()[:8]}]"


SecretKey = Union[ECSecretKey, EdwardsSecretKey, MontgomerySecretKey]
PublicKey = Union[ECPublicKey, EdwardsPublicKey, MontgomeryPublicKey]


def generate(curve) -> SecretKey:
  curve = get_curve(curve)
  if curve.family == SODIUM:
    return EdwardsSecretKey.generate()
  return ECSecretKey.generate(curve)


def derive_public(sk: SecretKey) -> PublicKey:
  return sk.public_key()


def encode_public(pk: PublicKey) -> bytes:
  """Compressed point for ECDSA curves, the raw 32 bytes for 25519 keys."""
  return bytes(pk)


def decode_public(data: bytes, curve) -> PublicKey:
  """
  Public key of the given curve from its encoded form.

  Ed25519 keys are taken as any 32 bytes: the point is checked when the key is
  first converted to X25519 (key exchange), which raises MalformedPoint.
  """
  curve = get_curve(curve)
  if curve.family == SODIUM:
    return EdwardsPublicKey(data)
  return ECPublicKey.from_bytes(data, curve)


def convert_family(key: Union[EdwardsSecretKey, EdwardsPublicKey]):
  """Edwards (signing) key to its Montgomery (X25519) counterpart. Only this direction is possible."""
  if not isinstance(key, (EdwardsSecretKey, EdwardsPublicKey)):
    _unsupported(key, "Edwards to Montgomery conversion")
  return key.montgomery()
