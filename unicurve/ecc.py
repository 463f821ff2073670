import logging

import nacl.bindings as sodium
from nacl.exceptions import BadSignatureError

from unicurve import ecdsa, keys
from unicurve.curves import DEFAULT_CURVE, ECDSA, SODIUM, digest, get_curve
from unicurve.exceptions import IncompatibleKeyFamily, MalformedSignature
from unicurve.signature import Signature

log = logging.getLogger(__name__)


class _Sodium:
  """Ed25519 signatures and X25519 key exchange by libsodium"""

  @staticmethod
  def scalarmult(curve, sk, pk) -> bytes:
    return sodium.crypto_scalarmult(sk.montgomery().sk, pk.montgomery().pk)

  @staticmethod
  def key_exchange(curve, sk, pk, is_client, hash_name) -> bytes:
    # Session keys of crypto_kx: client rx equals server tx (and vice versa),
    # so each role picks the direction that matches the opposite role's choice.
    # The transcript hash is fixed (BLAKE2b) by libsodium; hash_name is not used.
    msk = sk.montgomery()
    own = msk.public_key().pk
    peer = pk.montgomery().pk
    if is_client:
      return sodium.crypto_kx_client_session_keys(own, msk.sk, peer)[0]
    return sodium.crypto_kx_server_session_keys(own, msk.sk, peer)[1]

  @staticmethod
  def sign(curve, message, sk, ieee) -> bytes:
    if not isinstance(sk, keys.EdwardsSecretKey):
      raise IncompatibleKeyFamily("Only Ed25519 secret keys can be used to sign")
    return sodium.crypto_sign(message, sk.sk)[:sodium.crypto_sign_BYTES]

  @staticmethod
  def verify(curve, message, pk, signature, ieee) -> bool:
    if not isinstance(pk, keys.EdwardsPublicKey):
      raise IncompatibleKeyFamily("Only Ed25519 public keys can be used to verify")
    if len(signature) != sodium.crypto_sign_BYTES:
      raise MalformedSignature(f"Ed25519 signatures are {sodium.crypto_sign_BYTES} bytes, got {len(signature)}")
    try:
      sodium.crypto_sign_open(bytes(signature) + message, pk.pk)
    except BadSignatureError:
      return False
    return True


class _ECDSA:
  """ECDSA and hashed ECDH on Weierstrass curves"""

  @staticmethod
  def scalarmult(curve, sk, pk) -> bytes:
    return sk.exchange(pk)

  @staticmethod
  def key_exchange(curve, sk, pk, is_client, hash_name) -> bytes:
    shared = sk.exchange(pk)
    own = sk.public_key().der()
    peer = pk.der()
    # Each side puts its own key first when acting as client, last as server
    transcript = shared + own + peer if is_client else shared + peer + own
    return digest(hash_name or curve.hash_name, transcript)

  @staticmethod
  def sign(curve, message, sk, ieee) -> bytes:
    sig = ecdsa.sign(sk, message)
    return sig.to_fixed_width(curve.signature_size >> 1) if ieee else sig.to_der()

  @staticmethod
  def verify(curve, message, pk, signature, ieee) -> bool:
    if ieee:
      sig = Signature.from_fixed_width(signature, curve.order)
    else:
      sig = Signature.from_der(signature, curve.order)
    return ecdsa.verify(pk, message, sig)


_families = {SODIUM: _Sodium, ECDSA: _ECDSA}
_secret_types = (keys.ECSecretKey, keys.EdwardsSecretKey, keys.MontgomerySecretKey)
_public_types = (keys.ECPublicKey, keys.EdwardsPublicKey, keys.MontgomeryPublicKey)


class ECC:
  """
  One API for signatures and key exchange over Ed25519/X25519, secp256k1 and
  the NIST P-256, P-384 and P-521 curves.

  All keys given must belong to the curve chosen on construction.
  """

  def __init__(self, curve=DEFAULT_CURVE):
    self.curve = get_curve(curve)
    self._ops = _families[self.curve.family]

  @property
  def curve_name(self) -> str:
    return self.curve.name

  @property
  def public_key_length(self) -> int:
    return self.curve.public_key_size

  @property
  def signature_length(self) -> int:
    return self.curve.signature_size

  def generate_private_key(self) -> keys.SecretKey:
    return keys.generate(self.curve)

  def public_key_from_bytes(self, data: bytes) -> keys.PublicKey:
    return keys.decode_public(data, self.curve)

  def _check(self, private=None, public=None):
    if private is not None and not isinstance(private, _secret_types):
      raise IncompatibleKeyFamily(f"Expected a secret key, got {type(private).__name__}")
    if public is not None and not isinstance(public, _public_types):
      raise IncompatibleKeyFamily(f"Expected a public key, got {type(public).__name__}")
    for key in (private, public):
      if key is not None and (key.family != self.curve.family or key.curve != self.curve):
        raise IncompatibleKeyFamily(f"Key {key!r} cannot be used with curve {self.curve.name}")

  def scalarmult(self, private: keys.SecretKey, public: keys.PublicKey) -> bytes:
    """Raw Diffie-Hellman shared secret (not suitable as a key without hashing)"""
    self._check(private, public)
    return self._ops.scalarmult(self.curve, private, public)

  def key_exchange(self, private: keys.SecretKey, public: keys.PublicKey, is_client: bool, hash_name: str = None) -> bytes:
    """
    Derive a shared key. Two peers agree only if one acts as client and the other as server.

    :param hash_name: transcript hash for ECDSA curves, defaults to the curve's hash
    """
    self._check(private, public)
    log.debug("key exchange on %s as %s", self.curve.name, "client" if is_client else "server")
    return self._ops.key_exchange(self.curve, private, public, is_client, hash_name)

  def sign(self, message: bytes, private: keys.SecretKey, ieee: bool = False) -> bytes:
    """Sign with Ed25519, or ECDSA (DER encoded or with ieee=True as fixed-width r || s)."""
    self._check(private=private)
    return self._ops.sign(self.curve, message, private, ieee)

  def verify(self, message: bytes, public: keys.PublicKey, signature: bytes, ieee: bool = False) -> bool:
    """
    Check a signature. A valid but non-matching signature returns False.

    :raises MalformedSignature: if the signature cannot be decoded for this curve
    """
    self._check(public=public)
    return self._ops.verify(self.curve, message, public, signature, ieee)

  def __repr__(self):
    return f"ECC[{self.curve.name}]"
