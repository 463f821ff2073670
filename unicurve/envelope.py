import logging

from nacl.exceptions import CryptoError

from unicurve import keys
from unicurve.chacha import Aead
from unicurve.ecc import ECC
from unicurve.exceptions import DecryptError, TruncatedEnvelope

log = logging.getLogger(__name__)

# Symmetric keys are always derived with SHA-256 so that every curve gives a
# 32-byte key (Ed25519 key exchange gives 32 bytes natively).
ENVELOPE_HASH = "sha256"


class Envelope:
  """
  Public key encryption on top of ECC key exchange and an AEAD.

  Sealed format: encoded ephemeral public key (fixed size per curve) || AEAD ciphertext
  """

  def __init__(self, ecc: ECC, aead=None):
    self.ecc = ecc
    self.aead = Aead() if aead is None else aead

  def key_exchange(self, private: keys.SecretKey, public: keys.PublicKey, is_client: bool) -> bytes:
    return self.ecc.key_exchange(private, public, is_client, ENVELOPE_HASH)

  def symmetric_encrypt(self, message: bytes, key: bytes) -> bytes:
    return self.aead.encrypt(message, key)

  def symmetric_decrypt(self, ciphertext: bytes, key: bytes) -> bytes:
    try:
      return self.aead.decrypt(ciphertext, key)
    except CryptoError:
      raise DecryptError("Wrong key or modified ciphertext") from None

  def asymmetric_encrypt(self, message: bytes, private: keys.SecretKey, public: keys.PublicKey) -> bytes:
    """Encrypt from the sender's secret key to the recipient's public key (client role)"""
    return self.symmetric_encrypt(message, self.key_exchange(private, public, True))

  def asymmetric_decrypt(self, ciphertext: bytes, private: keys.SecretKey, public: keys.PublicKey) -> bytes:
    """Decrypt with the recipient's secret key and the sender's public key (server role)"""
    return self.symmetric_decrypt(ciphertext, self.key_exchange(private, public, False))

  def seal(self, message: bytes, public: keys.PublicKey) -> bytes:
    """Anonymous encryption to the public key using an ephemeral key pair."""
    eph = self.ecc.generate_private_key()
    header = keys.encode_public(eph.public_key())
    log.debug("sealing %d bytes with %s", len(message), self.ecc)
    return header + self.asymmetric_encrypt(message, eph, public)

  def unseal(self, data: bytes, private: keys.SecretKey) -> bytes:
    pklen = self.ecc.public_key_length
    if len(data) < pklen:
      raise TruncatedEnvelope(f"Sealed data too short ({len(data)} bytes) for a {self.ecc.curve_name} key")
    eph = self.ecc.public_key_from_bytes(data[:pklen])
    return self.asymmetric_decrypt(data[pklen:], private, eph)
