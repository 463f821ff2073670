import pytest

from unicurve import CURVES, ECC, Envelope
from unicurve.chacha import Aead
from unicurve.exceptions import DecryptError, TruncatedEnvelope

MESSAGE = b"This is a test message."


@pytest.mark.parametrize("curve", CURVES)
def test_seal_unseal(curve):
  ecc = ECC(curve)
  envelope = Envelope(ecc)
  sk = ecc.generate_private_key()
  sealed = envelope.seal(MESSAGE, sk.public_key())
  assert len(sealed) == ecc.public_key_length + len(MESSAGE) + Aead.overhead
  assert envelope.unseal(sealed, sk) == MESSAGE
  # Fresh ephemeral key every time
  assert envelope.seal(MESSAGE, sk.public_key())[:ecc.public_key_length] != sealed[:ecc.public_key_length]


@pytest.mark.parametrize("curve", CURVES)
def test_asymmetric(curve):
  ecc = ECC(curve)
  envelope = Envelope(ecc)
  alice, bob = ecc.generate_private_key(), ecc.generate_private_key()
  ciphertext = envelope.asymmetric_encrypt(MESSAGE, alice, bob.public_key())
  assert envelope.asymmetric_decrypt(ciphertext, bob, alice.public_key()) == MESSAGE
  # Decrypting in the wrong role fails
  with pytest.raises(DecryptError):
    envelope.symmetric_decrypt(ciphertext, envelope.key_exchange(bob, alice.public_key(), True))


def test_unseal_errors():
  ecc = ECC("P384")
  envelope = Envelope(ecc)
  sk = ecc.generate_private_key()
  sealed = envelope.seal(MESSAGE, sk.public_key())

  with pytest.raises(TruncatedEnvelope):
    envelope.unseal(sealed[:ecc.public_key_length - 1], sk)
  with pytest.raises(DecryptError):
    envelope.unseal(sealed[:ecc.public_key_length], sk)
  tampered = bytearray(sealed)
  tampered[-1] ^= 1
  with pytest.raises(DecryptError):
    envelope.unseal(bytes(tampered), sk)
  with pytest.raises(DecryptError):
    envelope.unseal(sealed, ecc.generate_private_key())


def test_empty_message():
  ecc = ECC()
  envelope = Envelope(ecc)
  sk = ecc.generate_private_key()
  sealed = envelope.seal(b"", sk.public_key())
  assert len(sealed) == 32 + Aead.overhead
  assert envelope.unseal(sealed, sk) == b""


def test_custom_aead():
  """Any object with encrypt(message, key) and decrypt(ciphertext, key) will do."""
  class XorAead:
    def encrypt(self, message, key):
      return bytes(m ^ key[i % len(key)] for i, m in enumerate(message))
    decrypt = encrypt

  ecc = ECC("K256")
  envelope = Envelope(ecc, XorAead())
  sk = ecc.generate_private_key()
  sealed = envelope.seal(MESSAGE, sk.public_key())
  assert len(sealed) == 33 + len(MESSAGE)
  assert envelope.unseal(sealed, sk) == MESSAGE
