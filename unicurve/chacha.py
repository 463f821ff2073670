from secrets import token_bytes
from typing import Optional

from nacl._sodium import ffi, lib
from nacl.exceptions import CryptoError

# ChaCha20-Poly1305 (IETF) through the sodium library directly. The bindings
# provided in pynacl would only accept bytes (not memoryview etc), and did not
# provide support for allocating the return buffer in Python.

KEYBYTES = 32
NONCEBYTES = 12
TAGBYTES = 16


def _aad(aad: Optional[bytes]):
  return (ffi.from_buffer(aad), len(aad)) if aad else (ffi.NULL, 0)


def encrypt(message: bytes, aad: Optional[bytes], nonce: bytes, key: bytes) -> bytes:
  if len(key) != KEYBYTES or len(nonce) != NONCEBYTES:
    raise ValueError("Invalid key or nonce length for ChaCha20-Poly1305")
  ciphertext = bytearray(len(message) + TAGBYTES)
  clen = ffi.new("unsigned long long *")
  a, alen = _aad(aad)
  ret = lib.crypto_aead_chacha20poly1305_ietf_encrypt(
    ffi.from_buffer(ciphertext), clen, ffi.from_buffer(message), len(message), a, alen, ffi.NULL, nonce, key
  )
  if ret:
    raise CryptoError('Encryption failed')
  return bytes(ciphertext)


def decrypt(ciphertext: bytes, aad: Optional[bytes], nonce: bytes, key: bytes) -> bytes:
  if len(key) != KEYBYTES or len(nonce) != NONCEBYTES:
    raise ValueError("Invalid key or nonce length for ChaCha20-Poly1305")
  if len(ciphertext) < TAGBYTES:
    raise CryptoError('Decryption failed')
  message = bytearray(len(ciphertext) - TAGBYTES)
  mlen = ffi.new("unsigned long long *")
  a, alen = _aad(aad)
  ret = lib.crypto_aead_chacha20poly1305_ietf_decrypt(
    ffi.from_buffer(message), mlen, ffi.NULL, ffi.from_buffer(ciphertext), len(ciphertext), a, alen, nonce, key
  )
  if ret:
    raise CryptoError('Decryption failed')
  return bytes(message)


class Aead:
  """Symmetric encryption with a 32-byte key: random nonce || ciphertext || tag"""
  overhead = NONCEBYTES + TAGBYTES

  def encrypt(self, message: bytes, key: bytes) -> bytes:
    nonce = token_bytes(NONCEBYTES)
    return nonce + encrypt(message, None, nonce, key)

  def decrypt(self, ciphertext: bytes, key: bytes) -> bytes:
    if len(ciphertext) < self.overhead:
      raise CryptoError('Decryption failed')
    return decrypt(ciphertext[NONCEBYTES:], None, ciphertext[:NONCEBYTES], key)
