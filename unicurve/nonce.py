import hmac
from secrets import token_bytes

from unicurve.curves import check_hash, hash_size
from unicurve.exceptions import NonceGenerationExhausted

# Hedged deterministic nonces for ECDSA
#
# This is the HMAC-DRBG of RFC 6979 section 3.2, with 32 fresh random bytes
# appended to the seed material. A broken random source still gives the
# deterministic RFC 6979 nonce (no reuse across messages), while good
# randomness makes each signature differ, which hampers fault attacks that
# rely on signing the same message twice with the same k.
#
# https://datatracker.ietf.org/doc/html/rfc6979#section-3.2

HEDGE_BYTES = 32
MAX_TRIES = 1024


def int2octets(n: int, rlen: int) -> bytes:
  """Big-endian encode n into exactly rlen bytes (zero padded, or keeping the leading bytes)."""
  out = n.to_bytes(max(1, (n.bit_length() + 7) >> 3), "big")
  if len(out) < rlen:
    return bytes(rlen - len(out)) + out
  return out[:rlen]


def bits2int(data: bytes, qlen: int) -> int:
  """Take the qlen leftmost bits of data as a big-endian integer."""
  v = int.from_bytes(data, "big")
  vlen = 8 * len(data)
  return v >> vlen - qlen if vlen > qlen else v


def generate(max_exclusive: int, secret: int, message_hash: int, hash_name: str) -> int:
  """
  Derive a signing nonce in range 1 .. max_exclusive - 1.

  :param max_exclusive: the curve order
  :param secret: the private scalar
  :param message_hash: digest of the message as an integer (bits2int of the hash)
  :param hash_name: hashlib name of the HMAC hash (e.g. "sha256")
  :raises NonceGenerationExhausted: if no candidate was accepted (a broken environment)
  """
  check_hash(hash_name)
  qlen = max_exclusive.bit_length()
  rlen = (qlen + 7) >> 3
  hlen = hash_size(hash_name)
  bx = int2octets(secret, rlen) + int2octets(message_hash, rlen) + token_bytes(HEDGE_BYTES)

  def mac(key, data):
    return hmac.new(key, data, hash_name).digest()

  V = b"\x01" * hlen
  K = bytes(hlen)
  K = mac(K, V + b"\x00" + bx)
  V = mac(K, V)
  K = mac(K, V + b"\x01" + bx)
  V = mac(K, V)

  for _ in range(MAX_TRIES):
    T = b""
    while len(T) < rlen:
      V = mac(K, V)
      T += V
    k = bits2int(T[:rlen], qlen)
    if 0 < k < max_exclusive:
      return k
    K = mac(K, V + b"\x00")
    V = mac(K, V)

  raise NonceGenerationExhausted(f"No valid nonce found in {MAX_TRIES} attempts")
