import os

from unicurve import keys
from unicurve.curves import SODIUM, get_curve
from unicurve.exceptions import MalformedKeyError

# Secret key files: PEM (EC PRIVATE KEY or PKCS8) for ECDSA curves, or the
# hex encoded 32-byte seed (or 64-byte libsodium secret key) for Ed25519.
# Public keys are given as hex strings of the compressed point / raw key,
# or as a PEM file for ECDSA curves.


def encode_sk(sk: keys.SecretKey) -> str:
  if isinstance(sk, keys.EdwardsSecretKey):
    return sk.seed.hex() + "\n"
  if isinstance(sk, keys.ECSecretKey):
    return sk.export_pem()
  raise MalformedKeyError(f"Cannot store {type(sk).__name__}")


def decode_sk(text: str) -> keys.SecretKey:
  text = text.strip()
  if text.startswith("-----BEGIN"):
    return keys.ECSecretKey.import_pem(text)
  try:
    data = bytes.fromhex(text)
  except ValueError:
    raise MalformedKeyError("Unable to parse secret key (expected PEM or hex)") from None
  return keys.EdwardsSecretKey(data)


def read_sk_file(filename: str) -> keys.SecretKey:
  if not os.path.isfile(filename):
    raise ValueError(f"Secret key file {filename} not found")
  with open(filename, "rb") as f:
    try:
      text = f.read().decode()
    except ValueError:
      raise ValueError(f"Keyfile {filename} could not be decoded. Only UTF-8 text is supported.") from None
  return decode_sk(text)


def decode_pk(keystr: str, curve) -> keys.PublicKey:
  """Public key from a hex string, or from a PEM file (ECDSA curves)."""
  curve = get_curve(curve)
  if curve.family != SODIUM and os.path.isfile(keystr):
    with open(keystr, "rb") as f:
      pk = keys.ECPublicKey.import_pem(f.read())
    if pk.curve != curve:
      raise MalformedKeyError(f"Key in {keystr} is on {pk.curve.name}, not {curve.name}")
    return pk
  try:
    data = bytes.fromhex(keystr)
  except ValueError:
    raise MalformedKeyError(f"Unrecognized public key {keystr!r}") from None
  return keys.decode_public(data, curve)
