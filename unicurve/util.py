import re
from base64 import b64decode, b64encode

ARMOR_LINE = 76
_b64line = re.compile("^[A-Za-z0-9+/]*={0,2}$")


def armor_decode(data: str) -> bytes:
  """Base64 decode, ignoring line breaks, indentation and a missing padding."""
  data = data.replace('\r\n', '\n').strip('\uFEFF \t\n')
  lines = [l.strip() for l in data.split('\n') if l.strip()]
  for i, line in enumerate(lines):
    if not _b64line.match(line):
      raise ValueError(f"Invalid armored encoding: unrecognized data on line {i + 1}")
  data = "".join(lines).rstrip("=")
  if len(data) % 4 == 1:
    raise ValueError("Invalid armored encoding: invalid length for Base64 sequence")
  return b64decode(data + -len(data) % 4 * "=", validate=True)


def armor_encode(data: bytes) -> str:
  """Base64 without padding, wrapped to lines of 76 characters."""
  d = b64encode(data).decode().rstrip('=')
  return '\n'.join(d[i:i + ARMOR_LINE] for i in range(0, len(d), ARMOR_LINE))
