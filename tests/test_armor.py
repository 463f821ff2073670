from secrets import token_bytes

import pytest

from unicurve.util import ARMOR_LINE, armor_decode, armor_encode


def test_armor_valid():
  data = token_bytes(1000)
  for i in [1000, 999, 998, 500] + list(range(60)):
    d = data[i:]
    text = armor_encode(d)
    assert "=" not in text
    assert all(len(line) <= ARMOR_LINE for line in text.split("\n"))
    # Indentation, CRLF and surrounding blank lines are ignored
    assert armor_decode("\n\n  " + text.replace("\n", "  \r\n\t") + "\n\n") == d


def test_armor_decode_invalid():
  assert armor_decode(76 * "A" + "\n") == bytes(57)

  with pytest.raises(ValueError) as exc:
    armor_decode("AAAA\n!")
  assert "unrecognized data on line 2" in str(exc.value)

  with pytest.raises(ValueError) as exc:
    armor_decode("AAAAA")
  assert "invalid length" in str(exc.value)
