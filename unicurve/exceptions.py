class UnsupportedCurve(ValueError):
  """Unknown curve name"""

class UnsupportedHash(ValueError):
  """Hash algorithm not available for this operation"""

class MalformedKeyError(ValueError):
  """Key material is malformed or of unsupported format"""

class InvalidKeyLength(MalformedKeyError):
  """Encoded key has the wrong size for its curve"""

class MalformedPoint(MalformedKeyError):
  """Encoded public key is not a point on the curve"""

class IncompatibleKeyFamily(TypeError):
  """Keys of different curves or families were mixed"""

class UnsupportedOperationForFamily(TypeError):
  """The operation has no meaning for this family of keys"""

class MalformedSignature(ValueError):
  """Signature encoding cannot be parsed"""

class OddLengthSignature(MalformedSignature):
  """Fixed-width signatures must have an even length"""

class SignatureRangeError(MalformedSignature):
  """Signature value out of range for the curve order"""

class DecryptError(ValueError):
  """Decryption failed"""

class TruncatedEnvelope(DecryptError):
  """Sealed data is too short to contain the ephemeral public key"""

class NonceGenerationExhausted(RuntimeError):
  """No acceptable nonce found (broken hash or random source)"""
