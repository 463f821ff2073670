__version__ = "0.1.0"

from unicurve.curves import CURVES, DEFAULT_CURVE, CurveDescriptor, get_curve
from unicurve.ecc import ECC
from unicurve.envelope import Envelope
from unicurve.keys import (
  ECPublicKey, ECSecretKey, EdwardsPublicKey, EdwardsSecretKey, MontgomeryPublicKey, MontgomerySecretKey
)
from unicurve.signature import Signature
