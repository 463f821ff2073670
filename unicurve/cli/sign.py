import sys

from unicurve import keyfile
from unicurve.cli.util import read_input
from unicurve.ecc import ECC


def main_sign(args):
  if len(args.identities) != 1:
    raise ValueError("Exactly one secret key file (-i) is required for signing")
  sk = keyfile.read_sk_file(args.identities[0])
  message = read_input(args)
  signature = ECC(sk.curve).sign(message, sk, ieee=args.ieee)
  print(signature.hex())


def main_verify(args):
  if len(args.recipients) != 1:
    raise ValueError("Exactly one public key (-r) is required for verification")
  if not args.signature:
    raise ValueError("Signature (-s) is required for verification")
  ecc = ECC(args.curve)
  pk = keyfile.decode_pk(args.recipients[0], ecc.curve)
  try:
    signature = bytes.fromhex(args.signature)
  except ValueError:
    raise ValueError("Signature is not a hex string") from None
  message = read_input(args)
  if not ecc.verify(message, pk, signature, ieee=args.ieee):
    raise ValueError("Signature verification failed")
  sys.stderr.write("Signature OK\n")
