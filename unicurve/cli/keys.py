import os
import sys

from unicurve import keyfile
from unicurve.ecc import ECC


def main_keygen(args):
  if args.files:
    raise ValueError("keygen takes no input files")
  ecc = ECC(args.curve)
  sk = ecc.generate_private_key()
  data = keyfile.encode_sk(sk)
  if args.outfile:
    if os.path.exists(args.outfile):
      raise ValueError(f"{args.outfile} already exists, not overwriting a secret key")
    # Secret keys are only readable by the owner
    fd = os.open(args.outfile, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
    with os.fdopen(fd, "w") as f:
      f.write(data)
  else:
    sys.stdout.write(data)
  sys.stderr.write(f"{ecc.curve_name} public key: {sk.public_key().hex()}\n")


def main_pubkey(args):
  if len(args.identities) != 1:
    raise ValueError("Exactly one secret key file (-i) is required")
  sk = keyfile.read_sk_file(args.identities[0])
  print(sk.public_key().hex())
