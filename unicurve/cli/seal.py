from unicurve import keyfile, util
from unicurve.cli.util import read_input, write_output
from unicurve.ecc import ECC
from unicurve.envelope import Envelope


def main_seal(args):
  if len(args.recipients) != 1:
    raise ValueError("Exactly one recipient public key (-r) is required")
  ecc = ECC(args.curve)
  pk = keyfile.decode_pk(args.recipients[0], ecc.curve)
  sealed = Envelope(ecc).seal(read_input(args), pk)
  if args.outfile:
    write_output(args, sealed)
  else:
    print(util.armor_encode(sealed))


def main_unseal(args):
  if len(args.identities) != 1:
    raise ValueError("Exactly one secret key file (-i) is required")
  sk = keyfile.read_sk_file(args.identities[0])
  data = read_input(args)
  # Stdin carries the text form, files are binary
  if not args.files or args.files[0] == "-":
    data = util.armor_decode(data.decode())
  write_output(args, Envelope(ECC(sk.curve)).unseal(data, sk))
