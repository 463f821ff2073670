import logging
import sys
from typing import NoReturn

import colorama

from unicurve.cli.args import argparse
from unicurve.cli.keys import main_keygen, main_pubkey
from unicurve.cli.seal import main_seal, main_unseal
from unicurve.cli.sign import main_sign, main_verify
from unicurve.exceptions import IncompatibleKeyFamily, UnsupportedOperationForFamily

modes = {
  "keygen": main_keygen,
  "pubkey": main_pubkey,
  "sign": main_sign,
  "verify": main_verify,
  "seal": main_seal,
  "unseal": main_unseal,
}


def main() -> NoReturn:
  """
  The main CLI entry point.

  System exit codes:
  * 0 The requested function was completed successfully
  * 1 CLI argument error
  * 2 Interrupted
  * 3 I/O error (broken pipe)
  * 10 Normal errors: invalid keys or signatures, decryption failures, ...

  :raises SystemExit: on normal exit or any expected error, including KeyboardInterrupt
  :raises Exception: on unexpected error (report a bug), or on any error with `--debug`
  """
  colorama.init()
  args = argparse()
  if len(args.outfile) > 1:
    raise ValueError('Only one output file may be specified')
  args.outfile = args.outfile[0] if args.outfile else None

  if args.debug:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    modes[args.mode](args)  # --debug makes us not catch errors
    sys.exit(0)
  try:
    modes[args.mode](args)
  except (ValueError, IncompatibleKeyFamily, UnsupportedOperationForFamily) as e:
    sys.stderr.write(f"Error: {e}\n")
    sys.exit(10)
  except BrokenPipeError:
    sys.stderr.write('I/O error (broken pipe)\n')
    sys.exit(3)
  except KeyboardInterrupt:
    sys.stderr.write("Interrupted.\n")
    sys.exit(2)
  sys.exit(0)

if __name__ == "__main__":
  main()
