import sys
from typing import NoReturn

import unicurve
from unicurve.curves import CURVES, DEFAULT_CURVE

H = "\x1B[1;37m"  # heading (bright white)
C = "\x1B[0;34m"  # command (dark blue)
F = "\x1B[1;34m"  # flag (light blue)
D = "\x1B[1;30m"  # dark / syntax markup
N = "\x1B[0m"     # normal color

usage = dict(
  keygen=f"{C}unicurve {F}keygen {D}[{F}-c {N}curve{D}] [{F}-o {N}secret.key{D}]{N}\n",
  pubkey=f"{C}unicurve {F}pubkey -i {N}secret.key {D}—{N} show the public key of a secret key\n",
  sign=f"{C}unicurve {F}sign -i {N}secret.key {D}[{F}--ieee{D}] [{N}file{D}]{N}\n",
  verify=f"{C}unicurve {F}verify {D}[{F}-c {N}curve{D}] {F}-r {N}pubkey {F}-s {N}signature {D}[{F}--ieee{D}] [{N}file{D}]{N}\n",
  seal=f"{C}unicurve {F}seal {D}[{F}-c {N}curve{D}] {F}-r {N}pubkey {D}[{N}file{D}] [{F}-o {N}sealed.dat{D}]{N}\n",
  unseal=f"{C}unicurve {F}unseal -i {N}secret.key {D}[{N}sealed.dat{D}] [{F}-o {N}file{D}]{N}\n",
)

usagetext = dict(
  keygen=f"""\
Generate a new secret key. It is written to the output file (or stdout) and
the matching public key (hex) is shown on stderr. Ed25519 keys are stored as
a hex seed, the others as PEM.

  {F}-c {N}curve          One of {", ".join(CURVES)} (default {DEFAULT_CURVE} or $UNICURVE_CURVE)
  {F}-o {N}FILENAME       Where to write the secret key
""",
  sign=f"""\
Sign a file (or stdin) and print the signature in hex. ECDSA signatures are
DER encoded unless {F}--ieee{N} is given for fixed-width r || s.
""",
  verify=f"""\
Verify a signature of a file (or stdin). Public keys are hex strings, or PEM
files for the ECDSA curves. Exits with status 10 if the signature is invalid.
""",
  seal=f"""\
Encrypt a file (or stdin) so that only the holder of the secret key can open
it. Binary output to {F}-o{N} file, Base64 text on stdout otherwise.
""",
  unseal=f"""\
Decrypt sealed data from a file (binary) or stdin (Base64 text).
""",
)

cmdhelp = {k: f"{usage[k]}\n{usagetext.get(k, '')}".rstrip("\n") + "\n" for k in usage}

introduction = f"{H}unicurve {unicurve.__version__}{N} - One API for Ed25519, secp256k1 and NIST curves\n"

shorthelp = f"""\
{introduction}
{"".join(usage.values())}
Supported curves: {", ".join(CURVES)}. Set {F}UNICURVE_CURVE{N} to change the default.
Add {F}--debug{N} to any command for a traceback on errors.
"""

fullhelp = f"""\
{introduction}
{chr(10).join(cmdhelp.values())}"""

def print_help(modehelp: str = None, error: str = None) -> NoReturn:
  stream = sys.stderr if error else sys.stdout
  if modehelp is None: stream.write(shorthelp)
  elif (h := cmdhelp.get(modehelp)): stream.write(h)
  else: stream.write(fullhelp)
  if error:
    stream.write(f"\n{error}\n")
    sys.exit(1)
  sys.exit(0)

def print_version() -> NoReturn:
  print(f"unicurve {unicurve.__version__}")
  sys.exit(0)
