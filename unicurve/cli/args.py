import os
import sys

from unicurve.cli.help import print_help, print_version
from unicurve.curves import DEFAULT_CURVE


class Args:

  def __init__(self):
    self.mode = None
    self.files = []
    self.curve = os.environ.get("UNICURVE_CURVE") or DEFAULT_CURVE
    self.identities = []
    self.recipients = []
    self.signature = ""
    self.outfile = []
    self.ieee = False
    self.debug = False


keygenargs = dict(
  curve='-c --curve'.split(),
  outfile='-o --out --output'.split(),
  debug='--debug'.split(),
)

pubkeyargs = dict(
  identities='-i --identity'.split(),
  debug='--debug'.split(),
)

signargs = dict(
  identities='-i --identity'.split(),
  ieee='--ieee'.split(),
  debug='--debug'.split(),
)

verifyargs = dict(
  curve='-c --curve'.split(),
  recipients='-r --recipient'.split(),
  signature='-s --signature'.split(),
  ieee='--ieee'.split(),
  debug='--debug'.split(),
)

sealargs = dict(
  curve='-c --curve'.split(),
  recipients='-r --recipient'.split(),
  outfile='-o --out --output'.split(),
  debug='--debug'.split(),
)

unsealargs = dict(
  identities='-i --identity'.split(),
  outfile='-o --out --output'.split(),
  debug='--debug'.split(),
)


def needhelp(av):
  """Check for -h and --help but not past --"""
  for a in av:
    if a == '--': return False
    if a.lower() in ('-h', '--help'): return True
  return False

def subcommand(arg):
  if arg in ('keygen', 'gen'): return 'keygen', keygenargs
  if arg in ('pubkey', 'pk'): return 'pubkey', pubkeyargs
  if arg in ('sign', ): return 'sign', signargs
  if arg in ('verify', ): return 'verify', verifyargs
  if arg in ('seal', 'enc'): return 'seal', sealargs
  if arg in ('unseal', 'dec'): return 'unseal', unsealargs
  if arg in ('help', ): return 'help', {}
  return None, {}

def argparse():
  # Custom parsing in the style of the other commands (flags may be combined as -ab)
  av = sys.argv[1:]
  if not av:
    print_help()

  if any(a.lower() in ('-v', '--version') for a in av):
    print_version()

  args = Args()
  args.mode, ad = subcommand(av[0])

  if args.mode == 'help' or needhelp(av):
    if args.mode == 'help' and len(av) == 2 and (mode := subcommand(av[1])[0]):
      print_help(mode)
    print_help(args.mode or "help")

  if args.mode is None:
    sys.stderr.write('Invalid or missing command (keygen/pubkey/sign/verify/seal/unseal/help).\n')
    sys.exit(1)

  aiter = iter(av[1:])
  shortargs = [flag[1:] for switches in ad.values() for flag in switches if not flag.startswith("--")]
  for a in aiter:
    aprint = a
    if not a.startswith('-') or a == '-':
      args.files.append(a)
      continue
    if a == '--':
      args.files += aiter
      break
    if a.startswith('--'):
      flags = [a.lower()]
    elif len(a) > 2:
      falseargs = [f for f in a[1:] if f not in shortargs]
      if falseargs:
        print_help(args.mode, f'Unknown argument: unicurve {args.mode} {a} (failing -{" -".join(falseargs)})')
      flags = [f'-{f}' for f in a[1:]]
    else:
      flags = [a]
    for flag in flags:
      argvar = next((k for k, v in ad.items() if flag in v), None)
      if argvar is None:
        print_help(args.mode, f'Unknown argument: unicurve {args.mode} {aprint}')
      try:
        var = getattr(args, argvar)
        if isinstance(var, list):
          var.append(next(aiter))
        elif isinstance(var, str):
          setattr(args, argvar, next(aiter))
        else:
          setattr(args, argvar, True)
      except StopIteration:
        print_help(args.mode, f'Argument parameter missing: unicurve {args.mode} {aprint} …')

  return args
