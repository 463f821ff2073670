import sys


def read_input(args) -> bytes:
  """Read the single input file, or stdin if none or - is given."""
  if len(args.files) > 1:
    raise ValueError("Only one input file may be specified")
  fname = args.files[0] if args.files else "-"
  if fname == "-":
    return sys.stdin.buffer.read()
  with open(fname, "rb") as f:
    return f.read()


def write_output(args, data: bytes):
  if args.outfile:
    with open(args.outfile, "wb") as f:
      f.write(data)
    return
  sys.stdout.flush()
  sys.stdout.buffer.write(data)
  sys.stdout.buffer.flush()
