"""Command line entry point: read an instance, print the matching."""

import argparse
import contextlib
import sys

import stablehr.core
import stablehr.instance
import stablehr.io


def main(argv=None, stdin=None, stdout=None):
  stdin = stdin or sys.stdin
  stdout = stdout or sys.stdout
  parser = argparse.ArgumentParser(
      prog="stablehr",
      description="Hospital-proposing deferred acceptance.")
  parser.add_argument('input', nargs='?',
                      help='input file in the text format, stdin if omitted')
  parser.add_argument('-o', '--output', help='output filename')
  parser.add_argument('--unlisted', default='last',
                      choices=sorted(stablehr.core.UNLISTED_POLICIES),
                      help='how a student treats a hospital they did not list')
  parser.add_argument('--strict', action="store_true",
                      help='fail when a hospital runs out of students')
  parser.add_argument('-v', '--verbose', help='print progress on stderr',
                      action="store_true")
  args = parser.parse_args(argv)

  try:
    ins = stablehr.io.load_text(args.input if args.input else stdin)
    if args.verbose:
      print(ins, file=sys.stderr)
    with contextlib.redirect_stdout(sys.stderr):
      sol = stablehr.instance.solve(ins, unlisted=args.unlisted,
                                    strict=args.strict, verbose=args.verbose)
    if args.verbose:
      print(sol, file=sys.stderr)
    if args.output:
      stablehr.io.save_text(sol, args.output)
    else:
      stdout.write(stablehr.io.format_text(sol))
  except (OSError, ValueError, RuntimeError) as e:
    print("error: {0}".format(e), file=sys.stderr)
    return 1
  return 0


if __name__ == "__main__":
  sys.exit(main())
