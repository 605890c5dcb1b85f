"""
The command line entry. Everything is started upon main() execution. To invoke from root:
    python -m dicenote.main 4d20kh3 + 2
"""
from __future__ import absolute_import, print_function
import logging
import os
import sys

import dicenote.args
import dicenote.dice
import dicenote.exc
import dicenote.notation
import dicenote.tbl
import dicenote.util

PAD_LEN = 8


def throw_output(roll_set):
    """
    Combine a rolled set into the expected output format.

    Returns:
        A string formatted to present important information of roll.
    """
    pad = PAD_LEN * " "
    totals = ', '.join(str(total) for total in roll_set.group_totals())
    trail = ""
    has_dice = any(expr.rolls for expr in roll_set)
    if has_dice and roll_set.is_all_maximum():
        trail += f"\n{pad}CRITICAL!"
    if has_dice and roll_set.is_all_minimum():
        trail += f"\n{pad}FUMBLE!"

    return f"{roll_set.spec} = {roll_set.render()} = {totals}{trail}"


def make_rolls(spec, repeat=1, *, max_dice=None, max_faces=None):
    """
    Parse the spec once per repeat and roll each result.

    Raises:
        ParseError: The spec is not valid notation.

    Returns:
        A list of rolled RollSets.
    """
    rolled = []
    for _ in range(repeat):
        roll_set = dicenote.notation.parse(spec, max_dice=max_dice, max_faces=max_faces)
        rolled += [dicenote.dice.roll(roll_set)]

    return rolled


def run(args):
    """
    Roll the notation in the parsed args and print the results.

    Raises:
        FileNotFoundError: The config or logging config file is missing.

    Returns:
        The exit code.
    """
    if args.log:
        dicenote.util.init_logging()

    log = logging.getLogger('dicenote.main')
    seeded = dicenote.util.seed_random(args.seed)
    log.info('Seeding numpy/random with: %d', seeded)

    repeat_limit = dicenote.util.get_config('cli', 'repeat_limit', default=100)
    if args.repeat > repeat_limit:
        print(f"dicenote: error: Please repeat at most {repeat_limit} times.", file=sys.stderr)
        return 2

    spec = ' '.join(args.notation)
    max_dice = dicenote.util.get_config('limits', 'dice', default=0)
    max_faces = dicenote.util.get_config('limits', 'faces', default=0)
    try:
        results = make_rolls(spec, args.repeat, max_dice=max_dice, max_faces=max_faces)
    except dicenote.exc.ParseError as exc:
        dicenote.exc.write_log(exc, log, notation=spec)
        print(f"Error: {exc}\n\n{dicenote.notation.NOTATION_HELP}", file=sys.stderr)
        return 1

    lines = [throw_output(roll_set) for roll_set in results]
    if len(results) > 1 or len(results[0]) > 1:
        lines += ['', dicenote.tbl.totals_table(results)]
    print('\n'.join(lines))

    return 0


def main(argv=None):
    """ Entry here! Returns the exit code. """
    try:
        args = dicenote.args.make_parser().parse_args(argv)
    except dicenote.exc.ArgumentHelpError as exc:
        print(exc)
        return 0
    except dicenote.exc.ArgumentParseError as exc:
        print(f"dicenote: error: {exc}", file=sys.stderr)
        return 2

    old_config = dicenote.util.YAML_FILE
    try:
        if args.config:
            dicenote.util.YAML_FILE = os.path.abspath(args.config)
        return run(args)
    except FileNotFoundError as exc:
        print(f"dicenote: error: Missing config file: {exc.filename}", file=sys.stderr)
        return 2
    finally:
        dicenote.util.YAML_FILE = old_config


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
