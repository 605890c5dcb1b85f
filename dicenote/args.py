"""
Everything related to parsing arguments from the command line.

The parser never terminates the program, errors and help are raised
as exceptions for main() to report.
"""
from __future__ import absolute_import, print_function

import argparse
from argparse import RawDescriptionHelpFormatter as RawHelp

import dicenote.exc

DESCRIPTION = """Parse dice notation, roll it and print the results.

dicenote 4d20kh3 + 2
        Roll 4d20, keep the 3 highest and add 2.
dicenote '1d20; 1d20'
        Roll 1d20 twice, each is totalled separately.
dicenote -n 6 4d6dl1
        Roll 4d6 and drop the lowest, 6 times.
dicenote -- -2 + 1d4
        Use -- when the notation starts with a sign.
"""


class ThrowArgumentParser(argparse.ArgumentParser):
    """
    ArgumentParser subclass that does NOT terminate the program.
    """
    def print_help(self, file=None):  # pylint: disable=redefined-builtin
        raise dicenote.exc.ArgumentHelpError(self.format_help())

    def error(self, message):
        raise dicenote.exc.ArgumentParseError(message)

    def exit(self, status=0, message=None):
        """
        Suppress default exit behaviour.
        """
        raise dicenote.exc.ArgumentParseError(message)


def positive_int(text):
    """ An argparse type that only accepts integers >= 1. """
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}") from None

    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")

    return value


def make_parser():
    """
    Returns the command line parser.
    """
    parser = ThrowArgumentParser(prog='dicenote', description=DESCRIPTION, formatter_class=RawHelp)
    parser.add_argument('notation', nargs='+', help='The dice notation, joined with spaces.')
    parser.add_argument('-n', '--repeat', type=positive_int, default=1,
                        help='Roll the notation this many times.')
    parser.add_argument('--seed', type=int, help='Seed the random generators for a repeatable roll.')
    parser.add_argument('--config', help='Use this yaml config instead of data/config.yml.')
    parser.add_argument('--no-log', dest='log', action='store_false',
                        help='Do not configure file logging.')

    return parser
