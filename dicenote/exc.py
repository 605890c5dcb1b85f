"""
Common exceptions.
"""
from __future__ import absolute_import, print_function


class DiceException(Exception):
    """
    All project exceptions subclass this.
    """
    def __init__(self, msg=None, lvl='info'):
        super().__init__(msg)
        self.log_level = lvl


class UserException(DiceException):
    """
    Exception occurred usually due to user error.

    Not unexpected but can indicate a problem.
    """


class ArgumentParseError(UserException):
    """ Error raised on failure to parse arguments. """


class ArgumentHelpError(UserException):
    """ Error raised on request to print help for command. """


class ParseError(UserException):
    """
    The notation could not be parsed into a roll set.

    Attributes:
        notation: The complete notation that was being parsed.
        position: The 0 based offset into notation where parsing failed.
        substring: The offending part of notation, starting at position.
        reason: A short description of what went wrong.
    """
    def __init__(self, reason, *, notation='', position=0, substring=None):
        if substring is None:
            substring = notation[position:]
        super().__init__(f"{reason} at position {position}: '{substring}'")
        self.reason = reason
        self.notation = notation
        self.position = position
        self.substring = substring


class InternalException(DiceException):
    """
    An internal exception that went uncaught.

    Indicates a severe problem.
    """
    def __init__(self, msg, lvl='exception'):
        super().__init__(msg, lvl)


class InvalidOperator(InternalException):
    """
    An expression holds a sign other than '+' or '-'.
    Only reachable by building an Expression by hand.
    """


def log_format(*, notation):
    """ Log useful information about the notation that failed. """
    return f"Notation: {notation!r}\n    Length: {len(notation)}"


def write_log(exc, log, *, lvl='info', notation):
    """
    Log all relevant information about this failure.
    """
    log_func = getattr(log, getattr(exc, 'log_level', lvl), getattr(log, lvl))
    header = '\n{}\n{}\n'.format(exc.__class__.__name__ + ': ' + str(exc), '=' * 20)
    log_func(header + log_format(notation=notation))
