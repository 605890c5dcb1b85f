"""
Parse dice notation into an unrolled RollSet.

Grammar, case sensitive:
    notation   := expression (';' expression)* ';'?
    expression := sign? term (sign term)*
    sign       := '+' | '-'
    term       := roll | modifier
    roll       := quantity 'd' faces selector*
    faces      := digit+ | 'F'
    selector   := ('kh'|'kl'|'dh'|'dl') digit+
    modifier   := digit+

Whitespace is allowed around signs and separators, never inside a roll or modifier.

Every parse_* helper takes the remaining line and returns (line, obj)
where line is what remains after processing. Errors raised by helpers are
relative to the line they received, parse() moves them onto the full notation.
"""
import logging
import re

import dicenote.exc
from dicenote.dice import Die, Expression, FateDie, Modifier, Roll, RollSet, Selector

IS_ROLL = re.compile(r'(\d+)d(\d+|F)', re.ASCII)
IS_SELECTOR = re.compile(r'([kd][hl])(\d+)', re.ASCII)
IS_MODIFIER = re.compile(r'\d+', re.ASCII)
IS_SIGN = re.compile(r'\s*([-+])\s*', re.ASCII)
IS_SEPARATOR = re.compile(r'\s*;\s*', re.ASCII)
# Ceilings used when the caller gives no limit
MAX_DICE = 10000
MAX_FACES = 10000
NOTATION_HELP = """__Quick Reference__

    4d6 + 2                 Roll 4d6 and add 2
    1d20; 1d20              Roll 1d20 twice, separately
    4d6kh3                  Roll 4d6 and keep the 3 highest
    4d6kl3                  Roll 4d6 and keep the 3 lowest
    4d6dh1                  Roll 4d6 and drop the highest
    4d6dl1                  Roll 4d6 and drop the lowest
    4dF                     Roll 4 Fate dice, each -1, 0 or +1

Every roll needs a quantity, write 1d20 not d20.
"""


def to_int(line, match, group=0):
    """
    Convert a matched run of digits to an int.

    Raises:
        ParseError: The run is too long for int() to convert.
    """
    try:
        return int(match.group(group))
    except ValueError:
        raise dicenote.exc.ParseError("Number is too large", notation=line, position=match.start(group),
                                      substring=match.group(group)) from None


def parse_selectors(line):
    """
    Attempt to parse the selectors trailing a roll.

    Raises:
        ParseError: A selector has a count of 0.

    Returns:
        (line, selectors)
            line: The remainder of line after processing.
            selectors: A list of Selector objects, in the order written.
    """
    selectors = []
    match = IS_SELECTOR.match(line)
    while match:
        num = to_int(line, match, 2)
        if num < 1:
            raise dicenote.exc.ParseError("Selector count must be positive", notation=line,
                                          substring=match.group(0))

        selectors += [Selector.from_kind(match.group(1), num)]
        line = line[match.end():]
        match = IS_SELECTOR.match(line)

    return line, selectors


def parse_roll(line, *, max_dice=None, max_faces=None):
    """
    Attempt to parse a roll of dice from the start of the line.

    Raises:
        ParseError: No roll could be found, or the quantity or faces are out of range.

    Returns:
        (line, roll)
            line: The remainder of line after processing.
            roll: An unrolled Roll containing the dice and any selectors.
    """
    match = IS_ROLL.match(line)
    if not match:
        raise dicenote.exc.ParseError("Invalid dice roll", notation=line)

    max_dice = max_dice or MAX_DICE
    max_faces = max_faces or MAX_FACES
    quantity = to_int(line, match, 1)
    if quantity < 1:
        raise dicenote.exc.ParseError("Dice quantity must be positive", notation=line,
                                      substring=match.group(1))
    if quantity > max_dice:
        raise dicenote.exc.ParseError(f"Too many dice, the limit is {max_dice}", notation=line,
                                      substring=match.group(1))

    if match.group(2) == 'F':
        template = FateDie()
    else:
        faces = to_int(line, match, 2)
        if faces < 1:
            raise dicenote.exc.ParseError("Dice faces must be positive", notation=line,
                                          position=match.start(2), substring=match.group(2))
        if faces > max_faces:
            raise dicenote.exc.ParseError(f"Too many faces, the limit is {max_faces}", notation=line,
                                          position=match.start(2), substring=match.group(2))
        template = Die(faces=faces)

    rest, selectors = parse_selectors(line[match.end():])

    return rest, Roll(quantity=quantity, die=template, selectors=selectors)


def parse_modifier(line):
    """
    Attempt to parse a constant from the start of the line.

    Raises:
        ParseError: The line does not start with a number.

    Returns:
        (line, modifier)
            line: The remainder of line after processing.
            modifier: A Modifier holding the number.
    """
    match = IS_MODIFIER.match(line)
    if not match:
        raise dicenote.exc.ParseError("Invalid modifier", notation=line)

    return line[match.end():], Modifier(to_int(line, match))


def parse_term(line, **limits):
    """
    Parse either a roll or a modifier, rolls take precedence.

    Raises:
        ParseError: Neither a roll nor a modifier starts the line.

    Returns:
        (line, term)
    """
    if IS_ROLL.match(line):
        return parse_roll(line, **limits)
    if IS_MODIFIER.match(line):
        return parse_modifier(line)

    raise dicenote.exc.ParseError("Expected a roll or a modifier", notation=line)


def parse_expression(line, **limits):
    """
    Parse signed terms until the end of the line or the next ';'.

    Raises:
        ParseError: Some part of the expression could not be parsed.

    Returns:
        (line, expression)
            line: The remainder of line, empty or starting at a ';'.
            expression: The Expression of all terms, a leading sign defaults to '+'.
    """
    terms = []
    sign = '+'
    match = IS_SIGN.match(line)
    while True:
        if match:
            sign = match.group(1)
            line = line[match.end():]

        line, term = parse_term(line, **limits)
        terms += [(sign, term)]

        match = IS_SIGN.match(line)
        if not match:
            break

    if line.strip() and not IS_SEPARATOR.match(line):
        raise dicenote.exc.ParseError("Expected '+', '-' or ';'", notation=line,
                                      position=len(line) - len(line.lstrip()))

    return line, Expression(terms)


def parse(notation, *, max_dice=None, max_faces=None):
    """
    Take a complete notation and return the unrolled RollSet it describes.

    Examples valid:
        4d20kh3 + 2; 2d6
        2d6+1d4-3
        1d20;1d20;
    Examples invalid:
        d20
        4d
        4d20kh

    Kwargs:
        max_dice: Refuse rolls of more than this many dice, MAX_DICE if not set.
        max_faces: Refuse dice with more than this many faces, MAX_FACES if not set.

    Raises:
        ParseError: Some part of the notation could not be parsed, no partial result is kept.

    Returns:
        A RollSet with one Expression per ';' separated part.
    """
    if not isinstance(notation, str):
        raise dicenote.exc.ParseError("Notation must be a string", substring=repr(notation))

    log = logging.getLogger('dicenote.notation')
    line = notation.lstrip()
    if not line:
        raise dicenote.exc.ParseError("No dice notation detected", notation=notation)

    expressions = []
    while line:
        try:
            line, expr = parse_expression(line, max_dice=max_dice, max_faces=max_faces)
        except dicenote.exc.ParseError as exc:
            # Helpers only ever see a suffix of notation
            offset = len(notation) - len(exc.notation)
            raise dicenote.exc.ParseError(exc.reason, notation=notation, position=offset + exc.position,
                                          substring=exc.substring) from None
        expressions += [expr]

        match = IS_SEPARATOR.match(line)
        line = line[match.end():] if match else ''

    roll_set = RollSet(expressions, spec=notation.strip())
    log.debug("Parsed %r into %d expression(s): %s", notation, len(roll_set), roll_set.render())

    return roll_set
