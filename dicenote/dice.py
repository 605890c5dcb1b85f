"""
Dice module for throwing dice.

A parsed notation is a strict tree of rollable nodes:
    RollSet -> Expression -> (Roll | Modifier) -> Die

Order of evaluation for every Roll:
    Roll every die, then apply each Selector in the order parsed.

Logic regarding selectors:
    All dice start in keep state after a roll.
    Each selector only considers the dice still kept by the previous ones.
    Dropped dice no longer count toward the total but are still displayed.
    A selector asking for as many or more dice than are kept does nothing.
"""
import abc
import logging

import numpy.random as rand

import dicenote.exc
from dicenote.util import ReprMixin

FATE_DISTRIBUTION = (-1, 0, 1)
SELECTOR_KINDS = {
    'kh': (True, True),
    'kl': (True, False),
    'dh': (False, True),
    'dl': (False, False),
}


class Rollable(abc.ABC):
    """
    The capability shared by every node in a parsed notation.
    Unless overridden, a node is the sum of its children and
    is at maximum (minimum) only when all its children are.
    """
    @abc.abstractmethod
    def children(self):
        """
        Returns:
            A list of the Rollable nodes directly below this one.
        """
        raise NotImplementedError

    def __str__(self):
        return self.render()

    def __int__(self):
        return self.total()

    def total(self):
        """ The numeric value of this node. """
        return sum(child.total() for child in self.children())

    def is_all_maximum(self):
        """ True IFF every die below this node shows its highest face. """
        return all(child.is_all_maximum() for child in self.children())

    def is_all_minimum(self):
        """ True IFF every die below this node shows its lowest face. """
        return all(child.is_all_minimum() for child in self.children())

    def render(self):
        """ Format this node for the user. """
        return ''.join(child.render() for child in self.children())


class FlaggableMixin():
    """
    Store the selection state of a die in a bit field.

    Attributes:
        flags: A bit field that stores the flags.
    """
    MASK = 0x3
    KEEP = 1 << 0
    DROP = 1 << 1

    def __init__(self):
        super().__init__()
        self.flags = FlaggableMixin.KEEP

    def reset_flags(self):
        """ Ensure this dice is kept, resets all other flags. """
        self.flags = FlaggableMixin.KEEP

    def is_kept(self):
        """ True if this dice still counts. """
        return bool(self.flags & FlaggableMixin.KEEP)

    def is_dropped(self):
        """ True if this dice should be ignored. """
        return bool(self.flags & FlaggableMixin.DROP)

    def set_drop(self):
        """ Ensure this dice is dropped and no longer counted. """
        self.flags = self.flags & (~FlaggableMixin.KEEP & FlaggableMixin.MASK)
        self.flags = self.flags | FlaggableMixin.DROP


class Die(ReprMixin, FlaggableMixin, Rollable):
    """
    Model a single dice with n faces, it can:
        - roll itself
        - format itself for user
        - flag itself to track selection
        - duplicate itself if needed

    Attributes:
        faces: The die has this many faces.
        distribution: The values on the faces, by default [1, faces]. Duplicates share it.
        value: The value of the last roll, None until rolled.
        flags: The flags tracking the Die's state.
    """
    _repr_keys = ['faces', 'value', 'flags']

    def __init__(self, *, faces=6, distribution=None, value=None, flags=FlaggableMixin.KEEP):
        super().__init__()
        if faces < 1:
            raise ValueError("A die must have at least 1 face.")

        self.faces = faces
        self.distribution = tuple(distribution) if distribution else tuple(range(1, faces + 1))
        self._value = None
        self.value = value
        self.flags = flags

    def __eq__(self, other):
        return isinstance(other, Die) and self.faces == other.faces \
            and self.distribution == other.distribution

    def __hash__(self):
        return hash((self.faces, self.distribution))

    @property
    def value(self):
        """ The value of this die. """
        return self._value

    @value.setter
    def value(self, new_value):
        """ The set value of this die, must be on one of the faces. """
        if new_value is not None and new_value not in self.distribution:
            raise ValueError(f"Die value must be one of: {self.distribution}")

        self._value = new_value

    @property
    def face_notation(self):
        """ How the faces are written in notation. """
        return str(self.faces)

    def is_rolled(self):
        """ True once this die has a value. """
        return self._value is not None

    def children(self):
        return []

    def total(self):
        return self._value if self.is_rolled() else 0

    def is_all_maximum(self):
        return self.is_rolled() and self._value == max(self.distribution)

    def is_all_minimum(self):
        return self.is_rolled() and self._value == min(self.distribution)

    def fmt_string(self):
        """ Return the correct formatting string given the die's current flags. """
        fmt = "[{}]"
        if self.is_dropped():
            fmt = "~~" + fmt + "~~"

        return fmt

    def render(self):
        if not self.is_rolled():
            return f'(d{self.face_notation})'

        return self.fmt_string().format(self._value)

    def roll(self):
        """ Reroll the value of this dice, it will be kept until a selector says otherwise. """
        self._value = self.distribution[rand.randint(0, len(self.distribution))]
        self.reset_flags()
        return self

    def dupe(self):
        """ Create an unrolled duplicate dice based on this spec. """
        return Die(faces=self.faces, distribution=self.distribution)


class FateDie(Die):
    """
    A Fate die has three faces valued -1, 0 and +1.
    """
    def __init__(self, **kwargs):
        kwargs['faces'] = 3
        kwargs['distribution'] = FATE_DISTRIBUTION
        super().__init__(**kwargs)

    @property
    def face_notation(self):
        return 'F'

    def dupe(self):
        return FateDie()


class Modifier(ReprMixin, Rollable):
    """
    A constant that is part of an expression.
    It has no faces to miss, so it is always both at maximum and minimum.
    """
    _repr_keys = ['value']

    def __init__(self, value=0):
        self._value = int(value)

    def __eq__(self, other):
        return isinstance(other, Modifier) and self.value == other.value

    def __hash__(self):
        return hash(self.value)

    @property
    def value(self):
        """ The constant, fixed at creation. """
        return self._value

    def children(self):
        return []

    def total(self):
        return self._value

    def is_all_maximum(self):
        return True

    def is_all_minimum(self):
        return True

    def render(self):
        return str(self._value)


class Selector(ReprMixin):
    """
    Keep or drop N high or low rolls.

    Attributes:
        keep: True if we should keep num elements, else will drop num elements.
        high: When True, select from highest values. When False, select from lowest.
        num: The number to keep or drop.
    """
    _repr_keys = ['keep', 'high', 'num']

    def __init__(self, *, keep=True, high=True, num=1):
        if num < 1:
            raise ValueError("A selector must select at least 1 die.")

        self.keep = keep
        self.high = high
        self.num = num

    @classmethod
    def from_kind(cls, kind, num):
        """
        Create a selector from its notation, like kh or dl.

        Raises:
            KeyError: The kind is not a known selector.
        """
        keep, high = SELECTOR_KINDS[kind]
        return cls(keep=keep, high=high, num=num)

    def __eq__(self, other):
        return isinstance(other, Selector) and \
            (self.keep, self.high, self.num) == (other.keep, other.high, other.num)

    def __hash__(self):
        return hash(str(self))

    def __str__(self):
        return f'{self.kind}{self.num}'

    @property
    def kind(self):
        """ The notation of this selector, one of: kh, kl, dh, dl """
        return ('k' if self.keep else 'd') + ('h' if self.high else 'l')

    def modify(self, dice):
        """
        Mark dice as dropped according to this selector.
        Only dice still kept are considered, ties are broken by roll order.

        Args:
            dice: The dice of a Roll, in the order rolled.
        """
        active = [die for die in dice if die.is_kept()]
        if self.num >= len(active):
            return

        # Stable even when reversed, equal values stay in roll order
        ordered = sorted(active, key=lambda die: die.value, reverse=self.high)
        selected, rest = ordered[:self.num], ordered[self.num:]
        for die in rest if self.keep else selected:
            die.set_drop()


class Roll(ReprMixin, Rollable):
    """
    A number of identical dice rolled together, then narrowed by selectors.

    Attributes:
        dice: The dice of this roll, their number never changes.
        selectors: The selectors applied in order after every roll.
    """
    _repr_keys = ['quantity', 'dice', 'selectors']

    def __init__(self, *, quantity=1, die=None, selectors=None):
        if quantity < 1:
            raise ValueError("A roll needs at least 1 die.")

        die = die if die is not None else Die()
        self.dice = tuple(die.dupe() for _ in range(quantity))
        self.selectors = tuple(selectors) if selectors else ()

    def __eq__(self, other):
        return isinstance(other, Roll) and self.quantity == other.quantity \
            and self.dice[0] == other.dice[0] and self.selectors == other.selectors

    def __hash__(self):
        return hash(self.notation)

    @property
    def quantity(self):
        """ The number of dice in this roll. """
        return len(self.dice)

    @property
    def notation(self):
        """ This roll written as notation, like 4d20kh3. """
        selectors = ''.join(str(sel) for sel in self.selectors)
        return f'{self.quantity}d{self.dice[0].face_notation}{selectors}'

    @property
    def active(self):
        """ The dice that still count toward the total. """
        return [die for die in self.dice if die.is_kept()]

    def is_rolled(self):
        """ True once every die has a value. """
        return all(die.is_rolled() for die in self.dice)

    def children(self):
        return list(self.dice)

    def total(self):
        return sum(die.total() for die in self.active)

    def render(self):
        if not self.is_rolled():
            return self.notation

        return super().render()

    def roll(self):
        """
        Roll all the dice then apply the selectors to them.
        """
        for die in self.dice:
            die.roll()
        for selector in self.selectors:
            selector.modify(self.dice)

        logging.getLogger('dicenote.dice').debug("Rolled %s: %s = %d",
                                                 self.notation, self.render(), self.total())
        return self


class Expression(ReprMixin, Rollable):
    """
    Rolls and modifiers joined by signs, evaluated left to right.

    Attributes:
        terms: A list of (sign, term) pairs, sign is '+' or '-'.
    """
    _repr_keys = ['terms']

    def __init__(self, terms=None):
        self.terms = list(terms) if terms else []

    def __eq__(self, other):
        return isinstance(other, Expression) and self.terms == other.terms

    def __hash__(self):
        return hash(tuple(self.terms))

    @property
    def rolls(self):
        """ Only the terms that have dice. """
        return [term for term in self.children() if isinstance(term, Roll)]

    def children(self):
        return [term for _, term in self.terms]

    def total(self):
        """
        Raises:
            InvalidOperator: A term has a sign that is neither '+' nor '-'.
        """
        value = 0
        for sign, term in self.terms:
            if sign == '+':
                value += term.total()
            elif sign == '-':
                value -= term.total()
            else:
                raise dicenote.exc.InvalidOperator(f"Unknown operator in expression: {sign!r}")

        return value

    def render(self):
        msg = ''
        for ind, (sign, term) in enumerate(self.terms):
            if ind or sign != '+':
                msg += sign
            msg += term.render()

        return msg

    def roll(self):
        """ Roll every Roll in this expression, in order. """
        for term in self.rolls:
            term.roll()

        return self


class RollSet(ReprMixin, Rollable):
    """
    A container that represents an entire notation line.
    Each expression is totalled separately.

    Attributes:
        expressions: The expressions, in the order written.
        spec: The original notation that created the set.
    """
    _repr_keys = ['spec', 'expressions']

    def __init__(self, expressions=None, *, spec=None):
        self.expressions = list(expressions) if expressions else []
        self.spec = spec

    def __eq__(self, other):
        return isinstance(other, RollSet) and self.expressions == other.expressions

    def __hash__(self):
        return hash(tuple(self.expressions))

    def __len__(self):
        return len(self.expressions)

    def __iter__(self):
        return iter(self.expressions)

    def children(self):
        return list(self.expressions)

    def total(self):
        raise TypeError("A RollSet has no single total, see group_totals().")

    def group_totals(self):
        """
        Returns:
            The total of each expression, in order.
        """
        return [expr.total() for expr in self.expressions]

    def render(self):
        return '; '.join(expr.render() for expr in self.expressions)

    def roll(self):
        """ Ensure every die is rolled again. """
        for expr in self.expressions:
            expr.roll()

        return self


def roll(roll_set):
    """
    Roll every die in the set and apply all selectors, in place.
    Rolling again simply replaces all values.

    Returns:
        The same roll_set, now rolled.
    """
    return roll_set.roll()
