"""
Parse and roll dice notation like 4d20kh3+2;2d6.

    roll_set = dicenote.parse('4d20kh3+2; 2d6')
    dicenote.roll_set(roll_set)
    roll_set.render(), roll_set.group_totals()

For the command line entry consult dicenote/main.py
"""
from __future__ import absolute_import, print_function

from dicenote.dice import roll as roll_set
from dicenote.notation import parse

__version__ = '0.1.0'
__all__ = ['parse', 'roll_set']
