"""
Test table formatting logic
"""
from __future__ import absolute_import, print_function

import dicenote.dice
import dicenote.notation
import dicenote.tbl


def test_max_col_width():
    lines = [
        ['aa', 'aaa', 'aa', 'aa'],
        ['a', 'aa', 'aa', 'aaaa'],
    ]
    assert dicenote.tbl.max_col_width(lines) == [2, 3, 2, 4]


def test_format_line_simple():
    data = ['a phrase', 3344, 5553, 'another phrase']
    expect = 'a phrase | 3344 | 5553 | another phrase'
    assert dicenote.tbl.format_line(data) == expect


def test_format_line_separator():
    data = ['a phrase', 3344, 5553, 'another phrase']
    expect = 'a phrase$$3344$$5553$$another phrase'
    assert dicenote.tbl.format_line(data, sep='$$') == expect


def test_format_line_pad_different():
    data = ['a phrase', 3344, 5553, 'another phrase']
    pads = [15, 7, 7, 20]
    expect = 'a phrase        | 3344    | 5553    | another phrase'
    assert dicenote.tbl.format_line(data, pads=pads) == expect


def test_format_line_pad_center():
    data = ['a phrase', 3344, 5553, 'another phrase']
    pads = [15, 7, 7, 20]
    expect = '   a phrase     |  3344   |  5553   |    another phrase'
    assert dicenote.tbl.format_line(data, pads=pads, center=True) == expect


def test_format_table_header():
    lines = [
        ['Roll', 'Expr 1'],
        [1, 12],
        [2, 7],
    ]
    expect = """Roll | Expr 1
---- | ------
1    | 12
2    | 7"""
    assert dicenote.tbl.format_table(lines, header=True) == expect


def test_format_table_no_header():
    lines = [['a', 'bb'], ['ccc', 'd']]
    assert dicenote.tbl.format_table(lines) == "a   | bb\nccc | d"


def test_totals_table(f_fixed_rolls):
    first = dicenote.notation.parse('1d6; 1d20+2')
    second = dicenote.notation.parse('1d6; 1d20+2')
    f_fixed_rolls(4, 10, 1, 20)
    dicenote.dice.roll(first)
    dicenote.dice.roll(second)

    expect = """Roll | Expr 1 | Expr 2
---- | ------ | ------
1    | 4      | 12
2    | 1      | 22"""
    assert dicenote.tbl.totals_table([first, second]) == expect
