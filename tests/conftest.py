# pylint: disable=redefined-outer-name,missing-function-docstring,unused-argument
"""
Used for pytest fixtures and anything else test setup/teardown related.
"""
from __future__ import absolute_import, print_function

import mock
import pytest

import dicenote.dice
import dicenote.util
from dicenote.dice import Die, Expression, Modifier, Roll, RollSet, Selector


@pytest.fixture
def f_fixed_rolls():
    """
    Patch the generator so the next dice rolled land on values, in roll order.
    Values are faces of dice with the default distribution, i.e. [1, faces].

    To use:
        f_fixed_rolls(5, 20, 1, 17)
        roll.roll()
    """
    patchers = []

    def inner(*values):
        patcher = mock.patch('dicenote.dice.rand.randint', side_effect=[val - 1 for val in values])
        patchers.append(patcher)
        return patcher.start()

    yield inner

    for patcher in patchers:
        patcher.stop()


@pytest.fixture
def f_dice():
    """ Four already rolled d20s in roll order. """
    dice = [Die(faces=20, value=val) for val in (5, 20, 1, 17)]

    yield dice


@pytest.fixture
def f_roll():
    """ An unrolled 4d20kh3. """
    yield Roll(quantity=4, die=Die(faces=20), selectors=[Selector(keep=True, high=True, num=3)])


@pytest.fixture
def f_expression():
    """ An unrolled 2d6+5-1d4. """
    yield Expression([
        ('+', Roll(quantity=2, die=Die(faces=6))),
        ('+', Modifier(5)),
        ('-', Roll(quantity=1, die=Die(faces=4))),
    ])


@pytest.fixture
def f_roll_set(f_expression):
    """ An unrolled 2d6+5-1d4; 1d20 """
    yield RollSet([f_expression, Expression([('+', Roll(quantity=1, die=Die(faces=20)))])],
                  spec='2d6+5-1d4; 1d20')


@pytest.fixture
def f_config(tmpdir):
    """ Point the config at a temporary yaml file for the test. """
    old_file = dicenote.util.YAML_FILE
    conf = tmpdir.join('config.yml')
    conf.write("""---
paths:
  log_conf: data/log.yml
limits:
  dice: 10
  faces: 100
cli:
  repeat_limit: 3
""")
    dicenote.util.YAML_FILE = str(conf)

    yield str(conf)

    dicenote.util.YAML_FILE = old_file
