# pylint: disable=redefined-outer-name,missing-function-docstring,unused-argument
"""
Test the command line entry in dicenote.main
"""
from __future__ import absolute_import, print_function
import re

import mock
import pytest

import dicenote.dice
import dicenote.exc
import dicenote.main
import dicenote.notation
import dicenote.util


@pytest.fixture
def f_no_logging():
    with mock.patch('dicenote.util.init_logging') as mock_init:
        yield mock_init


def test_throw_output(f_fixed_rolls):
    roll_set = dicenote.notation.parse('4d20kh3 + 2; 1d6')
    f_fixed_rolls(5, 20, 1, 17, 3)
    dicenote.dice.roll(roll_set)

    assert dicenote.main.throw_output(roll_set) == "4d20kh3 + 2; 1d6 = [5][20]~~[1]~~[17]+2; [3] = 44, 3"


def test_throw_output_critical(f_fixed_rolls):
    roll_set = dicenote.notation.parse('2d6')
    f_fixed_rolls(6, 6)
    dicenote.dice.roll(roll_set)

    first, second = dicenote.main.throw_output(roll_set).split('\n')
    assert first == "2d6 = [6][6] = 12"
    assert second.strip() == "CRITICAL!"


def test_throw_output_fumble(f_fixed_rolls):
    roll_set = dicenote.notation.parse('1d20')
    f_fixed_rolls(1)
    dicenote.dice.roll(roll_set)

    assert dicenote.main.throw_output(roll_set).split('\n')[1].strip() == "FUMBLE!"


def test_throw_output_no_dice():
    roll_set = dicenote.dice.roll(dicenote.notation.parse('7'))

    assert dicenote.main.throw_output(roll_set) == "7 = 7 = 7"


def test_make_rolls():
    results = dicenote.main.make_rolls('1d6; 1d8', 3)
    assert len(results) == 3
    assert len({id(roll_set) for roll_set in results}) == 3
    assert all(len(roll_set.group_totals()) == 2 for roll_set in results)


def test_make_rolls_raises():
    with pytest.raises(dicenote.exc.ParseError):
        dicenote.main.make_rolls('2000d6', max_dice=1000)


def test_main(capsys, f_no_logging):
    assert dicenote.main.main(['--seed', '42', '4d6kh3', '+', '2']) == 0

    out = capsys.readouterr().out
    assert re.match(r'4d6kh3 \+ 2 = (~~)?\[\d\].+\+2 = \d+', out)
    assert f_no_logging.called


def test_main_seed_repeatable(capsys, f_no_logging):
    dicenote.main.main(['--seed', '7', '10d20'])
    first = capsys.readouterr().out

    dicenote.main.main(['--seed', '7', '10d20'])
    assert capsys.readouterr().out == first


def test_main_table(capsys):
    assert dicenote.main.main(['--no-log', '-n', '2', '1d20;', '1d4']) == 0

    out = capsys.readouterr().out
    assert 'Roll | Expr 1 | Expr 2' in out
    assert re.search(r'^1    \| \d+ +\| \d$', out, re.MULTILINE)
    assert re.search(r'^2    \| \d+ +\| \d$', out, re.MULTILINE)


def test_main_parse_error(capsys, f_no_logging):
    assert dicenote.main.main(['4d']) == 1

    err = capsys.readouterr().err
    assert "at position 1: 'd'" in err
    assert "Quick Reference" in err


def test_main_help(capsys):
    assert dicenote.main.main(['--help']) == 0
    assert 'dicenote' in capsys.readouterr().out


def test_main_bad_args(capsys):
    assert dicenote.main.main(['--no-log']) == 2
    assert 'dicenote: error:' in capsys.readouterr().err


def test_main_config(capsys, f_config):
    assert dicenote.main.main(['--no-log', '--config', f_config, '11d6']) == 1
    assert 'Too many dice' in capsys.readouterr().err

    assert dicenote.main.main(['--no-log', '--config', f_config, '-n', '4', '1d6']) == 2
    assert 'at most 3' in capsys.readouterr().err


def test_main_config_missing(capsys, tmpdir):
    old_config = dicenote.util.YAML_FILE
    missing = str(tmpdir.join('not_there.yml'))

    assert dicenote.main.main(['--no-log', '--config', missing, '1d6']) == 2
    assert f"Missing config file: {missing}" in capsys.readouterr().err
    assert dicenote.util.YAML_FILE == old_config


def test_main_config_restored(capsys, tmpdir):
    old_config = dicenote.util.YAML_FILE
    conf = tmpdir.join('config.yml')
    conf.write("---\nlimits:\n  dice: 2\n")

    assert dicenote.main.main(['--no-log', '--config', str(conf), '3d6']) == 1
    assert dicenote.util.YAML_FILE == old_config
    assert dicenote.main.main(['--no-log', '3d6']) == 0
