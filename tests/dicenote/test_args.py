"""
Test the command line argument parser
"""
from __future__ import absolute_import, print_function

import argparse

import pytest

import dicenote.args
import dicenote.exc


def test_throw_argument_parser():
    parser = dicenote.args.ThrowArgumentParser()
    with pytest.raises(dicenote.exc.ArgumentHelpError):
        parser.print_help()
    with pytest.raises(dicenote.exc.ArgumentParseError):
        parser.error('blank')
    with pytest.raises(dicenote.exc.ArgumentParseError):
        parser.exit()


def test_positive_int():
    assert dicenote.args.positive_int('3') == 3
    with pytest.raises(argparse.ArgumentTypeError):
        dicenote.args.positive_int('0')
    with pytest.raises(argparse.ArgumentTypeError):
        dicenote.args.positive_int('many')


def test_make_parser_throws():
    parser = dicenote.args.make_parser()
    with pytest.raises(dicenote.exc.ArgumentParseError):
        parser.parse_args([])
    with pytest.raises(dicenote.exc.ArgumentHelpError):
        parser.parse_args(['--help'])
    with pytest.raises(dicenote.exc.ArgumentParseError):
        parser.parse_args('--invalidflag 1d6'.split())
    with pytest.raises(dicenote.exc.ArgumentParseError):
        parser.parse_args('-n 0 1d6'.split())


def test_make_parser():
    parser = dicenote.args.make_parser()
    args = parser.parse_args('-n 3 --seed 42 4d6kh3 + 2'.split())
    assert args.notation == ['4d6kh3', '+', '2']
    assert args.repeat == 3
    assert args.seed == 42
    assert args.log
    assert args.config is None


def test_make_parser_defaults():
    args = dicenote.args.make_parser().parse_args(['--no-log', '1d20'])
    assert args.repeat == 1
    assert args.seed is None
    assert not args.log
