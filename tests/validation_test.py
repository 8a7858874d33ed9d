"""Tests for `hoa2pg.games.validation`."""
import pytest

from hoa2pg import automaton as _aut
from hoa2pg.games import parity
from hoa2pg.games import validation


def _automaton():
    data = _aut.HoaData()
    data.num_states = 1
    data.acc_name_id = 'parity'
    data.acc_name_parameters = ['min', 'odd', '2']
    data.properties = ['complete', 'colored', 'deterministic']
    data.start = [0]
    return data


def _code(data):
    with pytest.raises(validation.ValidationError) as info:
        validation.check_automaton(data)
    return info.value.code


def test_valid():
    data = _automaton()
    r = validation.check_automaton(data)
    assert r == (False, parity.ODD), r


def test_not_parity():
    data = _automaton()
    data.acc_name_id = 'Buchi'
    assert _code(data) == 100
    data.acc_name_id = None
    assert _code(data) == 100


def test_acceptance_parameters():
    data = _automaton()
    data.acc_name_parameters = ['odd', '2']
    assert _code(data) == 101
    data.acc_name_parameters = ['max', '2']
    assert _code(data) == 102
    # order checked first
    data.acc_name_parameters = []
    assert _code(data) == 101


def test_properties():
    data = _automaton()
    data.properties = ['complete', 'colored']
    assert _code(data) == 200
    data.properties = ['deterministic', 'colored']
    assert _code(data) == 201
    data.properties = ['deterministic', 'complete']
    assert _code(data) == 202
    data.properties = []
    assert _code(data) == 200


def test_start():
    data = _automaton()
    data.start = []
    assert _code(data) == 300
    data.start = [0, 0]
    assert _code(data) == 300


def test_acceptance_checked_before_properties():
    data = _automaton()
    data.acc_name_id = 'Rabin'
    data.properties = []
    data.start = []
    assert _code(data) == 100


def test_message():
    data = _automaton()
    data.properties = ['deterministic', 'complete']
    with pytest.raises(validation.ValidationError) as info:
        validation.check_automaton(data)
    assert '"colored"' in str(info.value), str(info.value)
