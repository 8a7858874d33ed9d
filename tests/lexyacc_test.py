"""Tests for `hoa2pg.logic.lexyacc`."""
import logging

import pytest

from hoa2pg import automaton as _aut
from hoa2pg.logic import lexyacc
from hoa2pg.logic.ast import Nodes


log = logging.getLogger('astutils')
log.setLevel('ERROR')


parser = lexyacc.Parser()


FULL_HEADER = '''
HOA: v1
name: "GF \\"a\\""
tool: "ltlsynt" "2.9"
States: 2
Start: 0
AP: 3 "a" "b" "c"
controllable-AP: 1 2
Alias: @ab 0 & 1
Alias: @nc !2
acc-name: parity max odd 3
Acceptance: 3 Fin(2) & (Inf(1) | Fin(!0))
properties: trans-labels explicit-labels
properties: deterministic complete colored
spot-state-player: 0 1 /* kept verbatim */
--BODY--
State: 0 "start"
[@ab] 1 {0}
[!@ab & @nc] 0 {1}
[!@ab & !@nc] 0 {2}
State: [t] 1 {1}
0
--END--
'''


def test_header_items():
    data = parser.parse(FULL_HEADER)
    assert data.version == 'v1', data.version
    assert data.name == 'GF \\"a\\"', data.name
    assert data.tool_name == 'ltlsynt', data.tool_name
    assert data.tool_version == '2.9', data.tool_version
    assert data.num_states == 2, data.num_states
    assert data.start == [0], data.start
    assert data.num_aps == 3, data.num_aps
    assert data.aps == ['a', 'b', 'c'], data.aps
    assert data.cnt_aps == [1, 2], data.cnt_aps
    assert data.acc_name_id == 'parity', data.acc_name_id
    assert data.acc_name_parameters == ['max', 'odd', '3'], (
        data.acc_name_parameters)
    assert data.num_acc_sets == 3, data.num_acc_sets
    props = [
        'trans-labels', 'explicit-labels',
        'deterministic', 'complete', 'colored']
    assert data.properties == props, data.properties
    assert data.headers == [('spot-state-player', [0, 1])], data.headers


def test_aliases():
    data = parser.parse(FULL_HEADER)
    assert list(data.aliases) == ['@ab', '@nc'], data.aliases
    r = data.aliases['@ab'].flatten()
    assert r == '(0 & 1)', r
    r = data.aliases['@nc'].flatten()
    assert r == '!2', r


def test_acceptance_condition():
    data = parser.parse(FULL_HEADER)
    r = data.acc.flatten()
    r_ = '(Fin(2) & (Inf(1) | Fin(!0)))'
    assert r == r_, r


def test_body():
    data = parser.parse(FULL_HEADER)
    assert len(data.states) == 2, data.states
    s0, s1 = data.states
    # state 0
    assert s0.id == 0, s0.id
    assert s0.name == 'start', s0.name
    assert s0.label is None, s0.label
    assert s0.acc_sig is None, s0.acc_sig
    assert len(s0.transitions) == 3, s0.transitions
    t = s0.transitions[0]
    assert t.label.flatten() == '@ab', t.label
    assert t.successors == [1], t.successors
    assert t.acc_sig == [0], t.acc_sig
    t = s0.transitions[1]
    assert t.label.flatten() == '(!@ab & @nc)', t.label.flatten()
    assert t.acc_sig == [1], t.acc_sig
    # state 1: state-level label and acceptance
    assert s1.id == 1, s1.id
    assert s1.name is None, s1.name
    assert s1.label.flatten() == 't', s1.label
    assert s1.acc_sig == [1], s1.acc_sig
    (t,) = s1.transitions
    assert t.label is None, t.label
    assert t.successors == [0], t.successors
    assert t.acc_sig is None, t.acc_sig


def test_operator_precedence():
    s = '''
        HOA: v1
        AP: 3 "a" "b" "c"
        Alias: @x 0 | !1 & 2
        Alias: @y (0 | 1) & !(2)
        Alias: @z !0 | 1 & t | f
        --BODY--
        --END--
        '''
    data = parser.parse(s)
    r = data.aliases['@x'].flatten()
    assert r == '(0 | (!1 & 2))', r
    r = data.aliases['@y'].flatten()
    assert r == '((0 | 1) & !2)', r
    r = data.aliases['@z'].flatten()
    assert r == '((!0 | (1 & t)) | f)', r


def test_alternating_start_and_successors():
    s = '''
        HOA: v1
        Start: 0 & 1
        Start: 2
        --BODY--
        State: 0
        [t] 1 & 2
        --END--
        '''
    data = parser.parse(s)
    assert data.start == [0, 1, 2], data.start
    (t,) = data.states[0].transitions
    assert t.successors == [1, 2], t.successors


def test_multiline_comment():
    s = (
        'HOA: v1 /* one\n two */ States: 1\n'
        '--BODY-- /* ** */ --END--')
    data = parser.parse(s)
    assert data.num_states == 1, data.num_states
    assert data.states == [], data.states


def test_syntax_errors():
    with pytest.raises(_aut.ParseError) as info:
        parser.parse('HOA: v1\nStates: x\n--BODY--\n--END--')
    assert info.value.code == _aut.SYNTAX_ERROR, info.value.code
    assert 'line 2' in str(info.value), str(info.value)
    # missing end
    with pytest.raises(_aut.ParseError):
        parser.parse('HOA: v1\n--BODY--\n')
    # illegal character
    with pytest.raises(_aut.ParseError) as info:
        parser.parse('HOA: v1\nStates: 1 ;\n--BODY--\n--END--')
    assert 'Illegal character' in str(info.value), str(info.value)
    # missing format version
    with pytest.raises(_aut.ParseError):
        parser.parse('States: 1\n--BODY--\n--END--')


def test_abort():
    s = 'HOA: v1\n--BODY--\nState: 0\n--ABORT--\n'
    with pytest.raises(_aut.ParseError) as info:
        parser.parse(s)
    assert info.value.code == _aut.SYNTAX_ERROR, info.value.code


def test_duplicate_alias():
    s = 'HOA: v1\nAlias: @a t\nAlias: @a f\n--BODY--\n--END--'
    with pytest.raises(_aut.ParseError) as info:
        parser.parse(s)
    assert info.value.code == _aut.SEMANTIC_ERROR, info.value.code


def test_load_checks_consistency():
    data = lexyacc.load(FULL_HEADER)
    assert data.num_states == 2, data.num_states
    # undefined alias
    s = 'HOA: v1\nAP: 1 "a"\nAlias: @a @b\n--BODY--\n--END--'
    with pytest.raises(_aut.ParseError) as info:
        lexyacc.load(s)
    assert info.value.code == _aut.SEMANTIC_ERROR, info.value.code


def test_parser_reuse_resets_line_numbers():
    bad = 'HOA: v1\n\n\nStates: x\n--BODY--\n--END--'
    for _ in range(2):
        with pytest.raises(_aut.ParseError) as info:
            parser.parse(bad)
        assert 'line 4' in str(info.value), str(info.value)


def test_load_twice():
    for _ in range(2):
        data = lexyacc.load(FULL_HEADER)
        assert len(data.states) == 2, data.states
        assert data.cnt_aps == [1, 2], data.cnt_aps
    # a fresh parser has its own lexer
    other = lexyacc.Parser()
    data = other.parse(FULL_HEADER)
    assert data.num_aps == 3, data.num_aps
    bad = 'HOA: v1\nStates: x\n--BODY--\n--END--'
    with pytest.raises(_aut.ParseError) as info:
        other.parse(bad)
    assert 'line 2' in str(info.value), str(info.value)


def test_flattened_labels_parse_again():
    data = parser.parse(FULL_HEADER)
    kinds = (Nodes.Bool, Nodes.AP, Nodes.Alias, Nodes.Unary, Nodes.Binary)
    labels = list(data.aliases.values())
    labels.extend(
        t.label for s in data.states for t in s.transitions
        if t.label is not None)
    for u in labels:
        stack = [u]
        while stack:
            v = stack.pop()
            assert isinstance(v, kinds), v
            if v.type == 'operator':
                stack.extend(v.operands)
        s = u.flatten()
        text = FULL_HEADER.replace(
            'Alias: @nc !2', 'Alias: @nc !2\nAlias: @x ' + s)
        r = parser.parse(text).aliases['@x'].flatten()
        assert r == s, (r, s)
