"""Explicit automata read from (extended) HOA files.

An `HoaData` holds everything that the parser collects,
with states, transitions, labels and acceptance signatures
as plain attributes. Labels are syntax trees of
`hoa2pg.logic.ast.Nodes`.
"""
# Copyright 2019 by California Institute of Technology
# All rights reserved. Licensed under BSD-3.
#
import logging

from hoa2pg.logic.ast import Nodes
from hoa2pg.logic import labels as lbl


logger = logging.getLogger(__name__)
SYNTAX_ERROR = 1
SEMANTIC_ERROR = 2


class ParseError(Exception):
    """Input that is not a well-formed EHOA automaton.

    The attribute `code` is the process exit status.
    """

    def __init__(self, message, code=SYNTAX_ERROR):
        super(ParseError, self).__init__(message)
        self.code = code


class Transition(object):
    """Edge of an automaton state.

    @param label: syntax tree, or `None` if the
        state carries a state-level label
    @param successors: `list` of state ids
    @param acc_sig: `list` of acceptance set indices, or `None`
    """

    def __init__(self, label, successors, acc_sig=None):
        self.label = label
        self.successors = successors
        self.acc_sig = acc_sig

    def __repr__(self):
        return 'Transition({l}, {s}, {a})'.format(
            l=_flatten(self.label), s=self.successors, a=self.acc_sig)


class State(object):
    """Automaton state with its outgoing transitions."""

    def __init__(self, id, name=None, label=None,
                 acc_sig=None, transitions=None):
        self.id = id
        self.name = name
        self.label = label
        self.acc_sig = acc_sig
        if transitions is None:
            transitions = list()
        self.transitions = transitions

    def __repr__(self):
        return 'State({i}, {n!r}, {l}, {a}, {t})'.format(
            i=self.id, n=self.name, l=_flatten(self.label),
            a=self.acc_sig, t=self.transitions)


class HoaData(object):
    """Data collected from an EHOA file.

    Attributes:

      - `num_states`: `int`, `None` if `States:` is absent
      - `num_aps`: `int`, number of atomic propositions
      - `aps`: `list` of AP names
      - `cnt_aps`: `list` of indices of controllable APs
      - `num_acc_sets`: `int`
      - `acc`: acceptance condition as syntax tree
      - `acc_name_id`: `str`, for example `'parity'`
      - `acc_name_parameters`: `list` of `str`
      - `properties`: `list` of `str`
      - `start`: `list` of initial state ids
      - `aliases`: `dict` that maps names (with `@`)
        to label syntax trees
      - `states`: `list` of `State`
      - `headers`: `list` of `(name, values)` for
        header items without special meaning
    """

    def __init__(self):
        self.version = None
        self.num_states = None
        self.num_aps = 0
        self.aps = list()
        self.cnt_aps = list()
        self.num_acc_sets = 0
        self.acc = None
        self.acc_name_id = None
        self.acc_name_parameters = list()
        self.properties = list()
        self.start = list()
        self.aliases = dict()
        self.states = list()
        self.tool_name = None
        self.tool_version = None
        self.name = None
        self.headers = list()

    def __str__(self):
        c = [
            'HOA: {v}'.format(v=self.version),
            'States: {n}'.format(n=self.num_states),
            'Start: {s}'.format(s=self.start),
            'AP: {n} {aps}'.format(n=self.num_aps, aps=self.aps),
            'controllable-AP: {c}'.format(c=self.cnt_aps),
            'Acceptance: {n} {a}'.format(
                n=self.num_acc_sets, a=_flatten(self.acc)),
            'acc-name: {i} {p}'.format(
                i=self.acc_name_id,
                p=' '.join(self.acc_name_parameters)),
            'properties: {p}'.format(p=' '.join(self.properties))]
        for name, expr in self.aliases.items():
            c.append('Alias: {n} {e}'.format(n=name, e=expr.flatten()))
        c.extend(repr(state) for state in self.states)
        return '\n'.join(c)

    @property
    def uncontrollable_aps(self):
        """Return ascending `list` of uncontrollable AP indices."""
        cnt = set(self.cnt_aps)
        return [i for i in range(self.num_aps) if i not in cnt]


def check_consistency(data):
    """Raise `ParseError` if `data` refers to undeclared items.

    Infers `data.num_states` if `States:` was absent.
    Expands implicit labels into explicit ones.
    """
    if len(data.aps) != data.num_aps:
        _fail('declared {n} APs, but named {m}'.format(
            n=data.num_aps, m=len(data.aps)))
    for i in data.cnt_aps:
        _check_ap(i, data)
    ids = [state.id for state in data.states]
    if len(set(ids)) != len(ids):
        _fail('duplicate state ids: {ids}'.format(ids=ids))
    if data.num_states is None:
        mentioned = ids + list(data.start) + [
            j for state in data.states
            for t in state.transitions
            for j in t.successors]
        data.num_states = max(mentioned, default=-1) + 1
        logger.info('inferred {n} states'.format(n=data.num_states))
    for i in data.start:
        _check_state_id(i, data)
    for name, expr in data.aliases.items():
        _check_label(expr, data)
    cycle = lbl.find_alias_cycle(data.aliases)
    if cycle is not None:
        _fail('cyclic alias definitions: {c}'.format(
            c=' -> '.join(cycle)))
    for acc_set in _acc_sets(data.acc):
        _check_acc_set(acc_set, data)
    for state in data.states:
        _check_state(state, data)
    expand_implicit_labels(data)


def _check_state(state, data):
    _check_state_id(state.id, data)
    if state.label is not None:
        _check_label(state.label, data)
    for i in state.acc_sig or ():
        _check_acc_set(i, data)
    for t in state.transitions:
        if t.label is not None:
            _check_label(t.label, data)
        for i in t.successors:
            _check_state_id(i, data)
        for i in t.acc_sig or ():
            _check_acc_set(i, data)


def _check_label(expr, data):
    for name in lbl.aliases_in(expr):
        if name not in data.aliases:
            _fail('undefined alias "{a}"'.format(a=name))
    for i in lbl.support(expr):
        _check_ap(i, data)


def _check_ap(i, data):
    if not (0 <= i < data.num_aps):
        _fail('AP {i} out of range [0, {n})'.format(
            i=i, n=data.num_aps))


def _check_state_id(i, data):
    if not (0 <= i < data.num_states):
        _fail('state {i} out of range [0, {n})'.format(
            i=i, n=data.num_states))


def _check_acc_set(i, data):
    if not (0 <= i < data.num_acc_sets):
        _fail('acceptance set {i} out of range [0, {n})'.format(
            i=i, n=data.num_acc_sets))


def _acc_sets(u):
    """Yield acceptance set indices in tree `u`."""
    if u is None:
        return
    if u.type == 'set':
        yield int(u.value)
        return
    if u.type == 'operator':
        for v in u.operands:
            yield from _acc_sets(v)


def expand_implicit_labels(data):
    """Replace implicit edge labels by minterms.

    A state without label, with `2**num_aps` edges
    that are all unlabeled, uses implicit labels:
    the `k`-th edge is taken when the APs are valued
    as the binary digits of `k` (AP 0 is the least
    significant bit).
    """
    n = 2**data.num_aps
    for state in data.states:
        if state.label is not None or not state.transitions:
            continue
        if any(t.label is not None for t in state.transitions):
            continue
        if len(state.transitions) != n:
            continue
        for k, t in enumerate(state.transitions):
            t.label = minterm(k, data.num_aps)
        logger.debug('state {s} has implicit labels'.format(s=state.id))


def minterm(k, num_aps):
    """Return conjunction that is true only at valuation `k`."""
    u = None
    for i in range(num_aps):
        v = Nodes.AP(str(i))
        if not (k >> i) & 1:
            v = Nodes.Unary('!', v)
        u = v if u is None else Nodes.Binary('&', u, v)
    if u is None:
        return Nodes.Bool('t')
    return u


def _fail(message):
    raise ParseError(message, SEMANTIC_ERROR)


def _flatten(u):
    if u is None:
        return None
    return u.flatten()
