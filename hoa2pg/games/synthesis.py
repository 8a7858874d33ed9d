"""Construct a parity game for reactive synthesis from an automaton.

Each automaton state becomes a player-1 vertex (environment)
that keeps the state id. From there, the environment picks a
valuation of the uncontrollable APs, which leads to a player-0
vertex (system) for that "partial valuation". The system picks
a transition whose label is compatible with the partial
valuation, and arrives at a "full valuation" vertex, whose only
successor is the successor state of the transition. Only the
full valuation vertices carry the (normalized) acceptance
priority, so the game is won by player 0 iff the trace of the
automaton satisfies the parity condition.

The game is streamed: vertices are yielded as lines of PGSolver
text as soon as they are known, and nothing is kept in memory
besides the successors of the current partial valuation vertex.
"""
# Copyright 2019 by California Institute of Technology
# All rights reserved. Licensed under BSD-3.
#
import logging

from hoa2pg.games import parity
from hoa2pg.games import pgsolver
from hoa2pg.games import validation
from hoa2pg.logic import labels as lbl


logger = logging.getLogger(__name__)


def write_game(data, f):
    """Write to file `f` the PGSolver game of automaton `data`.

    Raise `validation.ValidationError` before writing anything,
    if `data` is not a deterministic, complete, colored parity
    automaton with a unique initial state.
    """
    is_max, win_res = validation.check_automaton(data)
    for line in game_lines(data, is_max, win_res):
        f.write(line)
        f.write('\n')


def game_lines(data, is_max, win_res):
    """Yield lines of PGSolver game for automaton `data`.

    @param is_max, win_res: parity objective,
        as returned by `parity.parity_objective`
    """
    ucnt_aps = data.uncontrollable_aps
    for i in ucnt_aps:
        logger.debug('Found an uncontrollable AP: {i}'.format(i=i))
    num_valuations = 2**len(ucnt_aps)
    yield pgsolver.format_header(max_vertex_id(data, num_valuations))
    next_index = data.num_states
    for state in data.states:
        first_succ = next_index
        next_index += num_valuations
        for value in range(num_valuations):
            part_val = first_succ + value
            valid_vals = list()
            for trans in state.transitions:
                full_val = next_index
                line = _transition_vertex(
                    full_val, state, trans, data,
                    ucnt_aps, value, is_max, win_res)
                if line is None:
                    continue
                next_index += 1
                yield line
                valid_vals.append(full_val)
            assert valid_vals, (
                'no transition compatible with valuation',
                state.id, value)
            # latest first
            valid_vals.reverse()
            yield pgsolver.format_vertex(
                part_val, 0, 0, valid_vals, str(part_val))
        # priority-0 edges from the player-1 vertex
        # to all partial valuation vertices
        succ = range(first_succ, first_succ + num_valuations)
        if state.name is not None:
            name = state.name
        else:
            name = str(state.id)
        yield pgsolver.format_vertex(state.id, 0, 1, succ, name)
    logger.info('game has {n} vertices'.format(
        n=len(data.states) + next_index - data.num_states))


def _transition_vertex(
        full_val, state, trans, data,
        ucnt_aps, value, is_max, win_res):
    """Return line for vertex `full_val`, or `None`.

    `None` means that the label of `trans` is false
    for the uncontrollable valuation `value`.
    """
    # a single successor per transition
    assert len(trans.successors) == 1, (state.id, trans)
    # a label at state or transition level
    if state.label is not None:
        label = state.label
    else:
        label = trans.label
    assert label is not None, (state.id, trans)
    # a priority at state or transition level
    if state.acc_sig is not None:
        acc = state.acc_sig
    else:
        acc = trans.acc_sig
    # exactly one acceptance set
    assert acc is not None and len(acc) == 1, (state.id, trans)
    priority = parity.adjust_priority(
        acc[0], is_max, win_res, data.num_acc_sets)
    evald = lbl.evaluate(label, data.aliases, ucnt_aps, value)
    logger.debug((
        'evaluated label {l} for value {v} with '
        '{n} uncontrollable APs; got {r}').format(
            l=label.flatten(), v=value, n=len(ucnt_aps), r=evald))
    if evald == lbl.FALSE:
        return None
    # the unique successor is that of the transition,
    # so which full valuation is picked does not matter
    (succ,) = trans.successors
    return pgsolver.format_vertex(
        full_val, priority, 0, [succ], str(full_val))


def max_vertex_id(data, num_valuations):
    """Return upper bound on the vertex ids of the game.

    Each state contributes one partial valuation vertex per
    valuation, and at most one full valuation vertex per
    transition and valuation.
    """
    n = sum(1 + len(state.transitions) for state in data.states)
    return max(data.num_states - 1 + num_valuations * n, 0)
