"""Parity objectives and their normalization to max-even.

The games produced by `hoa2pg.games.synthesis` are max-even
parity games in which player 0 wins a play iff the maximal
priority seen infinitely often is even. Priority 0 is left
for player-0 vertices that have no say in the objective.
"""
# Copyright 2019 by California Institute of Technology
# All rights reserved. Licensed under BSD-3.
#
import logging


logger = logging.getLogger(__name__)
EVEN = 0
ODD = 1


def parity_objective(acc_name_parameters):
    """Return `(is_max, win_res)` from `acc-name:` parameters.

    `is_max` is `True` for "max", `False` for "min".
    `win_res` is `EVEN` or `ODD`.
    Either is `None` if the parameters do not mention it.
    If a parameter appears more than once, the last wins.
    """
    is_max = None
    win_res = None
    for param in acc_name_parameters:
        if param == 'max':
            is_max = True
        elif param == 'min':
            is_max = False
        elif param == 'even':
            win_res = EVEN
        elif param == 'odd':
            win_res = ODD
    return is_max, win_res


def adjust_priority(p, is_max, win_res, num_acc_sets):
    """Return max-even priority that corresponds to `p`.

    A min objective is turned into a max one by subtracting
    from `num_acc_sets` (rounded up to even). Then all
    priorities are shifted up, by 2 for even objectives and
    by 1 for odd ones, which makes odd objectives even and
    keeps 0 for player-0 vertices.

    When `num_acc_sets` is odd and `is_max` is `False`,
    the parity of `p` is not preserved by the subtraction.

    @param p: index of acceptance set
    @param is_max: `True` if the original objective is max
    @param win_res: `EVEN` or `ODD`
    @param num_acc_sets: number of acceptance sets
    """
    assert win_res in (EVEN, ODD), win_res
    even_max = num_acc_sets
    if even_max % 2 != 0:
        even_max += 1
    if is_max:
        p_max = p
    else:
        p_max = even_max - p
    shifted = p_max + (2 - win_res)
    logger.debug((
        'Changed {p} into {q}. Original objective: {o} {r} '
        'with maximal priority {n}').format(
            p=p, q=shifted,
            o='max' if is_max else 'min',
            r='even' if win_res == EVEN else 'odd',
            n=num_acc_sets))
    return shifted
