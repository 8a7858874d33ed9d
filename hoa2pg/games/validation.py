"""Check that an automaton can be turned into a parity game."""
# Copyright 2019 by California Institute of Technology
# All rights reserved. Licensed under BSD-3.
#
import logging

from hoa2pg.games import parity


logger = logging.getLogger(__name__)
NOT_PARITY = 100
NO_ORDER = 101
NO_PARITY_SIDE = 102
NOT_DETERMINISTIC = 200
NOT_COMPLETE = 201
NOT_COLORED = 202
NO_UNIQUE_START = 300


class ValidationError(Exception):
    """Automaton of a shape that cannot be converted.

    The attribute `code` is the process exit status.
    """

    def __init__(self, message, code):
        super(ValidationError, self).__init__(message)
        self.code = code


def check_automaton(data):
    """Return `(is_max, win_res)` of parity automaton `data`.

    Raise `ValidationError` unless `data` is a deterministic,
    complete, colored parity automaton with one initial state.
    """
    if data.acc_name_id != 'parity':
        raise ValidationError((
            'Expected "parity..." automaton, found "{a}" '
            'as automaton type').format(a=data.acc_name_id),
            NOT_PARITY)
    is_max, win_res = parity.parity_objective(data.acc_name_parameters)
    if is_max is None:
        raise ValidationError(
            'Expected "max" or "min" in the acceptance name',
            NO_ORDER)
    if win_res is None:
        raise ValidationError(
            'Expected "even" or "odd" in the acceptance name',
            NO_PARITY_SIDE)
    props = set(data.properties)
    if 'deterministic' not in props:
        raise ValidationError(
            'Expected a deterministic automaton, '
            'did not find "deterministic" in the properties',
            NOT_DETERMINISTIC)
    if 'complete' not in props:
        raise ValidationError(
            'Expected a complete automaton, '
            'did not find "complete" in the properties',
            NOT_COMPLETE)
    if 'colored' not in props:
        raise ValidationError(
            'Expected one acceptance set per transition, '
            'did not find "colored" in the properties',
            NOT_COLORED)
    if len(data.start) != 1:
        raise ValidationError(
            'Expected a unique start state, found {n}'.format(
                n=len(data.start)),
            NO_UNIQUE_START)
    logger.info('parity objective: {o} {r}'.format(
        o='max' if is_max else 'min',
        r='even' if win_res == parity.EVEN else 'odd'))
    return is_max, win_res
