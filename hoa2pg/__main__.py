"""Translate an EHOA automaton on stdin to a PGSolver game on stdout.

Usage:

    python -m hoa2pg < automaton.ehoa > game.pg

Exit status is 0 on success, the parser's code (1 or 2) on
malformed input, and 100 to 300 for automata that are not
deterministic, complete, colored parity automata with a
unique initial state.
"""
# Copyright 2019 by California Institute of Technology
# All rights reserved. Licensed under BSD-3.
#
import io
import logging
import sys

from hoa2pg import automaton as _aut
from hoa2pg.games import synthesis
from hoa2pg.games import validation
from hoa2pg.logic import lexyacc


logger = logging.getLogger('hoa2pg')


def main(stdin=None, stdout=None, stderr=None):
    """Run the translation and return the exit status."""
    if stdin is None:
        stdin = sys.stdin
    if stdout is None:
        stdout = sys.stdout
    if stderr is None:
        stderr = sys.stderr
    handler = logging.StreamHandler(stderr)
    logger.addHandler(handler)
    if logger.level == logging.NOTSET:
        logger.setLevel(logging.WARNING)
    try:
        return _translate(stdin, stdout, stderr)
    finally:
        logger.removeHandler(handler)


def _translate(stdin, stdout, stderr):
    try:
        data = lexyacc.load(stdin.read())
    except _aut.ParseError as e:
        print(e, file=stderr)
        return e.code
    # buffer, so that nothing is written on failure
    buf = io.StringIO()
    try:
        synthesis.write_game(data, buf)
    except validation.ValidationError as e:
        print(e, file=stderr)
        return e.code
    stdout.write(buf.getvalue())
    stdout.flush()
    return 0


def run():
    """Console script entry point."""
    sys.exit(main())


if __name__ == '__main__':
    run()
