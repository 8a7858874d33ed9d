"""Parity games from automata, in PGSolver format."""
