"""Translate parity automata in extended HOA format to parity games."""
from hoa2pg._version import version as __version__
