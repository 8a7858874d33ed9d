"""Syntax of extended HOA automata and evaluation of labels."""
