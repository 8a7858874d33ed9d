"""Three-valued evaluation of edge labels.

A label is evaluated against a partial valuation: a
`projection` lists the AP indices that have values, and
bit `i` of the unsigned integer `value` is the value of
the AP `projection[i]`. APs outside the projection are
unknown, and the result follows Kleene's strong logic:

  - `TRUE` if the label holds for every completion,
  - `FALSE` if it fails for every completion,
  - `UNKNOWN` otherwise (as far as Kleene logic can tell).

Aliases are looked up by name in a `dict` that maps
alias names (with the `@`) to label syntax trees.
"""
# Copyright 2019 by California Institute of Technology
# All rights reserved. Licensed under BSD-3.
#
import logging

import networkx as nx


logger = logging.getLogger(__name__)
TRUE = 1
FALSE = -1
UNKNOWN = 0


def negate(x):
    """Return three-valued negation of `x`."""
    return -x


def evaluate(label, aliases, projection, value):
    """Return `TRUE`, `FALSE` or `UNKNOWN`.

    @param label: syntax tree with Boolean constants,
        AP references, alias references, `&`, `|`, `!`
    @param aliases: `dict` of label syntax trees
    @param projection: `list` of AP indices
    @param value: `int` with one bit per item of `projection`
    """
    assert label is not None
    t = label.type
    if t == 'bool':
        return TRUE if label.value == 't' else FALSE
    if t == 'ap':
        i = int(label.value)
        for k, j in enumerate(projection):
            if i == j:
                return TRUE if (value >> k) & 1 else FALSE
        return UNKNOWN
    if t == 'alias':
        assert label.value in aliases, (label.value, aliases)
        expr = aliases[label.value]
        return evaluate(expr, aliases, projection, value)
    assert t == 'operator', ('unexpected node in label', label)
    op = label.operator
    if op == '!':
        (x,) = label.operands
        return negate(evaluate(x, aliases, projection, value))
    assert op in ('&', '|'), ('unexpected operator in label', op)
    x, y = label.operands
    a = evaluate(x, aliases, projection, value)
    b = evaluate(y, aliases, projection, value)
    if op == '&':
        if a == FALSE or b == FALSE:
            return FALSE
        if a == UNKNOWN or b == UNKNOWN:
            return UNKNOWN
        return TRUE
    if a == TRUE or b == TRUE:
        return TRUE
    if a == UNKNOWN or b == UNKNOWN:
        return UNKNOWN
    return FALSE


def support(label):
    """Return `set` of AP indices that occur in `label`.

    Alias references are not followed, so each alias
    definition can be checked on its own.
    """
    if label.type == 'ap':
        return {int(label.value)}
    if label.type == 'operator':
        return set().union(*map(support, label.operands))
    return set()


def aliases_in(label):
    """Return `set` of alias names referenced in `label`."""
    if label.type == 'alias':
        return {label.value}
    if label.type == 'operator':
        return set().union(*map(aliases_in, label.operands))
    return set()


def alias_graph(aliases):
    """Return `networkx.DiGraph` of alias references.

    Each alias is a node, and an edge `(a, b)` means that
    the definition of `a` mentions `b`. References to
    undefined aliases appear as nodes too.
    """
    g = nx.DiGraph()
    for name, expr in aliases.items():
        g.add_node(name)
        for other in aliases_in(expr):
            g.add_edge(name, other)
    return g


def find_alias_cycle(aliases):
    """Return `list` of alias names on a cycle, or `None`.

    Evaluating a label that reaches a cycle of alias
    definitions would not terminate.
    """
    g = alias_graph(aliases)
    try:
        edges = nx.find_cycle(g)
    except nx.NetworkXNoCycle:
        return None
    cycle = [u for u, _ in edges]
    cycle.append(cycle[0])
    logger.debug('alias cycle: {c}'.format(c=cycle))
    return cycle
