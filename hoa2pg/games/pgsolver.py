"""Read and write parity games in PGSolver format.

A game is a header line followed by one line per vertex:

```
parity 4;
0 0 1 1,2 "init";
```

that is, identifier, priority, owner (0 or 1), comma-separated
successors, and an optional double-quoted label. The header
number bounds the largest identifier. Lines written here end
at the label (no semicolon); the reader accepts both.
"""
# Copyright 2019 by California Institute of Technology
# All rights reserved. Licensed under BSD-3.
#
import logging
import re

import networkx as nx


logger = logging.getLogger(__name__)
HEADER = re.compile(r'^parity\s+(\d+)\s*;$')
VERTEX = re.compile(
    r'^(\d+)\s+(\d+)\s+([01])\s+(\d+(?:,\d+)*)'
    r'(?:\s+"((?:[^"\\]|\\.)*)")?\s*;?$')


def format_header(max_id):
    """Return header line declaring ids up to `max_id`."""
    assert max_id >= 0, max_id
    return 'parity {n};'.format(n=max_id)


def format_vertex(u, priority, owner, successors, label):
    """Return line that describes vertex `u`.

    @param successors: nonempty iterable of vertex ids
    @param label: `str`, written between double quotes
    """
    assert priority >= 0, priority
    assert owner in (0, 1), owner
    succ = ','.join(str(v) for v in successors)
    assert succ, ('vertex without successors', u)
    return '{u} {p} {o} {s} "{l}"'.format(
        u=u, p=priority, o=owner, s=succ, l=label)


def loads(text):
    """Return `networkx.DiGraph` of game in PGSolver `text`.

    Nodes are integers with attributes `priority`, `owner`,
    `label`. The graph attribute `max_id` is the number in
    the header. Edges are ordered as listed for each vertex.
    Raise `ValueError` if `text` is malformed, a vertex is
    listed twice, or a successor is never listed.
    """
    g = nx.DiGraph()
    lines = [s.strip() for s in text.splitlines()]
    lines = [s for s in lines if s]
    if not lines:
        raise ValueError('empty game')
    m = HEADER.match(lines[0])
    if m is None:
        raise ValueError('malformed header: {s!r}'.format(s=lines[0]))
    g.graph['max_id'] = int(m.group(1))
    for line in lines[1:]:
        m = VERTEX.match(line)
        if m is None:
            raise ValueError('malformed vertex line: {s!r}'.format(s=line))
        u = int(m.group(1))
        if u in g and 'owner' in g.nodes[u]:
            raise ValueError('vertex {u} listed twice'.format(u=u))
        g.add_node(
            u,
            priority=int(m.group(2)),
            owner=int(m.group(3)),
            label=m.group(5))
        for v in m.group(4).split(','):
            g.add_edge(u, int(v))
    missing = [u for u, d in g.nodes(data=True) if 'owner' not in d]
    if missing:
        raise ValueError('successors never listed: {m}'.format(
            m=sorted(missing)))
    logger.debug('loaded game with {n} vertices and {e} edges'.format(
        n=len(g), e=g.number_of_edges()))
    return g


def load(f):
    """Return game read from file object `f`."""
    return loads(f.read())


def dumps(g):
    """Return PGSolver text of game graph `g` (as from `loads`)."""
    max_id = g.graph.get('max_id', max(g, default=0))
    lines = [format_header(max_id)]
    for u in sorted(g):
        d = g.nodes[u]
        label = d.get('label')
        if label is None:
            label = str(u)
        lines.append(format_vertex(
            u, d['priority'], d['owner'], g.successors(u), label))
    lines.append('')
    return '\n'.join(lines)
