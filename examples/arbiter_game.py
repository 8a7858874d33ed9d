"""How to turn a parity automaton into a synthesis game.

The automaton below describes a single-client arbiter:
each request ("req", chosen by the environment) should
eventually be granted ("grant", chosen by the system).
The translation produces a game in PGSolver format, which
a parity game solver (for example `pgsolver` or `oink`)
can solve to decide whether a controller exists.
"""
import io
import logging

from hoa2pg.games import pgsolver
from hoa2pg.games import synthesis
from hoa2pg.logic import lexyacc


log = logging.getLogger('hoa2pg.games.synthesis')
log.addHandler(logging.StreamHandler())
log.setLevel(logging.INFO)


ARBITER = '''
HOA: v1
name: "G (req -> F grant)"
States: 2
Start: 0
AP: 2 "req" "grant"
controllable-AP: 1
acc-name: parity max even 2
Acceptance: 2 Fin(1) & Inf(0)
properties: trans-labels explicit-labels trans-acc
properties: deterministic complete colored
--BODY--
State: 0 "granted"
[!0 | 1] 0 {0}
[0 & !1] 1 {1}
State: 1 "pending"
[1] 0 {0}
[!1] 1 {1}
--END--
'''


def translate():
    """Print the game and a summary of its vertices."""
    aut = lexyacc.load(ARBITER)
    f = io.StringIO()
    synthesis.write_game(aut, f)
    s = f.getvalue()
    print(s)
    g = pgsolver.loads(s)
    env = [u for u, d in g.nodes(data=True) if d['owner'] == 1]
    sys = [u for u, d in g.nodes(data=True) if d['owner'] == 0]
    print('{n} environment and {m} system vertices'.format(
        n=len(env), m=len(sys)))
    priorities = {d['priority'] for _, d in g.nodes(data=True)}
    print('priorities: {p}'.format(p=sorted(priorities)))


if __name__ == '__main__':
    translate()
