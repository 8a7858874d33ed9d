"""Abstract syntax tree classes for labels and acceptance conditions."""
# Copyright 2019 by California Institute of Technology
# All rights reserved. Licensed under BSD-3.
#
import astutils


class Nodes(object):
    """Container of AST node classes for HOA expressions.

    Terminal values are strings, as `astutils` requires.
    Each `flatten` returns HOA syntax that the parser accepts.
    """

    class Bool(astutils.Terminal):
        """Boolean constant, `'t'` or `'f'`."""

        def __init__(self, value, dtype='bool'):
            super(Nodes.Bool, self).__init__(value, dtype)

    class AP(astutils.Terminal):
        """Reference to an atomic proposition by index."""

        def __init__(self, value, dtype='ap'):
            super(Nodes.AP, self).__init__(value, dtype)

    class Alias(astutils.Terminal):
        """Reference to a named label, including the `@`."""

        def __init__(self, value, dtype='alias'):
            super(Nodes.Alias, self).__init__(value, dtype)

    class AccSet(astutils.Terminal):
        """Acceptance set, possibly complemented."""

        def __init__(self, value, negated=False, dtype='set'):
            super(Nodes.AccSet, self).__init__(value, dtype)
            self.negated = negated

        def flatten(self, *arg, **kw):
            if self.negated:
                return '!' + self.value
            return self.value

    class Unary(astutils.Operator):
        """Negation, `Inf` or `Fin`."""

        def flatten(self, *arg, **kw):
            (x,) = self.operands
            if self.operator == '!':
                return '!' + x.flatten(*arg, **kw)
            return self.operator + '(' + x.flatten(*arg, **kw) + ')'

    class Binary(astutils.Operator):
        """Conjunction or disjunction."""

        def flatten(self, *arg, **kw):
            # parenthesize everything, so precedence is moot
            return ' '.join([
                '(' + self.operands[0].flatten(*arg, **kw),
                self.operator,
                self.operands[1].flatten(*arg, **kw) + ')'])
