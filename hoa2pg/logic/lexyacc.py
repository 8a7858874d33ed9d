#!/usr/bin/env python
"""Parser for the extended Hanoi Omega-Automata format.

The format is HOA v1 with the header item `controllable-AP:`
that lists the indices of APs chosen by the system.


Reference
=========

Tomas Babiak, Frantisek Blahoudek, Alexandre Duret-Lutz,
Joachim Klein, Jan Kretinsky, David Mueller, David Parker,
Jan Strejcek
    "The Hanoi Omega-Automata Format"
    Computer Aided Verification (CAV)
    LNCS Vol.9206, pp.479--486, 2015
"""
# Copyright 2019 by California Institute of Technology
# All rights reserved. Licensed under BSD-3.
#
import logging

import astutils

from hoa2pg import automaton as _aut
from hoa2pg.logic.ast import Nodes


TABMODULE = 'hoa2pg.logic.hoa_parsetab'
logger = logging.getLogger(__name__)


class Lexer(astutils.Lexer):
    """Token rules to build EHOA lexer."""

    reserved = {
        't': 'TRUE',
        'f': 'FALSE',
        'Inf': 'INF',
        'Fin': 'FIN'}
    headers = {
        'HOA:': 'HOA',
        'States:': 'STATES',
        'Start:': 'START',
        'AP:': 'AP',
        'controllable-AP:': 'CNTAP',
        'Alias:': 'ALIAS',
        'Acceptance:': 'ACCEPTANCE',
        'acc-name:': 'ACCNAME',
        'tool:': 'TOOL',
        'name:': 'NAME',
        'properties:': 'PROPERTIES',
        'State:': 'STATE'}
    delimiters = [
        'LPAREN', 'RPAREN', 'LBRACKET', 'RBRACKET',
        'LBRACE', 'RBRACE', 'BODY', 'END', 'ABORT']
    operators = ['NOT', 'AND', 'OR']
    misc = [
        'HEADERNAME', 'IDENTIFIER', 'ANAME', 'STRING', 'INT'] + sorted(
            set(headers.values()))

    # functions are tried in the order defined,
    # so header names precede identifiers
    def t_HEADERNAME(self, t):
        r'[a-zA-Z_][0-9a-zA-Z_\-]*:'
        t.type = self.headers.get(t.value, 'HEADERNAME')
        return t

    def t_IDENTIFIER(self, t):
        r'[a-zA-Z_][0-9a-zA-Z_\-]*'
        t.type = self.reserved.get(t.value, 'IDENTIFIER')
        return t

    def t_ANAME(self, t):
        r'@[0-9a-zA-Z_\-]+'
        return t

    def t_STRING(self, t):
        r'"(?:[^"\\\n]|\\.)*"'
        # escape sequences are kept, so the
        # value can be quoted again as is
        t.value = t.value[1:-1]
        return t

    def t_INT(self, t):
        r'0|[1-9][0-9]*'
        t.value = int(t.value)
        return t

    def t_comment(self, t):
        r'/\*(?:.|\n)*?\*/'
        t.lexer.lineno += t.value.count('\n')

    def t_newline(self, t):
        r'\n+'
        t.lexer.lineno += t.value.count('\n')

    def t_error(self, t):
        raise _aut.ParseError(
            'Illegal character "{c}" at line {n}'.format(
                c=t.value[0], n=t.lexer.lineno))

    t_BODY = r'--BODY--'
    t_END = r'--END--'
    t_ABORT = r'--ABORT--'
    t_NOT = r'\!'
    t_AND = r'\&'
    t_OR = r'\|'
    t_LPAREN = r'\('
    t_RPAREN = r'\)'
    t_LBRACKET = r'\['
    t_RBRACKET = r'\]'
    t_LBRACE = r'\{'
    t_RBRACE = r'\}'
    t_ignore = ' \t\r'


class Parser(astutils.Parser):
    """Production rules to build EHOA parser.

    The result of `parse` is an `automaton.HoaData`
    that has not been checked for consistency.
    """

    tabmodule = TABMODULE
    start = 'automaton'
    # lowest to highest
    precedence = (
        ('left', 'OR'),
        ('left', 'AND'),
        ('right', 'NOT'))

    def __init__(self, nodes=None):
        if nodes is None:
            nodes = Nodes
        # kept, so that line numbers can be reset
        self._token_rules = Lexer()
        super(Parser, self).__init__(
            nodes=nodes, lexer=self._token_rules)

    def parse(self, text):
        """Return `HoaData` parsed from `text`."""
        self._token_rules.lexer.lineno = 1
        return super(Parser, self).parse(text)

    def p_automaton(self, p):
        """automaton : header BODY body END"""
        data = p[1]
        data.states = p[3]
        p[0] = data

    def p_automaton_aborted(self, p):
        """automaton : header BODY body ABORT"""
        raise _aut.ParseError('automaton aborted with "--ABORT--"')

    def p_header(self, p):
        """header : format_version header_items"""
        data = _aut.HoaData()
        data.version = p[1]
        for item in p[2]:
            item(data)
        p[0] = data

    def p_format_version(self, p):
        """format_version : HOA IDENTIFIER"""
        p[0] = p[2]

    def p_header_items_iter(self, p):
        """header_items : header_items header_item"""
        p[1].append(p[2])
        p[0] = p[1]

    def p_header_items_end(self, p):
        """header_items : """
        p[0] = list()

    # Each header item is a function that records
    # the item in a `HoaData`, so that repeated and
    # out-of-order items are handled in one place.
    def p_num_states(self, p):
        """header_item : STATES INT"""
        n = p[2]

        def item(data):
            data.num_states = n
        p[0] = item

    def p_start(self, p):
        """header_item : START state_conj"""
        ids = p[2]

        def item(data):
            data.start.extend(ids)
        p[0] = item

    def p_aps(self, p):
        """header_item : AP INT strings"""
        n = p[2]
        names = p[3]

        def item(data):
            data.num_aps = n
            data.aps = names
        p[0] = item

    def p_controllable_aps(self, p):
        """header_item : CNTAP ints"""
        ids = p[2]

        def item(data):
            data.cnt_aps.extend(ids)
        p[0] = item

    def p_alias(self, p):
        """header_item : ALIAS ANAME label_expr"""
        name = p[2]
        expr = p[3]

        def item(data):
            if name in data.aliases:
                raise _aut.ParseError(
                    'alias "{a}" defined twice'.format(a=name),
                    _aut.SEMANTIC_ERROR)
            data.aliases[name] = expr
        p[0] = item

    def p_acceptance(self, p):
        """header_item : ACCEPTANCE INT acceptance_cond"""
        n = p[2]
        acc = p[3]

        def item(data):
            data.num_acc_sets = n
            data.acc = acc
        p[0] = item

    def p_acc_name(self, p):
        """header_item : ACCNAME IDENTIFIER acc_params"""
        name = p[2]
        params = p[3]

        def item(data):
            data.acc_name_id = name
            data.acc_name_parameters = params
        p[0] = item

    def p_tool(self, p):
        """header_item : TOOL STRING
                       | TOOL STRING STRING
        """
        name = p[2]
        version = p[3] if len(p) == 4 else None

        def item(data):
            data.tool_name = name
            data.tool_version = version
        p[0] = item

    def p_name(self, p):
        """header_item : NAME STRING"""
        name = p[2]

        def item(data):
            data.name = name
        p[0] = item

    def p_properties(self, p):
        """header_item : PROPERTIES identifiers"""
        props = p[2]

        def item(data):
            data.properties.extend(props)
        p[0] = item

    def p_misc_header(self, p):
        """header_item : HEADERNAME values"""
        # drop the colon
        name = p[1][:-1]
        values = p[2]

        def item(data):
            data.headers.append((name, values))
        p[0] = item

    def p_acc_params_iter(self, p):
        """acc_params : acc_params IDENTIFIER
                      | acc_params INT
        """
        p[1].append(str(p[2]))
        p[0] = p[1]

    def p_acc_params_end(self, p):
        """acc_params : """
        p[0] = list()

    def p_identifiers_iter(self, p):
        """identifiers : identifiers IDENTIFIER"""
        p[1].append(p[2])
        p[0] = p[1]

    def p_identifiers_end(self, p):
        """identifiers : """
        p[0] = list()

    def p_strings_iter(self, p):
        """strings : strings STRING"""
        p[1].append(p[2])
        p[0] = p[1]

    def p_strings_end(self, p):
        """strings : """
        p[0] = list()

    def p_ints_iter(self, p):
        """ints : ints INT"""
        p[1].append(p[2])
        p[0] = p[1]

    def p_ints_end(self, p):
        """ints : """
        p[0] = list()

    def p_values_iter(self, p):
        """values : values value"""
        p[1].append(p[2])
        p[0] = p[1]

    def p_values_end(self, p):
        """values : """
        p[0] = list()

    def p_value(self, p):
        """value : TRUE
                 | FALSE
                 | INT
                 | STRING
                 | IDENTIFIER
        """
        p[0] = p[1]

    def p_state_conj_iter(self, p):
        """state_conj : state_conj AND INT"""
        p[1].append(p[3])
        p[0] = p[1]

    def p_state_conj_end(self, p):
        """state_conj : INT"""
        p[0] = [p[1]]

    def p_acceptance_binary(self, p):
        """acceptance_cond : acceptance_cond AND acceptance_cond
                           | acceptance_cond OR acceptance_cond
        """
        p[0] = self.nodes.Binary(p[2], p[1], p[3])

    def p_acceptance_paren(self, p):
        """acceptance_cond : LPAREN acceptance_cond RPAREN"""
        p[0] = p[2]

    def p_acceptance_atom(self, p):
        """acceptance_cond : INF LPAREN acc_set RPAREN
                           | FIN LPAREN acc_set RPAREN
        """
        p[0] = self.nodes.Unary(p[1], p[3])

    def p_acceptance_constant(self, p):
        """acceptance_cond : TRUE
                           | FALSE
        """
        p[0] = self.nodes.Bool(p[1])

    def p_acc_set(self, p):
        """acc_set : INT"""
        p[0] = self.nodes.AccSet(str(p[1]))

    def p_acc_set_negated(self, p):
        """acc_set : NOT INT"""
        p[0] = self.nodes.AccSet(str(p[2]), negated=True)

    def p_label_binary(self, p):
        """label_expr : label_expr AND label_expr
                      | label_expr OR label_expr
        """
        p[0] = self.nodes.Binary(p[2], p[1], p[3])

    def p_label_not(self, p):
        """label_expr : NOT label_expr"""
        p[0] = self.nodes.Unary(p[1], p[2])

    def p_label_paren(self, p):
        """label_expr : LPAREN label_expr RPAREN"""
        p[0] = p[2]

    def p_label_constant(self, p):
        """label_expr : TRUE
                      | FALSE
        """
        p[0] = self.nodes.Bool(p[1])

    def p_label_ap(self, p):
        """label_expr : INT"""
        p[0] = self.nodes.AP(str(p[1]))

    def p_label_alias(self, p):
        """label_expr : ANAME"""
        p[0] = self.nodes.Alias(p[1])

    def p_body_iter(self, p):
        """body : body state"""
        p[1].append(p[2])
        p[0] = p[1]

    def p_body_end(self, p):
        """body : """
        p[0] = list()

    def p_state(self, p):
        """state : STATE maybe_label INT maybe_string maybe_acc_sig edges"""
        p[0] = _aut.State(
            p[3], name=p[4], label=p[2],
            acc_sig=p[5], transitions=p[6])

    def p_edges_iter(self, p):
        """edges : edges edge"""
        p[1].append(p[2])
        p[0] = p[1]

    def p_edges_end(self, p):
        """edges : """
        p[0] = list()

    def p_edge(self, p):
        """edge : maybe_label state_conj maybe_acc_sig"""
        p[0] = _aut.Transition(p[1], p[2], acc_sig=p[3])

    def p_maybe_label(self, p):
        """maybe_label : LBRACKET label_expr RBRACKET"""
        p[0] = p[2]

    def p_maybe_acc_sig(self, p):
        """maybe_acc_sig : LBRACE ints RBRACE"""
        p[0] = p[2]

    def p_maybe_string(self, p):
        """maybe_string : STRING"""
        p[0] = p[1]

    def p_empty(self, p):
        """maybe_label :
           maybe_acc_sig :
           maybe_string :
        """
        p[0] = None

    def p_error(self, p):
        if p is None:
            raise _aut.ParseError('Syntax error at end of input')
        raise _aut.ParseError(
            'Syntax error at "{v}" (line {n})'.format(
                v=p.value, n=p.lineno))


_parser = None


def load(text):
    """Return `HoaData` read from EHOA `text`.

    Raise `automaton.ParseError` if `text` is malformed
    or inconsistent.
    """
    global _parser
    if _parser is None:
        _parser = Parser()
    data = _parser.parse(text)
    _aut.check_consistency(data)
    logger.info((
        'read automaton with {n} states, {a} APs '
        '({c} controllable)').format(
            n=data.num_states, a=data.num_aps, c=len(data.cnt_aps)))
    return data


def _rewrite_tables(outputdir='./'):
    astutils.rewrite_tables(Parser, TABMODULE, outputdir)


if __name__ == '__main__':
    log = logging.getLogger('astutils')
    log.setLevel(logging.DEBUG)
    log.addHandler(logging.StreamHandler())
    _rewrite_tables()
