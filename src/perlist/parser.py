## perlist — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import ast
from dataclasses import dataclass

import lark
from .errors import ListParseError, ListIncompleteParse


GRAMMAR = r"""?start: statement*
statement: (binding | release | expr) DOT
binding: NAME EQUALS expr
release: DROP NAME
expr: source step*
source: NIL | NAME | literal
literal: LANGLE value* RANGLE
step: PREPEND value | TAIL | HEAD | LENGTH
value: INTEGER | FLOAT | STRING | TRUE | FALSE | NIL | literal

// COMMENTS
COMMENT: /#[^\r\n]*/

// KEYWORDS
NIL: "nil"
DROP: "drop"
PREPEND: "prepend"
TAIL: "tail"
HEAD: "head"
LENGTH: "length"
TRUE: "true"
FALSE: "false"

// TOKENS
DOT: "."
EQUALS: "="
LANGLE: "<"
RANGLE: ">"
STRING: /"(?:[^"\\]|\\.)*"/
FLOAT: /-?\d+\.\d+(?:[eE][+-]?\d+)?/
INTEGER: /-?\d+/
NAME: /[A-Za-z_][A-Za-z0-9_\-]*/

// WHITESPACE
%import common.WS
%ignore WS
%ignore COMMENT
"""

_PARSER = lark.Lark(GRAMMAR, parser="lalr", lexer="contextual", propagate_positions=True)


@dataclass(frozen=True)
class Literal:
    """A `< … >` list literal, items head first; built into a list when evaluated."""
    items: tuple


def _meta(node, filename) -> dict:
    if isinstance(node, lark.Token):
        return {'filename': filename, 'line': node.line, 'column': node.column, 'token': node.value}
    if getattr(node, 'meta', None) is not None and not node.meta.empty:
        return {'filename': filename, 'line': node.meta.line, 'column': node.meta.column, 'token': None}
    return {'filename': filename, 'line': None, 'column': None, 'token': None}


def _value(node: lark.Tree):
    [child] = node.children
    if isinstance(child, lark.Tree):
        return _literal(child)
    match child.type:
        case 'INTEGER': return int(child)
        case 'FLOAT': return float(child)
        case 'STRING': return ast.literal_eval(child)
        case 'TRUE': return True
        case 'FALSE': return False
        case 'NIL': return Literal(())
    raise ListParseError(f"Unexpected value token `{child.type}`.", token=child.value)

def _literal(node: lark.Tree) -> Literal:
    assert node.data == 'literal'
    return Literal(tuple(_value(ch) for ch in node.children if isinstance(ch, lark.Tree)))


def _expr(node: lark.Tree, filename) -> dict:
    source, *steps = node.children
    [origin] = source.children
    if isinstance(origin, lark.Tree):
        src = ('literal', _literal(origin), _meta(source, filename))
    elif origin.type == 'NIL':
        src = ('literal', Literal(()), _meta(origin, filename))
    else:
        src = ('name', origin.value, _meta(origin, filename))

    ops = []
    for step in steps:
        keyword, *rest = step.children
        arg = _value(rest[0]) if rest else None
        ops.append((keyword.value, arg, _meta(keyword, filename)))
    return {'source': src, 'steps': ops}


def parse(source: str, filename=None):
    """Yield `(kind, data)` for each statement: `bind`, `drop` or `eval`."""
    try:
        tree = _PARSER.parse(source)
    except lark.exceptions.UnexpectedInput as exc:
        def attr(k): return getattr(exc, k, None)
        token = attr('token')
        token_val = getattr(token, 'value', '') if token is not None else (attr('char') or '')
        at_end = isinstance(exc, lark.exceptions.UnexpectedEOF) or getattr(token, 'type', None) == '$END'
        error_class = ListIncompleteParse if at_end else ListParseError
        line, column = attr('line'), attr('column')
        if at_end or line is None or line < 1:
            line = column = None
        raise error_class(str(exc), filename=filename, line=line, column=column, token=token_val) from None

    statements = tree.children if isinstance(tree, lark.Tree) and tree.data == 'start' else [tree]
    for stmt in statements:
        [body, _dot] = stmt.children
        match body.data:
            case 'binding':
                name, _eq, expr = body.children
                yield 'bind', {'name': name.value, 'expr': _expr(expr, filename), 'meta': _meta(name, filename)}
            case 'release':
                _kw, name = body.children
                yield 'drop', {'name': name.value, 'meta': _meta(name, filename)}
            case 'expr':
                yield 'eval', {'expr': _expr(body, filename), 'meta': _meta(body, filename)}

