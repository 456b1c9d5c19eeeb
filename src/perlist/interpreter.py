## perlist — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any

from .types import PersistentList, nil
from .errors import ListNameError, ListTypeError, ListValueError
from .parser import Literal
from .formatting import format_item, to_persistent


def build_literal(literal: Literal) -> PersistentList:
    return to_persistent([build_value(it) for it in literal.items])

def build_value(value):
    return build_literal(value) if isinstance(value, Literal) else value


def _release(value) -> None:
    if isinstance(value, PersistentList):
        value.release()


def apply_step(value, op: str, arg=None, meta: dict | None = None):
    if not isinstance(value, PersistentList):
        raise ListTypeError(f"`{op}` expects a list, got {type(value).__name__}.", list_token=op, list_meta=meta)
    match op:
        case 'prepend': return value.prepend(build_value(arg))
        case 'tail': return value.tail()
        case 'head':
            # Nested lists stay owned by their node; the caller gets its own handle.
            element = value.head()
            return element.clone() if isinstance(element, PersistentList) else element
        case 'length': return len(value)
    raise ListValueError(f"Unknown step `{op}`.", list_token=op, list_meta=meta)


def evaluate(expr: dict, bindings: dict[str, Any], verbosity=0):
    kind, payload, meta = expr['source']
    if kind == 'literal':
        value = build_literal(payload)
    elif payload in bindings:
        value = bindings[payload]
        # Every result owns its own handle, separate from the binding's.
        value = value.clone() if isinstance(value, PersistentList) else value
    else:
        raise ListNameError(f"Name `{payload}` is not bound in this session.", list_token=payload, list_meta=meta)

    for op, arg, meta in expr['steps']:
        result = apply_step(value, op, arg, meta)
        if verbosity == 2:
            print(f"\033[90m    {op:>8} :\033[0m  {format_item(result)}")
        if result is not value:
            _release(value)
        value = result
    return value


def bind(bindings: dict[str, Any], name: str, value) -> None:
    previous = bindings.get(name)
    bindings[name] = value
    if previous is not value:
        _release(previous)

def drop(bindings: dict[str, Any], name: str, meta: dict | None = None) -> None:
    if name not in bindings:
        raise ListNameError(f"Cannot drop `{name}`, it is not bound in this session.", list_token=name, list_meta=meta)
    _release(bindings.pop(name))


def interpret(statements, bindings: dict[str, Any], verbosity=0, stats=None):
    """Run parsed statements against `bindings`, returning the last statement's value."""
    out, step = None, 0
    for kind, data in statements:
        match kind:
            case 'bind':
                value = evaluate(data['expr'], bindings, verbosity)
                bind(bindings, data['name'], value)
                out = value.clone() if isinstance(value, PersistentList) else value
                text = f"{data['name']} = {format_item(out)}"
            case 'drop':
                if verbosity > 0: print(f"\033[90m{step:>3} :\033[0m  drop {data['name']}")
                drop(bindings, data['name'], data['meta'])
                out, text = nil, None
            case 'eval':
                out = evaluate(data['expr'], bindings, verbosity)
                text = format_item(out)
        if verbosity > 0 and text is not None:
            print(f"\033[90m{step:>3} :\033[0m  {text}")
        step += 1

    if stats is not None:
        stats['statements'] = stats.get('statements', 0) + step
    return out
