## perlist — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .types import PersistentList, nil


def to_persistent(values, base: PersistentList | None = None) -> PersistentList:
    """Build a list whose head is `values[0]`, sharing `base` as its tail.

    The result always owns its own reference, even when `values` is empty.
    """
    lst = nil if base is None else base.clone()
    for value in reversed(list(values)):
        lst = lst.prepend(value)
    return lst

def from_persistent(lst: PersistentList) -> list:
    return list(lst)


def format_item(it, width=None, indent=0):
    if isinstance(it, PersistentList):
        if it is nil:
            return '< nil >'
        formatted_items = [format_item(i, width, indent + 4) for i in it]
        single_line = '< ' + ' '.join(formatted_items) + ' >'
        # If it fits on one line, use single line format.
        if width is None or len(single_line) + indent <= width: return single_line
        # Otherwise use multi-line format...
        result = '<   '
        for i, item in enumerate(formatted_items):
            if i > 0: result += '\n' + (' ' * (indent + 4))
            result += item
        result += '\n' + (' ' * indent) + '>'
        return result
    if isinstance(it, str):
        return '"' + it.replace('"', '\\"') + '"'
    if isinstance(it, bool): return str(it).lower()
    if it is None: return '∅'
    return str(it)

def show_list(lst, width=72, end='\n', file=None):
    list_str = format_item(lst)
    if width is not None and len(list_str) > width:
        list_str = '… ' + list_str[-width+2:]
    print(list_str, end=end, file=file)
