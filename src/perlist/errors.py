## perlist — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import lark


class ListError(Exception):
    def __init__(self, message: str = "", *, list_token=None, list_meta=None):
        """Base class for all errors raised by perlist."""
        super().__init__(message)
        self.list_token: str = list_token
        self.list_meta: dict = list_meta

    @property
    def location(self) -> str:
        """`file:line:column` of the offending token, as far as it is known."""
        meta = self.list_meta or {}
        parts = [meta.get('filename') or '<input>', meta.get('line'), meta.get('column')]
        return ':'.join(str(p) for p in parts if p is not None)

class ListParseError(ListError):
    def __init__(self, message, *, filename=None, line=None, column=None, token=None):
        super().__init__(message, list_token=token, list_meta={'filename': filename, 'line': line, 'column': column})
        self.filename = filename
        self.line = line
        self.column = column
        self.token = token

class ListIncompleteParse(ListParseError, lark.exceptions.ParseError):
    def __init__(self, message, *, filename=None, line=None, column=None, token=None):
        super().__init__(message, filename=filename, line=line, column=column, token=token)

class ListNameError(ListError, NameError):
    pass

class ListTypeError(ListError, TypeError):
    """Applying a list step to something that is not a list."""
    pass

class ListReleasedError(ListError, RuntimeError):
    pass

class ListValueError(ListError, ValueError):
    pass
