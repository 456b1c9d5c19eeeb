## perlist — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .types import PersistentList, ListIter, nil, add_reclaim_hook, remove_reclaim_hook
from .stack import LinkedStack
from .errors import *
from .runtime import Session

_SESSION = Session()

def __getattr__(name):
    return getattr(_SESSION, name)
