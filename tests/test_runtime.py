## perlist — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

from perlist.errors import ListNameError, ListTypeError
from perlist.runtime import Session
from perlist.types import PersistentList, nil, add_reclaim_hook, remove_reclaim_hook


@pytest.fixture
def reclaimed():
    log = []
    hook = add_reclaim_hook(log.append)
    yield log
    remove_reclaim_hook(hook)


def test_session_shares_tails_between_bindings():
    s = Session()
    s.run("base = nil prepend 1 . a = base prepend 2 prepend 3 . b = base prepend 4 .")
    assert s.from_list(s.lookup('a')) == [3, 2, 1]
    assert s.from_list(s.lookup('b')) == [4, 1]
    assert s.lookup('base').refcount() == 4
    assert s.names() == ['a', 'b', 'base']


def test_run_returns_last_value():
    s = Session()
    assert s.run("a = < 1 2 3 > . a tail head .") == 2
    assert s.run("a length .") == 3
    assert s.run("nil head .") is None
    assert s.run("nil tail .") is nil


def test_bound_result_is_a_separate_handle():
    s = Session()
    out = s.run("a = < 1 > .")
    s.run("drop a .")
    assert out.head() == 1


def test_rebinding_releases_previous_handle(reclaimed):
    s = Session()
    s.run("a = < 1 > .")
    assert reclaimed == []
    s.run("a = nil .")
    assert reclaimed == [1]


def test_drop_keeps_shared_nodes_alive(reclaimed):
    s = Session()
    s.run("base = < 1 > . top = base prepend 2 prepend 3 .")
    s.run("drop top .")
    assert reclaimed == [3, 2]
    s.run("drop base .")
    assert reclaimed == [3, 2, 1]
    assert s.names() == []


def test_intermediate_results_are_released(reclaimed):
    s = Session()
    assert s.run("< 1 2 > tail tail .") is nil
    assert reclaimed == [1, 2]


def test_nested_literal_values():
    s = Session()
    inner = s.run("< < 1 2 > 3 > head .")
    assert isinstance(inner, PersistentList)
    assert s.from_list(inner) == [1, 2]


def test_unknown_name_raises():
    s = Session()
    with pytest.raises(ListNameError) as exc_info:
        s.run("missing tail .", filename="<test>")
    assert exc_info.value.list_token == 'missing'
    assert exc_info.value.list_meta['line'] == 1

    with pytest.raises(ListNameError):
        s.run("drop missing .")
    with pytest.raises(ListNameError):
        s.lookup('missing')


def test_step_on_non_list_raises():
    s = Session()
    s.run("x = < 1 > head .")
    with pytest.raises(ListTypeError) as exc_info:
        s.run("x tail .")
    assert exc_info.value.list_token == 'tail'


def test_bind_and_lookup_from_python():
    s = Session()
    lst = s.to_list(['a', 'b'])
    s.bind('xs', lst)
    assert lst.refcount() == 2
    assert s.run("xs prepend \"z\" .") == s.to_list(['z', 'a', 'b'])
    s.drop('xs')
    assert lst.refcount() == 1


def test_clear_releases_everything(reclaimed):
    s = Session()
    s.run("a = < 1 > . b = < 2 > .")
    s.clear()
    assert sorted(reclaimed) == [1, 2]
    assert s.names() == []


def test_stats_and_verbose_trace(capsys):
    s = Session()
    stats = {}
    s.run("a = < 1 > . a tail . drop a .", verbosity=1, stats=stats)
    assert stats['statements'] == 3
    out = capsys.readouterr().out
    assert "a = < 1 >" in out
    assert "drop a" in out
