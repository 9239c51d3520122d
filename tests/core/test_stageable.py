"""Stageable - tests for the generic draft/commit wrapper.

Invariants:
    - pending starts equal to committed, so a fresh wrapper is clean
    - commit() and discard() both leave the wrapper clean
"""

from splaroulette.core.stageable import Stageable


def test_new_stageable_is_clean():
    stage = Stageable(frozenset({"a"}))
    assert stage.pending == stage.committed
    assert not stage.is_dirty


def test_pending_edit_makes_dirty():
    stage = Stageable(frozenset({"a"}))
    stage.pending = frozenset({"a", "b"})
    assert stage.is_dirty
    assert stage.committed == frozenset({"a"})


def test_commit_promotes_pending_and_clears_dirty():
    stage = Stageable(frozenset({"a"}))
    stage.pending = frozenset({"b"})
    assert stage.commit() == frozenset({"b"})
    assert stage.committed == frozenset({"b"})
    assert not stage.is_dirty


def test_discard_restores_committed_and_clears_dirty():
    stage = Stageable(frozenset({"a"}))
    stage.pending = frozenset()
    stage.discard()
    assert stage.pending == frozenset({"a"})
    assert not stage.is_dirty


def test_reverting_pending_by_hand_is_not_dirty():
    stage = Stageable(frozenset({"a", "b"}))
    stage.pending = frozenset({"a"})
    stage.pending = frozenset({"b", "a"})
    assert not stage.is_dirty


def test_reset_replaces_both_sides():
    stage = Stageable(1)
    stage.pending = 2
    stage.reset(5)
    assert stage.committed == 5
    assert stage.pending == 5
    assert not stage.is_dirty
