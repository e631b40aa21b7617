"""Tests for tenacity-based store retry."""

from unittest.mock import MagicMock

import pytest

from cli.retry import store_retry, with_retry
from habits.errors import PersistenceError, ValidationError


def _fast(**kwargs):
    return store_retry(min_wait=0, max_wait=0, **kwargs)


def test_retries_persistence_error_then_succeeds():
    fn = MagicMock(side_effect=[PersistenceError("busy"), PersistenceError("busy"), "ok"])
    assert _fast(max_attempts=3)(fn)() == "ok"
    assert fn.call_count == 3


def test_gives_up_and_reraises():
    fn = MagicMock(side_effect=PersistenceError("disk gone"))
    with pytest.raises(PersistenceError, match="disk gone"):
        _fast(max_attempts=2)(fn)()
    assert fn.call_count == 2


def test_other_errors_not_retried():
    fn = MagicMock(side_effect=ValidationError("bad"))
    with pytest.raises(ValidationError):
        _fast(max_attempts=5)(fn)()
    assert fn.call_count == 1


def test_single_attempt():
    fn = MagicMock(side_effect=PersistenceError("nope"))
    with pytest.raises(PersistenceError):
        _fast(max_attempts=1)(fn)()
    assert fn.call_count == 1


def test_with_retry_filters_by_type():
    fn = MagicMock(side_effect=[KeyError("k"), "done"])
    decorated = with_retry(max_attempts=2, min_wait=0, max_wait=0, exceptions=(KeyError,))(fn)
    assert decorated() == "done"
