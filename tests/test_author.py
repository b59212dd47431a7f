from datetime import datetime, timezone

import pytest

from mitpair.author import Author, AuthorState


def test_has_an_author():
    author = Author("The Name", "email@example.com")
    assert author.name == "The Name"
    assert author.email == "email@example.com"
    assert author.signingkey is None


def test_has_a_signing_key():
    author = Author("The Name", "email@example.com", "0A46826A")
    assert author.signingkey == "0A46826A"


def test_unwrap_with_value():
    assert AuthorState.some(True).unwrap() is True


def test_unwrap_with_none():
    with pytest.raises(ValueError):
        AuthorState.none().unwrap()


def test_unwrap_with_timeout():
    with pytest.raises(ValueError):
        AuthorState.timeout(datetime.fromtimestamp(10, tz=timezone.utc)).unwrap()


def test_some_predicates():
    state = AuthorState.some(True)
    assert state.is_some()
    assert not state.is_none()
    assert not state.is_timeout()


def test_none_predicates():
    state = AuthorState.none()
    assert not state.is_some()
    assert state.is_none()
    assert not state.is_timeout()


def test_timeout_predicates():
    state = AuthorState.timeout(datetime.now(timezone.utc))
    assert not state.is_some()
    assert not state.is_none()
    assert state.is_timeout()


def test_to_optional():
    assert AuthorState.some([1]).to_optional() == [1]
    assert AuthorState.none().to_optional() is None
    assert AuthorState.timeout(datetime.now(timezone.utc)).to_optional() is None


def test_states_compare_by_value():
    moment = datetime.fromtimestamp(10, tz=timezone.utc)
    assert AuthorState.timeout(moment) == AuthorState.timeout(moment)
    assert AuthorState.some([]) == AuthorState.some([])
    assert AuthorState.some([]) != AuthorState.none()