import pytest

from mitpair.errors import GitConfigError
from mitpair.vcs import (
    GitConfig,
    InMemory,
    get_coauthor_config,
    get_coauthors_config,
    has_coauthor,
)


def test_in_memory_reads_strings():
    store = InMemory({"user.name": "Billie Thompson"})
    assert store.get_str("user.name") == "Billie Thompson"
    assert store.get_str("user.email") is None


def test_in_memory_writes_into_shared_dict():
    backing = {}
    InMemory(backing).set_str("mit.relate.to", "[#12345678]")
    assert backing == {"mit.relate.to": "[#12345678]"}


def test_in_memory_integer_round_trip():
    store = InMemory()
    store.set_i64("mit.author.expires", -42)
    assert store.get_i64("mit.author.expires") == -42
    assert store.get_i64("missing") is None


def test_in_memory_invalid_integer_raises():
    with pytest.raises(GitConfigError):
        InMemory({"mit.author.expires": "soon"}).get_i64("mit.author.expires")


def test_in_memory_booleans():
    store = InMemory({"a": "true", "b": "false", "c": "yes"})
    assert store.get_bool("a") is True
    assert store.get_bool("b") is False
    assert store.get_bool("d") is None
    with pytest.raises(GitConfigError):
        store.get_bool("c")


def test_in_memory_remove():
    backing = {"user.signingkey": "0A46826A"}
    InMemory(backing).remove("user.signingkey")
    assert "user.signingkey" not in backing


def test_has_coauthor_needs_name_and_email():
    store = InMemory(
        {
            "mit.author.coauthors.0.name": "Annie Example",
            "mit.author.coauthors.0.email": "annie@example.com",
            "mit.author.coauthors.1.name": "Joe Bloggs",
        }
    )
    assert has_coauthor(store, 0)
    assert not has_coauthor(store, 1)


def test_get_coauthor_config_reads_field():
    store = InMemory({"mit.author.coauthors.0.email": "annie@example.com"})
    assert get_coauthor_config(store, "email", 0) == "annie@example.com"
    assert get_coauthor_config(store, "name", 0) is None


def test_get_coauthors_config_stops_at_gap():
    store = InMemory(
        {
            "mit.author.coauthors.0.name": "Annie Example",
            "mit.author.coauthors.0.email": "annie@example.com",
            "mit.author.coauthors.1.name": "Joe Bloggs",
            "mit.author.coauthors.1.email": "joe@example.com",
            "mit.author.coauthors.3.name": "Skipped Person",
            "mit.author.coauthors.3.email": "skipped@example.com",
        }
    )
    assert get_coauthors_config(store, "name") == ["Annie Example", "Joe Bloggs"]
    assert get_coauthors_config(store, "email") == ["annie@example.com", "joe@example.com"]


def test_get_coauthors_config_empty_store():
    assert get_coauthors_config(InMemory(), "name") == []


def test_discover_outside_repository_raises(tmp_path, monkeypatch):
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.parent))
    with pytest.raises(GitConfigError) as info:
        GitConfig.discover(tmp_path)
    assert info.value.help() == "is the directory a git repository"