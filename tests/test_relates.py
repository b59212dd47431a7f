import time
from datetime import timedelta

import pytest

from mitpair.relates import RelateTo, get_relate_to_configuration, set_relates_to
from mitpair.vcs import InMemory


def _epoch_with_offset(seconds):
    return int(time.time() + seconds)


def test_has_a_relate_to_string():
    assert RelateTo("[#12343567]").to == "[#12343567]"


def test_the_value_becomes_the_relates():
    buffer = {}
    set_relates_to(InMemory(buffer), RelateTo("[#12345678]"), timedelta(hours=1))
    assert buffer.get("mit.relate.to") == "[#12345678]"


def test_sets_the_expiry_time():
    buffer = {}
    set_relates_to(InMemory(buffer), RelateTo("[#12345678]"), timedelta(hours=1))
    sec59min = _epoch_with_offset(60 * 59)
    sec61min = _epoch_with_offset(60 * 61)
    actual = int(buffer["mit.relate.expires"])
    assert sec59min < actual < sec61min


def test_there_is_no_relate_config_if_it_has_expired():
    buffer = {"mit.relate.expires": str(_epoch_with_offset(-10))}
    assert get_relate_to_configuration(InMemory(buffer)) is None


def test_we_get_relate_to_config_back_if_there_is_any():
    buffer = {
        "mit.relate.expires": str(_epoch_with_offset(10)),
        "mit.relate.to": "[#12345678]",
    }
    assert get_relate_to_configuration(InMemory(buffer)) == RelateTo("[#12345678]")


def test_no_expiry_means_no_config():
    assert get_relate_to_configuration(InMemory({"mit.relate.to": "[#1]"})) is None


def test_negative_expiry_is_an_error():
    with pytest.raises(ValueError):
        get_relate_to_configuration(InMemory({"mit.relate.expires": "-5"}))


def test_round_trip_through_store():
    store = InMemory()
    set_relates_to(store, RelateTo("[#42]"), timedelta(minutes=5))
    assert get_relate_to_configuration(store) == RelateTo("[#42]")