"""The Relates-to trailer value and its expiring configuration."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from datetime import timedelta

from mitpair.vcs import ConfigStore

CONFIG_KEY_EXPIRES = "mit.relate.expires"
CONFIG_KEY_TO = "mit.relate.to"


@dataclass(frozen=True)
class RelateTo:
    """What the commit relates to, such as an issue number."""

    to: str


def set_relates_to(store: ConfigStore, relates: RelateTo, expires_in: timedelta) -> None:
    """Save the relates-to value and when it expires."""
    store.set_str(CONFIG_KEY_TO, relates.to)
    expiry = math.floor(time.time() + expires_in.total_seconds())
    store.set_i64(CONFIG_KEY_EXPIRES, expiry)


def get_relate_to_configuration(store: ConfigStore) -> RelateTo | None:
    """Return the saved relates-to value, or None if unset or expired."""
    expires = store.get_i64(CONFIG_KEY_EXPIRES)
    if expires is None:
        return None
    if expires < 0:
        raise ValueError("failed converted epoch int between types")
    if time.time() >= expires:
        return None
    value = store.get_str(CONFIG_KEY_TO)
    return None if value is None else RelateTo(value)