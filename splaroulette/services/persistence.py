"""Persistence Helpers - best-effort access to the key-value store.

Invariants:
    - Never raise: a missing store, a PersistenceError or an undecodable value
      all read as None and write as False
    - Failures are logged at WARNING with the store key, never surfaced
"""

import logging
from typing import Callable, TypeVar

from splaroulette.core.errors import PersistenceError
from splaroulette.core.repository_protocols import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


def read_value(store: KeyValueStore | None, key: str) -> str | None:
    if store is None:
        return None
    try:
        return store.get(key)
    except PersistenceError as e:
        logger.warning(f"Store read failed: {e.message}", extra={"store_key": key})
        return None


def read_decoded(
    store: KeyValueStore | None, key: str, decode: Callable[[str], T],
) -> T | None:
    """Read and decode `key`; unparsable values count as absent."""
    raw = read_value(store, key)
    if raw is None:
        return None
    try:
        return decode(raw)
    except (ValueError, TypeError) as e:
        logger.warning(f"Ignoring malformed stored value: {e}", extra={"store_key": key})
        return None


def write_value(store: KeyValueStore | None, key: str, value: str) -> bool:
    if store is None:
        return False
    try:
        store.set(key, value)
        return True
    except PersistenceError as e:
        logger.warning(f"Store write failed: {e.message}", extra={"store_key": key})
        return False


def remove_value(store: KeyValueStore | None, key: str) -> bool:
    if store is None:
        return False
    try:
        store.remove(key)
        return True
    except PersistenceError as e:
        logger.warning(f"Store remove failed: {e.message}", extra={"store_key": key})
        return False
