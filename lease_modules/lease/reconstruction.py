"""
Inception-state reconstruction by unwinding the modification log.

A contract carries its *current* terms.  Each modification records the
values it replaced, so folding the log newest-first and laying each
``previous_values`` over the running state peels the changes back one at a
time until only the inception terms remain.  ``replay_modifications`` is
the inverse fold.

Ordering is by ``(effective_date, recorded_at)``; modifications recorded
without a timestamp sort before timestamped ones on the same date, and
remaining ties fall back to position in the newest-first log.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime, timezone
from functools import reduce

from lease_modules.lease.models import LeaseContract, LeaseModification

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _sort_key(position: int, modification: LeaseModification) -> tuple:
    recorded = modification.recorded_at or _EPOCH
    if recorded.tzinfo is None:
        recorded = recorded.replace(tzinfo=timezone.utc)
    # The log is newest first, so a later position means recorded earlier.
    return (modification.effective_date, recorded, -position)


def chronological(modifications: Iterable[LeaseModification]) -> tuple[LeaseModification, ...]:
    """Modifications oldest first, the order the timeline applies them."""
    ranked = sorted(enumerate(modifications), key=lambda item: _sort_key(*item))
    return tuple(modification for _, modification in ranked)


def _unwind(state: LeaseContract, modification: LeaseModification) -> LeaseContract:
    return replace(state, **modification.previous_values)


def _apply(state: LeaseContract, modification: LeaseModification) -> LeaseContract:
    return replace(state, **modification.new_values)


def reconstruct_inception_terms(contract: LeaseContract) -> LeaseContract:
    """The contract as it stood before any modification, with an empty log."""
    newest_first = reversed(chronological(contract.modifications))
    return reduce(_unwind, newest_first, replace(contract, modifications=()))


def replay_modifications(
    inception: LeaseContract,
    modifications: Iterable[LeaseModification],
) -> LeaseContract:
    """Apply each modification's new values oldest first.

    The returned contract carries the replayed terms; its modification log
    is left as ``inception`` had it.
    """
    return reduce(_apply, chronological(modifications), inception)
