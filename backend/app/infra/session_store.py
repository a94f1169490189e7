"""
In-memory call store.

Maps call_id to the live CallState.  This is the caller-owned state the
assist tasks never touch; use cases load a call, mutate it between awaits
and leave it in place.

Tradeoff: in-memory dict means single-process only.  Swap for Redis or
Postgres in production.
"""

from __future__ import annotations

from app.domain.call import CallState, CallStatus

_store: dict[str, CallState] = {}


def create_call(state: CallState) -> None:
    _store[state.call_id] = state


def get_call(call_id: str) -> CallState | None:
    return _store.get(call_id)


def get_active_call_ids() -> list[str]:
    return [cid for cid, s in _store.items() if s.status is CallStatus.ACTIVE]


def clear_calls() -> None:
    _store.clear()
