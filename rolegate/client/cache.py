"""Identity-keyed profile snapshots with event-driven invalidation."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import StrEnum

from rolegate.application.api.v1.schemas import ProfileResponse

logger = logging.getLogger(__name__)

ProfileFetch = Callable[[], Awaitable[ProfileResponse | None]]
InvalidationListener = Callable[["InvalidationTag", str | None], None]


class InvalidationTag(StrEnum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    PROFILE_MUTATED = "PROFILE_MUTATED"


@dataclass(frozen=True)
class _Snapshot:
    profile: ProfileResponse | None


class ProfileCache:
    """Caches the caller's own profile per identity.

    Snapshots never expire on a timer; they are dropped only by
    ``invalidate()``. A stale snapshot would make the client disagree with
    the server gate, so every identity change must invalidate.
    """

    def __init__(self) -> None:
        self._snapshots: dict[str, _Snapshot] = {}
        self._listeners: list[InvalidationListener] = []

    def subscribe(self, listener: InvalidationListener) -> None:
        self._listeners.append(listener)

    async def get(self, identity: str, fetch: ProfileFetch) -> ProfileResponse | None:
        snapshot = self._snapshots.get(identity)
        if snapshot is None:
            snapshot = _Snapshot(profile=await fetch())
            self._snapshots[identity] = snapshot
            logger.debug("Profile snapshot fetched for %s", identity)
        return snapshot.profile

    def has(self, identity: str) -> bool:
        return identity in self._snapshots

    def invalidate(self, tag: InvalidationTag, identity: str | None = None) -> None:
        """Drop snapshots affected by an identity event.

        SIGNED_OUT drops every snapshot. SIGNED_IN and PROFILE_MUTATED drop the
        given identity's snapshot (every snapshot when no identity is given).
        """
        if tag == InvalidationTag.SIGNED_OUT or identity is None:
            self._snapshots.clear()
        else:
            self._snapshots.pop(identity, None)
        logger.debug("Profile cache invalidated: tag=%s, identity=%s", tag, identity)

        for listener in self._listeners:
            listener(tag, identity)
