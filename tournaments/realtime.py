# tournaments/realtime.py
"""
In-process change feed for the tournament list.

Every tournament insert/update/delete is published as a ChangeEvent on
`tournament_channel`. Each subscriber owns a bounded queue; when it is full
the event is dropped for that subscriber. There is no ordering guarantee
across publishers, no dedup and no replay.

Subscribers keep a local list of tournament dicts and fold events into it
with `apply_change`.
"""
from __future__ import annotations

import json
import logging
import queue
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.urls import reverse

logger = logging.getLogger(__name__)

INSERT = "INSERT"
UPDATE = "UPDATE"
DELETE = "DELETE"
EVENT_TYPES = frozenset({INSERT, UPDATE, DELETE})

Row = Dict[str, Any]


@dataclass(frozen=True)
class ChangeEvent:
    event_type: str
    new: Row = field(default_factory=dict)
    old: Row = field(default_factory=dict)

    def as_payload(self) -> Row:
        return {"eventType": self.event_type, "new": self.new, "old": self.old}

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ChangeEvent":
        """Build from a wire payload; raises ValueError when it is not a mapping."""
        if not isinstance(payload, Mapping):
            raise ValueError(f"change payload must be a mapping, got {type(payload).__name__}")
        return cls(
            event_type=str(payload.get("eventType") or payload.get("event_type") or ""),
            new=dict(payload.get("new") or {}),
            old=dict(payload.get("old") or {}),
        )


def apply_change(rows: List[Row], event: Union[ChangeEvent, Mapping[str, Any], None]) -> List[Row]:
    """
    Fold one change into a tournament list and return the new list.

    INSERT prepends `new`; UPDATE replaces the row with the same id, or
    appends it when absent; DELETE drops rows whose id matches `old["id"]`.
    Anything else is logged and leaves the list unchanged. `rows` itself is
    never mutated.
    """
    if not isinstance(event, ChangeEvent):
        try:
            event = ChangeEvent.from_payload(event)
        except ValueError:
            logger.warning("Ignoring malformed tournament change: %r", event)
            return list(rows)

    if event.event_type == INSERT:
        if "id" not in event.new:
            logger.warning("Ignoring INSERT without a row id")
            return list(rows)
        return [event.new] + list(rows)

    if event.event_type == UPDATE:
        row_id = event.new.get("id")
        if row_id is None:
            logger.warning("Ignoring UPDATE without a row id")
            return list(rows)
        merged, replaced = [], False
        for row in rows:
            if row.get("id") == row_id:
                merged.append(event.new)
                replaced = True
            else:
                merged.append(row)
        if not replaced:
            merged.append(event.new)
        return merged

    if event.event_type == DELETE:
        row_id = event.old.get("id")
        if row_id is None:
            logger.warning("Ignoring DELETE without a row id")
            return list(rows)
        return [row for row in rows if row.get("id") != row_id]

    logger.warning("Ignoring unknown tournament change type %r", event.event_type)
    return list(rows)


class Subscription:
    def __init__(self, maxsize: int):
        self.queue: "queue.Queue[ChangeEvent]" = queue.Queue(maxsize=maxsize)
        self.dropped = 0

    def get(self, timeout: Optional[float] = None) -> ChangeEvent:
        """Next event; raises queue.Empty after `timeout` seconds."""
        return self.queue.get(timeout=timeout)


class TournamentChannel:
    """Fan-out of ChangeEvents to every live subscription in this process."""

    def __init__(self, queue_size: Optional[int] = None):
        self._queue_size = queue_size
        self._subscribers: set[Subscription] = set()
        self._lock = threading.Lock()

    @property
    def queue_size(self) -> int:
        if self._queue_size is not None:
            return self._queue_size
        return getattr(settings, "TOURNAMENT_FEED_QUEUE_SIZE", 100)

    def subscribe(self) -> Subscription:
        sub = Subscription(self.queue_size)
        with self._lock:
            self._subscribers.add(sub)
        logger.debug("Tournament feed subscriber added (%d live)", len(self._subscribers))
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            self._subscribers.discard(sub)
        logger.debug("Tournament feed subscriber removed (%d live)", len(self._subscribers))

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def publish(self, event: ChangeEvent) -> int:
        """Offer the event to every subscriber; returns how many accepted it."""
        with self._lock:
            subscribers = list(self._subscribers)
        delivered = 0
        for sub in subscribers:
            try:
                sub.queue.put_nowait(event)
                delivered += 1
            except queue.Full:
                sub.dropped += 1
                logger.warning(
                    "Tournament feed subscriber queue full, dropped %s event (%d dropped so far)",
                    event.event_type, sub.dropped,
                )
        return delivered


tournament_channel = TournamentChannel()


def serialize_tournament(t, registered: Optional[int] = None) -> Row:
    """Plain dict of a tournament as pushed to list subscribers."""
    if registered is None:
        registered = getattr(t, "registered", None)
    if registered is None:
        registered = t.registrations.count()
    return {
        "id": t.pk,
        "title": t.title,
        "description": t.description,
        "start_date": t.start_date,
        "end_date": t.end_date,
        "registration_deadline": t.registration_deadline,
        "prize_pool": t.prize_pool,
        "entry_fee": t.entry_fee,
        "max_teams": t.max_teams,
        "team_size": t.team_size,
        "mode": t.mode,
        "status": t.status,
        "image_url": t.image_url,
        "registered": registered,
        "fill_percent": round(t.fill_percent(registered), 1),
        "url": reverse("tournaments:tournament_detail", args=[t.pk]),
    }


def sse_frame(event: str, data: Any, event_id: Optional[int] = None) -> bytes:
    payload = json.dumps(data, cls=DjangoJSONEncoder)
    head = f"id: {event_id}\n" if event_id is not None else ""
    return f"{head}event: {event}\ndata: {payload}\n\n".encode()
