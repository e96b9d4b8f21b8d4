"""Handler records and the per-event handler lists.

This module contains the storage side of an emitter: the record created for
every subscription and the operations that mutate one event's handler list.

CONTENTS:
- HandlerRecord: Metadata for one registered handler
- HandlerStore: Mapping of event name to its ordered handler list
- resolve_store: Locate (and optionally create) the store a receiver uses
- add_record / remove_tagged / expire_once: List mutations

ORDERING: Every handler list is kept sorted by priority, highest first. The
full list is re-sorted on each insertion.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from operator import attrgetter
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 10
"""Priority used when none (or a falsy one, including 0) is supplied."""

HandlerStore = dict[str, list["HandlerRecord"]]


@dataclass(eq=False)
class HandlerRecord:
    """Registration metadata for an event handler.

    Records compare by identity so that two subscriptions of the same
    function stay distinct entries.

    Attributes:
        callable: The function invoked on dispatch
        tag: Optional label used for targeted removal
        priority: Execution order, higher runs first
        context: Value passed to the handler as its first argument
        once: Remove the record after its first invocation
    """

    callable: Callable[..., Any]
    """The handler function or method to execute."""

    context: Any = None
    """Receiver handed to the handler on every call."""

    tag: str | None = None
    """Label matched by ``off()``."""

    priority: int = DEFAULT_PRIORITY
    """Higher values are invoked earlier."""

    once: bool = False
    """Expire after the first dispatch that invokes this record."""

    @classmethod
    def build(
        cls,
        callable: Callable[..., Any],
        receiver: Any,
        *,
        tag: str | None = None,
        priority: int | None = None,
        context: Any = None,
        once: bool = False,
    ) -> HandlerRecord:
        """Create a record, applying the registration defaults.

        ``priority`` falls back to DEFAULT_PRIORITY for any falsy value, so an
        explicit 0 is treated as unset. ``context`` falls back to the object
        that performed the registration.
        """
        return cls(
            callable=callable,
            context=receiver if context is None else context,
            tag=tag,
            priority=priority or DEFAULT_PRIORITY,
            once=bool(once),
        )

    @property
    def name(self) -> str:
        return getattr(self.callable, "__qualname__", repr(self.callable))


def resolve_store(
    receiver: Any,
    handlers_prop: str | None,
    private: HandlerStore | None,
    create: bool = False,
) -> HandlerStore | None:
    """Return the handler store the given receiver dispatches against.

    With a public ``handlers_prop`` the store is an attribute of the receiver,
    created on demand when ``create`` is set. Otherwise the private store
    owned by the capability is returned.
    """
    if not handlers_prop:
        return private

    store = getattr(receiver, handlers_prop, None)
    if store is None and create:
        store = {}
        setattr(receiver, handlers_prop, store)
    return store


def add_record(
    store: HandlerStore, eventname: str, record: HandlerRecord, debug: bool = False
) -> None:
    """Append ``record`` to the event's list and re-sort by priority."""
    records = store.setdefault(eventname, [])
    records.append(record)
    records.sort(key=attrgetter("priority"), reverse=True)
    if debug:
        logger.debug(
            f"Registered {record.name} for {eventname!r} at priority {record.priority}"
            + (" (once)" if record.once else "")
        )


def remove_tagged(
    store: HandlerStore | None, eventname: str, tag: str | None, debug: bool = False
) -> HandlerRecord | None:
    """Remove the first record for ``eventname`` whose tag equals ``tag``.

    Returns the removed record, or None when nothing matched.
    """
    if not tag or not store or eventname not in store:
        return None

    records = store[eventname]
    for index, record in enumerate(records):
        if record.tag == tag:
            del records[index]
            if debug:
                logger.debug(f"Removed {record.name} tagged {tag!r} from {eventname!r}")
            return record
    return None


def expire_once(
    store: HandlerStore,
    eventname: str,
    invoked: Iterable[HandlerRecord],
    debug: bool = False,
) -> int:
    """Drop the invoked one-shot records from the live list.

    Matching is by record identity, so records registered while the dispatch
    was running are left alone. Returns the number of records removed.
    """
    expired = {id(record) for record in invoked if record.once}
    records = store.get(eventname)
    if not expired or not records:
        return 0

    before = len(records)
    records[:] = [record for record in records if id(record) not in expired]
    removed = before - len(records)
    if debug and removed:
        logger.debug(f"Expired {removed} one-time handler(s) on {eventname!r}")
    return removed
