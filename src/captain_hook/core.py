"""Emitter capability factory.

``captain_hook()`` returns a plain object carrying four operations: register
(``on``), register-once (``once``), deregister (``off``) and dispatch
(``_emit``). The object can be used as an emitter on its own or composed onto
any class or instance with ``mixin()``, in which case the host becomes the
receiver of every operation.

STORAGE POLICY:
- Public (default): the handler store is an attribute of the receiver,
  created on its first registration. Every host instance has its own store.
- Private (``handlers_prop=None``): one store is owned by the capability and
  shared by every host it is composed onto. No host can reach it.

DISPATCH:
- Handlers run synchronously, highest priority first, over the handlers
  registered when dispatch starts. A handler removed from the live list
  before its turn (by off() or by a nested dispatch expiring it) is skipped.
- Each handler is called as ``handler(context, *args)``. The context defaults
  to the object that registered the handler.
- Return values are collected in invocation order. Awaitables are returned
  unresolved; awaiting them is up to the emitting host.
- Handler exceptions propagate immediately, skipping the remaining handlers
  and the one-shot cleanup for that call.

TYPICAL USAGE:
```python
hooks = captain_hook()


@mixin(hooks)
class Uploader:
    def upload(self, path):
        if all(self._emit("upload:allowed", path)):
            ...


uploader = Uploader()
uploader.on("upload:allowed", lambda this, path: not path.endswith(".exe"))
```
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from typing import Any

from .config import HookConfig
from .registration import (
    HandlerRecord,
    HandlerStore,
    add_record,
    expire_once,
    remove_tagged,
    resolve_store,
)
from .trace import log_dispatch

logger = logging.getLogger(__name__)


def _merge_options(
    options: Mapping[str, Any] | None, overrides: Mapping[str, Any]
) -> dict[str, Any]:
    merged = dict(options or {})
    merged.update(overrides)
    return merged


def captain_hook(
    config: HookConfig | Mapping[str, Any] | None = None, /, **options: Any
) -> Any:
    """
    Create an emitter capability object.

    Args:
        config: Optional HookConfig or mapping of option names
        **options: Individual options, overriding ``config``:
            on_prop, once_prop, off_prop, emit_prop (operation names),
            handlers_prop (store attribute, or None for private storage),
            debug, trace, trace_verbosity

    Returns:
        Instance of a class created for this call whose namespace holds the
        four operations under the configured names

    Raises:
        pydantic.ValidationError: Unknown option name or wrong option type
    """
    cfg = HookConfig.coerce(config, **options)

    on_prop = cfg.on_prop
    handlers_prop = cfg.handlers_prop
    debug = cfg.debug

    # Use a truly private store instead of an attribute on the receiver
    private: HandlerStore | None = {} if cfg.private else None

    def on(
        self,
        eventname: str,
        callable: Callable[..., Any] | None = None,
        options: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ):
        """
        Associate a handler with an event name.

        Called without ``callable`` this returns a decorator registering the
        decorated function, which is returned unchanged.

        Args:
            eventname: Event to subscribe to
            callable: Handler, invoked as ``callable(context, *args)``
            options: Mapping of registration options, overridden by kwargs
            tag: Label for removal through ``off()``
            priority: Execution order, higher first (default 10; 0 counts as unset)
            context: First argument passed to the handler (default: receiver)
            once: Remove the handler after its first invocation
        """
        opts = _merge_options(options, kwargs)

        if callable is None:

            def decorator(fn):
                on(self, eventname, fn, opts)
                return fn

            return decorator

        record = HandlerRecord.build(
            callable,
            self,
            tag=opts.get("tag"),
            priority=opts.get("priority"),
            context=opts.get("context"),
            once=opts.get("once", False),
        )
        store = resolve_store(self, handlers_prop, private, create=True)
        add_record(store, eventname, record, debug)
        return None

    def once(
        self,
        eventname: str,
        callable: Callable[..., Any] | None = None,
        options: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ):
        """Same as the register operation with ``once`` forced on."""
        opts = _merge_options(options, kwargs)
        opts["once"] = True
        # Goes through the receiver so an overridden register applies here too
        return getattr(self, on_prop)(eventname, callable, opts)

    def off(self, eventname: str, tag: str | None = None) -> None:
        """
        Remove the first handler of ``eventname`` tagged ``tag``.

        Does nothing if ``tag`` is empty or nothing matches.
        """
        store = resolve_store(self, handlers_prop, private)
        remove_tagged(store, eventname, tag, debug)

    def emit(self, eventname: str, *args: Any) -> list[Any]:
        """
        Call every handler registered for ``eventname``.

        Return values of handlers are not visible to other handlers. To let
        handlers filter content, pass it in a mutable container.

        Args:
            eventname: Event to dispatch
            *args: Forwarded positionally to every handler after its context

        Returns:
            Return value of each handler, in invocation order
        """
        store = resolve_store(self, handlers_prop, private)
        records = list(store[eventname]) if store and eventname in store else []

        results: list[Any] = []
        invoked: list[HandlerRecord] = []
        error: BaseException | None = None
        start_time = time.perf_counter()

        try:
            for record in records:
                # Removed by off() or expired by a nested dispatch since the snapshot
                if record not in store.get(eventname, ()):
                    continue
                invoked.append(record)
                try:
                    results.append(record.callable(record.context, *args))
                except Exception as e:
                    error = e
                    if debug:
                        logger.exception(f"Handler {record.name} failed on {eventname!r}")
                    raise
        finally:
            if cfg.trace:
                log_dispatch(
                    eventname,
                    cfg.emit_prop,
                    args,
                    len(records),
                    duration_ms=(time.perf_counter() - start_time) * 1000,
                    results=results,
                    error=error,
                    verbosity=cfg.trace_verbosity,
                )

        if invoked:
            expire_once(store, eventname, invoked, debug)
        return results

    namespace: dict[str, Any] = {
        "__module__": __name__,
        "__doc__": "Event emitter capability created by captain_hook().",
        "__hook_config__": cfg,
    }
    # Later names win when two options collide
    for name, fn in zip(cfg.names(), (on, once, off, emit)):
        fn.__name__ = name
        fn.__qualname__ = f"CaptainHook.{name}"
        namespace[name] = fn

    if debug:
        logger.debug(
            f"Created emitter capability {cfg.names()} with "
            + ("private storage" if cfg.private else f"storage {handlers_prop!r}")
        )

    return type("CaptainHook", (), namespace)()
