"""Composing emitter capabilities onto host classes and objects."""

from __future__ import annotations

import types
from collections.abc import Callable
from typing import Any, TypeVar

from .config import HookConfig

T = TypeVar("T")


def hook_config(hook: Any) -> HookConfig:
    """Return the configuration a capability (or its class) was built with."""
    cls = hook if isinstance(hook, type) else type(hook)
    config = getattr(cls, "__hook_config__", None)
    if not isinstance(config, HookConfig):
        raise TypeError(f"{hook!r} is not an emitter capability")
    return config


def operations(hook: Any) -> dict[str, Callable[..., Any]]:
    """Map each configured operation name to its plain function.

    Colliding names appear once, holding the operation that won.
    """
    cls = hook if isinstance(hook, type) else type(hook)
    return {name: getattr(cls, name) for name in dict.fromkeys(hook_config(hook).names())}


def mixin(hook: Any, target: T | None = None) -> Any:
    """
    Compose the operations of ``hook`` onto ``target``.

    A class receives the operations as methods, so each of its instances is a
    receiver with its own public store (or all share the capability's private
    one). Any other object receives them bound to itself.

    Without ``target`` a class decorator is returned:

        @mixin(captain_hook(emit_prop="trigger"))
        class Player: ...

    Returns:
        The target, with the operations attached
    """
    if target is None:
        return lambda cls: mixin(hook, cls)

    for name, fn in operations(hook).items():
        if isinstance(target, type):
            setattr(target, name, fn)
        else:
            setattr(target, name, types.MethodType(fn, target))
    return target
