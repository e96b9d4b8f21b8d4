"""Construction options for emitter capabilities."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field


class HookConfig(BaseModel):
    """Names and storage policy of one emitter capability.

    Operation names are not checked against each other. Two options naming
    the same attribute silently overwrite one another.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    on_prop: str = Field(default="on", description="Name of the register operation")
    once_prop: str = Field(
        default="once", description="Name of the register-once operation"
    )
    off_prop: str = Field(default="off", description="Name of the deregister operation")
    emit_prop: str = Field(default="_emit", description="Name of the dispatch operation")
    handlers_prop: Annotated[str, Field(min_length=1)] | None = Field(
        default="_handlers",
        description="Attribute holding the handler store; None keeps it private",
    )
    debug: bool = Field(default=False, description="Log registry changes at DEBUG")
    trace: bool = Field(default=False, description="Print a trace line per dispatch")
    trace_verbosity: int = Field(
        default=1, ge=0, le=2, description="0=minimal, 1=normal, 2=verbose"
    )

    @property
    def private(self) -> bool:
        return self.handlers_prop is None

    def names(self) -> tuple[str, str, str, str]:
        """Operation names in the order they are written onto the capability."""
        return (self.on_prop, self.once_prop, self.off_prop, self.emit_prop)

    @classmethod
    def coerce(
        cls, config: HookConfig | Mapping[str, Any] | None = None, **overrides: Any
    ) -> HookConfig:
        """Merge a config object or mapping with keyword overrides."""
        if config is None:
            base: dict[str, Any] = {}
        elif isinstance(config, HookConfig):
            base = config.model_dump(exclude_unset=True)
        else:
            base = dict(config)
        base.update(overrides)
        return cls(**base)
