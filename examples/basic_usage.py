"""Minimal emitter example covering registration, priorities and removal."""

from __future__ import annotations

from captain_hook import captain_hook

hooks = captain_hook()


@hooks.on("demo:greet", priority=20)
def greet(this, name: str) -> str:
    return f"Hello, {name}!"


def audit(this, name: str) -> None:
    print(f"greet called for {name}")


def main() -> None:
    hooks.on("demo:greet", audit, tag="audit", priority=5)
    print(hooks._emit("demo:greet", "Ada"))

    hooks.off("demo:greet", "audit")
    print(hooks._emit("demo:greet", "Grace"))


if __name__ == "__main__":
    main()
