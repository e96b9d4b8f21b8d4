"""Handlers may return awaitables; the emitting host decides how to wait."""

from __future__ import annotations

import asyncio

from captain_hook import captain_hook, mixin

# One private store shared by every Cache instance
shared_hooks = captain_hook(handlers_prop=None)


@mixin(shared_hooks)
class Cache:
    def __init__(self, name: str) -> None:
        self.name = name

    async def invalidate(self, key: str) -> list:
        return await asyncio.gather(*self._emit("cache:invalidate", key))


async def purge_cdn(this, key: str) -> str:
    await asyncio.sleep(0)
    return f"{this.name}: cdn purged {key}"


async def main() -> None:
    primary, replica = Cache("primary"), Cache("replica")
    primary.on("cache:invalidate", purge_cdn, priority=20)
    replica.once("cache:invalidate", purge_cdn)

    print(await replica.invalidate("/index.html"))
    print(await primary.invalidate("/about.html"))


if __name__ == "__main__":
    asyncio.run(main())
