"""Plugins vote on an action by returning booleans from their handlers."""

from __future__ import annotations

from captain_hook import captain_hook, mixin


@mixin(captain_hook(on_prop="subscribe", off_prop="unsubscribe", emit_prop="notify"))
class Document:
    def __init__(self, title: str) -> None:
        self.title = title
        self.saved = False

    def save(self) -> bool:
        votes = self.notify("document:save", self.title)
        if all(vote is not False for vote in votes):
            self.saved = True
        return self.saved


def no_drafts(doc: Document, title: str) -> bool:
    return not title.startswith("DRAFT")


def main() -> None:
    draft = Document("DRAFT release notes")
    draft.subscribe("document:save", no_drafts, tag="no-drafts")
    print(f"{draft.title}: saved={draft.save()}")

    draft.unsubscribe("document:save", "no-drafts")
    print(f"{draft.title}: saved={draft.save()}")


if __name__ == "__main__":
    main()
