"""
Protocol classes for PageDigest.

These protocols define the interface contracts for the collaborators that
live outside this package (the page-rendering surface, the display and the
secret storage), so the pipeline works with any host implementation through
structural subtyping.
"""

from typing import Awaitable, Protocol, runtime_checkable


@runtime_checkable
class PageSurface(Protocol):
    """A rendered page that can be asked for its readable text.

    ``extract_text`` may be a coroutine function or a plain function. A plain
    function is only safe to call on the surface's own execution context.
    """
    current_url: str | None

    def extract_text(self) -> str | Awaitable[str]:
        """Return ``title + "\\n\\n" + body text`` of the loaded page."""
        ...


@runtime_checkable
class DisplaySink(Protocol):
    """Receives the live markdown text; may be updated many times per second."""

    def update(self, text: str, is_rendering: bool) -> None:
        ...


@runtime_checkable
class CredentialStore(Protocol):
    """Synchronous get/set/clear of a single named secret."""

    def get(self) -> str | None:
        ...

    def set(self, credential: str) -> None:
        ...

    def clear(self) -> None:
        ...


__all__ = [
    "PageSurface",
    "DisplaySink",
    "CredentialStore",
]
