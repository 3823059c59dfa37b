"""Extracted page content value objects."""

from dataclasses import dataclass

from pagedigest.exceptions import EmptyContentError

TITLE_SEPARATOR = "\n\n"


@dataclass(frozen=True, slots=True)
class ExtractedContent:
    """Title and body text captured from a page for a single operation.

    Empty or whitespace-only content is rejected at construction.
    """

    title: str
    body: str

    def __post_init__(self) -> None:
        if not (self.title.strip() or self.body.strip()):
            raise EmptyContentError("The page has no readable content")

    @classmethod
    def from_text(cls, text: str) -> "ExtractedContent":
        """Split page text of the form ``title + "\\n\\n" + body``.

        Text without a blank line is treated as body only.
        """
        title, separator, body = text.strip().partition(TITLE_SEPARATOR)
        if not separator:
            return cls(title="", body=title)
        return cls(title=title.strip(), body=body.strip())

    def as_text(self, max_body_chars: int | None = None) -> str:
        body = self.body
        if max_body_chars and len(body) > max_body_chars:
            body = body[:max_body_chars]
        if not self.title:
            return body
        return f"{self.title}{TITLE_SEPARATOR}{body}"


__all__ = ["ExtractedContent"]
