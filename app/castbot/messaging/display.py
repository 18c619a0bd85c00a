"""Platform-agnostic rich message model."""

from __future__ import annotations

from dataclasses import dataclass

DESCRIPTION_LIMIT = 1024
FOOTER_SEPARATOR = " | "


@dataclass(frozen=True, slots=True)
class Author:
    name: str = ""
    url: str = ""
    icon_url: str = ""

    def __bool__(self) -> bool:
        return bool(self.name)


@dataclass(frozen=True, slots=True)
class DisplayUnit:
    """One rich message: linked title, description, image, author, footer.

    The description is clipped to :data:`DESCRIPTION_LIMIT` on construction.
    """

    title: str = ""
    url: str = ""
    description: str = ""
    image_url: str = ""
    author: Author = Author()
    footer: str = ""

    def __post_init__(self) -> None:
        if len(self.description) > DESCRIPTION_LIMIT:
            object.__setattr__(self, "description", self.description[:DESCRIPTION_LIMIT])


def join_footer(pieces: list[str | None]) -> str:
    """Join non-empty footer pieces in order."""
    return FOOTER_SEPARATOR.join(p for p in pieces if p)
