"""Render display units as Bot Framework card attachments.

Adaptive Cards carry every field of a :class:`DisplayUnit`.  Channels
without Adaptive Card support get a Hero Card instead: the author block
is dropped and the footer moves to the subtitle.
"""

from __future__ import annotations

from typing import Any

from botbuilder.schema import ActionTypes, Attachment, CardAction, CardImage, HeroCard

from .display import DisplayUnit
from .formatting import markdown_to_telegram, strip_markdown

ADAPTIVE_CARD_CONTENT_TYPE = "application/vnd.microsoft.card.adaptive"
HERO_CARD_CONTENT_TYPE = "application/vnd.microsoft.card.hero"

# channel id -> converter for the card body text
_HERO_ONLY_CHANNELS = {
    "telegram": markdown_to_telegram,
    "sms": strip_markdown,
}


def build_attachment(unit: DisplayUnit, channel: str = "") -> Attachment:
    convert = _HERO_ONLY_CHANNELS.get(channel.lower())
    if convert is not None:
        return _hero_card_attachment(unit, convert(unit.description))
    return _adaptive_card_attachment(adaptive_card_json(unit))


def adaptive_card_json(unit: DisplayUnit) -> dict[str, Any]:
    body: list[dict[str, Any]] = []

    if unit.author:
        author_columns: list[dict[str, Any]] = []
        if unit.author.icon_url:
            author_columns.append({
                "type": "Column",
                "width": "auto",
                "items": [{"type": "Image", "url": unit.author.icon_url, "size": "Small"}],
            })
        name = f"[{unit.author.name}]({unit.author.url})" if unit.author.url else unit.author.name
        author_columns.append({
            "type": "Column",
            "width": "stretch",
            "verticalContentAlignment": "Center",
            "items": [{"type": "TextBlock", "text": name, "size": "Small", "weight": "Bolder", "wrap": True}],
        })
        body.append({"type": "ColumnSet", "columns": author_columns})

    if unit.title:
        title = f"[{unit.title}]({unit.url})" if unit.url else unit.title
        body.append({"type": "TextBlock", "text": title, "size": "Medium", "weight": "Bolder", "wrap": True})
    if unit.description:
        body.append({"type": "TextBlock", "text": unit.description, "wrap": True})
    if unit.image_url:
        body.append({"type": "Image", "url": unit.image_url, "size": "Stretch"})
    if unit.footer:
        body.append({"type": "TextBlock", "text": unit.footer, "size": "Small", "isSubtle": True, "wrap": True})

    return {"body": body}


def _adaptive_card_attachment(card_json: dict) -> Attachment:
    card_json.setdefault("type", "AdaptiveCard")
    card_json.setdefault("version", "1.5")
    card_json.setdefault("$schema", "http://adaptivecards.io/schemas/adaptive-card.json")
    return Attachment(content_type=ADAPTIVE_CARD_CONTENT_TYPE, content=card_json)


def _hero_card_attachment(unit: DisplayUnit, text: str) -> Attachment:
    images = [CardImage(url=unit.image_url)] if unit.image_url else None
    buttons = (
        [CardAction(type=ActionTypes.open_url, title="Open", value=unit.url)]
        if unit.url
        else None
    )
    card = HeroCard(
        title=unit.title or None,
        subtitle=unit.footer or None,
        text=text or None,
        images=images,
        buttons=buttons,
    )
    return Attachment(content_type=HERO_CARD_CONTENT_TYPE, content=card)
