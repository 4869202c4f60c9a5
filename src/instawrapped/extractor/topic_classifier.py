"""
Keyword-based emoji assignment for interest labels.
"""

from __future__ import annotations

from typing import Optional, Sequence

DEFAULT_EMOJI = "🏷️"

# (keywords, emoji), checked top to bottom. First rule with a keyword
# contained in the lower-cased label wins, so specific keywords
# ("basketball") must precede broader ones ("sport").
TOPIC_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    # Sports
    (("basketball",), "🏀"),
    (("cricket",), "🏏"),
    (("football", "soccer"), "⚽"),
    (("tennis",), "🎾"),
    (("baseball",), "⚾"),
    (("sport", "fitness", "gym"), "💪"),
    (("boxing", "combat", "mma"), "🥊"),
    (("swimming",), "🏊"),
    (("running", "marathon"), "🏃"),
    # Food & drink
    (("food", "cuisine", "recipe", "cooking"), "🍕"),
    (("coffee", "café"), "☕"),
    (("wine", "cocktail", "beer"), "🍷"),
    (("dessert", "cake", "sweet"), "🍰"),
    (("vegan", "vegetarian", "healthy eating"), "🥗"),
    # Travel & places
    (("aviation", "airline"), "✈️"),
    (("travel", "vacation", "tourism"), "✈️"),
    (("asia", "destination"), "🌏"),
    (("beach", "ocean"), "🏖️"),
    (("mountain", "hiking"), "⛰️"),
    (("city", "urban"), "🏙️"),
    # Entertainment
    (("video game", "gaming", "esports"), "🎮"),
    (("movie", "film", "cinema"), "🎬"),
    (("tv", "television", "series"), "📺"),
    (("bollywood", "hollywood"), "🎬"),
    (("anime", "manga"), "🎌"),
    (("music", "concert", "band"), "🎵"),
    (("comedy", "standup"), "😂"),
    # Creative & arts
    (("fashion", "clothing", "style"), "👗"),
    (("art", "paint", "draw"), "🎨"),
    (("photography", "photo"), "📷"),
    (("design", "graphic"), "🎨"),
    (("writing", "literature", "poetry"), "✍️"),
    (("dance", "ballet"), "💃"),
    # Technology
    (("technology", "tech", "gadget"), "💻"),
    (("coding", "programming", "software"), "👨‍💻"),
    (("ai", "artificial intelligence", "machine learning"), "🤖"),
    (("crypto", "blockchain"), "₿"),
    # Lifestyle
    (("pet", "dog", "cat"), "🐾"),
    (("car", "automotive"), "🚗"),
    (("motorcycle", "bike"), "🏍️"),
    (("home", "interior", "decor"), "🏠"),
    (("garden", "plant"), "🌱"),
    # Education & career
    (("business", "entrepreneur"), "💼"),
    (("finance", "invest"), "💰"),
    (("science", "research"), "🔬"),
    (("education", "learning"), "📚"),
    # Health & wellness
    (("yoga", "meditation"), "🧘"),
    (("wellness", "mental health"), "💚"),
)


class TopicClassifier:
    """Maps a free-text interest label to a representative emoji."""

    def __init__(
        self,
        rules: Optional[Sequence[tuple[Sequence[str], str]]] = None,
        default: str = DEFAULT_EMOJI,
    ) -> None:
        self.rules = tuple(rules) if rules is not None else TOPIC_RULES
        self.default = default

    def classify(self, label: str) -> str:
        text = (label or "").lower()
        for keywords, emoji in self.rules:
            if any(keyword in text for keyword in keywords):
                return emoji
        return self.default


_default_classifier = TopicClassifier()


def classify(label: str) -> str:
    """Classify with the built-in rule table."""
    return _default_classifier.classify(label)
