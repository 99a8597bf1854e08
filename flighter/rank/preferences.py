import re
from typing import Dict

from flighter.types import PreferenceWeights


# Each family adds this much once when any of its keywords shows up.
FAMILY_WEIGHT = 3

# Families may share keywords: a nonstop flight is both faster and easier.
PREFERENCE_KEYWORDS: Dict[str, re.Pattern] = {
    "price": re.compile(
        r"\b(?:cheap\w*|budget|afford\w*|inexpensive|low[\s-]?cost|lowest price|best deal|deals?|bargain|save|saving)\b"
    ),
    "speed": re.compile(
        r"\b(?:fast\w*|quick\w*|shortest|asap|as soon as possible|urgent\w*|non[\s-]?stop|direct)\b"
    ),
    "comfort": re.compile(
        r"\b(?:comfort\w*|luxur\w*|business class|first class|premium|legroom|best rated|top rated|quality|relax\w*)\b"
    ),
    "convenience": re.compile(
        r"\b(?:convenien\w*|non[\s-]?stop|direct|no (?:layovers?|stops?|connections?)|easy|easiest|simple|morning|evening)\b"
    ),
}


def analyze_preferences(text: str) -> PreferenceWeights:
    lower = (text or "").lower()
    weights = PreferenceWeights()
    for family, rx in PREFERENCE_KEYWORDS.items():
        if rx.search(lower):
            setattr(weights, family, getattr(weights, family) + FAMILY_WEIGHT)
    return weights
