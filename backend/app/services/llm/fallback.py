"""
Offline Fallback Synthesizer

Produces a canned analytical paragraph when no provider is configured or
every provider failed. Pure and deterministic: the same message text always
yields the same paragraph.
"""

import re

from app.services.llm.models import ConversationMessage


# ── Topic Table ───────────────────────────────────────────────────────────────
# Checked in order; the first topic with a matching trigger wins.
# A trigger matches when every one of its keywords occurs in the message
# (case-insensitive substring match; keywords in WHOLE_WORD_KEYWORDS must
# appear as whole words). India/Pakistan is checked before Russia/Ukraine,
# following the chat panel's order, so "Russia and Kashmir" gets the
# Kashmir paragraph.

WHOLE_WORD_KEYWORDS = frozenset({"us"})

TOPIC_RESPONSES: list[tuple[tuple[tuple[str, ...], ...], str]] = [
    (
        (
            ("iran", "israel"),
            ("iran", "america"),
            ("iran", "united states"),
            ("iran", "us"),
        ),
        "CRITICAL ANALYSIS: Iran-Israel-US escalation represents the most dangerous "
        "Middle East crisis in decades. Iran's ballistic missile strikes on Israeli "
        "military targets have triggered massive Israeli retaliation against Iranian "
        "nuclear facilities. US carrier deployment signals potential for wider regional "
        "war. Oil markets in panic as Strait of Hormuz closure threatened.",
    ),
    (
        (("kashmir",), ("india", "pakistan")),
        "NUCLEAR FLASHPOINT: India-Pakistan tensions over Kashmir have escalated "
        "dramatically with 300% increase in cross-border incidents. Both nuclear powers "
        "have reinforced military positions along Line of Control. Risk of miscalculation "
        "extremely high given nuclear doctrines and domestic political pressures.",
    ),
    (
        (("ukraine",), ("russia",)),
        "ONGOING CONFLICT: Russia-Ukraine war continues with systematic targeting of "
        "civilian infrastructure. Winter campaign focuses on energy warfare. Western "
        "military aid sustaining Ukrainian resistance while sanctions pressure Russian "
        "economy. Risk of NATO involvement remains if attacks spill beyond borders.",
    ),
    (
        (("china", "taiwan"),),
        "STRATEGIC CRISIS: Taiwan Strait tensions at highest level since 1996. Chinese "
        "military exercises demonstrate invasion capabilities while Taiwan enhances "
        "defensive preparations. US strategic ambiguity tested as semiconductor supply "
        "chains face disruption risk. Economic implications global.",
    ),
    (
        (("north korea",), ("pyongyang",)),
        "PROLIFERATION WATCH: North Korea continues to expand its ballistic missile "
        "testing and fissile material production. Each launch cycle tests regional "
        "missile defenses in Japan and South Korea while sanctions enforcement erodes. "
        "Risk of a seventh nuclear test remains the key escalation indicator.",
    ),
]

DEFAULT_RESPONSE = (
    "I can provide analysis on current geopolitical situations including Iran-Israel "
    "tensions, Russia-Ukraine conflict, India-Pakistan Kashmir dispute, China-Taiwan "
    "crisis, North Korea nuclear program, and global economic security challenges. "
    "Please specify which area interests you most."
)


def _mentions(lowered: str, keyword: str) -> bool:
    if keyword in WHOLE_WORD_KEYWORDS:
        return re.search(rf"\b{re.escape(keyword)}\b", lowered) is not None
    return keyword in lowered


def synthesize_fallback(message_text: str) -> str:
    """Return the canned paragraph for the first topic the message mentions."""
    lowered = message_text.lower()
    for triggers, response in TOPIC_RESPONSES:
        if any(all(_mentions(lowered, keyword) for keyword in trigger) for trigger in triggers):
            return response
    return DEFAULT_RESPONSE


def latest_user_text(messages: list[ConversationMessage]) -> str:
    """Content of the most recent user message, or "" if there is none."""
    for msg in reversed(messages):
        if msg.role == "user":
            return msg.content
    return ""
