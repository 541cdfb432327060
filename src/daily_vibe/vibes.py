"""The closed set of daily vibes and their static metadata.

Every vibe owns one immutable :class:`VibeProfile` record in
:data:`VIBE_PROFILES`. Adding a vibe is a data change: append a member to
:class:`Vibe` and a matching entry to the table.

Keyword lexicons can be replaced at runtime from a JSON file shaped like
``{"hopeful": ["hope", "progress"], ...}`` via :func:`build_profiles`.
Unknown vibe names in that file are ignored; vibes it omits keep their
built-in lexicon.
"""

from __future__ import annotations

import json
import random
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from .logging_utils import get_logger

log = get_logger(__name__)

RGB = Tuple[float, float, float]


class Vibe(str, Enum):
    HOPEFUL = "hopeful"
    CONTEMPLATIVE = "contemplative"
    ENERGETIC = "energetic"
    PEACEFUL = "peaceful"
    MELANCHOLIC = "melancholic"
    INSPIRING = "inspiring"
    UNCERTAIN = "uncertain"
    CELEBRATORY = "celebratory"
    REFLECTIVE = "reflective"
    DETERMINED = "determined"
    NOSTALGIC = "nostalgic"
    ADVENTUROUS = "adventurous"
    WHIMSICAL = "whimsical"
    URGENT = "urgent"
    TRIUMPHANT = "triumphant"
    SOLEMN = "solemn"
    PLAYFUL = "playful"
    MYSTERIOUS = "mysterious"
    REBELLIOUS = "rebellious"
    COMPASSIONATE = "compassionate"

    @classmethod
    def parse(cls, value: str) -> Optional["Vibe"]:
        """Map a free-form label to a vibe, or ``None`` if it is not one."""
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return None


# Returned whenever a batch carries no usable signal.
NEUTRAL_VIBE = Vibe.CONTEMPLATIVE


@dataclass(frozen=True)
class VibeProfile:
    vibe: Vibe
    display_name: str
    description: str
    poem_prompt: str
    emoji: str
    keywords: Tuple[str, ...]
    title_templates: Tuple[str, ...]
    light_gradient: Tuple[RGB, RGB]
    dark_gradient: Tuple[RGB, RGB]
    color_description: str

    @property
    def definition_text(self) -> str:
        """Short text embedded once per vibe for semantic similarity."""
        return f"{self.display_name}: {self.description}. {' '.join(self.keywords[:5])}"

    def gradient(self, dark: bool = False) -> Tuple[RGB, RGB]:
        return self.dark_gradient if dark else self.light_gradient

    def generate_title(
        self,
        keywords: Sequence[str],
        theme: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ) -> str:
        """Fill a random title template.

        ``[keyword]`` becomes the first keyword and ``[theme]`` the theme, or
        the second keyword when no theme is given. Both fall back to the
        display name.
        """
        chooser = rng or random
        template = chooser.choice(self.title_templates) if self.title_templates else "[keyword]"
        keyword = keywords[0].capitalize() if keywords else self.display_name
        if theme:
            theme_text = theme.capitalize()
        elif len(keywords) > 1:
            theme_text = keywords[1].capitalize()
        else:
            theme_text = self.display_name
        return template.replace("[keyword]", keyword).replace("[theme]", theme_text)


def _profile(
    vibe: Vibe,
    description: str,
    emoji: str,
    poem_prompt: str,
    keywords: Iterable[str],
    title_templates: Iterable[str],
    light: Tuple[RGB, RGB],
    dark: Tuple[RGB, RGB],
    color_description: str,
) -> VibeProfile:
    # Lexicons are lowercase and de-duplicated, preserving declaration order.
    seen: List[str] = []
    for word in keywords:
        w = word.strip().lower()
        if w and w not in seen:
            seen.append(w)
    return VibeProfile(
        vibe=vibe,
        display_name=vibe.value.capitalize(),
        description=description,
        poem_prompt=poem_prompt,
        emoji=emoji,
        keywords=tuple(seen),
        title_templates=tuple(title_templates),
        light_gradient=light,
        dark_gradient=dark,
        color_description=color_description,
    )


_PROFILES: Tuple[VibeProfile, ...] = (
    _profile(
        Vibe.HOPEFUL,
        "Looking forward with optimism",
        "🌅",
        "Write an uplifting poem about hope, new beginnings, and the promise of "
        "better days ahead. Focus on light breaking through darkness, seeds "
        "growing into flowers, and the resilience of the human spirit.",
        [
            "breakthrough", "discovery", "progress", "success", "achievement",
            "improvement", "recovery", "growth", "positive", "advance", "solution",
            "innovation", "hope", "promising", "bright", "optimistic", "future",
            "opportunity", "healing",
        ],
        [
            "Dawn of [keyword]", "[keyword] Rising", "When [theme] Met Hope",
            "The Promise of [keyword]", "[theme]: A New Beginning",
        ],
        ((1.0, 0.95, 0.8), (1.0, 0.9, 0.7)),
        ((0.3, 0.25, 0.1), (0.4, 0.3, 0.15)),
        "Warm sunrise colors with golden and amber tones that evoke optimism "
        "and new beginnings",
    ),
    _profile(
        Vibe.CONTEMPLATIVE,
        "Deep thoughts and reflection",
        "🤔",
        "Write a thoughtful poem about life's deeper meanings, the passage of "
        "time, and quiet moments of reflection. Explore themes of wisdom, "
        "understanding, and the beauty found in stillness.",
        [
            "study", "research", "analysis", "report", "findings", "investigation",
            "examination", "review", "consideration", "reflection", "thought",
            "meditation", "philosophy", "wisdom", "understanding", "insight",
            "depth", "meaning",
        ],
        [
            "Thoughts on [keyword]", "Pondering [theme]", "The Depth of [keyword]",
            "Reflections: [theme]", "In Search of [keyword]",
        ],
        ((0.85, 0.9, 1.0), (0.8, 0.85, 0.95)),
        ((0.1, 0.15, 0.3), (0.15, 0.2, 0.35)),
        "Soft blue-gray hues that inspire deep thought and peaceful reflection",
    ),
    _profile(
        Vibe.ENERGETIC,
        "Full of life and motivation",
        "⚡",
        "Write a vibrant poem full of life, movement, and enthusiasm. Capture "
        "the feeling of rushing wind, dancing, laughter, and the joy of being "
        "fully alive and engaged with the world.",
        [
            "launch", "start", "begin", "action", "movement", "fast", "rapid",
            "quick", "energy", "power", "dynamic", "active", "vibrant", "exciting",
            "thrilling", "passionate", "intense", "vigorous", "lively",
            "enthusiastic",
        ],
        [
            "The Rush of [keyword]", "[theme] in Motion", "Surge of [keyword]",
            "Racing Through [theme]", "[keyword] Ablaze",
        ],
        ((1.0, 0.7, 0.3), (0.9, 0.6, 0.2)),
        ((0.4, 0.2, 0.1), (0.5, 0.25, 0.1)),
        "Vibrant orange and warm colors that pulse with life and dynamic energy",
    ),
    _profile(
        Vibe.PEACEFUL,
        "Calm and serene moments",
        "🕊️",
        "Write a serene poem about tranquility, calm waters, gentle breezes, and "
        "moments of perfect stillness. Focus on harmony, balance, and the quiet "
        "beauty of peaceful scenes.",
        [
            "agreement", "peace", "calm", "quiet", "serene", "harmony", "balance",
            "resolution", "settled", "tranquil", "still", "gentle", "cooperation",
            "collaboration", "unity", "accord", "reconciliation", "mediation",
        ],
        [
            "Tranquil [keyword]", "The Calm of [theme]", "[keyword] at Rest",
            "Serenity in [theme]", "Stillness: [keyword]",
        ],
        ((0.9, 1.0, 0.9), (0.8, 0.95, 0.8)),
        ((0.1, 0.3, 0.15), (0.15, 0.35, 0.2)),
        "Gentle green tones reminiscent of serene nature and tranquil moments",
    ),
    _profile(
        Vibe.MELANCHOLIC,
        "Bittersweet and thoughtful",
        "🌧️",
        "Write a bittersweet poem that captures the beauty in sadness, the "
        "poetry of rain, autumn leaves, and gentle farewells. Explore themes of "
        "nostalgia, memory, and the tender ache of longing.",
        [
            "loss", "death", "mourning", "grief", "sad", "tragedy", "decline",
            "ending", "farewell", "memorial", "remembrance", "nostalgia",
            "bittersweet", "longing", "missing", "departed", "past", "memory",
            "regret", "sorrow",
        ],
        [
            "Farewell to [keyword]", "The Weight of [theme]", "[keyword] in Rain",
            "Autumn [theme]", "Missing [keyword]",
        ],
        ((0.9, 0.9, 1.0), (0.8, 0.8, 0.95)),
        ((0.2, 0.15, 0.3), (0.25, 0.2, 0.35)),
        "Soft purple-gray colors that capture the beauty of bittersweet emotions",
    ),
    _profile(
        Vibe.INSPIRING,
        "Uplifting and encouraging",
        "✨",
        "Write a motivational poem about overcoming challenges, reaching for "
        "dreams, and the power within each person to create change. Focus on "
        "courage, perseverance, and the triumph of the human spirit.",
        [
            "hero", "brave", "courage", "overcome", "triumph", "victory", "inspire",
            "motivate", "encourage", "uplift", "empower", "strength", "resilience",
            "perseverance", "determination", "achievement", "excellence",
            "outstanding",
        ],
        [
            "Rise of [keyword]", "[theme] Awakening", "The Power of [keyword]",
            "Courage in [theme]", "[keyword] Ascends",
        ],
        ((1.0, 0.9, 1.0), (0.95, 0.8, 0.95)),
        ((0.3, 0.1, 0.3), (0.35, 0.15, 0.35)),
        "Light magenta and pink hues that uplift the spirit and encourage dreams",
    ),
    _profile(
        Vibe.UNCERTAIN,
        "Navigating unclear times",
        "🌫️",
        "Write a poem about navigating unclear paths, standing at crossroads, "
        "and finding strength in times of doubt. Explore themes of patience, "
        "trust, and the wisdom of not knowing.",
        [
            "unclear", "unknown", "uncertain", "uncertainty", "doubt", "question",
            "mystery", "puzzle", "confusion", "ambiguous", "unsure", "debate",
            "speculation", "possibility", "maybe", "perhaps", "investigation",
            "pending", "waiting", "fear", "volatile", "volatility",
        ],
        [
            "Crossroads of [keyword]", "Navigating [theme]", "The Unknown [keyword]",
            "Doubts About [theme]", "[keyword] in Question",
        ],
        ((0.95, 0.95, 0.95), (0.9, 0.9, 0.9)),
        ((0.2, 0.2, 0.25), (0.25, 0.25, 0.3)),
        "Neutral gray tones that provide calm stability during unclear times",
    ),
    _profile(
        Vibe.CELEBRATORY,
        "Joyful and triumphant",
        "🎉",
        "Write a joyful poem about celebration, achievement, and moments of pure "
        "happiness. Capture the feeling of success, gratitude, and the shared "
        "joy of special occasions.",
        [
            "celebration", "festival", "party", "joy", "happiness", "success",
            "win", "victory", "achievement", "milestone", "anniversary", "honor",
            "award", "recognition", "congratulations", "cheers", "festive",
            "jubilant", "triumphant",
        ],
        [
            "Victory of [keyword]", "Celebrating [theme]", "[keyword] Triumphant",
            "Joy in [theme]", "Festival of [keyword]",
        ],
        ((1.0, 0.8, 0.6), (1.0, 0.7, 0.5)),
        ((0.4, 0.3, 0.1), (0.45, 0.35, 0.15)),
        "Golden celebration colors that sparkle with joy and achievement",
    ),
    _profile(
        Vibe.REFLECTIVE,
        "Quiet introspection",
        "🪞",
        "Write a quiet poem about looking back on life's journey, lessons "
        "learned, and the wisdom that comes with experience. Focus on memory, "
        "growth, and understanding.",
        [
            "history", "past", "lessons", "learned", "experience", "retrospective",
            "memorial", "remembering", "tradition", "heritage", "legacy", "wisdom",
            "knowledge", "understanding", "perspective", "insight",
        ],
        [
            "Looking Back at [keyword]", "Lessons from [theme]", "Wisdom of [keyword]",
            "Memory: [theme]", "[keyword] Remembered",
        ],
        ((0.9, 0.95, 1.0), (0.85, 0.9, 0.95)),
        ((0.1, 0.2, 0.3), (0.15, 0.25, 0.35)),
        "Calm blue shades that encourage quiet introspection and wisdom",
    ),
    _profile(
        Vibe.DETERMINED,
        "Focused and resolute",
        "💪",
        "Write a strong poem about unwavering resolve, commitment to goals, and "
        "the power of focused intention. Explore themes of persistence, "
        "strength, and the will to overcome obstacles.",
        [
            "commitment", "dedication", "focus", "goal", "target", "mission",
            "purpose", "resolve", "determination", "persistence", "effort", "work",
            "strive", "push", "drive", "ambition", "strength", "fight",
            "struggle",
        ],
        [
            "The Will of [keyword]", "Persevering Through [theme]",
            "[keyword] Unshaken", "Resolve in [theme]", "Standing for [keyword]",
        ],
        ((0.8, 0.9, 1.0), (0.7, 0.8, 0.95)),
        ((0.1, 0.2, 0.4), (0.15, 0.25, 0.45)),
        "Strong blue colors that convey resolve, focus, and unwavering strength",
    ),
    _profile(
        Vibe.NOSTALGIC,
        "Remembering days gone by",
        "📚",
        "Write a tender poem about memories, the passage of time, and the "
        "bittersweet beauty of looking back. Explore themes of childhood, "
        "heritage, and the golden glow of yesterdays.",
        [
            "nostalgia", "nostalgic", "memories", "remember", "childhood",
            "vintage", "retro", "classic", "reunion", "decades", "bygone",
            "yesteryear", "revival", "throwback", "restored", "oldies",
            "generations", "era", "reissue", "hometown",
        ],
        [
            "Echoes of [keyword]", "When [theme] Was New", "Remembering [keyword]",
            "[theme] Through Time", "Yesterday's [keyword]",
        ],
        ((0.95, 0.9, 0.85), (0.9, 0.85, 0.8)),
        ((0.3, 0.25, 0.2), (0.35, 0.3, 0.25)),
        "Warm sepia tones that evoke memories and the gentle glow of days gone by",
    ),
    _profile(
        Vibe.ADVENTUROUS,
        "Embracing the unknown",
        "🗺️",
        "Write an exciting poem about exploration, discovery, and the thrill of "
        "venturing into the unknown. Capture the spirit of journeys, quests, "
        "and the courage to explore new frontiers.",
        [
            "adventure", "explore", "exploration", "explorers", "expedition",
            "journey", "voyage", "quest", "frontier", "uncharted", "travel",
            "space", "mars", "summit", "wilderness", "trek", "pioneer", "daring",
            "venture", "orbit",
        ],
        [
            "The Quest for [keyword]", "[theme] Uncharted", "Beyond [keyword]",
            "Exploring [theme]", "Journey to [keyword]",
        ],
        ((0.85, 1.0, 0.9), (0.8, 0.95, 0.85)),
        ((0.1, 0.3, 0.25), (0.15, 0.35, 0.3)),
        "Fresh teal-green colors that inspire exploration and discovery",
    ),
    _profile(
        Vibe.WHIMSICAL,
        "Playfully imaginative",
        "🎨",
        "Write a playful poem filled with imagination, creativity, and "
        "delightful surprises. Embrace quirky imagery, fantastical ideas, and "
        "the joy of seeing the world through wonder-filled eyes.",
        [
            "whimsical", "quirky", "bizarre", "curious", "odd", "unusual", "magic",
            "magical", "fairy", "wonder", "imagination", "fantasy", "dream",
            "dreams", "surprise", "delightful", "unicorn", "costume", "oddball",
            "wacky",
        ],
        [
            "A [keyword] Daydream", "[theme] in Wonderland", "The Curious [keyword]",
            "Whimsy of [theme]", "[keyword] and Magic",
        ],
        ((1.0, 0.95, 0.9), (0.95, 0.9, 0.95)),
        ((0.3, 0.2, 0.3), (0.35, 0.25, 0.35)),
        "Soft rainbow hues that sparkle with imagination and playful creativity",
    ),
    _profile(
        Vibe.URGENT,
        "Time-sensitive and pressing",
        "⏰",
        "Write a compelling poem about pressing matters, crucial moments, and "
        "the weight of time-sensitive decisions. Explore themes of immediacy, "
        "crisis, and the need for swift action.",
        [
            "urgent", "emergency", "breaking", "alert", "warning", "evacuate",
            "evacuation", "immediate", "deadline", "critical", "shortage",
            "outbreak", "storm", "hurricane", "wildfire", "threat", "escalate",
            "escalating", "imminent", "lockdown",
        ],
        [
            "[theme] Now", "The Pressing [keyword]", "Time for [theme]",
            "[keyword] Urgent", "Critical [theme]",
        ],
        ((1.0, 0.85, 0.7), (0.95, 0.75, 0.6)),
        ((0.4, 0.2, 0.15), (0.45, 0.25, 0.2)),
        "Alert orange-red tones that convey immediacy and pressing importance",
    ),
    _profile(
        Vibe.TRIUMPHANT,
        "Victorious and conquering",
        "🏆",
        "Write a powerful poem about victory, conquest, and the sweet taste of "
        "achievement. Capture the exhilaration of overcoming challenges and "
        "emerging victorious.",
        [
            "triumph", "triumphant", "victorious", "champion", "championship",
            "champions", "conquer", "conquered", "glory", "trophy", "medal",
            "gold", "prevail", "prevails", "clinch", "clinches", "undefeated",
            "winner", "winners", "title",
        ],
        [
            "The Triumph of [keyword]", "[theme] Victorious", "Conquering [keyword]",
            "Victory: [theme]", "[keyword] Prevails",
        ],
        ((1.0, 0.95, 0.7), (0.95, 0.9, 0.6)),
        ((0.4, 0.35, 0.15), (0.45, 0.4, 0.2)),
        "Victory gold colors that shine with achievement and conquest",
    ),
    _profile(
        Vibe.SOLEMN,
        "Reverent and dignified",
        "🕯️",
        "Write a dignified poem about reverence, respect, and serious "
        "contemplation. Explore themes of remembrance, honor, and the weight of "
        "profound moments.",
        [
            "solemn", "funeral", "tribute", "vigil", "mourn", "mourners", "honour",
            "ceremony", "dignity", "veterans", "commemorate", "commemoration",
            "silence", "reverence", "condolences", "sacred", "buried", "wreath",
            "fallen", "laid",
        ],
        [
            "In Remembrance of [keyword]", "The Weight of [theme]",
            "Honoring [keyword]", "Sacred [theme]", "[keyword] in Dignity",
        ],
        ((0.85, 0.85, 0.9), (0.8, 0.8, 0.85)),
        ((0.15, 0.15, 0.25), (0.2, 0.2, 0.3)),
        "Dignified gray-blue hues that reflect reverence and serious contemplation",
    ),
    _profile(
        Vibe.PLAYFUL,
        "Lighthearted and fun",
        "🎭",
        "Write a joyful poem about fun, laughter, and the lightness of being. "
        "Embrace themes of games, dance, and the simple pleasures that make "
        "life delightful.",
        [
            "playful", "fun", "funny", "laugh", "laughter", "game", "games",
            "play", "toy", "toys", "dance", "dancing", "joke", "comedy", "silly",
            "prank", "cartoon", "puppy", "kitten", "amusing",
        ],
        [
            "Dancing with [keyword]", "The [theme] Waltz", "When [keyword] Plays",
            "Games of [theme]", "[keyword] in Jest",
        ],
        ((1.0, 0.9, 0.8), (0.95, 0.85, 0.75)),
        ((0.3, 0.2, 0.15), (0.35, 0.25, 0.2)),
        "Cheerful peach colors that radiate fun, laughter, and joy",
    ),
    _profile(
        Vibe.MYSTERIOUS,
        "Enigmatic and intriguing",
        "🔮",
        "Write an intriguing poem about secrets, enigmas, and the allure of the "
        "unknown. Explore themes of puzzles, hidden truths, and the fascinating "
        "nature of mysteries.",
        [
            "mysterious", "mystery", "secret", "secrets", "enigma", "unexplained",
            "hidden", "strange", "riddle", "cryptic", "ancient", "ghost",
            "anomaly", "clue", "clues", "vanished", "disappearance", "ufo",
            "unidentified", "baffled",
        ],
        [
            "The Mystery of [keyword]", "[theme] Unveiled", "Secrets of [keyword]",
            "Enigma: [theme]", "[keyword] Unknown",
        ],
        ((0.8, 0.75, 0.9), (0.75, 0.7, 0.85)),
        ((0.2, 0.15, 0.35), (0.25, 0.2, 0.4)),
        "Enigmatic purple shades that hint at secrets and hidden truths",
    ),
    _profile(
        Vibe.REBELLIOUS,
        "Defiant and challenging",
        "⚔️",
        "Write a bold poem about defiance, resistance, and challenging the "
        "status quo. Explore themes of revolution, breaking boundaries, and "
        "standing up for beliefs.",
        [
            "protest", "protests", "protesters", "rebel", "rebels", "rebellion",
            "revolt", "defy", "defies", "defiance", "resistance", "strike",
            "boycott", "uprising", "revolution", "activists", "dissent",
            "marchers", "oppose", "walkout",
        ],
        [
            "Rising Against [keyword]", "The [theme] Rebellion", "Breaking [keyword]",
            "Defying [theme]", "[keyword] Unbound",
        ],
        ((0.95, 0.7, 0.7), (0.9, 0.6, 0.6)),
        ((0.35, 0.1, 0.1), (0.4, 0.15, 0.15)),
        "Bold red colors that burn with defiance and the spirit of revolution",
    ),
    _profile(
        Vibe.COMPASSIONATE,
        "Empathetic and caring",
        "💕",
        "Write a gentle poem about kindness, empathy, and the power of caring "
        "for others. Explore themes of love, tenderness, and the beauty of "
        "human connection.",
        [
            "kindness", "charity", "donate", "donation", "donations", "volunteer",
            "volunteers", "aid", "relief", "rescue", "rescued", "support", "care",
            "caring", "compassion", "empathy", "shelter", "generous", "refugees",
            "humanitarian",
        ],
        [
            "With Love for [keyword]", "The Gentle [theme]", "Embracing [keyword]",
            "Kindness in [theme]", "[keyword] in Heart",
        ],
        ((1.0, 0.9, 0.95), (0.95, 0.85, 0.9)),
        ((0.3, 0.15, 0.25), (0.35, 0.2, 0.3)),
        "Tender pink tones that embody kindness, empathy, and caring",
    ),
)

VIBE_PROFILES: Mapping[Vibe, VibeProfile] = MappingProxyType(
    {p.vibe: p for p in _PROFILES}
)


def get_profile(vibe: Vibe) -> VibeProfile:
    return VIBE_PROFILES[vibe]


def load_keyword_overrides(path: Path) -> dict:
    """Read ``{vibe: [keywords]}`` from a JSON file.

    Returns an empty dict (and logs) if the file is missing or malformed,
    so that a bad override never takes the built-in lexicons down with it.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, ValueError) as e:
        log.warning("vibe_keywords_load_failed path=%s err=%s", path, str(e))
        return {}
    if not isinstance(raw, dict):
        log.warning("vibe_keywords_invalid path=%s reason=not_an_object", path)
        return {}

    out = {}
    for name, words in raw.items():
        vibe = Vibe.parse(str(name))
        if vibe is None:
            log.warning("vibe_keywords_unknown_vibe path=%s vibe=%s", path, name)
            continue
        if not isinstance(words, list):
            log.warning("vibe_keywords_invalid path=%s vibe=%s", path, name)
            continue
        out[vibe] = [str(w) for w in words]
    return out


def build_profiles(keywords_path: Optional[Path] = None) -> Mapping[Vibe, VibeProfile]:
    """Return the profile table, with lexicons overridden from ``keywords_path``."""
    if keywords_path is None:
        return VIBE_PROFILES
    overrides = load_keyword_overrides(keywords_path)
    if not overrides:
        return VIBE_PROFILES
    table = {}
    for vibe, profile in VIBE_PROFILES.items():
        if vibe in overrides:
            words = tuple(
                dict.fromkeys(w.strip().lower() for w in overrides[vibe] if w.strip())
            )
            profile = replace(profile, keywords=words)
        table[vibe] = profile
    log.info(
        "vibe_keywords_loaded path=%s overridden=%d", keywords_path, len(overrides)
    )
    return MappingProxyType(table)
