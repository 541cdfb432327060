from daily_vibe.models import SentimentScore
from daily_vibe.rationale import (
    build_rationale,
    detect_themes,
    energy_label,
    extract_keywords,
    no_signal_rationale,
    positivity_label,
)
from daily_vibe.vibes import Vibe, get_profile


def test_detect_themes_ranks_by_hits_and_omits_empty():
    tokens = ["market"] * 3 + ["vaccine"] * 2 + ["election"] + ["banana"]
    assert detect_themes(tokens) == ["economy", "health", "politics"]


def test_detect_themes_ties_keep_table_order():
    assert detect_themes(["climate", "election"]) == ["politics", "environment"]


def test_detect_themes_limit_and_empty():
    tokens = ["market", "vaccine", "election", "climate"]
    assert len(detect_themes(tokens)) == 3
    assert detect_themes(tokens, limit=1) == ["politics"]
    assert detect_themes([]) == []


def test_labels_thresholds():
    assert positivity_label(0.29) == "challenging news"
    assert positivity_label(0.3) == "mixed developments"
    assert positivity_label(0.7) == "positive developments"
    assert energy_label(0.1) == "calm, steady news"
    assert energy_label(0.5) == "moderate activity"
    assert energy_label(0.95) == "high-energy events"


def test_build_rationale_text():
    profile = get_profile(Vibe.HOPEFUL)
    sentiment = SentimentScore(positivity=0.9, energy=0.2, complexity=0.5)
    text = build_rationale(profile, sentiment, ["technology", "environment"])
    assert text == (
        "Today's news reflects a hopeful mood based on positive developments "
        "and calm, steady news. Key themes include: technology, environment. "
        "Headlines suggest looking forward with optimism."
    )


def test_build_rationale_without_themes():
    profile = get_profile(Vibe.UNCERTAIN)
    sentiment = SentimentScore(positivity=0.0, energy=0.5, complexity=0.5)
    text = build_rationale(profile, sentiment, [])
    assert "Key themes include: general news." in text
    assert "challenging news and moderate activity" in text


def test_no_signal_rationale_names_vibe():
    text = no_signal_rationale(get_profile(Vibe.CONTEMPLATIVE))
    assert "contemplative" in text


def test_extract_keywords_orders_by_count_then_alpha():
    profile = get_profile(Vibe.HOPEFUL)
    tokens = ["hope", "future", "future", "breakthrough", "banana", "hope", "growth"]
    assert extract_keywords(tokens, profile) == ["future", "hope", "breakthrough", "growth"]
    assert extract_keywords(tokens, profile, limit=1) == ["future"]


def test_extract_keywords_no_matches():
    assert extract_keywords(["banana"], get_profile(Vibe.HOPEFUL)) == []
