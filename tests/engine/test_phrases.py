"""Phrase extraction tests."""

from __future__ import annotations

import pytest

from autolinker.engine.phrases import PhraseExtractor, headline_of, normalize_phrase


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("Restaurant SEO: Google gefunden werden", ["restaurant seo"]),
        (
            "Instagram Reels für Restaurants: Mehr Gäste",
            ["instagram reels restaurants", "reels restaurants", "instagram reels"],
        ),
        ("Foodfotografie im Restaurant: 10 Tipps", ["foodfotografie restaurant", "foodfotografie"]),
        (
            "Stammgäste aufbauen in der Gastronomie",
            ["stammgäste aufbauen gastronomie", "aufbauen gastronomie", "stammgäste aufbauen"],
        ),
    ],
)
def test_extracts_exact_phrase_sets(extractor, title, expected):
    assert extractor.extract(title) == expected


def test_only_headline_before_colon_is_used(extractor):
    phrases = extractor.extract("Birria Tacos: Warum Foodfotografie alles verändert")

    assert phrases == ["birria tacos"]


def test_bigram_needs_long_first_or_longer_second_word(extractor):
    # "bar eis" fails both length checks, "eis kaffee" passes on the second word.
    assert extractor.extract("Bar Eis Kaffee") == ["eis kaffee"]


def test_titles_without_substance_yield_nothing(extractor):
    assert extractor.extract("Tipps und Ideen") == []
    assert extractor.extract("SEO: Tipps für alle") == []
    assert extractor.extract("") == []
    assert extractor.extract("2024 ??? !!!") == []


def test_punctuation_and_digits_become_separators(extractor):
    phrases = extractor.extract("#1 Speisekarte/Design 2025")

    assert phrases == ["speisekarte design"]
    assert all(set(phrase) <= set("abcdefghijklmnopqrstuvwxyzäöüß ") for phrase in phrases)


def test_compound_singles_respect_single_stopwords(engine_config):
    extractor = PhraseExtractor.from_config(engine_config, "de")
    assert "suchmaschinenoptimierung" in extractor.extract("Suchmaschinenoptimierung lokal")

    strict = PhraseExtractor(
        stopwords=frozenset(),
        single_stopwords=frozenset({"suchmaschinenoptimierung"}),
        alphabet="a-zäöüß",
    )
    assert strict.extract("Suchmaschinenoptimierung") == []


def test_english_locale_rules(engine_config):
    extractor = PhraseExtractor.from_config(engine_config, "en")

    assert extractor.extract("How to Make Birria Tacos at Home") == [
        "birria tacos home",
        "birria tacos",
        "tacos home",
    ]


def test_thresholds_come_from_configuration(engine_config):
    engine_config.raw["phrases"]["compound_min"] = 8
    extractor = PhraseExtractor.from_config(engine_config, "de")

    assert "speisekarte" in extractor.extract("Speisekarte")


def test_results_are_unique_and_longest_first(extractor):
    phrases = extractor.extract("Digitale Speisekarte Digitale Speisekarte")

    assert len(phrases) == len(set(phrases))
    assert [len(phrase) for phrase in phrases] == sorted((len(phrase) for phrase in phrases), reverse=True)


def test_headline_helpers():
    assert headline_of("Restaurant SEO: Google") == "Restaurant SEO"
    assert headline_of("Kein Doppelpunkt") == "Kein Doppelpunkt"
    assert headline_of(":Nur Untertitel") == ":Nur Untertitel"
    assert normalize_phrase("  Google   Business\tProfil ") == "google business profil"
