"""Link insertion tests."""

from __future__ import annotations

from autolinker.engine.injector import build_url, inject, scan_existing_links
from autolinker.engine.types import LinkRecord

from .conftest import PREFIX, make_candidates


def test_wraps_first_occurrence_with_original_casing():
    body = "Wir bieten die beste Birria Tacos Erfahrung. Birria tacos sind toll."
    candidates = make_candidates(("birria tacos", "x"))

    result = inject("source", body, candidates, PREFIX)

    assert result.body == (
        "Wir bieten die beste [Birria Tacos](/de/blog/x) Erfahrung. Birria tacos sind toll."
    )
    assert len(result.links) == 1
    link = result.links[0]
    assert (link.phrase, link.target_id, link.url, link.anchor_text) == (
        "birria tacos",
        "x",
        "/de/blog/x",
        "Birria Tacos",
    )
    assert link.line_number == 1
    assert "Birria Tacos Erfahrung" in link.context


def test_rerun_adds_nothing():
    body = "Wir bieten die beste birria tacos Erfahrung"
    candidates = make_candidates(("birria tacos", "x"))

    first = inject("source", body, candidates, PREFIX)
    second = inject("source", first.body, candidates, PREFIX)

    assert first.body.count("[birria tacos](/de/blog/x)") == 1
    assert second.body == first.body
    assert second.links == []
    assert not second.changed


def test_phrase_only_inside_fenced_code_is_not_linked():
    body = "Einleitung ohne Treffer.\n```\nbirria tacos im Code\n```\nEnde."

    result = inject("source", body, make_candidates(("birria tacos", "x")), PREFIX)

    assert result.body == body
    assert result.links == []


def test_text_after_closing_fence_is_linkable():
    body = "~~~\nbirria tacos\n~~~\nDanach kommen birria tacos."

    result = inject("source", body, make_candidates(("birria tacos", "x")), PREFIX)

    assert result.body.splitlines()[1] == "birria tacos"
    assert result.body.splitlines()[3] == "Danach kommen [birria tacos](/de/blog/x)."
    assert result.links[0].line_number == 4


def test_headings_and_indented_code_are_skipped():
    body = "## Birria Tacos Rezept\n    birria tacos = True\nUnsere birria tacos."

    result = inject("source", body, make_candidates(("birria tacos", "x")), PREFIX)

    assert result.body == "## Birria Tacos Rezept\n    birria tacos = True\nUnsere [birria tacos](/de/blog/x)."


def test_existing_link_text_and_destinations_are_skipped():
    body = (
        "Siehe [alles über birria tacos](https://example.com/rezepte) "
        "und [Rezept](/de/blog/foodfotografie-tipps) zur foodfotografie."
    )
    candidates = make_candidates(("birria tacos", "x"), ("foodfotografie", "foodfotografie-restaurant"))

    result = inject("source", body, candidates, PREFIX)

    assert result.body == (
        "Siehe [alles über birria tacos](https://example.com/rezepte) "
        "und [Rezept](/de/blog/foodfotografie-tipps) zur "
        "[foodfotografie](/de/blog/foodfotografie-restaurant)."
    )
    assert [link.target_id for link in result.links] == ["foodfotografie-restaurant"]


def test_position_after_open_parenthesis_is_skipped():
    body = "Tacos (birria tacos) und birria tacos."

    result = inject("source", body, make_candidates(("birria tacos", "x")), PREFIX)

    assert result.body == "Tacos (birria tacos) und [birria tacos](/de/blog/x)."


def test_link_text_continued_from_previous_line_is_skipped():
    body = "[Die besten\nbirria tacos](https://example.com) findest du hier, birria tacos."

    result = inject("source", body, make_candidates(("birria tacos", "x")), PREFIX)

    assert result.body == (
        "[Die besten\nbirria tacos](https://example.com) findest du hier, [birria tacos](/de/blog/x)."
    )


def test_pre_existing_internal_links_consume_target_and_phrase():
    body = "Mehr zu [Birria Tacos](/de/blog/x). Auch Sushi Platte und birria tacos."
    candidates = make_candidates(
        ("birria tacos", "y"),
        ("sushi platte", "x"),
        ("sushi platte", "z"),
    )

    result = inject("source", body, candidates, PREFIX)

    # "birria tacos" is already used as anchor text and target x is already linked.
    assert result.body == (
        "Mehr zu [Birria Tacos](/de/blog/x). Auch [Sushi Platte](/de/blog/z) und birria tacos."
    )
    assert [(link.phrase, link.target_id) for link in result.links] == [("sushi platte", "z")]


def test_one_link_per_target():
    body = "Tacos de birria und birria tacos."
    candidates = make_candidates(("tacos de birria", "x"), ("birria tacos", "x"))

    result = inject("source", body, candidates, PREFIX)

    assert result.body == "[Tacos de birria](/de/blog/x) und birria tacos."
    assert len(result.links) == 1


def test_first_target_wins_shared_phrase():
    body = "Unsere birria tacos und noch mehr birria tacos."
    candidates = make_candidates(("birria tacos", "first"), ("birria tacos", "second"))

    result = inject("source", body, candidates, PREFIX)

    assert [link.target_id for link in result.links] == ["first"]
    assert "/de/blog/second" not in result.body


def test_longer_phrase_is_inserted_before_shorter_one():
    body = "Ein guter Restaurant SEO Plan bringt Gäste."
    candidates = make_candidates(("restaurant seo plan", "long"), ("seo plan", "short"))

    result = inject("source", body, candidates, PREFIX)

    assert result.body == "Ein guter [Restaurant SEO Plan](/de/blog/long) bringt Gäste."
    assert [link.target_id for link in result.links] == ["long"]


def test_self_links_are_never_inserted():
    body = "Alles über birria tacos."

    result = inject("birria", body, make_candidates(("birria tacos", "birria")), PREFIX)

    assert result.body == body
    assert result.links == []


def test_unmatched_candidates_leave_body_untouched():
    body = "Nichts Passendes hier.\n"

    result = inject("source", body, make_candidates(("birria tacos", "x")), PREFIX)

    assert result.body == body
    assert not result.changed


def test_record_is_updated_and_respected():
    record = LinkRecord(targets={"x"})
    body = "Birria tacos und sushi platte."
    candidates = make_candidates(("birria tacos", "x"), ("sushi platte", "y"), manual=["sushi platte"])

    result = inject("source", body, candidates, PREFIX, record)

    assert [link.target_id for link in result.links] == ["y"]
    assert result.links[0].manual is True
    assert record.targets == {"x", "y"}
    assert "sushi platte" in record.phrases


def test_scan_existing_links_and_urls_ignore_trailing_slash():
    body = "[Birria Tacos](/de/blog/x) und [Extern](https://example.com/de/blog/y)"

    record = scan_existing_links(body, "/de/blog/")

    assert record.targets == {"x"}
    assert record.phrases == {"birria tacos"}
    assert build_url("/de/blog/", "x") == "/de/blog/x"


def test_link_text_wrapped_over_lines_is_never_nested():
    body = "[Die besten\nbirria tacos und mehr](https://example.com) hier."

    result = inject("source", body, make_candidates(("birria tacos", "x")), PREFIX)

    assert result.body == body
    assert result.links == []


def test_blank_line_closes_unbalanced_bracket():
    body = "Ein [offener Satz\n\nUnsere birria tacos."

    result = inject("source", body, make_candidates(("birria tacos", "x")), PREFIX)

    assert result.body == "Ein [offener Satz\n\nUnsere [birria tacos](/de/blog/x)."


def test_existing_link_with_fragment_consumes_target():
    body = "Siehe [Rezept](/de/blog/x#zutaten). Unsere birria tacos."

    result = inject("source", body, make_candidates(("birria tacos", "x")), PREFIX)

    assert result.body == body
    assert result.links == []
