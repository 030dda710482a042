"""Tests for the recursive origin resolver against fixed dictionary pages."""

from __future__ import annotations

import asyncio

from conftest import etymology_page, inflection_page

from etymolens.models.origin_models import (
    CompoundOrigin,
    CompoundPart,
    NetworkFailure,
    OriginLabel,
    SimpleOrigin
)

HAPPINESS_ETYMOLOGY = (
    '<p>From <i class="Latn mention" lang="en"><a href="/wiki/happy#English" title="happy">happy</a></i>'
    ' +\u200e <i class="Latn mention" lang="en"><a href="/wiki/-ness#English" title="-ness">-ness</a></i>.</p>'
)

PAGES = {
    "table": etymology_page(
        "<p>From Middle English <i>table</i>, from Old French <i>table</i>, from Latin <i>tabula</i>.</p>"
    ),
    "goose": etymology_page("<p>From Middle English <i>gos</i>, from Old English <i>gōs</i>.</p>"),
    "geese": inflection_page(
        '<h2><span class="mw-headline" id="English">English</span></h2>'
        '<p><b>geese</b></p><ol><li>plural of <a href="/wiki/goose#English" title="goose">goose</a></li></ol>'
    ),
    "happy": etymology_page("<p>From Middle English <i>happy</i>, from Old Norse <i>happ</i>.</p>"),
    "happiness": etymology_page(HAPPINESS_ETYMOLOGY),
    "govern": etymology_page("<p>From Latin <i>gubernāre</i>.</p>"),
    "-ment": etymology_page("<p>From Latin <i>-mentum</i>.</p>"),
    "government": etymology_page("<p>Equivalent to govern + -ment.</p>"),
    "color": etymology_page("<p>From Latin <i>color</i>.</p>"),
    "colour": etymology_page('<p>See also: <a href="/wiki/color" title="color">color</a></p>'),
    "beast": etymology_page("<p>Inherited (fro) <i>beste</i></p>"),
    "quark": etymology_page("<p>Coined by James Joyce.</p>"),
    "alpha": inflection_page("<p>Inflection of beta.</p>"),
    "beta": inflection_page("<p>Inflection of gamma.</p>"),
    "gamma": inflection_page("<p>Inflection of delta.</p>"),
    "delta": etymology_page("<p>From Ancient Greek δέλτα.</p>"),
    "broken": etymology_page("<p>From Old English <i>brocen</i>.</p>"),
    "sunflower": etymology_page("<p>From sun + flower.</p>"),
    "sun": etymology_page("<p>From Old English <i>sunne</i>.</p>"),
}


def _resolve(resolver, word: str, depth: int = 0):
    return asyncio.run(resolver.resolve_origin(word, depth))


def test_etymology_text_classification(make_resolver) -> None:
    resolver = make_resolver(PAGES)

    assert _resolve(resolver, "table") == SimpleOrigin(OriginLabel.LATIN)


def test_cached_result_skips_dictionary(make_resolver) -> None:
    resolver = make_resolver(PAGES)

    first = _resolve(resolver, "table")
    second = _resolve(resolver, "Table")

    assert first == second
    assert resolver.source.queried("table") == 2  # sections + section content, once


def test_morphological_fallback_uses_cached_stem(make_resolver) -> None:
    resolver = make_resolver(PAGES)
    resolver.cache.set("walk", SimpleOrigin(OriginLabel.OLD_ENGLISH))

    assert _resolve(resolver, "walked") == SimpleOrigin(OriginLabel.OLD_ENGLISH)
    assert resolver.source.queried("walked") == 0
    assert resolver.cache.get("walked") == SimpleOrigin(OriginLabel.OLD_ENGLISH)


def test_morphology_only_runs_for_top_level_words(make_resolver) -> None:
    resolver = make_resolver(PAGES)
    resolver.cache.set("walk", SimpleOrigin(OriginLabel.OLD_ENGLISH))

    assert _resolve(resolver, "walked", depth=1) == SimpleOrigin(OriginLabel.UNKNOWN)
    assert resolver.source.queried("walked") == 1


def test_morphology_ignores_short_stems(make_resolver) -> None:
    resolver = make_resolver(PAGES)

    _resolve(resolver, "bus")

    assert resolver.source.queried("bu") == 0


def test_missing_page_resolves_to_unknown_and_is_cached(make_resolver) -> None:
    resolver = make_resolver(PAGES)

    assert _resolve(resolver, "xyzzy") == SimpleOrigin(OriginLabel.UNKNOWN)
    assert _resolve(resolver, "xyzzy") == SimpleOrigin(OriginLabel.UNKNOWN)
    assert resolver.source.calls[("sections", "xyzzy")] == 1


def test_unclassifiable_etymology_is_unknown(make_resolver) -> None:
    resolver = make_resolver(PAGES)

    assert _resolve(resolver, "quark") == SimpleOrigin(OriginLabel.UNKNOWN)
    assert resolver.cache.has("quark")


def test_inflection_follows_linked_headword(make_resolver) -> None:
    resolver = make_resolver(PAGES)

    assert _resolve(resolver, "geese") == SimpleOrigin(OriginLabel.OLD_ENGLISH)
    assert resolver.cache.get("geese") == SimpleOrigin(OriginLabel.OLD_ENGLISH)


def test_recursion_stops_below_depth_two(make_resolver) -> None:
    resolver = make_resolver(PAGES)

    assert _resolve(resolver, "alpha") == SimpleOrigin(OriginLabel.UNKNOWN)
    assert resolver.source.queried("gamma") > 0
    assert resolver.source.queried("delta") == 0


def test_compound_with_affix_table_fallback(make_resolver) -> None:
    resolver = make_resolver(PAGES)

    result = _resolve(resolver, "happiness")

    assert result == CompoundOrigin(
        parts=(CompoundPart("happy", OriginLabel.OLD_NORSE), CompoundPart("ness", OriginLabel.OLD_ENGLISH)),
        original_word="happiness"
    )
    assert resolver.source.queried("-ness") > 0


def test_compound_affix_with_own_entry_wins_over_table(make_resolver) -> None:
    resolver = make_resolver(PAGES)

    result = _resolve(resolver, "government")

    assert isinstance(result, CompoundOrigin)
    assert result.origins == [OriginLabel.LATIN, OriginLabel.LATIN]
    assert [part.text for part in result.parts] == ["govern", "ment"]


def test_compound_of_free_words(make_resolver) -> None:
    resolver = make_resolver(PAGES)

    result = _resolve(resolver, "sunflower")

    assert isinstance(result, CompoundOrigin)
    assert result.origins == [OriginLabel.OLD_ENGLISH, OriginLabel.UNKNOWN]
    assert resolver.cache.get("sunflower") == result


def test_see_also_link_is_followed(make_resolver) -> None:
    resolver = make_resolver(PAGES)

    assert _resolve(resolver, "colour") == SimpleOrigin(OriginLabel.LATIN)


def test_language_code_heuristic(make_resolver) -> None:
    resolver = make_resolver(PAGES)

    assert _resolve(resolver, "beast") == SimpleOrigin(OriginLabel.FRENCH)


def test_empty_word_is_unknown_without_lookup(make_resolver) -> None:
    resolver = make_resolver(PAGES)

    assert _resolve(resolver, "") == SimpleOrigin(OriginLabel.UNKNOWN)
    assert not resolver.source.calls


def test_network_failure_is_returned_and_not_cached(make_resolver) -> None:
    resolver = make_resolver(PAGES, unavailable=["broken"])

    first = _resolve(resolver, "broken")
    second = _resolve(resolver, "broken")

    assert isinstance(first, NetworkFailure)
    assert isinstance(second, NetworkFailure)
    assert first.label == "Network Error"
    assert not resolver.cache.has("broken")
    assert resolver.source.calls[("sections", "broken")] == 2


def test_network_failure_in_compound_part_fails_the_word(make_resolver) -> None:
    resolver = make_resolver(PAGES, unavailable=["flower"])

    result = _resolve(resolver, "sunflower")

    assert isinstance(result, NetworkFailure)
    assert not resolver.cache.has("sunflower")
    assert resolver.cache.get("sun") == SimpleOrigin(OriginLabel.OLD_ENGLISH)


def test_network_failure_during_morphology_propagates(make_resolver) -> None:
    resolver = make_resolver(PAGES, unavailable=["cat"])

    result = _resolve(resolver, "cats")

    assert isinstance(result, NetworkFailure)
    assert resolver.source.queried("cats") == 0
    assert not resolver.cache.has("cats")


def test_network_failure_while_following_inflection(make_resolver) -> None:
    resolver = make_resolver(PAGES, unavailable=["goose"])

    assert isinstance(_resolve(resolver, "geese"), NetworkFailure)
    assert not resolver.cache.has("geese")


def test_see_also_link_to_the_word_itself_is_not_followed(make_resolver) -> None:
    resolver = make_resolver({
        "hue": etymology_page('<p>See also: <a href="/wiki/Hue" title="Hue">Hue</a>; inherited (fro) <i>hu</i></p>'),
    })

    assert _resolve(resolver, "hue") == SimpleOrigin(OriginLabel.FRENCH)
    assert resolver.source.calls[("sections", "hue")] == 1


def test_see_also_link_to_an_affix_is_not_followed(make_resolver) -> None:
    resolver = make_resolver({
        "kind": etymology_page('<p>See also: <a href="/wiki/-ness" title="-ness">-ness</a></p>'),
        "-ness": etymology_page("<p>From Old English <i>-nes</i>.</p>"),
    })

    assert _resolve(resolver, "kind") == SimpleOrigin(OriginLabel.UNKNOWN)
    assert resolver.source.queried("-ness") == 0
