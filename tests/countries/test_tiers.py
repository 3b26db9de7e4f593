"""Tests for the individual tier matchers on a hand-built catalog."""

import pytest

from placecountry.countries.countrynormalize import normalize_place
from placecountry.countries.countryresult import (
    FUZZY_CEILING,
    FUZZY_FLOOR,
    MatchMethod,
)
from placecountry.countries.countrytiers import (
    alias_tier,
    exact_tier,
    fuzzy_confidence,
    fuzzy_tier,
    historical_tier,
    pattern_tier,
    region_tier,
    score_candidates,
)


def _run(tier, raw, catalog, year=None, **kwargs):
    return tier(normalize_place(raw), year, catalog, **kwargs)


class TestExactTier:
    """Test ISO2/ISO3 code matching"""

    @pytest.mark.parametrize("raw", ["DE", "de", "DEU", "deu", " Deu "])
    def test_codes(self, tiny_catalog, raw):
        result = _run(exact_tier, raw, tiny_catalog)
        assert result.iso2 == "DE"
        assert result.confidence == 1.0
        assert result.method is MatchMethod.EXACT
        assert result.matched_on == "DE"

    def test_not_a_code(self, tiny_catalog):
        assert _run(exact_tier, "Germany", tiny_catalog) is None
        assert _run(exact_tier, "ZZ", tiny_catalog) is None


class TestAliasTier:
    """Test whole-input name and alias matching"""

    def test_alias(self, tiny_catalog):
        result = _run(alias_tier, "DEUTSCHLAND", tiny_catalog)
        assert result.iso2 == "DE"
        assert result.confidence == 0.95
        assert result.method is MatchMethod.ALIAS
        assert result.matched_on == "DEUTSCHLAND"

    def test_canonical_name(self, tiny_catalog):
        assert _run(alias_tier, "france", tiny_catalog).iso2 == "FR"

    def test_constituent_nations(self, tiny_catalog):
        for raw in ["England", "Scotland", "Wales"]:
            assert _run(alias_tier, raw, tiny_catalog).iso2 == "GB"

    def test_whole_string_only(self, tiny_catalog):
        """Test an alias embedded in longer text does not match here"""
        assert _run(alias_tier, "Born in France", tiny_catalog) is None

    def test_region_is_not_an_alias(self, tiny_catalog):
        assert _run(alias_tier, "Texas", tiny_catalog) is None


class TestPatternTier:
    """Test "City, State, Country" hierarchy matching"""

    def test_last_segment_name(self, tiny_catalog):
        result = _run(pattern_tier, "Paris, France", tiny_catalog)
        assert result.iso2 == "FR"
        assert result.confidence == 0.9
        assert result.method is MatchMethod.PATTERN
        assert result.matched_on == "France"

    def test_last_segment_code(self, tiny_catalog):
        result = _run(pattern_tier, "Dallas, Texas, USA", tiny_catalog)
        assert result.iso2 == "US"
        assert result.matched_on == "USA"

    def test_last_two_segments(self, tiny_catalog):
        """Test names that themselves contain a comma"""
        result = _run(pattern_tier, "Seoul, Korea, Republic of", tiny_catalog)
        assert result.iso2 == "KR"
        assert result.matched_on == "Korea, Republic of"

    def test_trailing_window(self, tiny_catalog):
        result = _run(pattern_tier, "New York City, in the United States", tiny_catalog)
        assert result.iso2 == "US"
        assert result.matched_on == "United States"

    def test_longest_window_wins(self, tiny_catalog):
        result = _run(pattern_tier, "Boston, United States of America", tiny_catalog)
        assert result.matched_on == "United States of America"

    def test_free_text_single_segment(self, tiny_catalog):
        """Test a country named at the end of free text"""
        result = _run(pattern_tier, "Born in France", tiny_catalog)
        assert result.iso2 == "FR"
        assert result.confidence == 0.9
        assert result.method is MatchMethod.PATTERN
        assert result.matched_on == "France"

    @pytest.mark.parametrize("raw, iso2, matched_on", [
        ("Died in England", "GB", "England"),
        ("Lived in Germany", "DE", "Germany"),
        ("Emigrated to the United States", "US", "United States"),
    ])
    def test_free_text_names_country(self, tiny_catalog, raw, iso2, matched_on):
        result = _run(pattern_tier, raw, tiny_catalog)
        assert result.iso2 == iso2
        assert result.matched_on == matched_on

    def test_window_words_are_not_codes(self, tiny_catalog):
        """Test a short trailing word ("Co", "De") is not read as an ISO code"""
        assert _run(pattern_tier, "Brooklyn, Kings Co", tiny_catalog) is None
        assert _run(pattern_tier, "Born in Nueva De", tiny_catalog) is None

    def test_whole_segment_code(self, tiny_catalog):
        assert _run(pattern_tier, "Hamburg, De", tiny_catalog).iso2 == "DE"

    def test_stops_at_historical_name(self, tiny_catalog):
        """Test "East Germany" is left to the historical tier"""
        assert _run(pattern_tier, "East Germany", tiny_catalog, year=1975) is None
        assert _run(pattern_tier, "Born in East Germany", tiny_catalog) is None
        assert _run(pattern_tier, "Saigon, South Vietnam", tiny_catalog) is None

    def test_stops_at_region(self, tiny_catalog):
        """Test "New Mexico" is not resolved through its last word"""
        assert _run(pattern_tier, "Santa Fe, New Mexico", tiny_catalog) is None

    def test_max_window(self, tiny_catalog):
        raw = "Somewhere, far away in the south of France"
        assert _run(pattern_tier, raw, tiny_catalog).iso2 == "FR"
        assert _run(pattern_tier, "Somewhere, the United States", tiny_catalog, max_window=1) is None

    def test_unknown(self, tiny_catalog):
        assert _run(pattern_tier, "Springfield, Nowhere", tiny_catalog) is None


class TestRegionTier:
    """Test state/province matching"""

    def test_whole_input(self, tiny_catalog):
        result = _run(region_tier, "Bavaria", tiny_catalog)
        assert result.iso2 == "DE"
        assert result.confidence == 0.85
        assert result.method is MatchMethod.REGION
        assert result.matched_on == "Bavaria"

    def test_word_window(self, tiny_catalog):
        result = _run(region_tier, "Born in Texas", tiny_catalog)
        assert result.iso2 == "US"
        assert result.matched_on == "Texas"

    def test_segment(self, tiny_catalog):
        result = _run(region_tier, "Santa Fe, New Mexico", tiny_catalog)
        assert result.iso2 == "US"
        assert result.matched_on == "New Mexico"

    def test_multiword_region_preferred(self, tiny_catalog):
        result = _run(region_tier, "Born in New Jersey", tiny_catalog)
        assert result.iso2 == "US"
        assert result.matched_on == "New Jersey"

    def test_later_segment_first(self, tiny_catalog):
        result = _run(region_tier, "Bavaria, Yorkshire", tiny_catalog)
        assert result.iso2 == "GB"

    def test_words_inside_country_name_skipped(self, tiny_catalog):
        """Test "Zealand" inside "New Zealand" is not read as the Danish region"""
        assert _run(region_tier, "Born in New Zealand", tiny_catalog) is None
        assert _run(region_tier, "Born on Zealand", tiny_catalog).iso2 == "DK"

    def test_no_region(self, tiny_catalog):
        assert _run(region_tier, "Near the river", tiny_catalog) is None


class TestHistoricalTier:
    """Test defunct state names with validity windows"""

    def test_inside_window(self, tiny_catalog):
        result = _run(historical_tier, "East Germany", tiny_catalog, year=1975)
        assert result.iso2 == "DE"
        assert result.confidence == 0.75
        assert result.method is MatchMethod.HISTORICAL
        assert result.matched_on == "East Germany"
        assert result.historical_year == 1975

    @pytest.mark.parametrize("year", [1949, 1990])
    def test_window_inclusive(self, tiny_catalog, year):
        assert _run(historical_tier, "East Germany", tiny_catalog, year=year).iso2 == "DE"

    @pytest.mark.parametrize("year", [1948, 1991, 1995])
    def test_outside_window_abstains(self, tiny_catalog, year):
        assert _run(historical_tier, "East Germany", tiny_catalog, year=year) is None

    def test_no_year_abstains(self, tiny_catalog):
        assert _run(historical_tier, "East Germany", tiny_catalog) is None

    def test_historical_alias(self, tiny_catalog):
        assert _run(historical_tier, "GDR", tiny_catalog, year=1980).iso2 == "DE"

    def test_last_segment(self, tiny_catalog):
        result = _run(historical_tier, "Saigon, South Vietnam", tiny_catalog, year=1968)
        assert result.iso2 == "VN"
        assert result.matched_on == "South Vietnam"

    def test_trailing_window(self, tiny_catalog):
        result = _run(historical_tier, "Born in East Germany", tiny_catalog, year=1975)
        assert result.iso2 == "DE"
        assert result.matched_on == "East Germany"
        assert _run(historical_tier, "Born in East Germany", tiny_catalog, year=1995) is None


class TestFuzzyTier:
    """Test the edit-distance fallback"""

    def test_confidence_mapping(self):
        assert fuzzy_confidence(1.0) == FUZZY_CEILING
        assert fuzzy_confidence(0.6) == pytest.approx(FUZZY_FLOOR)
        assert fuzzy_confidence(0.8) == pytest.approx(0.595)
        assert fuzzy_confidence(0.0) == 0.0

    def test_confidence_monotonic(self):
        values = [fuzzy_confidence(x / 100) for x in range(60, 101)]
        assert values == sorted(values)
        assert all(FUZZY_FLOOR <= v <= FUZZY_CEILING for v in values)

    def test_typo(self, tiny_catalog):
        result = _run(fuzzy_tier, "Germny", tiny_catalog)
        assert result.iso2 == "DE"
        assert result.method is MatchMethod.FUZZY
        assert result.matched_on == "Germany"
        assert FUZZY_FLOOR <= result.confidence < 0.9

    def test_transposition(self, tiny_catalog):
        result = _run(fuzzy_tier, "Frnace", tiny_catalog)
        assert result.iso2 == "FR"
        assert FUZZY_FLOOR <= result.confidence < 0.9

    def test_alternatives_tie_break(self, tiny_catalog):
        """Test equal scores fall back to catalog order"""
        result = _run(fuzzy_tier, "Irak", tiny_catalog)
        assert result.iso2 == "IQ"
        assert result.alternatives[0].iso2 == "IR"
        assert result.alternatives[0].confidence == result.confidence
        assert "edit distance 1" in result.alternatives[0].reason

    def test_max_alternatives(self, tiny_catalog):
        result = _run(fuzzy_tier, "Irak", tiny_catalog, max_alternatives=0)
        assert result.alternatives == ()

    def test_below_floor(self, tiny_catalog):
        assert _run(fuzzy_tier, "XYZ123", tiny_catalog) is None

    def test_historical_names_excluded(self, tiny_catalog):
        """Test an out-of-window historical name is not rescued by fuzzy"""
        assert _run(fuzzy_tier, "East Germany", tiny_catalog) is None

    def test_score_candidates(self, tiny_catalog):
        ranked = score_candidates("irak", tiny_catalog)
        assert [r[0] for r in ranked[:2]] == ["IQ", "IR"]
        assert len({r[0] for r in ranked}) == len(ranked)
        assert all(r[1] >= FUZZY_FLOOR for r in ranked)

    def test_score_candidates_empty(self, tiny_catalog):
        assert score_candidates("", tiny_catalog) == []
