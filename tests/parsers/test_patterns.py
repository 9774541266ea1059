"""Tests for the regex heuristics shared by the parsers."""

import pytest

from csfd_scraper.models import ShowKind
from csfd_scraper.parsers.patterns import (
    classify_kind,
    clean_episode_name,
    clean_season_name,
    extract_episode_count,
    extract_episode_count_from_name,
    extract_season_number,
    extract_season_year,
    extract_year,
    extract_year_range,
    mentions_season,
    parse_episode_code,
    parse_episode_number_from_name,
    parse_rating,
)


class TestEpisodeCode:
    """Test cases for parse_episode_code."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("S01E05", (1, 5)),
            ("s02e10", (2, 10)),
            ("Episode S02E10 - Title", (2, 10)),
            ("3x07", (3, 7)),
            ("1x05", (1, 5)),
            ("(S1E2)", (1, 2)),
        ],
    )
    def test_recognized_codes(self, text, expected):
        """Test both code notations."""
        assert parse_episode_code(text) == expected

    @pytest.mark.parametrize("text", ["", "no code here", "Pilot", "Season 1"])
    def test_absent_code(self, text):
        """Test text without a code yields None."""
        assert parse_episode_code(text) is None

    def test_primary_notation_wins(self):
        """Test SxxEyy is preferred over NxM when both appear."""
        assert parse_episode_code("2x03 aka S04E05") == (4, 5)


class TestEpisodeNumberFromName:
    """Test cases for parse_episode_number_from_name."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("1. Pilot", 1),
            ("12. Finale", 12),
            ("Epizoda 4", 4),
            ("Díl 7", 7),
            ("Episode 3", 3),
        ],
    )
    def test_numbers(self, name, expected):
        """Test ordinals and episode words."""
        assert parse_episode_number_from_name(name) == expected

    def test_plain_name(self):
        """Test a name without a number yields None."""
        assert parse_episode_number_from_name("Pilot") is None


class TestRating:
    """Test cases for parse_rating."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("85%", 85.0),
            ("Hodnocení: 72.5 %", 72.5),
            ("0%", 0.0),
            ("72.5%", 72.5),
            ("100%", 100.0),
        ],
    )
    def test_in_range(self, text, expected):
        """Test percentages within bounds are returned."""
        assert parse_rating(text) == expected

    @pytest.mark.parametrize("text", ["150%", "1000%", "rated 1000 %", "no rating", "", "85"])
    def test_absent_or_out_of_range(self, text):
        """Test anything outside [0, 100] is treated as missing."""
        assert parse_rating(text) is None


class TestEpisodeNameCleaning:
    """Test cases for clean_episode_name."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("S01E01 - Pilot", "Pilot"),
            ("S01E02: Cat's in the Bag", "Cat's in the Bag"),
            ("1. Pilot", "Pilot"),
            ("1. First Episode", "First Episode"),
            ("Pilot", "Pilot"),
            ("  Pilot  ", "Pilot"),
        ],
    )
    def test_prefixes_removed(self, name, expected):
        """Test code and ordinal prefixes are stripped."""
        assert clean_episode_name(name) == expected


class TestYears:
    """Test cases for the year helpers."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Breaking Bad (2008)", "2008"),
            ("(2008-2013)", "2008-2013"),
            ("vydáno 1999, remaster 2010", "1999"),
            ("no year", None),
            ("(1850)", "1850"),
            ("1850", None),
        ],
    )
    def test_extract_year(self, text, expected):
        """Test parenthesised years beat bare 19xx/20xx years."""
        assert extract_year(text) == expected

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("2008 – 2013", "2008-2013"),
            ("2008-2013", "2008-2013"),
            ("USA, 2019, 5 epizod", "2019"),
            ("2021 –", "2021-"),
            ("2021 – , 8 epizod", "2021-"),
            ("2008 - 62 min", "2008"),
            ("žádný rok", None),
        ],
    )
    def test_extract_year_range(self, text, expected):
        """Test ranges are returned with a plain hyphen."""
        assert extract_year_range(text) == expected

    def test_extract_season_year(self):
        """Test only a parenthesised year counts for seasons."""
        assert extract_season_year("(2008) - 7 epizod") == "2008"
        assert extract_season_year("2008 - 7 epizod") is None


class TestSeasonHelpers:
    """Test cases for the season heuristics."""

    def test_episode_count(self):
        """Test counts from info lines."""
        assert extract_episode_count("(2007) - 17 epizod") == 17
        assert extract_episode_count("(2007)") is None

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Série 1 (10 epizod)", 10),
            ("Série 1 (8)", 8),
            ("Série 1 (2015)", None),
            ("Série 1", None),
        ],
    )
    def test_episode_count_from_name(self, name, expected):
        """Test counts embedded in legacy season labels."""
        assert extract_episode_count_from_name(name) == expected

    def test_clean_season_name(self):
        """Test parenthesised fragments are removed."""
        assert clean_season_name("Série 1 (2015) (10 epizod)") == "Série 1"

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("Série 2", 2), ("Season 3", 3), ("3. řada", None), ("Řada 4", 4), ("Pilot", None)],
    )
    def test_extract_season_number(self, text, expected):
        """Test season headers in Czech and English."""
        assert extract_season_number(text) == expected

    def test_mentions_season(self):
        """Test header words are detected case-insensitively."""
        assert mentions_season("SÉRIE 1")
        assert mentions_season("Season two")
        assert not mentions_season("S01E01 Pilot")


class TestClassifyKind:
    """Test cases for classify_kind."""

    def test_mini_series(self):
        assert classify_kind("Černobyl (2019) (minisérie)") is ShowKind.MINI_SERIES

    def test_single_season(self):
        assert classify_kind("Série 5 (2012) (série)") is ShowKind.SEASON

    def test_series_default(self):
        assert classify_kind("Perníkový táta (2008) (seriál)") is ShowKind.SERIES
        assert classify_kind("Anything else") is ShowKind.SERIES
