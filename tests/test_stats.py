"""
Tests for stat aggregation, number formatting and payload models.
"""

import pytest

from bf6stats.stats import (
    STAT_MODES,
    ButtonSettings,
    PlayerStatsResponse,
    StatMode,
    aggregate,
    format_number,
    format_title,
    kd_ratio,
    win_rate,
)


class TestDerivedValues:
    def test_kd_zero_deaths(self):
        assert kd_ratio(10, 0) == "0.00"

    def test_kd_two_decimals(self):
        assert kd_ratio(150, 75) == "2.00"
        assert kd_ratio(10, 3) == "3.33"

    def test_win_rate_no_games(self):
        assert win_rate(0, 0) == "0.0"

    def test_win_rate_one_decimal(self):
        assert win_rate(30, 70) == "30.0"
        assert win_rate(1, 2) == "33.3"

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0, "0"),
            (999, "999"),
            (1000, "1.0K"),
            (1500, "1.5K"),
            (999_999, "1000.0K"),
            (1_000_000, "1.0M"),
            (2_500_000, "2.5M"),
            (100.0, "100"),
            (12.5, "12.5"),
        ],
    )
    def test_format_number(self, value, expected):
        assert format_number(value) == expected


class TestAggregate:
    def test_sums_all_breakdowns(self):
        response = PlayerStatsResponse.model_validate(
            {
                "userName": "Foo",
                "classes": [{"kills": 100, "deaths": 50}, {"kills": 50, "deaths": 25}],
                "gamemodes": [{"wins": 20, "losses": 30}, {"wins": 10, "losses": 40}],
            }
        )
        stats = aggregate(response)

        assert stats.kills == 150
        assert stats.deaths == 75
        assert stats.kd == "2.00"
        assert stats.wins == 30
        assert stats.losses == 70
        assert stats.win_rate == "30.0"
        assert stats.player_name == "Foo"

    def test_missing_fields_count_as_zero(self):
        response = PlayerStatsResponse.model_validate(
            {
                "userName": "Foo",
                "classes": [{"kills": 5}, {"deaths": None}, "junk"],
                "gamemodes": [{}],
            }
        )
        stats = aggregate(response)

        assert stats.kills == 5
        assert stats.deaths == 0
        assert stats.kd == "0.00"
        assert stats.win_rate == "0.0"

    def test_absent_breakdowns(self):
        stats = aggregate(PlayerStatsResponse.model_validate({"userName": "Foo"}))
        assert (stats.kills, stats.deaths, stats.wins, stats.losses) == (0, 0, 0, 0)


class TestFormatTitle:
    def setup_method(self):
        self.stats = aggregate(
            PlayerStatsResponse.model_validate(
                {
                    "userName": "Foo",
                    "classes": [{"kills": 2500, "deaths": 1000}],
                    "gamemodes": [{"wins": 3, "losses": 1}],
                }
            )
        )

    def test_titles_per_mode(self):
        assert format_title(StatMode.KD, self.stats) == "K/D\n2.50"
        assert format_title(StatMode.KILLS, self.stats) == "Kills\n2.5K"
        assert format_title(StatMode.WINS, self.stats) == "Wins\n75.0%"

    def test_mode_order(self):
        assert [m.value for m in STAT_MODES] == ["kd", "kills", "wins"]


class TestPlayerStatsResponse:
    def test_numeric_strings_are_parsed(self):
        response = PlayerStatsResponse.model_validate(
            {"userName": "Foo", "classes": [{"kills": "1,234", "deaths": "oops"}]}
        )
        assert response.classes[0].kills == 1234
        assert response.classes[0].deaths == 0

    def test_non_list_breakdowns_become_empty(self):
        response = PlayerStatsResponse.model_validate(
            {"userName": "Foo", "classes": {"kills": 1}, "gamemodes": None}
        )
        assert response.classes == []
        assert response.gamemodes == []

    def test_bool_counts_are_ignored(self):
        response = PlayerStatsResponse.model_validate(
            {"userName": "Foo", "gamemodes": [{"wins": True, "losses": 2}]}
        )
        assert response.gamemodes[0].wins == 0
        assert response.gamemodes[0].losses == 2

    @pytest.mark.parametrize(
        "data,resolved",
        [
            ({"userName": "Foo"}, True),
            ({"userName": "Foo", "errors": ["player not found"]}, False),
            ({"userName": "Foo", "errors": []}, False),
            ({"userName": "Foo", "errors": {}}, False),
            ({"userName": "Foo", "errors": ""}, True),
            ({"userName": "Foo", "errors": None}, True),
            ({"userName": ""}, False),
            ({"userName": 42}, False),
            ({}, False),
        ],
    )
    def test_is_resolved(self, data, resolved):
        assert PlayerStatsResponse.model_validate(data).is_resolved is resolved


class TestButtonSettings:
    def test_from_payload(self):
        settings = ButtonSettings.from_payload(
            {"settings": {"playerName": "  Foo ", "platform": " PS5 ", "extra": 1}}
        )
        assert settings.player_name == "Foo"
        assert settings.platform == "ps5"

    @pytest.mark.parametrize(
        "payload",
        [None, {}, {"settings": None}, {"settings": "bad"}, {"settings": {}}],
    )
    def test_defaults(self, payload):
        settings = ButtonSettings.from_payload(payload)
        assert settings.player_name is None
        assert settings.platform == "pc"

    def test_blank_values_use_defaults(self):
        settings = ButtonSettings.model_validate({"playerName": "   ", "platform": ""})
        assert settings.player_name is None
        assert settings.platform == "pc"

    def test_unknown_platform_passes_through(self):
        settings = ButtonSettings.model_validate({"playerName": "Foo", "platform": "Switch"})
        assert settings.platform == "switch"
