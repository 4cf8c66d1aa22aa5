"""Aggregation of provider breakdowns and title formatting."""

from __future__ import annotations

from .models import CachedStats, PlayerStatsResponse, StatMode

# Prompts rendered instead of stats
PROMPT_SET_PLAYER = "Set\nPlayer"
PROMPT_PLAYER_NOT_FOUND = "Player\nNot Found"
PROMPT_API_ERROR = "API\nError"


def kd_ratio(kills: float, deaths: float) -> str:
    if deaths <= 0:
        return "0.00"
    return f"{kills / deaths:.2f}"


def win_rate(wins: float, losses: float) -> str:
    total = wins + losses
    if total <= 0:
        return "0.0"
    return f"{wins / total * 100:.1f}"


def format_number(value: float) -> str:
    """Compact a raw counter: ``1500`` -> ``1.5K``, ``2500000`` -> ``2.5M``."""
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{value / 1_000:.1f}K"
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def aggregate(response: PlayerStatsResponse) -> CachedStats:
    """Sum class and game-mode breakdowns into the values shown on a button.

    Args:
        response: A resolved provider response.

    Returns:
        CachedStats with totals, K/D and win rate.
    """
    kills = sum(entry.kills for entry in response.classes)
    deaths = sum(entry.deaths for entry in response.classes)
    wins = sum(entry.wins for entry in response.gamemodes)
    losses = sum(entry.losses for entry in response.gamemodes)
    return CachedStats(
        kills=kills,
        deaths=deaths,
        kd=kd_ratio(kills, deaths),
        wins=wins,
        losses=losses,
        win_rate=win_rate(wins, losses),
        player_name=response.user_name or "",
    )


def format_title(mode: StatMode, stats: CachedStats) -> str:
    if mode is StatMode.KD:
        return f"K/D\n{stats.kd}"
    if mode is StatMode.KILLS:
        return f"Kills\n{format_number(stats.kills)}"
    return f"Wins\n{stats.win_rate}%"
