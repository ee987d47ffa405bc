from typing import Iterable, Sequence

from memorygame.models import Card, Player


def all_matched(cards: Iterable[Card]) -> bool:
    """True once every card of a non-empty deck is matched."""
    cards = list(cards)
    return bool(cards) and all(c.is_matched for c in cards)


def decide_winner(players: Sequence[Player], draw_result: str = 'draw') -> str:
    """Name of the player with the highest score, or `draw_result` on a tie.

    A lone remaining player (after the opponent left) wins outright.
    """
    if not players:
        return draw_result
    if len(players) == 1:
        return players[0].name
    first, second = players[0], players[1]
    if first.score == second.score:
        return draw_result
    return first.name if first.score > second.score else second.name
