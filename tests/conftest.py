import pytest

from genkipairing.models import MatchOutcome, MatchRecord, PlayerRecord


@pytest.fixture
def make_player():
    def _make(user_id, points=0, opponents=(), received_bye=False, is_dropped=False, **kwargs):
        return PlayerRecord(
            user_id=user_id,
            user_name=kwargs.pop("user_name", f"Player {user_id}"),
            points=points,
            opponent_ids=tuple(opponents),
            received_bye=received_bye,
            is_dropped=is_dropped,
            **kwargs,
        )

    return _make


@pytest.fixture
def win():
    def _win(winner, loser, games=(2, 0)):
        return MatchRecord(winner, loser, MatchOutcome.PLAYER_A_WIN, games[0], games[1])

    return _win


@pytest.fixture
def roster():
    return {"A": "Alice", "B": "Bob", "C": "Carol", "D": "Dave"}
