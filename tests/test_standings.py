import pytest

from genkipairing import calculate_standings, get_player_records_for_pairing
from genkipairing.constants import TIEBREAK_FLOOR
from genkipairing.exceptions import (
    InvalidReferenceException,
    MalformedMatchRecordException,
)
from genkipairing.models import EventConfig, MatchOutcome, MatchRecord
from genkipairing.tournament import StandingsCalculator, compare_records


def _by_id(standings):
    return {record.user_id: record for record in standings}


def test_no_matches_everyone_at_floor(roster):
    standings = calculate_standings(roster, [])

    assert [r.user_id for r in standings] == ["A", "B", "C", "D"]
    assert [r.rank for r in standings] == [1, 2, 3, 4]
    for record in standings:
        assert record.points == 0
        assert record.omw_percent == TIEBREAK_FLOOR
        assert record.gw_percent == TIEBREAK_FLOOR
        assert record.ogw_percent == TIEBREAK_FLOOR
        assert record.oomw_percent == TIEBREAK_FLOOR
        assert record.opponent_ids == ()


def test_win_and_draw(roster, win):
    matches = [
        win("A", "B"),
        MatchRecord("C", "D", MatchOutcome.DRAW, 1, 1),
    ]
    standings = calculate_standings(roster, matches)
    by_id = _by_id(standings)

    assert [r.user_id for r in standings] == ["A", "C", "D", "B"]
    assert by_id["A"].points == 3
    assert by_id["C"].points == 1
    assert by_id["D"].points == 1
    assert by_id["B"].points == 0

    assert by_id["A"].gw_percent == pytest.approx(1.0)
    assert by_id["A"].omw_percent == TIEBREAK_FLOOR
    assert by_id["B"].gw_percent == TIEBREAK_FLOOR
    assert by_id["C"].match_draws == 1
    assert by_id["C"].omw_percent == pytest.approx(0.5)
    assert by_id["B"].user_name == "Bob"


def test_tiebreaks_over_two_rounds(roster, win):
    matches = [
        win("A", "B"),
        win("C", "D"),
        win("A", "C"),
        win("B", "D"),
    ]
    by_id = _by_id(calculate_standings(roster, matches))

    assert by_id["A"].omw_percent == pytest.approx(0.5)
    assert by_id["B"].omw_percent == pytest.approx((1.0 + TIEBREAK_FLOOR) / 2)
    assert by_id["B"].ogw_percent == pytest.approx((1.0 + TIEBREAK_FLOOR) / 2)
    assert by_id["B"].oomw_percent == pytest.approx(0.5)
    # B and C are tied on everything, so the id decides
    assert [by_id[p].rank for p in "ABCD"] == [1, 2, 3, 4]


def test_bye_counts_as_win_without_opponent():
    matches = [
        MatchRecord("A", "B", MatchOutcome.PLAYER_A_WIN, 2, 1),
        MatchRecord("C"),
    ]
    standings = calculate_standings(["A", "B", "C"], matches)
    by_id = _by_id(standings)

    assert by_id["C"].points == 3
    assert by_id["C"].match_wins == 1
    assert by_id["C"].received_bye
    assert by_id["C"].opponent_ids == ()
    assert by_id["C"].game_wins == 0
    assert by_id["C"].omw_percent == TIEBREAK_FLOOR
    assert not by_id["A"].received_bye
    # A and C tie on points and OMW; A has the better game record
    assert [r.user_id for r in standings] == ["A", "C", "B"]


def test_double_loss_and_disqualification(roster):
    matches = [
        MatchRecord("A", "B", MatchOutcome.DOUBLE_LOSS),
        MatchRecord("C", "D", MatchOutcome.PLAYER_A_DQ),
    ]
    by_id = _by_id(calculate_standings(roster, matches))

    assert by_id["A"].points == 0
    assert by_id["A"].match_losses == 1
    assert by_id["B"].match_losses == 1
    assert by_id["A"].opponent_ids == ("B",)
    assert by_id["C"].points == 0
    assert by_id["C"].match_losses == 1
    assert by_id["D"].points == 3
    assert by_id["D"].match_wins == 1


def test_intentional_draw_scores_like_draw(roster):
    matches = [MatchRecord("A", "B", MatchOutcome.INTENTIONAL_DRAW)]
    by_id = _by_id(calculate_standings(roster, matches))

    assert by_id["A"].points == 1
    assert by_id["B"].points == 1
    assert by_id["A"].match_draws == 1


def test_unreported_match_is_ignored(roster):
    matches = [MatchRecord("A", "B")]
    by_id = _by_id(calculate_standings(roster, matches))

    assert by_id["A"].matches_played == 0
    assert by_id["A"].opponent_ids == ()
    assert by_id["B"].points == 0


def test_repeat_opponent_counts_each_meeting(win):
    matches = [win("A", "B"), win("B", "A"), win("A", "C")]
    by_id = _by_id(calculate_standings(["A", "B", "C"], matches))

    assert by_id["A"].opponent_ids == ("B", "B", "C")
    assert by_id["B"].opponent_ids == ("A", "A")


def test_dropped_players_are_ranked_and_flagged(roster, win):
    standings = calculate_standings(roster, [win("A", "B")], dropped_players=["A"])
    by_id = _by_id(standings)

    assert by_id["A"].is_dropped
    assert by_id["A"].rank == 1
    assert not by_id["B"].is_dropped


def test_records_for_pairing_leave_out_dropped(roster, win):
    records = get_player_records_for_pairing(roster, [win("A", "B")], ["B"])

    assert [r.user_id for r in records] == ["A", "C", "D"]


def test_roster_order_does_not_matter(win):
    matches = [win("A", "B"), MatchRecord("C", "D", MatchOutcome.DRAW, 1, 1)]
    forward = calculate_standings({"A": "a", "B": "b", "C": "c", "D": "d"}, matches)
    backward = calculate_standings({"D": "d", "C": "c", "B": "b", "A": "a"}, matches)

    assert [r.to_dict() for r in forward] == [r.to_dict() for r in backward]


def test_deterministic(roster, win):
    matches = [win("A", "B"), win("C", "D", games=(2, 1))]

    first = calculate_standings(roster, matches)
    second = calculate_standings(roster, matches)
    assert first == second


def test_zero_players():
    assert calculate_standings({}, []) == []


def test_unknown_match_player_rejected(roster, win):
    with pytest.raises(InvalidReferenceException) as excinfo:
        calculate_standings(roster, [win("A", "Z")])
    assert excinfo.value.player_id == "Z"


def test_unknown_dropped_player_rejected(roster):
    with pytest.raises(InvalidReferenceException):
        calculate_standings(roster, [], dropped_players=["Z"])


def test_duplicate_roster_ids_rejected():
    with pytest.raises(InvalidReferenceException):
        calculate_standings(["A", "B", "A"], [])


@pytest.mark.parametrize(
    "record",
    [
        MatchRecord("A", "B", MatchOutcome.PLAYER_A_WIN, -1, 0),
        MatchRecord("A", "B", MatchOutcome.PLAYER_A_WIN, 3, 0),
        MatchRecord("A", "B", MatchOutcome.PLAYER_A_WIN, 1, 2),
        MatchRecord("A", "A", MatchOutcome.DRAW, 1, 1),
    ],
)
def test_malformed_record_rejected(roster, record):
    with pytest.raises(MalformedMatchRecordException):
        calculate_standings(roster, [record])


def test_single_game_format():
    config = EventConfig(best_of=1)
    matches = [
        MatchRecord("A", "B", MatchOutcome.PLAYER_A_WIN, 1, 0),
        MatchRecord("C", "D", MatchOutcome.DRAW, 1, 1),
    ]
    standings = calculate_standings(["A", "B", "C", "D"], matches, config=config)
    assert standings[0].user_id == "A"

    with pytest.raises(MalformedMatchRecordException):
        calculate_standings(
            ["A", "B"],
            [MatchRecord("A", "B", MatchOutcome.PLAYER_A_WIN, 2, 0)],
            config=config,
        )


def test_compare_records_uses_epsilon(make_player):
    close_a = make_player("B", points=3, omw_percent=0.50001)
    close_b = make_player("A", points=3, omw_percent=0.5)

    # Within epsilon the user id breaks the tie
    assert compare_records(close_b, close_a) < 0

    clear = make_player("B", points=3, omw_percent=0.6)
    assert compare_records(clear, close_b) < 0


def test_calculator_aggregate_counts_games(win):
    calculator = StandingsCalculator()
    stats = calculator.aggregate(
        {"A": "a", "B": "b"}, [win("A", "B", games=(2, 1))], set()
    )

    assert stats["A"].game_wins == 2
    assert stats["A"].game_losses == 1
    assert stats["B"].game_wins == 1
    assert stats["B"].games_played == 3


def test_disqualified_player_b_loses(roster):
    matches = [MatchRecord("A", "B", MatchOutcome.PLAYER_B_DQ, 1, 0)]
    by_id = _by_id(calculate_standings(roster, matches))

    assert by_id["A"].points == 3
    assert by_id["A"].match_wins == 1
    assert by_id["B"].match_losses == 1
    assert by_id["A"].game_wins == 1
    assert by_id["A"].opponent_ids == ("B",)


def test_roster_ids_used_as_given():
    matches = [MatchRecord(1, 2, MatchOutcome.PLAYER_A_WIN, 2, 0)]

    from_mapping = calculate_standings({1: "One", 2: "Two"}, matches)
    from_ids = calculate_standings([1, 2], matches)

    assert [r.user_id for r in from_mapping] == [1, 2]
    assert [r.user_id for r in from_ids] == [1, 2]
    assert from_mapping[0].points == 3
    assert from_mapping[0].user_name == "One"
