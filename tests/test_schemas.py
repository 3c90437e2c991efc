import pytest
from pydantic import ValidationError

from golfpool.schemas import Course, GameFormat, Player, Team, TournamentSnapshot


def test_course_needs_18_holes(course):
    course["holes"] = course["holes"][:9]
    with pytest.raises(ValidationError, match="exactly 18 holes"):
        Course(**course)


def test_stroke_index_must_be_a_permutation(course):
    course["holes"][0]["stroke_index"] = course["holes"][1]["stroke_index"]
    with pytest.raises(ValidationError, match="permutation"):
        Course(**course)


def test_holes_come_back_in_order(course):
    course["holes"].reverse()
    assert [h.number for h in Course(**course).holes] == list(range(1, 19))


@pytest.mark.parametrize("raw, expected", [("12", 12.0), (" 7.5 ", 7.5), ("", 0.0), (None, 0.0), (9, 9.0)])
def test_handicap_accepts_text(raw, expected):
    assert Player(name="Ana", handicap=raw).handicap == expected


@pytest.mark.parametrize("raw", ["scratch", -1])
def test_bad_handicaps_are_rejected(raw):
    with pytest.raises(ValidationError):
        Player(name="Ana", handicap=raw)


def test_player_names_unique_within_team():
    with pytest.raises(ValidationError, match="unique"):
        Team(name="A", players=[{"name": "Ana"}, {"name": "Ana"}])


def test_unknown_game_format_is_rejected(course):
    with pytest.raises(ValidationError):
        TournamentSnapshot(
            course=course,
            game_format="wolf",
            bet_amount=10,
            teams=[{"name": "A", "players": [{"name": "Ana"}]}],
        )


def test_scores_must_match_the_rosters(make_snapshot):
    with pytest.raises(ValidationError, match="unknown player"):
        make_snapshot("skins", {"A": [("Ana", 0)]}, scores={"A": {"Zed": {1: 4}}})

    with pytest.raises(ValidationError, match="unknown team"):
        make_snapshot("skins", {"A": [("Ana", 0)]}, scores={"Q": {"Ana": {1: 4}}})

    with pytest.raises(ValidationError, match="out of range"):
        make_snapshot("skins", {"A": [("Ana", 0)]}, scores={"A": {"Ana": {19: 4}}})


def test_hole_keys_from_json_become_ints(make_snapshot):
    snap = make_snapshot("skins", {"A": [("Ana", 0)]}, scores={"A": {"Ana": {"3": 4}}})

    assert snap.game_format is GameFormat.SKINS
    assert snap.gross("A", "Ana", 3) == 4
    assert snap.gross("A", "Ana", 4) is None


def test_tie_is_not_a_team_name(make_snapshot):
    with pytest.raises(ValidationError, match="reserved"):
        make_snapshot("matchPlay", {"Tie": [("Ana", 0)], "B": [("Ben", 0)]})
