import os
import tempfile

# golfpool.db reads DATABASE_URL at import time
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite:///" + os.path.join(tempfile.mkdtemp(prefix="golfpool-"), "test.db"),
)

import pytest

from golfpool.schemas import TournamentSnapshot


PARS = [4, 5, 3, 4, 4, 3, 4, 5, 4, 4, 3, 5, 4, 4, 3, 4, 5, 4]
STROKE_INDEXES = [7, 15, 3, 11, 1, 17, 9, 13, 5, 8, 16, 4, 12, 2, 18, 10, 14, 6]


def course_payload():
    return {
        "name": "Pine Valley Muni",
        "holes": [
            {"number": n, "par": par, "stroke_index": si}
            for n, (par, si) in enumerate(zip(PARS, STROKE_INDEXES), start=1)
        ],
    }


@pytest.fixture
def course():
    return course_payload()


@pytest.fixture
def make_snapshot():
    """
    teams: {team_name: [(player_name, handicap), ...]} in declaration order
    scores: {team_name: {player_name: {hole: gross}}}
    """
    def _make(game_format, teams, scores=None, bet_amount=100, closest_to_pin_amount=0,
              individual_champion_amount=0):
        return TournamentSnapshot(
            course=course_payload(),
            game_format=game_format,
            bet_amount=bet_amount,
            closest_to_pin_amount=closest_to_pin_amount,
            individual_champion_amount=individual_champion_amount,
            teams=[
                {"name": name, "players": [{"name": p, "handicap": h} for p, h in players]}
                for name, players in teams.items()
            ],
            scores=scores or {},
        )

    return _make
