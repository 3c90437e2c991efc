from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


HOLES_PER_ROUND = 18

# payout label for a halved two-team game, so no team may use it
TIE_RECIPIENT = "Tie"


class GameFormat(str, Enum):
    STROKE_PLAY = "strokePlay"
    MATCH_PLAY = "matchPlay"
    HIGH_LOW = "highLow"
    SKINS = "skins"
    BEST_BALL = "bestBall"
    SCRAMBLE = "scramble"


#---------------------------------------------------------------------------------
# ------------------------------------ Course ------------------------------------
# --------------------------------------------------------------------------------

class Hole(BaseModel):
    number: int = Field(ge=1, le=HOLES_PER_ROUND)
    par: int = Field(gt=0)
    stroke_index: int = Field(ge=1, le=HOLES_PER_ROUND)


class Course(BaseModel):
    name: Optional[str] = None
    holes: list[Hole]

    @field_validator("holes")
    @classmethod
    def check_full_scorecard(cls, holes: list[Hole]):
        if len(holes) != HOLES_PER_ROUND:
            raise ValueError(f"course must have exactly {HOLES_PER_ROUND} holes, got {len(holes)}")

        expected = set(range(1, HOLES_PER_ROUND + 1))
        if {h.number for h in holes} != expected:
            raise ValueError("hole numbers must be 1..18, each exactly once")
        if {h.stroke_index for h in holes} != expected:
            raise ValueError("stroke indexes must be a permutation of 1..18")

        return sorted(holes, key=lambda h: h.number)


#---------------------------------------------------------------------------------
# ------------------------------------ Teams -------------------------------------
# --------------------------------------------------------------------------------

class Player(BaseModel):
    name: str = Field(min_length=1)
    handicap: float = 0.0

    @field_validator("handicap", mode="before")
    @classmethod
    def parse_handicap(cls, v):
        # handicaps arrive as text from the setup form ("12", "7.5", "")
        if v is None:
            return 0.0
        if isinstance(v, str):
            v = v.strip()
            if v == "":
                return 0.0
            try:
                return float(v)
            except ValueError:
                raise ValueError(f"handicap must be numeric, got {v!r}")
        return v

    @field_validator("handicap")
    @classmethod
    def non_negative(cls, v: float):
        if v < 0:
            raise ValueError("handicap cannot be negative")
        return v


class Team(BaseModel):
    name: str = Field(min_length=1)
    players: list[Player] = Field(min_length=1)

    @field_validator("players")
    @classmethod
    def unique_player_names(cls, players: list[Player]):
        names = [p.name for p in players]
        if len(names) != len(set(names)):
            raise ValueError("player names must be unique within a team")
        return players


#---------------------------------------------------------------------------------
# --------------------------------- Tournament -----------------------------------
# --------------------------------------------------------------------------------

class TournamentCreate(BaseModel):
    course: Course
    game_format: GameFormat
    bet_amount: Decimal = Field(gt=0)
    closest_to_pin_amount: Decimal = Field(default=Decimal("0"), ge=0)
    individual_champion_amount: Decimal = Field(default=Decimal("0"), ge=0)
    teams: list[Team] = Field(min_length=1)

    @field_validator("teams")
    @classmethod
    def unique_team_names(cls, teams: list[Team]):
        names = [t.name for t in teams]
        if len(names) != len(set(names)):
            raise ValueError("team names must be unique within a tournament")
        if TIE_RECIPIENT in names:
            raise ValueError(f"'{TIE_RECIPIENT}' is reserved for a halved match and can't be a team name")
        return teams


class TournamentSnapshot(TournamentCreate):
    """
    Everything the scoring engine reads: course, teams and the sparse score grid
    scores[team][player][hole] = gross. A missing key means the hole is unlogged.
    """
    scores: dict[str, dict[str, dict[int, int]]] = Field(default_factory=dict)

    @model_validator(mode="after")
    def check_scores(self):
        rosters = {t.name: {p.name for p in t.players} for t in self.teams}

        for team_name, by_player in self.scores.items():
            if team_name not in rosters:
                raise ValueError(f"scores for unknown team {team_name!r}")
            for player_name, by_hole in by_player.items():
                if player_name not in rosters[team_name]:
                    raise ValueError(f"scores for unknown player {player_name!r} in team {team_name!r}")
                for hole_number, gross in by_hole.items():
                    if not 1 <= hole_number <= HOLES_PER_ROUND:
                        raise ValueError(f"hole number {hole_number} out of range")
                    if gross < 1:
                        raise ValueError(f"gross score must be at least 1, got {gross} on hole {hole_number}")
        return self

    def gross(self, team_name: str, player_name: str, hole_number: int) -> int | None:
        return self.scores.get(team_name, {}).get(player_name, {}).get(hole_number)

    @property
    def player_count(self) -> int:
        return sum(len(t.players) for t in self.teams)

    @property
    def team_names(self) -> list[str]:
        return [t.name for t in self.teams]


class TournamentOut(TournamentSnapshot):
    id: int


class ScoreSubmit(BaseModel):
    player_name: str
    hole_number: int
    score: int = Field(ge=1)


#---------------------------------------------------------------------------------
# ----------------------------------- Results ------------------------------------
# --------------------------------------------------------------------------------

class LeaderboardRow(BaseModel):
    team_name: str
    scores_by_hole: dict[int, Optional[int]]
    total_net: int
    holes_played: int


class Leaderboard(BaseModel):
    leaderboard: list[LeaderboardRow]


class PayoutReport(BaseModel):
    payouts: dict[str, Decimal]
    details: dict[str, Any]
