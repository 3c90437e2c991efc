import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from . import models, schemas
from .errors import CourseConfigError

logger = logging.getLogger(__name__)


#---------------------------------------------------------------------------------
# --------------------------------- Tournaments ----------------------------------
# --------------------------------------------------------------------------------

def create_tournament(db: Session, data: schemas.TournamentCreate):
    t = models.Tournament(
        course_name=data.course.name,
        game_format=data.game_format.value,
        bet_amount=data.bet_amount,
        closest_to_pin_amount=data.closest_to_pin_amount,
        individual_champion_amount=data.individual_champion_amount,
    )

    for h in data.course.holes:
        t.holes.append(models.TournamentHole(**h.model_dump()))

    for team_pos, team in enumerate(data.teams):
        team_row = models.Team(name=team.name, position=team_pos)
        for player_pos, player in enumerate(team.players):
            team_row.players.append(models.TeamPlayer(
                name=player.name,
                position=player_pos,
                handicap=str(player.handicap),
            ))
        t.teams.append(team_row)

    db.add(t)
    db.commit()
    db.refresh(t)

    logger.info("Tournament %s created (%s, %d teams)", t.id, t.game_format, len(data.teams))
    return t


def get_tournament(db: Session, tournament_id: int):
    return db.query(models.Tournament).filter(models.Tournament.id == tournament_id).first()


def get_team(t: models.Tournament, team_name: str):
    for team in t.teams:
        if team.name == team_name:
            return team
    return None


#---------------------------------------------------------------------------------
# ------------------------------------ Scores ------------------------------------
# --------------------------------------------------------------------------------

def find_score_entry(db: Session, team_id: int, player_name: str, hole_number: int):
    return (
        db.query(models.ScoreEntry)
        .filter(
            models.ScoreEntry.team_id == team_id,
            models.ScoreEntry.player_name == player_name,
            models.ScoreEntry.hole_number == hole_number,
        )
        .first()
    )


def submit_score(db: Session, team: models.Team, data: schemas.ScoreSubmit):
    """
    One entry per (team, player, hole): a new submission overwrites the
    previous score and timestamp.
    """
    team_id = team.id
    entry = find_score_entry(db, team_id, data.player_name, data.hole_number)

    now = datetime.utcnow()

    if entry:
        entry.gross_strokes = data.score
        entry.timestamp = now
    else:
        entry = models.ScoreEntry(
            team_id=team_id,
            player_name=data.player_name,
            hole_number=data.hole_number,
            gross_strokes=data.score,
            timestamp=now,
        )
        db.add(entry)

    team.tournament.updated_at = now
    try:
        db.commit()
    except IntegrityError:
        # another submission inserted the same row after our lookup; overwrite it
        db.rollback()
        logger.info(
            "Score row for team=%s player=%s hole=%s created concurrently, overwriting",
            team_id, data.player_name, data.hole_number,
        )
        entry = find_score_entry(db, team_id, data.player_name, data.hole_number)
        entry.gross_strokes = data.score
        entry.timestamp = now
        team.tournament.updated_at = now
        db.commit()
    db.refresh(entry)

    logger.info(
        "Score saved: tournament=%s team=%s player=%s hole=%s gross=%s",
        team.tournament_id, team.name, data.player_name, data.hole_number, data.score,
    )
    return entry


#---------------------------------------------------------------------------------
# ----------------------------------- Snapshot -----------------------------------
# --------------------------------------------------------------------------------

def build_snapshot(t: models.Tournament) -> schemas.TournamentSnapshot:
    """
    Reads the whole tournament once into a snapshot, so a leaderboard or
    payout run never mixes scores from two different moments.
    """
    if len(t.holes) != schemas.HOLES_PER_ROUND:
        raise CourseConfigError(f"Tournament {t.id}: course scorecard is missing or incomplete.")

    scores = {}
    for team in t.teams:
        by_player = {}
        for s in team.scores:
            by_player.setdefault(s.player_name, {})[s.hole_number] = s.gross_strokes
        scores[team.name] = by_player

    return schemas.TournamentSnapshot(
        course=schemas.Course(
            name=t.course_name,
            holes=[
                schemas.Hole(number=h.number, par=h.par, stroke_index=h.stroke_index)
                for h in t.holes
            ],
        ),
        game_format=t.game_format,
        bet_amount=t.bet_amount,
        closest_to_pin_amount=t.closest_to_pin_amount,
        individual_champion_amount=t.individual_champion_amount,
        teams=[
            schemas.Team(
                name=team.name,
                players=[schemas.Player(name=p.name, handicap=p.handicap) for p in team.players],
            )
            for team in t.teams
        ],
        scores=scores,
    )
