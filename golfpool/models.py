from datetime import datetime

from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship

from .db import Base


class Tournament(Base):
    __tablename__ = "tournaments"

    id = Column(Integer, primary_key=True, index=True)
    course_name = Column(String, nullable=True)
    game_format = Column(String, nullable=False)  # GameFormat value

    bet_amount = Column(Numeric(10, 2), nullable=False)
    closest_to_pin_amount = Column(Numeric(10, 2), nullable=False, default=0)
    individual_champion_amount = Column(Numeric(10, 2), nullable=False, default=0)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    holes = relationship(
        "TournamentHole",
        back_populates="tournament",
        cascade="all, delete-orphan",
        order_by="TournamentHole.number",
    )

    # declaration order matters (matchPlay side A/B, tie-breaks)
    teams = relationship(
        "Team",
        back_populates="tournament",
        cascade="all, delete-orphan",
        order_by="Team.position",
    )


class TournamentHole(Base):
    __tablename__ = "tournament_holes"

    id = Column(Integer, primary_key=True, index=True)
    tournament_id = Column(Integer, ForeignKey("tournaments.id"), nullable=False)

    number = Column(Integer, nullable=False)          # 1..18
    par = Column(Integer, nullable=False)             # 3/4/5
    stroke_index = Column(Integer, nullable=False)    # 1 = hardest

    tournament = relationship("Tournament", back_populates="holes")


class Team(Base):
    __tablename__ = "teams"
    __table_args__ = (UniqueConstraint("tournament_id", "name"),)

    id = Column(Integer, primary_key=True, index=True)
    tournament_id = Column(Integer, ForeignKey("tournaments.id"), nullable=False)
    name = Column(String, nullable=False)
    position = Column(Integer, nullable=False)

    tournament = relationship("Tournament", back_populates="teams")

    players = relationship(
        "TeamPlayer",
        back_populates="team",
        cascade="all, delete-orphan",
        order_by="TeamPlayer.position",
    )

    scores = relationship(
        "ScoreEntry",
        back_populates="team",
        cascade="all, delete-orphan"
    )


class TeamPlayer(Base):
    __tablename__ = "team_players"
    __table_args__ = (UniqueConstraint("team_id", "name"),)

    id = Column(Integer, primary_key=True, index=True)
    team_id = Column(Integer, ForeignKey("teams.id"), nullable=False)
    name = Column(String, nullable=False)
    position = Column(Integer, nullable=False)

    # kept as entered ("12", "7.5"), parsed when the snapshot is built
    handicap = Column(String, nullable=False, default="0")

    team = relationship("Team", back_populates="players")


class ScoreEntry(Base):
    __tablename__ = "score_entries"
    __table_args__ = (UniqueConstraint("team_id", "player_name", "hole_number"),)

    id = Column(Integer, primary_key=True, index=True)
    team_id = Column(Integer, ForeignKey("teams.id"), nullable=False)

    player_name = Column(String, nullable=False)
    hole_number = Column(Integer, nullable=False)   # 1..18
    gross_strokes = Column(Integer, nullable=False)
    timestamp = Column(DateTime, nullable=False, default=datetime.utcnow)

    team = relationship("Team", back_populates="scores")
