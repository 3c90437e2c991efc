# golfpool/routers/tournaments.py

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from golfpool import crud, schemas
from golfpool.db import get_db
from golfpool.leaderboard import compute_leaderboard
from golfpool.payouts import compute_payouts

router = APIRouter(prefix="/api")


def _tournament_or_404(db: Session, tournament_id: int):
    t = crud.get_tournament(db, tournament_id)
    if not t:
        raise HTTPException(status_code=404, detail="Tournament not found")
    return t


# ---- CREATE ----
@router.post("/tournaments")
def tournament_create(data: schemas.TournamentCreate, db: Session = Depends(get_db)):
    t = crud.create_tournament(db, data)
    return {"tournament_id": t.id}


# ---- DETAIL ----
@router.get("/tournaments/{tournament_id}", response_model=schemas.TournamentOut)
def tournament_detail(tournament_id: int, db: Session = Depends(get_db)):
    t = _tournament_or_404(db, tournament_id)
    snapshot = crud.build_snapshot(t)
    return schemas.TournamentOut(id=t.id, **snapshot.model_dump())


# ---- SCORES ----
@router.post("/tournaments/{tournament_id}/teams/{team_name}/scores")
def score_submit(
    tournament_id: int,
    team_name: str,
    data: schemas.ScoreSubmit,
    db: Session = Depends(get_db),
):
    t = _tournament_or_404(db, tournament_id)

    team = crud.get_team(t, team_name)
    if not team:
        raise HTTPException(status_code=404, detail="Team not found")

    if data.player_name not in {p.name for p in team.players}:
        raise HTTPException(
            status_code=404,
            detail=f'Player "{data.player_name}" not found in team "{team_name}"',
        )

    if data.hole_number not in {h.number for h in t.holes}:
        raise HTTPException(
            status_code=400,
            detail=f"Hole number {data.hole_number} does not exist in the course",
        )

    crud.submit_score(db, team, data)
    return {"message": "Score added successfully"}


# ---- LEADERBOARD ----
@router.get("/tournaments/{tournament_id}/leaderboard", response_model=schemas.Leaderboard)
def tournament_leaderboard(tournament_id: int, db: Session = Depends(get_db)):
    t = _tournament_or_404(db, tournament_id)
    rows = compute_leaderboard(crud.build_snapshot(t))
    return {"leaderboard": rows}


# ---- PAYOUTS ----
@router.get("/tournaments/{tournament_id}/payouts", response_model=schemas.PayoutReport)
def tournament_payouts(tournament_id: int, db: Session = Depends(get_db)):
    t = _tournament_or_404(db, tournament_id)
    return compute_payouts(crud.build_snapshot(t))


@router.post("/payouts/preview", response_model=schemas.PayoutReport)
def payouts_preview(snapshot: schemas.TournamentSnapshot):
    return compute_payouts(snapshot)
