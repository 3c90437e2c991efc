import logging

from .golf_calc import player_net_by_hole
from .schemas import TournamentSnapshot

logger = logging.getLogger(__name__)


def compute_leaderboard(snapshot: TournamentSnapshot) -> list[dict]:
    """
    Per team and hole, the lowest net any of its players logged (None when
    nobody has). total_net only adds the holes that have a value.

    Ordered by total_net ascending; teams that haven't logged anything go to
    the bottom, ties keep team declaration order.
    """
    rows = []
    for team in snapshot.teams:
        scores_by_hole = {h.number: None for h in snapshot.course.holes}

        for player in team.players:
            for hole_number, net in player_net_by_hole(snapshot, team.name, player).items():
                current = scores_by_hole[hole_number]
                if current is None or net < current:
                    scores_by_hole[hole_number] = net

        logged = [v for v in scores_by_hole.values() if v is not None]
        rows.append({
            "team_name": team.name,
            "scores_by_hole": scores_by_hole,
            "total_net": sum(logged),
            "holes_played": len(logged),
        })

    rows = sorted(rows, key=lambda row: (row["holes_played"] == 0, row["total_net"]))
    logger.debug("Leaderboard: %s", [(r["team_name"], r["total_net"]) for r in rows])
    return rows
