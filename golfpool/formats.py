import logging

from .errors import FormatValidationError
from .golf_calc import player_net_by_hole
from .schemas import GameFormat, TournamentSnapshot

logger = logging.getLogger(__name__)


FORMAT_LABELS = {
    GameFormat.STROKE_PLAY: "Stroke Play",
    GameFormat.MATCH_PLAY: "Match Play",
    GameFormat.HIGH_LOW: "High/Low",
    GameFormat.SKINS: "Skins",
    GameFormat.BEST_BALL: "Best Ball",
    GameFormat.SCRAMBLE: "Scramble",
}


def _team_nets(snapshot: TournamentSnapshot, team) -> dict[str, dict[int, int]]:
    # {player_name: {hole_number: net}} with only logged holes
    return {p.name: player_net_by_hole(snapshot, team.name, p) for p in team.players}


def _best_net(nets_by_player: dict[str, dict[int, int]], hole_number: int) -> int | None:
    logged = [nets[hole_number] for nets in nets_by_player.values() if hole_number in nets]
    return min(logged) if logged else None


def _require_teams(snapshot: TournamentSnapshot, exactly: int | None = None, at_least: int = 1):
    label = FORMAT_LABELS[snapshot.game_format]
    n = len(snapshot.teams)

    if exactly is not None and n != exactly:
        raise FormatValidationError(f"{label} requires exactly {exactly} teams, got {n}.")
    if n < at_least:
        raise FormatValidationError(f"{label} requires at least {at_least} team, got {n}.")


def rank_rows(rows: list[dict]) -> list[dict]:
    """
    Ascending by total_net. Rows that can't place (eligible=False) go last.
    Ties keep team declaration order (sorted is stable).
    """
    ranked = sorted(rows, key=lambda row: (not row["eligible"], row["total_net"]))
    place = 0
    for row in ranked:
        if row["eligible"]:
            place += 1
            row["place"] = place
        else:
            row["place"] = None
    return ranked


#---------------------------------------------------------------------------------
# --------------------------------- Stroke play ----------------------------------
# --------------------------------------------------------------------------------

def score_stroke_play(snapshot: TournamentSnapshot) -> dict:
    """
    Team total = sum of every player's net on every logged hole (not best-of).
    A team with nothing logged can't win.
    """
    _require_teams(snapshot)

    rows = []
    for team in snapshot.teams:
        total = 0
        logged = 0
        for nets in _team_nets(snapshot, team).values():
            total += sum(nets.values())
            logged += len(nets)

        rows.append({
            "team": team.name,
            "total_net": total,
            "scores_logged": logged,
            "eligible": logged > 0,
        })

    ranked = rank_rows(rows)
    logger.debug("Stroke play standings: %s", ranked)
    return {"standings": ranked}


#---------------------------------------------------------------------------------
# --------------------------- Best ball / Scramble -------------------------------
# --------------------------------------------------------------------------------

def score_best_ball(snapshot: TournamentSnapshot) -> dict:
    """
    Per hole the team scores its lowest player net; total over the 18 holes.
    A hole nobody on the team logged leaves the team incomplete, and an
    incomplete team can't place.
    """
    _require_teams(snapshot)

    rows = []
    for team in snapshot.teams:
        nets = _team_nets(snapshot, team)

        by_hole = {}
        for hole in snapshot.course.holes:
            by_hole[hole.number] = _best_net(nets, hole.number)

        logged = [v for v in by_hole.values() if v is not None]
        rows.append({
            "team": team.name,
            "total_net": sum(logged),
            "holes_played": len(logged),
            "scores_by_hole": by_hole,
            "eligible": len(logged) == len(snapshot.course.holes),
        })

    ranked = rank_rows(rows)
    logger.debug("Best ball standings: %s", ranked)
    return {"standings": ranked}


def score_scramble(snapshot: TournamentSnapshot) -> dict:
    # one combined ball per hole, scored exactly like best ball
    return score_best_ball(snapshot)


#---------------------------------------------------------------------------------
# --------------------------- Match play / High-Low ------------------------------
# --------------------------------------------------------------------------------

class PointsTally:
    """
    Running score of a two-team points game.

    Tied comparisons go into the carry. The carry is collected by the team
    that wins the next decided hole (more points than the other side on that
    hole); a level hole adds its ties to the carry instead. Whatever is still
    carried after the last hole is left unresolved.
    """

    def __init__(self, team_a: str, team_b: str):
        self.team_a = team_a
        self.team_b = team_b
        self.points = {team_a: 0, team_b: 0}
        self.carry = 0
        self.holes = []

    def settle_hole(self, hole_number: int, a_points: int, b_points: int, ties: int):
        self.points[self.team_a] += a_points
        self.points[self.team_b] += b_points

        if a_points > b_points:
            winner = self.team_a
        elif b_points > a_points:
            winner = self.team_b
        else:
            winner = None

        collected = 0
        if winner is not None:
            collected = self.carry
            self.points[winner] += collected
            self.carry = ties
        else:
            self.carry += ties

        self.holes.append({
            "hole": hole_number,
            "points": {self.team_a: a_points, self.team_b: b_points},
            "ties": ties,
            "winner": winner,
            "carry_collected": collected,
        })

    def skip_hole(self, hole_number: int, carry: int):
        self.carry += carry
        self.holes.append({
            "hole": hole_number,
            "points": {self.team_a: 0, self.team_b: 0},
            "ties": 0,
            "winner": None,
            "carry_collected": 0,
            "skipped": True,
        })

    def result(self) -> dict:
        a = self.points[self.team_a]
        b = self.points[self.team_b]
        if a > b:
            winner = self.team_a
        elif b > a:
            winner = self.team_b
        else:
            winner = None

        return {
            "points": dict(self.points),
            "winner": winner,
            "unresolved_carry": self.carry,
            "holes": self.holes,
        }


def _compare_lower(a: int | None, b: int | None) -> int:
    # 1 -> side A, -1 -> side B, 0 -> tie or nothing to compare
    if a is None or b is None or a == b:
        return 0
    return 1 if a < b else -1


def score_match_play(snapshot: TournamentSnapshot) -> dict:
    """
    Every A player against every B player on each hole, lower net takes the
    point. A comparison with an unlogged score on either side doesn't count.
    """
    _require_teams(snapshot, exactly=2)

    team_a, team_b = snapshot.teams
    nets_a = _team_nets(snapshot, team_a)
    nets_b = _team_nets(snapshot, team_b)
    tally = PointsTally(team_a.name, team_b.name)

    for hole in snapshot.course.holes:
        a_pts = b_pts = ties = 0

        for a_nets in nets_a.values():
            a = a_nets.get(hole.number)
            if a is None:
                continue
            for b_nets in nets_b.values():
                b = b_nets.get(hole.number)
                if b is None:
                    continue

                outcome = _compare_lower(a, b)
                if outcome > 0:
                    a_pts += 1
                elif outcome < 0:
                    b_pts += 1
                else:
                    ties += 1

        tally.settle_hole(hole.number, a_pts, b_pts, ties)

    result = tally.result()
    logger.debug("Match play result: %s", result["points"])
    return result


def score_high_low(snapshot: TournamentSnapshot) -> dict:
    """
    Per hole each side's two lowest nets face the other side's two lowest,
    and the two highest face the two highest. Lower net wins every one of the
    four comparisons. A comparison either side can't fill (only one player
    logged) is a tie. A hole where a side logged nothing is skipped and puts
    2 into the carry.
    """
    _require_teams(snapshot, exactly=2)

    team_a, team_b = snapshot.teams
    nets_a = _team_nets(snapshot, team_a)
    nets_b = _team_nets(snapshot, team_b)
    tally = PointsTally(team_a.name, team_b.name)

    for hole in snapshot.course.holes:
        a_nets = sorted(n[hole.number] for n in nets_a.values() if hole.number in n)
        b_nets = sorted(n[hole.number] for n in nets_b.values() if hole.number in n)

        if not a_nets or not b_nets:
            tally.skip_hole(hole.number, 2)
            continue

        pairs = []
        for i in range(2):
            pairs.append((_nth(a_nets, i), _nth(b_nets, i)))
            pairs.append((_nth(a_nets[::-1], i), _nth(b_nets[::-1], i)))

        a_pts = b_pts = ties = 0
        for a, b in pairs:
            outcome = _compare_lower(a, b)
            if outcome > 0:
                a_pts += 1
            elif outcome < 0:
                b_pts += 1
            else:
                ties += 1

        tally.settle_hole(hole.number, a_pts, b_pts, ties)

    result = tally.result()
    logger.debug("High/Low result: %s", result["points"])
    return result


def _nth(values: list[int], i: int) -> int | None:
    return values[i] if i < len(values) else None


#---------------------------------------------------------------------------------
# ------------------------------------ Skins -------------------------------------
# --------------------------------------------------------------------------------

def score_skins(snapshot: TournamentSnapshot) -> dict:
    """
    Hole-by-hole winners: the team whose best player net is strictly lowest.
    Tied holes, and holes nobody logged, have no winner.
    """
    _require_teams(snapshot)

    team_nets = [(team.name, _team_nets(snapshot, team)) for team in snapshot.teams]

    holes = []
    for hole in snapshot.course.holes:
        best = None
        winners = []
        for team_name, nets in team_nets:
            team_best = _best_net(nets, hole.number)
            if team_best is None:
                continue
            if best is None or team_best < best:
                best = team_best
                winners = [team_name]
            elif team_best == best:
                winners.append(team_name)

        holes.append({
            "hole": hole.number,
            "best_net": best,
            "winner": winners[0] if len(winners) == 1 else None,
            "tied": winners if len(winners) > 1 else [],
        })

    return {"holes": holes}

