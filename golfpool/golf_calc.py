def strokes_allocated(course_handicap: float, stroke_index: int) -> int:
    """
    Strokes a player receives on one hole.

    base = one stroke per full 18 of handicap, on every hole
    extra = the remainder, on holes with stroke_index <= remainder
    (hcp 9 -> SI 1..9 get 1; hcp 22 -> every hole 1, SI 1..4 get 2)
    """
    if course_handicap is None or course_handicap <= 0:
        return 0

    base = int(course_handicap // 18)
    extra = course_handicap - base * 18

    return base + (1 if stroke_index <= extra else 0)


def net_score(gross: int | None, course_handicap: float, stroke_index: int) -> int | None:
    # None = unlogged hole, never treated as 0
    if gross is None:
        return None
    return gross - strokes_allocated(course_handicap, stroke_index)


def player_net_by_hole(snapshot, team_name: str, player) -> dict[int, int]:
    """Net score for every hole the player has logged, keyed by hole number."""
    nets = {}
    for hole in snapshot.course.holes:
        gross = snapshot.gross(team_name, player.name, hole.number)
        if gross is None:
            continue
        nets[hole.number] = net_score(gross, player.handicap, hole.stroke_index)
    return nets


def player_net_total(snapshot, team_name: str, player) -> int | None:
    nets = player_net_by_hole(snapshot, team_name, player)
    if not nets:
        return None
    return sum(nets.values())
