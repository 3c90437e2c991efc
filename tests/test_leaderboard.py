from golfpool.leaderboard import compute_leaderboard


def test_lowest_net_per_hole_and_ordering(make_snapshot):
    snap = make_snapshot(
        "bestBall",
        {"A": [("Ana", 0), ("Alex", 18)], "B": [("Ben", 0)], "C": [("Cy", 0)]},
        scores={
            # Alex gets a stroke everywhere: 5 -> 4
            "A": {"Ana": {1: 5, 2: 3}, "Alex": {1: 5, 2: 5}},
            "B": {"Ben": {1: 3, 2: 3, 3: 4}},
        },
    )

    rows = compute_leaderboard(snap)

    assert [r["team_name"] for r in rows] == ["A", "B", "C"]
    a = rows[0]
    assert a["scores_by_hole"][1] == 4
    assert a["scores_by_hole"][2] == 3
    assert a["scores_by_hole"][3] is None
    assert a["total_net"] == 7
    assert a["holes_played"] == 2


def test_unlogged_holes_are_none_not_zero(make_snapshot):
    snap = make_snapshot("strokePlay", {"A": [("Ana", 0)]}, scores={"A": {"Ana": {7: 4}}})

    row = compute_leaderboard(snap)[0]

    assert len(row["scores_by_hole"]) == 18
    assert [n for n, v in row["scores_by_hole"].items() if v is not None] == [7]
    assert row["total_net"] == 4


def test_team_without_scores_sits_at_the_bottom(make_snapshot):
    snap = make_snapshot(
        "strokePlay",
        {"Empty": [("Ed", 0)], "Playing": [("Pat", 0)]},
        scores={"Playing": {"Pat": {1: 4}}},
    )

    rows = compute_leaderboard(snap)

    assert [r["team_name"] for r in rows] == ["Playing", "Empty"]
    assert rows[1]["total_net"] == 0
    assert rows[1]["holes_played"] == 0


def test_ties_keep_declaration_order(make_snapshot):
    snap = make_snapshot(
        "strokePlay",
        {"Z": [("z", 0)], "A": [("a", 0)]},
        scores={"Z": {"z": {1: 4}}, "A": {"a": {1: 4}}},
    )

    assert [r["team_name"] for r in compute_leaderboard(snap)] == ["Z", "A"]
