import logging
from decimal import Decimal, ROUND_HALF_UP

from .errors import FormatValidationError, PotValidationError
from .formats import (
    score_best_ball,
    score_high_low,
    score_match_play,
    score_skins,
    score_stroke_play,
)
from .golf_calc import player_net_total
from .schemas import GameFormat, HOLES_PER_ROUND, TIE_RECIPIENT, TournamentSnapshot

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
FIRST_PLACE_SHARE = Decimal("0.75")


#---------------------------------------------------------------------------------
# ------------------------------------ Money -------------------------------------
# --------------------------------------------------------------------------------

def to_money(amount) -> Decimal:
    return Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP)


def split_evenly(amount: Decimal, parts: int) -> list[Decimal]:
    """
    Splits an amount into `parts` cent amounts that add back up exactly.
    The leftover cents go to the first parts.
    """
    cents = int(to_money(amount) / CENT)
    base, extra = divmod(cents, parts)
    return [(base + (1 if i < extra else 0)) * CENT for i in range(parts)]


def split_first_second(amount: Decimal) -> tuple[Decimal, Decimal]:
    # 75% / 25%, the second share takes the rounding
    amount = to_money(amount)
    first = to_money(amount * FIRST_PLACE_SHARE)
    return first, amount - first


def total_pot(snapshot: TournamentSnapshot) -> Decimal:
    """Everybody's bet minus the closest-to-pin and individual champion side pots."""
    pot = (
        to_money(snapshot.bet_amount) * snapshot.player_count
        - to_money(snapshot.closest_to_pin_amount)
        - to_money(snapshot.individual_champion_amount)
    )
    if pot < 0:
        raise PotValidationError(
            f"Side pots ({snapshot.closest_to_pin_amount} + {snapshot.individual_champion_amount}) "
            f"exceed the money collected from {snapshot.player_count} players."
        )
    return pot


def _empty_payouts(snapshot: TournamentSnapshot) -> dict[str, Decimal]:
    return {name: Decimal("0.00") for name in snapshot.team_names}


#---------------------------------------------------------------------------------
# -------------------------------- Team payouts ----------------------------------
# --------------------------------------------------------------------------------

def stroke_play_payouts(snapshot: TournamentSnapshot, pot: Decimal) -> dict:
    """Whole pot to the lowest total; teams tied on the lowest total split it."""
    result = score_stroke_play(snapshot)
    standings = result["standings"]
    payouts = _empty_payouts(snapshot)

    leaders = [row for row in standings if row["place"] == 1]
    if leaders:
        best = leaders[0]["total_net"]
        winners = [row["team"] for row in standings if row["eligible"] and row["total_net"] == best]
        for team_name, share in zip(winners, split_evenly(pot, len(winners))):
            payouts[team_name] = share

    return {"payouts": payouts, "details": {"standings": standings}}


def _points_game_payouts(snapshot: TournamentSnapshot, pot: Decimal, result: dict) -> dict:
    payouts = _empty_payouts(snapshot)
    if result["winner"] is None:
        payouts[TIE_RECIPIENT] = to_money(pot)
    else:
        payouts[result["winner"]] = to_money(pot)
    return {"payouts": payouts, "details": result}


def match_play_payouts(snapshot: TournamentSnapshot, pot: Decimal) -> dict:
    return _points_game_payouts(snapshot, pot, score_match_play(snapshot))


def high_low_payouts(snapshot: TournamentSnapshot, pot: Decimal) -> dict:
    return _points_game_payouts(snapshot, pot, score_high_low(snapshot))


def skins_payouts(snapshot: TournamentSnapshot, pot: Decimal) -> dict:
    """
    Pot split across the 18 holes. An outright hole winner takes the hole's
    share plus whatever was carried in; a tied hole carries its share forward.
    Carry left after the last hole stays unpaid (reported as unclaimed).
    """
    result = score_skins(snapshot)
    payouts = _empty_payouts(snapshot)
    shares = split_evenly(pot, HOLES_PER_ROUND)

    carry = Decimal("0.00")
    for hole, share in zip(result["holes"], shares):
        winner = hole["winner"]
        if winner is None:
            carry += share
            hole["won"] = Decimal("0.00")
        else:
            hole["won"] = share + carry
            payouts[winner] += share + carry
            carry = Decimal("0.00")
        hole["carry"] = carry
        logger.debug("Skins hole %s: winner=%s carry=%s", hole["hole"], winner, carry)

    return {
        "payouts": payouts,
        "details": {"holes": result["holes"], "unclaimed": carry},
    }


def best_ball_payouts(snapshot: TournamentSnapshot, pot: Decimal) -> dict:
    """1st place 75%, 2nd place 25%. A share nobody can place for stays unclaimed."""
    result = score_best_ball(snapshot)
    standings = result["standings"]
    payouts = _empty_payouts(snapshot)

    placed = [row for row in standings if row["place"] is not None]
    unclaimed = Decimal("0.00")
    for place, share in enumerate(split_first_second(pot)):
        if place < len(placed):
            payouts[placed[place]["team"]] += share
        else:
            unclaimed += share

    return {
        "payouts": payouts,
        "details": {"standings": standings, "unclaimed": unclaimed},
    }


TEAM_PAYOUTS = {
    GameFormat.STROKE_PLAY: stroke_play_payouts,
    GameFormat.MATCH_PLAY: match_play_payouts,
    GameFormat.HIGH_LOW: high_low_payouts,
    GameFormat.SKINS: skins_payouts,
    GameFormat.BEST_BALL: best_ball_payouts,
    GameFormat.SCRAMBLE: best_ball_payouts,
}


def team_payouts(snapshot: TournamentSnapshot, pot: Decimal) -> dict:
    calc = TEAM_PAYOUTS.get(snapshot.game_format)
    if calc is None:
        raise FormatValidationError(f"Unknown game format: {snapshot.game_format!r}")
    return calc(snapshot, pot)


#---------------------------------------------------------------------------------
# ----------------------------- Individual champion ------------------------------
# --------------------------------------------------------------------------------

def individual_champion_payouts(snapshot: TournamentSnapshot) -> dict:
    """
    Every player in the tournament ranked by their own net total, whatever
    team they're on. Players with nothing logged don't rank.
    """
    ranked = []
    for team in snapshot.teams:
        for player in team.players:
            net = player_net_total(snapshot, team.name, player)
            if net is None:
                continue
            ranked.append({"team": team.name, "player": player.name, "net": net})

    ranked = sorted(ranked, key=lambda row: row["net"])

    first_place = ranked[0] if len(ranked) >= 1 else None
    second_place = ranked[1] if len(ranked) >= 2 else None

    first_share, second_share = split_first_second(snapshot.individual_champion_amount)

    payouts = {}
    if first_place:
        payouts[f"Individual Champion - {first_place['player']} ({first_place['team']})"] = first_share
    if second_place:
        payouts[f"Individual Runner-Up - {second_place['player']} ({second_place['team']})"] = second_share

    return {
        "payouts": payouts,
        "details": {"first_place": first_place, "second_place": second_place},
    }


#---------------------------------------------------------------------------------
# ----------------------------------- Entry --------------------------------------
# --------------------------------------------------------------------------------

def compute_payouts(snapshot: TournamentSnapshot) -> dict:
    """
    Team payouts for the tournament's format plus the individual champion
    side pot, as one flat {label: amount} mapping. The same person can show up
    both as champion and through their team; those are never merged.
    """
    pot = total_pot(snapshot)

    team_result = team_payouts(snapshot, pot)
    champion_result = individual_champion_payouts(snapshot)

    payouts = {**team_result["payouts"], **champion_result["payouts"]}

    logger.info(
        "Payouts computed: format=%s pot=%s recipients=%d",
        snapshot.game_format.value, pot, len(payouts),
    )

    return {
        "payouts": payouts,
        "details": {
            "total_pot": pot,
            "team_payouts": team_result["details"],
            "individual_champion": champion_result["details"],
        },
    }
