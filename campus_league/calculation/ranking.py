from typing import Callable, Dict, Literal, Mapping, Sequence, Tuple, TypeVar

from campus_league.models.enums import TiebreakKey
from campus_league.models.standing import RankedStanding, StandingRow

T = TypeVar("T")

FairPlayPolicy = Literal["auto", "always", "never"]

BASE_TIEBREAKS: Tuple[TiebreakKey, ...] = (
    TiebreakKey.POINTS,
    TiebreakKey.GOAL_DIFFERENCE,
    TiebreakKey.GOALS_FOR,
)
FAIR_PLAY_TIEBREAKS: Tuple[TiebreakKey, ...] = BASE_TIEBREAKS + (TiebreakKey.FAIR_PLAY,)

# Sort values: negated where higher is better so every key sorts ascending.
_KEY_VALUES: Dict[TiebreakKey, Callable[[StandingRow], int]] = {
    TiebreakKey.POINTS: lambda row: -row.points,
    TiebreakKey.GOAL_DIFFERENCE: lambda row: -row.goal_difference,
    TiebreakKey.GOALS_FOR: lambda row: -row.goals_for,
    TiebreakKey.FAIR_PLAY: lambda row: row.fair_play,
}


def resolve_tiebreaks(
    has_card_data: bool, policy: FairPlayPolicy = "auto"
) -> Tuple[TiebreakKey, ...]:
    """The comparator chain for a scope.

    Fair-play only breaks ties when cards were recorded, unless the policy
    forces it on or off.
    """
    if policy == "always" or (policy == "auto" and has_card_data):
        return FAIR_PLAY_TIEBREAKS
    return BASE_TIEBREAKS


def assign_tied_ranks(items: Sequence[T], tie_key: Callable[[T], object]) -> list[Tuple[int, T]]:
    """Pairs already-sorted items with tie-sharing ranks.

    An item equal to its predecessor under `tie_key` shares its rank; any other
    item is ranked by its 1-based position, so ranks skip after a tie.
    """
    ranked: list[Tuple[int, T]] = []
    previous_key: object = None
    previous_rank = 0
    for position, item in enumerate(items, start=1):
        key = tie_key(item)
        rank = previous_rank if ranked and key == previous_key else position
        ranked.append((rank, item))
        previous_key, previous_rank = key, rank
    return ranked


def rank_rows(
    rows: Mapping[str, StandingRow],
    tiebreaks: Sequence[TiebreakKey] = BASE_TIEBREAKS,
) -> list[RankedStanding]:
    """Sorts one scope's rows by the tiebreak chain and assigns tie-sharing ranks.

    Team name (then id) settles anything the chain leaves tied, so output order
    never depends on the iteration order of `rows`. Names do not split ranks.
    """
    extractors = [_KEY_VALUES[key] for key in tiebreaks]

    def tie_key(row: StandingRow) -> Tuple[int, ...]:
        return tuple(extract(row) for extract in extractors)

    ordered = sorted(
        rows.values(), key=lambda row: (tie_key(row), row.team_name, row.team_id)
    )
    return [
        RankedStanding(rank=rank, row=row)
        for rank, row in assign_tied_ranks(ordered, tie_key)
    ]
