from typing import Dict, Iterable, Mapping, Optional

from loguru import logger

from campus_league.calculation.ranking import assign_tied_ranks
from campus_league.models.goal import GoalEvent, Leaderboard, RankedScorer, ScorerSummary


def tally_scorers(
    *sources: Iterable[GoalEvent],
    photo_lookup: Optional[Mapping[str, str]] = None,
) -> Dict[str, ScorerSummary]:
    """Counts goals per scorer across every event stream, as if concatenated.

    The first event seen for a scorer fixes the display name; the photo is the
    first one any event supplies, else the lookup table's entry.
    """
    tallies: Dict[str, ScorerSummary] = {}
    dropped = 0
    for events in sources:
        for event in events:
            if not event.scorer_id or not event.scorer_name:
                dropped += 1
                continue
            summary = tallies.get(event.scorer_id)
            if summary is None:
                summary = ScorerSummary(
                    scorer_id=event.scorer_id, scorer_name=event.scorer_name
                )
                tallies[event.scorer_id] = summary
            if not summary.photo_url and event.scorer_photo_url:
                summary.photo_url = event.scorer_photo_url
            summary.goals += 1

    if photo_lookup:
        for scorer_id, summary in tallies.items():
            if not summary.photo_url and photo_lookup.get(scorer_id):
                summary.photo_url = photo_lookup[scorer_id]

    if dropped:
        logger.debug(f"Dropped {dropped} goal events without a scorer id or name.")
    return tallies


def build_leaderboard(
    *sources: Iterable[GoalEvent],
    photo_lookup: Optional[Mapping[str, str]] = None,
) -> Leaderboard:
    """Full ranked scorer list: goals desc, then name; ties share a rank."""
    tallies = tally_scorers(*sources, photo_lookup=photo_lookup)
    ordered = sorted(
        tallies.values(),
        key=lambda s: (-s.goals, s.scorer_name, s.scorer_id),
    )
    entries = [
        RankedScorer(rank=rank, **summary.model_dump())
        for rank, summary in assign_tied_ranks(ordered, lambda s: s.goals)
    ]
    logger.debug(f"Leaderboard built with {len(entries)} scorers.")
    return Leaderboard(entries=entries)
