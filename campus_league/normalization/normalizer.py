from typing import Iterable, List, Optional, Tuple

from loguru import logger

from campus_league.models.result import MatchResult, NormalizedResult, TeamRef
from campus_league.models.team import Team
from campus_league.utils.misc_utils import count_or_zero

WIN_POINTS = 3
DRAW_POINTS = 1
LOSS_POINTS = 0


def resolve_team_id(team_id: Optional[str], team_ref: Optional[TeamRef]) -> Optional[str]:
    """Prefers the explicit id and falls back to the pointer's identity."""
    if team_id:
        return team_id
    if team_ref is not None and team_ref.id:
        return team_ref.id
    return None


def derive_points(home_score: int, away_score: int) -> Tuple[int, int]:
    """Points for (home, away) under strict win/draw rules."""
    if home_score > away_score:
        return WIN_POINTS, LOSS_POINTS
    if home_score < away_score:
        return LOSS_POINTS, WIN_POINTS
    return DRAW_POINTS, DRAW_POINTS


class ResultNormalizer:
    """Turns stored match results into `NormalizedResult`s ready for aggregation.

    `teams` is used for diagnostics only: results naming a team outside it are
    logged at DEBUG and still normalized.
    """

    def __init__(self, teams: Iterable[Team] = ()):
        self.known_team_ids = {team.id for team in teams}
        logger.debug(
            f"ResultNormalizer initialized with {len(self.known_team_ids)} known teams."
        )

    def normalize_result(self, result: MatchResult) -> Optional[NormalizedResult]:
        """Normalizes one result, or returns None if a participant is unresolved."""
        home_id = resolve_team_id(result.home_team_id, result.home_team_ref)
        away_id = resolve_team_id(result.away_team_id, result.away_team_ref)
        if not home_id or not away_id:
            logger.debug(
                f"Skipping result {result.game_id or '<no game id>'}: unresolved participant "
                f"(home={home_id!r}, away={away_id!r})"
            )
            return None

        for team_id in (home_id, away_id):
            if self.known_team_ids and team_id not in self.known_team_ids:
                logger.debug(f"Result references unknown team {team_id}; keeping it.")

        home_score = count_or_zero(result.home_score)
        away_score = count_or_zero(result.away_score)
        derived_home, derived_away = derive_points(home_score, away_score)

        return NormalizedResult(
            game_id=result.game_id,
            home_id=home_id,
            away_id=away_id,
            home_score=home_score,
            away_score=away_score,
            home_points=(
                result.home_points if result.home_points is not None else derived_home
            ),
            away_points=(
                result.away_points if result.away_points is not None else derived_away
            ),
            home_yellow=count_or_zero(result.home_yellow_cards),
            home_red=count_or_zero(result.home_red_cards),
            away_yellow=count_or_zero(result.away_yellow_cards),
            away_red=count_or_zero(result.away_red_cards),
            has_card_data=result.has_card_data,
        )

    def normalize(self, results: Iterable[MatchResult]) -> List[NormalizedResult]:
        """Normalizes every resolvable result, silently dropping the rest."""
        normalized: List[NormalizedResult] = []
        skipped = 0
        for result in results:
            item = self.normalize_result(result)
            if item is None:
                skipped += 1
                continue
            normalized.append(item)

        logger.debug(
            f"Normalization complete: {len(normalized)} results kept, {skipped} skipped."
        )
        return normalized
