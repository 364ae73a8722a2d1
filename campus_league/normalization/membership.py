from typing import Dict, FrozenSet, Iterable, Mapping, Set

from loguru import logger

from campus_league.models.team import Group

MembershipIndex = Mapping[str, FrozenSet[str]]

_NO_GROUPS: FrozenSet[str] = frozenset()


def build_membership_index(groups: Iterable[Group]) -> Dict[str, FrozenSet[str]]:
    """Maps each rostered team id to the ids of every group listing it."""
    index: Dict[str, Set[str]] = {}
    for group in groups:
        for team_id in group.team_ids:
            index.setdefault(team_id, set()).add(group.id)

    logger.debug(f"Membership index built for {len(index)} rostered teams.")
    return {team_id: frozenset(group_ids) for team_id, group_ids in index.items()}


def groups_of(index: MembershipIndex, team_id: str) -> FrozenSet[str]:
    """Groups containing `team_id`; empty for teams on no roster."""
    return index.get(team_id, _NO_GROUPS)


def shared_groups(index: MembershipIndex, home_id: str, away_id: str) -> FrozenSet[str]:
    """Groups both participants belong to: the group tables a match counts in."""
    return groups_of(index, home_id) & groups_of(index, away_id)
