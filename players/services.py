# players/services.py
from __future__ import annotations

import logging
import string
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import List

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Count, Q, Sum
from django.utils.crypto import get_random_string

from tournaments.models import MatchParticipant
from .models import Team, TeamMember

logger = logging.getLogger(__name__)

TEAM_CODE_CHARS = string.ascii_uppercase + string.digits
TEAM_CODE_ATTEMPTS = 20


def generate_team_code(length: int | None = None) -> str:
    """Random upper-case code not yet taken by another team."""
    length = length or getattr(settings, "TEAM_CODE_LENGTH", 6)
    for _ in range(TEAM_CODE_ATTEMPTS):
        code = get_random_string(length, allowed_chars=TEAM_CODE_CHARS)
        if not Team.objects.filter(team_code=code).exists():
            return code
    raise ValidationError("Could not generate a unique team code, try again.")


@transaction.atomic
def create_team(*, captain, name: str, bio: str = "", region: str = "", logo_url: str = "",
                add_captain_member: bool = True) -> Team:
    """
    Insert a team with `captain` as its captain.
    Players creating their own team also become its first member; backoffice-created teams skip that.
    """
    if add_captain_member and TeamMember.objects.filter(profile=captain).exists():
        raise ValidationError("You are already in a team. Leave it before creating a new one.")
    if Team.objects.filter(name__iexact=name.strip()).exists():
        raise ValidationError("A team with that name already exists.")

    team = Team.objects.create(
        name=name.strip(),
        bio=bio,
        region=region,
        logo_url=logo_url,
        team_code=generate_team_code(),
        captain=captain,
    )
    if add_captain_member:
        TeamMember.objects.create(team=team, profile=captain, role=TeamMember.Role.CAPTAIN)
    logger.info("Team %s created by %s with code %s", team.name, captain.username, team.team_code)
    return team


@transaction.atomic
def join_team_by_code(*, profile, code: str) -> Team:
    code = (code or "").strip().upper()
    team = Team.objects.filter(team_code=code).first() if code else None
    if team is None:
        raise ValidationError("Invalid Team Code", code="invalid_code")
    if TeamMember.objects.filter(profile=profile).exists():
        raise ValidationError("Already in a Team", code="already_member")

    TeamMember.objects.create(team=team, profile=profile, role=TeamMember.Role.MEMBER)
    logger.info("%s joined team %s", profile.username, team.name)
    return team


def teams_with_counts():
    """Team queryset annotated with member_count and wins (first placements)."""
    return Team.objects.select_related("captain").annotate(
        member_count=Count("members", distinct=True),
        wins=Count(
            "match_entries__match",
            filter=Q(match_entries__placement=1),
            distinct=True,
        ),
    )


@dataclass(frozen=True)
class TeamStanding:
    rank: int
    team_id: int
    name: str
    logo_url: str
    matches: int
    wins: int
    kills: int
    kills_per_match: Decimal
    points: int


def team_standings(limit: int | None = None) -> List[TeamStanding]:
    """
    Aggregate match participant rows per team, ranked by points then wins.
    """
    rows = (
        MatchParticipant.objects.filter(team__isnull=False)
        .values("team_id", "team__name", "team__logo_url")
        .annotate(
            matches=Count("match", distinct=True),
            wins=Count("match", filter=Q(placement=1), distinct=True),
            kills=Sum("kills"),
            points=Sum("points"),
        )
        .order_by("-points", "-wins", "team__name")
    )
    if limit:
        rows = rows[:limit]

    standings: List[TeamStanding] = []
    for rank, row in enumerate(rows, start=1):
        matches = row["matches"] or 0
        kills = row["kills"] or 0
        kpm = Decimal(kills) / Decimal(matches) if matches else Decimal(0)
        standings.append(
            TeamStanding(
                rank=rank,
                team_id=row["team_id"],
                name=row["team__name"],
                logo_url=row["team__logo_url"],
                matches=matches,
                wins=row["wins"] or 0,
                kills=kills,
                kills_per_match=kpm.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP),
                points=row["points"] or 0,
            )
        )
    return standings
