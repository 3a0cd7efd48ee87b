# tournaments/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import Count, QuerySet
from django.utils import timezone

from players.models import TeamMember
from .models import Match, Tournament, TournamentRegistration

logger = logging.getLogger(__name__)


def tournaments_with_counts() -> QuerySet:
    """Tournaments annotated with `registered` (registration rows)."""
    return Tournament.objects.annotate(registered=Count("registrations", distinct=True))


def with_fill(tournaments) -> List[Tournament]:
    """Evaluate annotated tournaments and attach the clamped `fill_pct` each card draws."""
    rows = list(tournaments)
    for t in rows:
        t.fill_pct = t.fill_percent(t.registered)
    return rows


def is_registered(tournament: Tournament, profile) -> bool:
    if not getattr(profile, "is_authenticated", False):
        return False
    return TournamentRegistration.objects.filter(tournament=tournament, profile=profile).exists()


@transaction.atomic
def register_for_tournament(*, tournament: Tournament, profile) -> TournamentRegistration:
    """
    Register `profile` (and their team, if any) for the tournament.
    Payment is Pending when the tournament has an entry fee, Free otherwise.
    """
    # lock the tournament row so two last-slot registrations can't both pass the capacity check
    tournament = Tournament.objects.select_for_update().get(pk=tournament.pk)

    if TournamentRegistration.objects.filter(tournament=tournament, profile=profile).exists():
        raise ValidationError("You are already registered for this tournament.", code="already_registered")
    if tournament.status != Tournament.Status.REGISTRATION_OPEN:
        raise ValidationError("Registration is closed for this tournament.", code="closed")
    if tournament.registration_deadline and tournament.registration_deadline < timezone.now():
        raise ValidationError("The registration deadline has passed.", code="deadline")
    if tournament.registrations.count() >= tournament.max_teams:
        raise ValidationError("Tournament Full", code="full")

    membership = TeamMember.objects.select_related("team").filter(profile=profile).first()
    team = membership.team if membership else None
    if team and TournamentRegistration.objects.filter(tournament=tournament, team=team).exists():
        raise ValidationError(f"{team.name} is already registered for this tournament.", code="team_registered")

    payment = (
        TournamentRegistration.PaymentStatus.FREE
        if tournament.is_free
        else TournamentRegistration.PaymentStatus.PENDING
    )
    try:
        with transaction.atomic():
            reg = TournamentRegistration.objects.create(
                tournament=tournament, profile=profile, team=team, payment_status=payment
            )
    except IntegrityError:
        raise ValidationError("You are already registered for this tournament.", code="already_registered")

    logger.info("%s registered for %s (%s)", profile.username, tournament.title, payment)
    return reg


@dataclass
class Schedule:
    upcoming: List[Match]
    past: List[Match]


def split_schedule(tournament_id: Optional[int] = None, now=None) -> Schedule:
    """
    Matches with their tournament, split on start_time:
    upcoming ascending, past most recent first.
    """
    now = now or timezone.now()
    qs = Match.objects.select_related("tournament")
    if tournament_id:
        qs = qs.filter(tournament_id=tournament_id)
    return Schedule(
        upcoming=list(qs.filter(start_time__gte=now).order_by("start_time", "id")),
        past=list(qs.filter(start_time__lt=now).order_by("-start_time", "-id")),
    )
