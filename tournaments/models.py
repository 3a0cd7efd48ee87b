# tournaments/models.py
from __future__ import annotations

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q


class Tournament(models.Model):
    class TeamSize(models.TextChoices):
        SOLO = "Solo", "Solo"
        DUO = "Duo (2 players)", "Duo (2 players)"
        SQUAD = "Squad (4 players)", "Squad (4 players)"

    class Mode(models.TextChoices):
        ONLINE = "Online", "Online"
        OFFLINE = "Offline", "Offline"

    class Status(models.TextChoices):
        REGISTRATION_OPEN = "Registration Open", "Registration Open"
        IN_PROGRESS = "In Progress", "In Progress"
        COMPLETED = "Completed", "Completed"

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    start_date = models.DateTimeField()
    end_date = models.DateTimeField(null=True, blank=True)
    registration_deadline = models.DateTimeField()
    prize_pool = models.CharField(max_length=60)
    entry_fee = models.CharField(max_length=60, blank=True, help_text="Leave blank for free entry.")
    max_teams = models.PositiveIntegerField(default=32, validators=[MinValueValidator(1)])
    team_size = models.CharField(max_length=20, choices=TeamSize.choices, default=TeamSize.SQUAD)
    mode = models.CharField(max_length=10, choices=Mode.choices, default=Mode.ONLINE)
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.REGISTRATION_OPEN, db_index=True
    )
    image_url = models.URLField(blank=True)
    rules = models.TextField(blank=True)

    creator = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="tournaments_created"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(condition=Q(max_teams__gte=1), name="tournament_max_teams_positive"),
        ]

    def __str__(self) -> str:
        return self.title

    @property
    def is_free(self) -> bool:
        return not (self.entry_fee or "").strip()

    def fill_percent(self, registered: int) -> float:
        if not self.max_teams:
            return 0.0
        return max(0.0, min(100.0, registered / self.max_teams * 100))


class TournamentRegistration(models.Model):
    class PaymentStatus(models.TextChoices):
        PENDING = "Pending", "Pending"
        FREE = "Free", "Free"
        PAID = "Paid", "Paid"

    tournament = models.ForeignKey(Tournament, on_delete=models.CASCADE, related_name="registrations")
    profile = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, null=True, blank=True, related_name="tournament_registrations"
    )
    team = models.ForeignKey(
        "players.Team", on_delete=models.CASCADE, null=True, blank=True, related_name="tournament_registrations"
    )
    payment_status = models.CharField(max_length=10, choices=PaymentStatus.choices, default=PaymentStatus.PENDING)
    registration_date = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["tournament_id", "registration_date"]
        constraints = [
            models.UniqueConstraint(
                fields=["tournament", "profile"],
                condition=Q(profile__isnull=False),
                name="unique_profile_per_tournament",
            ),
            models.UniqueConstraint(
                fields=["tournament", "team"],
                condition=Q(team__isnull=False),
                name="unique_team_per_tournament",
            ),
        ]

    def __str__(self) -> str:
        who = self.team or self.profile
        return f"{who} @ {self.tournament} [{self.payment_status}]"


class Match(models.Model):
    class Status(models.TextChoices):
        SCHEDULED = "Scheduled", "Scheduled"
        LIVE = "Live", "Live"
        COMPLETED = "Completed", "Completed"
        CANCELLED = "Cancelled", "Cancelled"

    tournament = models.ForeignKey(Tournament, on_delete=models.CASCADE, related_name="matches")
    round_number = models.PositiveSmallIntegerField(default=1, validators=[MinValueValidator(1)])
    match_number = models.PositiveSmallIntegerField(default=1, validators=[MinValueValidator(1)])
    start_time = models.DateTimeField()
    end_time = models.DateTimeField(null=True, blank=True)
    map = models.CharField(max_length=60, blank=True)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.SCHEDULED)
    stream_url = models.URLField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["start_time", "id"]
        indexes = [
            models.Index(fields=["tournament", "round_number"], name="match_t_round_idx"),
            models.Index(fields=["start_time"], name="match_start_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.tournament.title}: R{self.round_number} M{self.match_number}"


class MatchParticipant(models.Model):
    match = models.ForeignKey(Match, on_delete=models.CASCADE, related_name="participants")
    profile = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, null=True, blank=True, related_name="match_entries"
    )
    team = models.ForeignKey(
        "players.Team", on_delete=models.CASCADE, null=True, blank=True, related_name="match_entries"
    )
    kills = models.PositiveIntegerField(default=0)
    placement = models.PositiveSmallIntegerField(null=True, blank=True, validators=[MinValueValidator(1)])
    points = models.IntegerField(default=0)

    class Meta:
        ordering = ["match_id", "placement", "id"]

    def __str__(self) -> str:
        who = self.team or self.profile
        return f"{who} in {self.match} (#{self.placement or '-'})"
