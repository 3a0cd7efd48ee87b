from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings
from django.core.validators import RegexValidator
from django.db import models

team_code_validator = RegexValidator(r"^[A-Z0-9]+$", "Team codes use upper-case letters and digits only.")


def compute_kd_ratio(kills: int, deaths: int) -> Decimal:
    """kills / deaths rounded to 2 places; with no deaths the ratio is just the kill count."""
    if deaths > 0:
        return (Decimal(kills) / Decimal(deaths)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return Decimal(kills).quantize(Decimal("0.01"))


class Team(models.Model):
    """
    A squad players join with a short invite code. The captain is the profile that created it.
    """
    class Region(models.TextChoices):
        NORTH = "North", "North"
        SOUTH = "South", "South"
        EAST = "East", "East"
        WEST = "West", "West"

    name = models.CharField(max_length=100, unique=True)
    bio = models.TextField(blank=True)
    region = models.CharField(max_length=10, choices=Region.choices, blank=True)
    logo_url = models.URLField(blank=True)
    team_code = models.CharField(max_length=12, unique=True, validators=[team_code_validator])
    captain = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="teams_captained"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class TeamMember(models.Model):
    class Role(models.TextChoices):
        CAPTAIN = "captain", "Captain"
        MEMBER = "member", "Member"

    team = models.ForeignKey(Team, on_delete=models.CASCADE, related_name="members")
    # one team per profile
    profile = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="team_membership"
    )
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.MEMBER)
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["team_id", "joined_at"]

    def __str__(self) -> str:
        return f"{self.profile} @ {self.team} [{self.role}]"


class PlayerStats(models.Model):
    profile = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="player_stats"
    )
    total_matches = models.PositiveIntegerField(default=0)
    wins = models.PositiveIntegerField(default=0)
    kills = models.PositiveIntegerField(default=0)
    deaths = models.PositiveIntegerField(default=0)
    assists = models.PositiveIntegerField(default=0)
    kd_ratio = models.DecimalField(max_digits=8, decimal_places=2, default=Decimal("0.00"))
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-kills", "profile__username"]
        verbose_name_plural = "player stats"

    def save(self, *args, **kwargs):
        self.kd_ratio = compute_kd_ratio(self.kills, self.deaths)
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "kd_ratio" not in update_fields:
            kwargs["update_fields"] = list(update_fields) + ["kd_ratio"]
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.profile} K/D {self.kd_ratio}"
