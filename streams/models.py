from __future__ import annotations

from django.conf import settings
from django.db import models
from django.db.models import Q


class Stream(models.Model):
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    thumbnail_url = models.URLField(blank=True)
    stream_url = models.URLField()
    is_live = models.BooleanField(default=False, db_index=True)
    viewers = models.PositiveIntegerField(default=0)
    streamer = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="streams"
    )
    scheduled_for = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-is_live", "-viewers", "scheduled_for"]
        constraints = [
            models.CheckConstraint(condition=Q(viewers__gte=0), name="stream_viewers_non_negative"),
        ]

    def __str__(self) -> str:
        return f"{self.title}{' (LIVE)' if self.is_live else ''}"

    @property
    def streamer_name(self) -> str:
        return self.streamer.display_name if self.streamer else "Unknown Streamer"
