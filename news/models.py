from __future__ import annotations

from django.conf import settings
from django.db import models
from django.utils import timezone

EXCERPT_LENGTH = 200


class News(models.Model):
    class Category(models.TextChoices):
        GENERAL = "General", "General"
        TOURNAMENT = "Tournament", "Tournament"
        UPDATE = "Update", "Update"
        INTERVIEW = "Interview", "Interview"
        GUIDE = "Guide", "Guide"
        TEAM_NEWS = "Team News", "Team News"

    title = models.CharField(max_length=200)
    content = models.TextField()
    category = models.CharField(max_length=20, choices=Category.choices, default=Category.GENERAL, db_index=True)
    image_url = models.URLField(blank=True)
    is_featured = models.BooleanField(default=False)
    published_at = models.DateTimeField(default=timezone.now, db_index=True)
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="news_posts"
    )

    class Meta:
        ordering = ["-published_at", "-id"]
        verbose_name_plural = "news"

    def __str__(self) -> str:
        return self.title

    @property
    def excerpt(self) -> str:
        text = (self.content or "").strip()
        if len(text) <= EXCERPT_LENGTH:
            return text
        cut = text[:EXCERPT_LENGTH]
        if " " in cut:
            cut = cut.rsplit(" ", 1)[0]
        return cut.rstrip(" ,.;:") + "…"
