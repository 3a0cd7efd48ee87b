from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import PlayerStats


@receiver(post_save, sender=settings.AUTH_USER_MODEL, dispatch_uid="players_create_stats_for_player")
def create_stats_for_player(sender, instance, **kwargs):
    """
    Every player gets an empty stats row so they show up on the leaderboard.
    Also covers an existing account whose role is changed to player.
    """
    if instance.role == sender.Roles.PLAYER:
        PlayerStats.objects.get_or_create(profile=instance)
