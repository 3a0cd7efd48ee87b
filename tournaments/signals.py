# tournaments/signals.py
from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import Tournament, TournamentRegistration
from .realtime import DELETE, INSERT, UPDATE, ChangeEvent, serialize_tournament, tournament_channel


def _publish_current(tournament_id: int, event_type: str) -> None:
    t = Tournament.objects.filter(pk=tournament_id).first()
    if t is None:
        return
    tournament_channel.publish(ChangeEvent(event_type, new=serialize_tournament(t)))


@receiver(post_save, sender=Tournament, dispatch_uid="tournaments_publish_save")
def publish_tournament_saved(sender, instance: Tournament, created, **kwargs):
    event_type = INSERT if created else UPDATE
    transaction.on_commit(lambda: _publish_current(instance.pk, event_type))


@receiver(post_delete, sender=Tournament, dispatch_uid="tournaments_publish_delete")
def publish_tournament_deleted(sender, instance: Tournament, **kwargs):
    event = ChangeEvent(DELETE, old={"id": instance.pk, "title": instance.title})
    transaction.on_commit(lambda: tournament_channel.publish(event))


@receiver([post_save, post_delete], sender=TournamentRegistration, dispatch_uid="tournaments_publish_registration")
def publish_registration_change(sender, instance: TournamentRegistration, **kwargs):
    # Registered counts are part of the list row
    tournament_id = instance.tournament_id
    transaction.on_commit(lambda: _publish_current(tournament_id, UPDATE))
