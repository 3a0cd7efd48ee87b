from datetime import timedelta

import pytest
from django.core.exceptions import ValidationError
from django.utils import timezone

from tournaments.models import Match, Tournament, TournamentRegistration
from tournaments.services import (
    is_registered,
    register_for_tournament,
    split_schedule,
    tournaments_with_counts,
)


@pytest.mark.django_db
class TestRegister:
    def test_free_tournament(self, tournament, player):
        reg = register_for_tournament(tournament=tournament, profile=player)
        assert reg.payment_status == TournamentRegistration.PaymentStatus.FREE
        assert is_registered(tournament, player)

    def test_entry_fee_is_pending(self, make_tournament, player):
        paid = make_tournament("Paid Cup", entry_fee="₹100")
        reg = register_for_tournament(tournament=paid, profile=player)
        assert reg.payment_status == TournamentRegistration.PaymentStatus.PENDING

    def test_team_attached(self, tournament, player, team):
        reg = register_for_tournament(tournament=tournament, profile=player)
        assert reg.team == team

    def test_already_registered(self, tournament, player):
        register_for_tournament(tournament=tournament, profile=player)
        with pytest.raises(ValidationError, match="already registered"):
            register_for_tournament(tournament=tournament, profile=player)
        assert tournament.registrations.count() == 1

    def test_full(self, make_tournament, make_user, player):
        small = make_tournament("Tiny Cup", max_teams=1)
        register_for_tournament(tournament=small, profile=make_user("early"))
        with pytest.raises(ValidationError) as exc:
            register_for_tournament(tournament=small, profile=player)
        assert exc.value.messages == ["Tournament Full"]

    def test_closed(self, make_tournament, player):
        running = make_tournament("Running Cup", status=Tournament.Status.IN_PROGRESS)
        with pytest.raises(ValidationError, match="closed"):
            register_for_tournament(tournament=running, profile=player)

    def test_deadline_passed(self, make_tournament, player):
        late = make_tournament("Late Cup", registration_deadline=timezone.now() - timedelta(minutes=1))
        with pytest.raises(ValidationError, match="deadline"):
            register_for_tournament(tournament=late, profile=player)

    def test_team_registered_by_teammate(self, tournament, player, other_player, team):
        from players.services import join_team_by_code

        join_team_by_code(profile=other_player, code=team.team_code)
        register_for_tournament(tournament=tournament, profile=player)
        with pytest.raises(ValidationError, match="Booyah Squad is already registered"):
            register_for_tournament(tournament=tournament, profile=other_player)

    def test_anonymous_is_never_registered(self, tournament):
        from django.contrib.auth.models import AnonymousUser

        assert not is_registered(tournament, AnonymousUser())

    def test_registered_annotation(self, tournament, player, other_player):
        register_for_tournament(tournament=tournament, profile=player)
        register_for_tournament(tournament=tournament, profile=other_player)
        assert tournaments_with_counts().get(pk=tournament.pk).registered == 2


@pytest.mark.django_db
def test_split_schedule(tournament, make_tournament):
    now = timezone.now()
    other = make_tournament("Other Cup")
    past_old = Match.objects.create(tournament=tournament, start_time=now - timedelta(days=2))
    past_new = Match.objects.create(tournament=tournament, start_time=now - timedelta(hours=1))
    soon = Match.objects.create(tournament=tournament, start_time=now + timedelta(hours=1))
    later = Match.objects.create(tournament=tournament, start_time=now + timedelta(days=1))
    elsewhere = Match.objects.create(tournament=other, start_time=now + timedelta(hours=2))

    schedule = split_schedule(now=now)
    assert schedule.upcoming == [soon, elsewhere, later]
    assert schedule.past == [past_new, past_old]

    only = split_schedule(tournament_id=tournament.pk, now=now)
    assert elsewhere not in only.upcoming
    assert only.upcoming[0].tournament.title == tournament.title
