import json
import logging
from datetime import timedelta

import pytest
from django.contrib.messages import get_messages
from django.db import DatabaseError
from django.urls import reverse
from django.utils import timezone

from tournaments.models import Match, Tournament, TournamentRegistration
from tournaments.realtime import INSERT, ChangeEvent, tournament_channel


def _messages(response):
    return [str(m) for m in get_messages(response.wsgi_request)]


@pytest.mark.django_db
class TestList:
    def test_lists_with_registered_counts(self, client, tournament, player):
        TournamentRegistration.objects.create(tournament=tournament, profile=player)
        resp = client.get(reverse("tournaments:tournament_list"))
        [row] = resp.context["tournaments"]
        assert row.registered == 1
        assert "1 / 4" in resp.content.decode()

    def test_status_filter(self, client, tournament, make_tournament):
        make_tournament("Finished Cup", status=Tournament.Status.COMPLETED)
        resp = client.get(reverse("tournaments:tournament_list"), {"status": "Completed"})
        assert [t.title for t in resp.context["tournaments"]] == ["Finished Cup"]

    def test_unknown_status_ignored(self, client, tournament, make_tournament):
        make_tournament("Finished Cup", status=Tournament.Status.COMPLETED)
        resp = client.get(reverse("tournaments:tournament_list"), {"status": "bogus"})
        assert len(resp.context["tournaments"]) == 2

    def test_fill_bar_clamped_when_capacity_lowered(self, client, tournament, make_user):
        for i in range(6):
            TournamentRegistration.objects.create(tournament=tournament, profile=make_user(f"p{i}"))
        Tournament.objects.filter(pk=tournament.pk).update(max_teams=2)

        resp = client.get(reverse("tournaments:tournament_list"))
        body = resp.content.decode()

        assert resp.context["tournaments"][0].fill_pct == 100.0
        assert "6 / 2 teams" in body
        assert "width: 100%" in body
        assert "width: 300%" not in body


@pytest.mark.django_db
class TestDetail:
    def test_open_tournament(self, player_client, tournament):
        resp = player_client.get(reverse("tournaments:tournament_detail", args=[tournament.pk]))
        assert resp.context["registered"] == 0
        assert resp.context["is_open"]
        assert not resp.context["is_full"]
        assert "Register now" in resp.content.decode()

    def test_already_registered(self, player_client, player, tournament):
        TournamentRegistration.objects.create(tournament=tournament, profile=player)
        resp = player_client.get(reverse("tournaments:tournament_detail", args=[tournament.pk]))
        assert resp.context["is_registered"]
        assert resp.context["fill_percent"] == 25.0
        assert "Already Registered" in resp.content.decode()

    def test_full(self, client, make_tournament, player):
        t = make_tournament("Tiny Cup", max_teams=1)
        TournamentRegistration.objects.create(tournament=t, profile=player)
        resp = client.get(reverse("tournaments:tournament_detail", args=[t.pk]))
        assert resp.context["is_full"]
        assert "Tournament Full" in resp.content.decode()

    def test_closed(self, client, make_tournament):
        t = make_tournament("Running Cup", status=Tournament.Status.IN_PROGRESS)
        resp = client.get(reverse("tournaments:tournament_detail", args=[t.pk]))
        assert "Registration Closed" in resp.content.decode()

    def test_missing_is_404(self, client, db):
        assert client.get(reverse("tournaments:tournament_detail", args=[404])).status_code == 404


@pytest.mark.django_db
class TestRegisterView:
    def test_anonymous_redirected_to_login(self, client, tournament):
        resp = client.post(reverse("tournaments:tournament_register", args=[tournament.pk]))
        assert resp.status_code == 302
        assert reverse("accounts:login") in resp["Location"]

    def test_get_not_allowed(self, player_client, tournament):
        resp = player_client.get(reverse("tournaments:tournament_register", args=[tournament.pk]))
        assert resp.status_code == 405

    def test_free_registration(self, player_client, player, tournament):
        resp = player_client.post(reverse("tournaments:tournament_register", args=[tournament.pk]))
        assert resp["Location"] == reverse("tournaments:tournament_detail", args=[tournament.pk])
        assert "You're registered for Clash Squad Cup!" in _messages(resp)
        reg = TournamentRegistration.objects.get(tournament=tournament, profile=player)
        assert reg.payment_status == "Free"

    def test_paid_registration_message(self, player_client, make_tournament):
        paid = make_tournament("Paid Cup", entry_fee="₹100")
        resp = player_client.post(reverse("tournaments:tournament_register", args=[paid.pk]))
        [msg] = _messages(resp)
        assert msg.startswith("Registered for Paid Cup. Complete the ₹100 entry fee payment")

    def test_error_shown_as_message(self, player_client, make_tournament, make_user):
        t = make_tournament("Tiny Cup", max_teams=1)
        TournamentRegistration.objects.create(tournament=t, profile=make_user("early"))
        resp = player_client.post(reverse("tournaments:tournament_register", args=[t.pk]))
        assert _messages(resp) == ["Tournament Full"]

    def test_database_failure_logged_and_reported(self, player_client, tournament, monkeypatch, caplog):
        def broken(**kwargs):
            raise DatabaseError("down")

        monkeypatch.setattr("tournaments.views.register_for_tournament", broken)
        with caplog.at_level(logging.ERROR, logger="tournaments.views"):
            resp = player_client.post(reverse("tournaments:tournament_register", args=[tournament.pk]))

        assert resp.status_code == 302
        assert resp["Location"] == reverse("tournaments:tournament_detail", args=[tournament.pk])
        assert _messages(resp) == ["Failed to register for the tournament. Please try again."]
        assert any(r.levelname == "ERROR" and r.exc_info for r in caplog.records)
        assert not TournamentRegistration.objects.exists()


@pytest.mark.django_db
def test_schedule(client, tournament):
    now = timezone.now()
    upcoming = Match.objects.create(tournament=tournament, start_time=now + timedelta(hours=3), map="Bermuda")
    past = Match.objects.create(tournament=tournament, start_time=now - timedelta(hours=3))

    resp = client.get(reverse("tournaments:schedule"))
    assert resp.context["upcoming"] == [upcoming]
    assert resp.context["past"] == [past]
    assert "Bermuda" in resp.content.decode()

    resp = client.get(reverse("tournaments:schedule"), {"tournament": str(tournament.pk + 1)})
    assert resp.context["upcoming"] == []


def _frames(chunks):
    return b"".join(chunks).decode().split("\n\n")


@pytest.mark.django_db
class TestFeed:
    def test_snapshot_then_complete(self, client, tournament):
        before = tournament_channel.subscriber_count
        resp = client.get(reverse("tournaments:tournament_feed"))

        assert resp.status_code == 200
        assert resp["Content-Type"] == "text/event-stream"
        assert resp["Cache-Control"] == "no-cache"

        frames = _frames(resp.streaming_content)
        assert frames[0].startswith("id: 0\nevent: snapshot\ndata: ")
        snapshot = json.loads(frames[0].split("data: ", 1)[1])
        assert [row["title"] for row in snapshot] == ["Clash Squad Cup"]
        assert ": keep-alive" in frames
        assert frames[-2].startswith("event: complete")
        assert tournament_channel.subscriber_count == before

    def test_change_frames_follow_snapshot(self, client):
        resp = client.get(reverse("tournaments:tournament_feed"))
        chunks = iter(resp.streaming_content)
        try:
            assert b"event: snapshot" in next(chunks)
            tournament_channel.publish(ChangeEvent(INSERT, new={"id": 77, "title": "Pushed"}))
            frame = next(chunks).decode()
        finally:
            resp.close()

        assert frame.startswith("id: 1\nevent: change\n")
        payload = json.loads(frame.split("data: ", 1)[1])
        assert payload == {"eventType": "INSERT", "new": {"id": 77, "title": "Pushed"}, "old": {}}

    def test_post_not_allowed(self, client):
        assert client.post(reverse("tournaments:tournament_feed")).status_code == 405
