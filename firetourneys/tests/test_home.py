from datetime import timedelta

import pytest
from django.urls import reverse
from django.utils import timezone

from news.models import News
from streams.models import Stream
from tournaments.models import Match, MatchParticipant, Tournament, TournamentRegistration


@pytest.mark.django_db
def test_home_sections(client, make_tournament, team):
    now = timezone.now()
    for i in range(5):
        make_tournament(f"Cup {i}", start_date=now + timedelta(days=i + 1))
    make_tournament("Done Cup", status=Tournament.Status.COMPLETED)
    make_tournament("Old Cup", start_date=now - timedelta(days=3))
    for i in range(4):
        News.objects.create(title=f"Story {i}", content="...", published_at=now - timedelta(hours=i))
    Stream.objects.create(title="Offline", stream_url="https://example.com/1", viewers=5000)
    live = Stream.objects.create(title="Live", stream_url="https://example.com/2", is_live=True, viewers=10)
    m = Match.objects.create(tournament=Tournament.objects.first(), start_time=now)
    MatchParticipant.objects.create(match=m, team=team, placement=1, points=15)

    resp = client.get(reverse("home"))

    assert resp.status_code == 200
    assert [t.title for t in resp.context["tournaments"]] == ["Cup 0", "Cup 1", "Cup 2", "Cup 3"]
    assert [n.title for n in resp.context["latest_news"]] == ["Story 0", "Story 1", "Story 2"]
    assert list(resp.context["streams"])[0] == live
    assert [s.name for s in resp.context["top_teams"]] == ["Booyah Squad"]


@pytest.mark.django_db
def test_unknown_page_uses_404_template(client):
    resp = client.get("/no-such-page/")
    assert resp.status_code == 404


@pytest.mark.django_db
def test_home_cards_clamp_fill_bar(client, tournament, make_user):
    for i in range(3):
        TournamentRegistration.objects.create(tournament=tournament, profile=make_user(f"p{i}"))
    Tournament.objects.filter(pk=tournament.pk).update(max_teams=1)

    body = client.get(reverse("home")).content.decode()

    assert "width: 100%" in body
    assert "width: 300%" not in body
