from datetime import timedelta

import pytest
from django.urls import reverse
from django.utils import timezone

from streams.models import Stream


def test_streamer_name_fallback():
    assert Stream(title="x").streamer_name == "Unknown Streamer"


@pytest.mark.django_db
def test_stream_list_sections(client, player):
    now = timezone.now()
    small = Stream.objects.create(title="Scrims", stream_url="https://example.com/a", is_live=True, viewers=40)
    big = Stream.objects.create(
        title="Grand finals", stream_url="https://example.com/b", is_live=True, viewers=900, streamer=player
    )
    later = Stream.objects.create(
        title="Qualifiers day 2", stream_url="https://example.com/c", scheduled_for=now + timedelta(days=2)
    )
    sooner = Stream.objects.create(
        title="Qualifiers day 1", stream_url="https://example.com/d", scheduled_for=now + timedelta(days=1)
    )
    ended = Stream.objects.create(
        title="Last week", stream_url="https://example.com/e", scheduled_for=now - timedelta(days=7)
    )

    resp = client.get(reverse("streams:stream_list"))

    assert list(resp.context["live_streams"]) == [big, small]
    assert list(resp.context["upcoming_streams"]) == [sooner, later]
    assert list(resp.context["past_streams"]) == [ended]
    assert "ghost" in resp.content.decode()
