from __future__ import annotations

from django.db.models import Q
from django.utils import timezone
from django.views.generic import TemplateView

from .models import Stream

PAST_BROADCASTS = 6


class StreamListView(TemplateView):
    template_name = "streams/stream_list.html"

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        now = timezone.now()
        qs = Stream.objects.select_related("streamer")
        ctx.update(
            {
                "live_streams": qs.filter(is_live=True).order_by("-viewers", "title"),
                "upcoming_streams": qs.filter(is_live=False, scheduled_for__gte=now).order_by("scheduled_for"),
                "past_streams": qs.filter(is_live=False)
                .filter(Q(scheduled_for__lt=now) | Q(scheduled_for__isnull=True))
                .order_by("-updated_at")[:PAST_BROADCASTS],
            }
        )
        return ctx
