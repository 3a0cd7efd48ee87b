# tournaments/views.py
from __future__ import annotations

import logging
import queue
import time

from django.conf import settings
from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.http import StreamingHttpResponse
from django.shortcuts import get_object_or_404, redirect
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.http import require_GET, require_POST
from django.views.generic import DetailView, ListView, TemplateView

from .models import Tournament
from .realtime import serialize_tournament, sse_frame, tournament_channel
from .services import (
    is_registered,
    register_for_tournament,
    split_schedule,
    tournaments_with_counts,
    with_fill,
)

logger = logging.getLogger(__name__)


class TournamentListView(ListView):
    template_name = "tournaments/tournament_list.html"
    context_object_name = "tournaments"
    paginate_by = 24

    def get_queryset(self):
        qs = tournaments_with_counts().order_by("-created_at")
        status = self.request.GET.get("status") or ""
        if status in Tournament.Status.values:
            qs = qs.filter(status=status)
        return qs

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        ctx["tournaments"] = with_fill(ctx["tournaments"])
        ctx["status_choices"] = Tournament.Status.choices
        ctx["current_status"] = self.request.GET.get("status") or ""
        return ctx


class TournamentDetailView(DetailView):
    template_name = "tournaments/tournament_detail.html"
    context_object_name = "tournament"

    def get_queryset(self):
        return tournaments_with_counts().select_related("creator")

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        t = self.object
        ctx.update(
            {
                "registered": t.registered,
                "fill_percent": t.fill_percent(t.registered),
                "is_full": t.registered >= t.max_teams,
                "is_registered": is_registered(t, self.request.user),
                "is_open": t.status == Tournament.Status.REGISTRATION_OPEN,
                "matches": t.matches.order_by("start_time"),
            }
        )
        return ctx


@method_decorator(require_POST, name="dispatch")
class TournamentRegisterView(LoginRequiredMixin, View):
    def post(self, request, pk):
        t = get_object_or_404(Tournament, pk=pk)
        try:
            reg = register_for_tournament(tournament=t, profile=request.user)
        except ValidationError as e:
            for msg in e.messages:
                messages.error(request, msg)
        except DatabaseError:
            logger.exception("Registration for tournament %s failed", t.pk)
            messages.error(request, "Failed to register for the tournament. Please try again.")
        else:
            if reg.payment_status == reg.PaymentStatus.PENDING:
                messages.success(
                    request,
                    f"Registered for {t.title}. Complete the {t.entry_fee} entry fee payment to confirm your slot.",
                )
            else:
                messages.success(request, f"You're registered for {t.title}!")
        return redirect("tournaments:tournament_detail", pk=t.pk)


class ScheduleView(TemplateView):
    template_name = "tournaments/schedule.html"

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        tournament_id = self.request.GET.get("tournament")
        schedule = split_schedule(int(tournament_id) if (tournament_id or "").isdigit() else None)
        ctx.update(
            {
                "upcoming": schedule.upcoming,
                "past": schedule.past,
                "tournaments": Tournament.objects.order_by("title").only("id", "title"),
                "current_tournament": tournament_id or "",
            }
        )
        return ctx


# ---------------- Live list feed (Server-Sent Events) ----------------
def _feed_stream(snapshot_rows):
    keepalive = getattr(settings, "TOURNAMENT_FEED_KEEPALIVE_SECONDS", 15)
    max_seconds = getattr(settings, "TOURNAMENT_FEED_MAX_SECONDS", 300)

    sub = tournament_channel.subscribe()
    try:
        yield sse_frame("snapshot", snapshot_rows, event_id=0)
        deadline = time.monotonic() + max_seconds
        seq = 0
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            try:
                event = sub.get(timeout=min(keepalive, remaining))
            except queue.Empty:
                yield b": keep-alive\n\n"
                continue
            seq += 1
            yield sse_frame("change", event.as_payload(), event_id=seq)
        yield b'event: complete\ndata: {"status": "stream_complete"}\n\n'
    finally:
        tournament_channel.unsubscribe(sub)


@require_GET
def tournament_feed(request):
    """
    GET /tournaments/feed/ -> text/event-stream of the tournament list.
    First frame is `snapshot` (the full list), then one `change` frame per
    insert/update/delete. Clients reconnect after `complete`.

    Serve this under WSGI with threaded workers: ASGI buffers a sync
    streaming response until the generator finishes.
    """
    rows = [serialize_tournament(t) for t in tournaments_with_counts().order_by("-created_at")]
    response = StreamingHttpResponse(_feed_stream(rows), content_type="text/event-stream")
    response["Cache-Control"] = "no-cache"
    response["X-Accel-Buffering"] = "no"
    return response
