from __future__ import annotations

import logging

from django.contrib import messages
from django.contrib.auth import get_user_model
from django.contrib.messages.views import SuccessMessageMixin
from django.core.exceptions import ValidationError
from django.core.paginator import Paginator
from django.db import DatabaseError, transaction
from django.db.models import Count, Q
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse, reverse_lazy
from django.utils import timezone
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.http import require_POST
from django.views.generic import CreateView, FormView, ListView, UpdateView

from accounts.permissions import AdminRequiredMixin, admin_required
from news.models import News
from players.models import PlayerStats, Team
from players.services import create_team, teams_with_counts
from streams.models import Stream
from tournaments.forms import MatchForm, MatchParticipantFormSet, TournamentCreateForm, TournamentForm
from tournaments.models import Match, Tournament
from tournaments.services import tournaments_with_counts
from .forms import NewsForm, PlayerStatsCreateForm, PlayerStatsForm, StreamForm, TeamAdminForm

User = get_user_model()
logger = logging.getLogger(__name__)

PAGE_SIZE = 25


@admin_required
def dashboard(request):
    now = timezone.now()
    by_role = (
        User.objects.values("role")
        .annotate(total=Count("id"))
        .order_by("role")
    )
    kpi = {
        "open_tournaments": Tournament.objects.filter(status=Tournament.Status.REGISTRATION_OPEN).count(),
        "teams": Team.objects.count(),
        "upcoming_matches": Match.objects.filter(start_time__gte=now, status=Match.Status.SCHEDULED).count(),
        "live_streams": Stream.objects.filter(is_live=True).count(),
    }
    context = {
        "now": now,
        "total_users": User.objects.count(),
        "by_role": by_role,
        "kpi": kpi,
    }
    return render(request, "backoffice/dashboard.html", context)


# ---------------- Shared panel plumbing ----------------
class PanelFormMixin(AdminRequiredMixin, SuccessMessageMixin):
    """
    Create/update views for the panels. A failed write is logged and shown as a
    notification instead of a 500.
    """
    template_name = "backoffice/form.html"
    panel_title = ""
    cancel_url = None

    def form_valid(self, form):
        try:
            return super().form_valid(form)
        except DatabaseError:
            logger.exception("Saving %s failed", form._meta.model._meta.verbose_name)
            messages.error(self.request, "Could not save your changes. Please try again.")
            return self.form_invalid(form)

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        ctx["panel_title"] = self.panel_title
        ctx["cancel_url"] = self.cancel_url or self.success_url or self.get_success_url()
        return ctx


@method_decorator(require_POST, name="dispatch")
class PanelDeleteView(AdminRequiredMixin, View):
    model = None
    success_url = None

    def post(self, request, pk):
        obj = get_object_or_404(self.model, pk=pk)
        label = str(obj)
        try:
            obj.delete()
        except DatabaseError:
            logger.exception("Deleting %s %s failed", self.model._meta.verbose_name, pk)
            messages.error(request, f"Could not delete “{label}”.")
        else:
            logger.info("%s deleted %s %s", request.user.username, self.model._meta.verbose_name, pk)
            messages.success(request, f"Deleted “{label}”.")
        return redirect(self.success_url)


# ---------------- Tournaments ----------------
class TournamentPanelView(AdminRequiredMixin, ListView):
    template_name = "backoffice/tournaments.html"
    context_object_name = "tournaments"
    paginate_by = PAGE_SIZE

    def get_queryset(self):
        qs = tournaments_with_counts().order_by("-created_at")
        q = (self.request.GET.get("q") or "").strip()
        if q:
            qs = qs.filter(title__icontains=q)
        return qs


class TournamentCreatePanelView(PanelFormMixin, CreateView):
    model = Tournament
    form_class = TournamentCreateForm
    panel_title = "New tournament"
    success_url = reverse_lazy("backoffice:tournaments")
    success_message = "Tournament “%(title)s” created."

    def form_valid(self, form):
        form.instance.creator = self.request.user
        form.instance.status = Tournament.Status.REGISTRATION_OPEN
        return super().form_valid(form)


class TournamentUpdatePanelView(PanelFormMixin, UpdateView):
    model = Tournament
    form_class = TournamentForm
    panel_title = "Edit tournament"
    success_url = reverse_lazy("backoffice:tournaments")
    success_message = "Tournament “%(title)s” updated."


class TournamentDeletePanelView(PanelDeleteView):
    model = Tournament
    success_url = reverse_lazy("backoffice:tournaments")


# ---------------- Teams ----------------
class TeamPanelView(AdminRequiredMixin, ListView):
    template_name = "backoffice/teams.html"
    context_object_name = "teams"
    paginate_by = PAGE_SIZE

    def get_queryset(self):
        qs = teams_with_counts().order_by("name")
        q = (self.request.GET.get("q") or "").strip()
        if q:
            qs = qs.filter(Q(name__icontains=q) | Q(team_code__iexact=q))
        return qs


class TeamCreatePanelView(AdminRequiredMixin, FormView):
    form_class = TeamAdminForm
    template_name = "backoffice/form.html"

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        ctx.update({"panel_title": "New team", "cancel_url": reverse("backoffice:teams")})
        return ctx

    def form_valid(self, form):
        try:
            team = create_team(captain=self.request.user, add_captain_member=False, **form.cleaned_data)
        except ValidationError as e:
            for msg in e.messages:
                messages.error(self.request, msg)
            return self.form_invalid(form)
        except DatabaseError:
            logger.exception("Backoffice team creation failed")
            messages.error(self.request, "Could not create the team. Please try again.")
            return self.form_invalid(form)
        messages.success(self.request, f"Team “{team.name}” created with code {team.team_code}.")
        return redirect("backoffice:teams")


class TeamUpdatePanelView(PanelFormMixin, UpdateView):
    model = Team
    form_class = TeamAdminForm
    panel_title = "Edit team"
    success_url = reverse_lazy("backoffice:teams")
    success_message = "Team “%(name)s” updated."


class TeamDeletePanelView(PanelDeleteView):
    model = Team
    success_url = reverse_lazy("backoffice:teams")


# ---------------- Schedule ----------------
class MatchPanelView(AdminRequiredMixin, ListView):
    template_name = "backoffice/matches.html"
    context_object_name = "matches"
    paginate_by = PAGE_SIZE

    def get_queryset(self):
        qs = Match.objects.select_related("tournament").annotate(
            participant_count=Count("participants")
        ).order_by("-start_time")
        tournament_id = self.request.GET.get("tournament") or ""
        if tournament_id.isdigit():
            qs = qs.filter(tournament_id=int(tournament_id))
        status = self.request.GET.get("status") or ""
        if status in Match.Status.values:
            qs = qs.filter(status=status)
        return qs

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        ctx.update(
            {
                "tournaments": Tournament.objects.order_by("title").only("id", "title"),
                "status_choices": Match.Status.choices,
                "filters": {
                    "tournament": self.request.GET.get("tournament") or "",
                    "status": self.request.GET.get("status") or "",
                },
            }
        )
        return ctx


class MatchCreatePanelView(PanelFormMixin, CreateView):
    model = Match
    form_class = MatchForm
    panel_title = "New match"
    success_message = "Match scheduled."

    def get_initial(self):
        initial = super().get_initial()
        tournament_id = self.request.GET.get("tournament") or ""
        if tournament_id.isdigit():
            initial["tournament"] = int(tournament_id)
        return initial

    def get_success_url(self):
        return reverse("backoffice:match_edit", args=[self.object.pk])

    def get_context_data(self, **kwargs):
        self.cancel_url = reverse("backoffice:matches")
        return super().get_context_data(**kwargs)


class MatchUpdatePanelView(AdminRequiredMixin, View):
    """Match fields plus an inline grid of participant results."""
    template_name = "backoffice/match_form.html"

    def _render(self, request, match, form, formset):
        return render(request, self.template_name, {"match": match, "form": form, "formset": formset})

    def get(self, request, pk):
        match = get_object_or_404(Match, pk=pk)
        return self._render(request, match, MatchForm(instance=match), MatchParticipantFormSet(instance=match))

    def post(self, request, pk):
        match = get_object_or_404(Match, pk=pk)
        form = MatchForm(request.POST, instance=match)
        formset = MatchParticipantFormSet(request.POST, instance=match)
        if form.is_valid() and formset.is_valid():
            try:
                with transaction.atomic():
                    form.save()
                    formset.save()
            except DatabaseError:
                logger.exception("Saving match %s failed", pk)
                messages.error(request, "Could not save the match. Please try again.")
                return self._render(request, match, form, formset)
            messages.success(request, "Match updated.")
            return redirect("backoffice:matches")
        return self._render(request, match, form, formset)


class MatchDeletePanelView(PanelDeleteView):
    model = Match
    success_url = reverse_lazy("backoffice:matches")


# ---------------- Leaderboard ----------------
class LeaderboardPanelView(AdminRequiredMixin, ListView):
    template_name = "backoffice/leaderboard.html"
    context_object_name = "stats"
    paginate_by = PAGE_SIZE

    def get_queryset(self):
        qs = PlayerStats.objects.select_related("profile").order_by("-kills", "profile__username")
        q = (self.request.GET.get("q") or "").strip()
        if q:
            qs = qs.filter(Q(profile__username__icontains=q) | Q(profile__full_name__icontains=q))
        return qs


class PlayerStatsCreatePanelView(PanelFormMixin, CreateView):
    model = PlayerStats
    form_class = PlayerStatsCreateForm
    panel_title = "Add player stats"
    success_url = reverse_lazy("backoffice:leaderboard")
    success_message = "Stats added."


class PlayerStatsUpdatePanelView(PanelFormMixin, UpdateView):
    model = PlayerStats
    form_class = PlayerStatsForm
    panel_title = "Edit player stats"
    success_url = reverse_lazy("backoffice:leaderboard")

    def get_success_message(self, cleaned_data):
        return f"Stats for {self.object.profile.display_name} updated (K/D {self.object.kd_ratio})."


# ---------------- News ----------------
class NewsPanelView(AdminRequiredMixin, ListView):
    template_name = "backoffice/news.html"
    context_object_name = "articles"
    paginate_by = PAGE_SIZE

    def get_queryset(self):
        qs = News.objects.select_related("author").order_by("-published_at", "-id")
        q = (self.request.GET.get("q") or "").strip()
        if q:
            qs = qs.filter(title__icontains=q)
        return qs


class NewsCreatePanelView(PanelFormMixin, CreateView):
    model = News
    form_class = NewsForm
    panel_title = "New article"
    success_url = reverse_lazy("backoffice:news")
    success_message = "Article “%(title)s” published."

    def form_valid(self, form):
        form.instance.author = self.request.user
        form.instance.published_at = timezone.now()
        return super().form_valid(form)


class NewsUpdatePanelView(PanelFormMixin, UpdateView):
    model = News
    form_class = NewsForm
    panel_title = "Edit article"
    success_url = reverse_lazy("backoffice:news")
    success_message = "Article “%(title)s” updated."


class NewsDeletePanelView(PanelDeleteView):
    model = News
    success_url = reverse_lazy("backoffice:news")


# ---------------- Streams ----------------
class StreamPanelView(AdminRequiredMixin, ListView):
    template_name = "backoffice/streams.html"
    context_object_name = "streams"
    paginate_by = PAGE_SIZE

    def get_queryset(self):
        return Stream.objects.select_related("streamer").order_by("-is_live", "-viewers", "title")


class StreamCreatePanelView(PanelFormMixin, CreateView):
    model = Stream
    form_class = StreamForm
    panel_title = "New stream"
    success_url = reverse_lazy("backoffice:streams")
    success_message = "Stream “%(title)s” added."

    def get_initial(self):
        initial = super().get_initial()
        initial["streamer"] = self.request.user.pk
        return initial


class StreamUpdatePanelView(PanelFormMixin, UpdateView):
    model = Stream
    form_class = StreamForm
    panel_title = "Edit stream"
    success_url = reverse_lazy("backoffice:streams")
    success_message = "Stream “%(title)s” updated."


class StreamDeletePanelView(PanelDeleteView):
    model = Stream
    success_url = reverse_lazy("backoffice:streams")


@method_decorator(require_POST, name="dispatch")
class StreamToggleLiveView(AdminRequiredMixin, View):
    def post(self, request, pk):
        stream = get_object_or_404(Stream, pk=pk)
        stream.is_live = not stream.is_live
        try:
            stream.save(update_fields=["is_live", "updated_at"])
        except DatabaseError:
            logger.exception("Toggling live state of stream %s failed", pk)
            messages.error(request, "Could not update the stream. Please try again.")
            return redirect("backoffice:streams")
        state = "live" if stream.is_live else "offline"
        messages.success(request, f"“{stream.title}” is now {state}.")
        return redirect("backoffice:streams")
