from __future__ import annotations

import logging

from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.db.models import Q
from django.shortcuts import redirect
from django.views.generic import DetailView, FormView, ListView, TemplateView

from .forms import JoinTeamForm, TeamCreateForm, TeamFilterForm
from .models import PlayerStats, Team, TeamMember
from .services import create_team, join_team_by_code, team_standings, teams_with_counts

logger = logging.getLogger(__name__)


# ---------------- Team screens ----------------
class TeamListView(ListView):
    template_name = "players/team_list.html"
    context_object_name = "teams"

    def get_filter_form(self):
        if not hasattr(self, "_filter_form"):
            self._filter_form = TeamFilterForm(self.request.GET or None)
            self._filter_form.is_valid()
        return self._filter_form

    def get_queryset(self):
        data = getattr(self.get_filter_form(), "cleaned_data", {})
        q = (data.get("q") or "").strip()
        region = data.get("region") or ""
        sort = data.get("sort") or "rank"

        ranked = list(teams_with_counts().order_by("-wins", "name"))
        for rank, team in enumerate(ranked, start=1):
            team.rank = rank

        teams = ranked
        if q:
            teams = [t for t in teams if q.lower() in t.name.lower()]
        if region:
            teams = [t for t in teams if t.region == region]
        if sort == "name":
            teams.sort(key=lambda t: t.name.lower())
        elif sort == "wins":
            teams.sort(key=lambda t: (-t.wins, t.name.lower()))
        return teams

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        ctx["filter_form"] = self.get_filter_form()
        if self.request.user.is_authenticated:
            ctx["my_membership"] = (
                TeamMember.objects.select_related("team").filter(profile=self.request.user).first()
            )
        return ctx


class TeamCreateView(LoginRequiredMixin, FormView):
    form_class = TeamCreateForm
    template_name = "players/team_form.html"

    def form_valid(self, form):
        try:
            team = create_team(captain=self.request.user, **form.cleaned_data)
        except ValidationError as e:
            for msg in e.messages:
                messages.error(self.request, msg)
            return self.form_invalid(form)
        except DatabaseError:
            logger.exception("Team creation failed for %s", self.request.user.username)
            messages.error(self.request, "Could not create the team right now. Please try again.")
            return self.form_invalid(form)

        messages.success(
            self.request,
            f"Team “{team.name}” created. Share code {team.team_code} with your teammates.",
        )
        return redirect("players:team_detail", pk=team.pk)


class TeamJoinView(LoginRequiredMixin, FormView):
    form_class = JoinTeamForm
    template_name = "players/team_join.html"

    def form_valid(self, form):
        try:
            team = join_team_by_code(profile=self.request.user, code=form.cleaned_data["code"])
        except ValidationError as e:
            for msg in e.messages:
                messages.error(self.request, msg)
            return self.form_invalid(form)
        except DatabaseError:
            logger.exception("Joining team failed for %s", self.request.user.username)
            messages.error(self.request, "Could not join the team right now. Please try again.")
            return self.form_invalid(form)

        messages.success(self.request, f"You have joined {team.name}.")
        return redirect("players:team_detail", pk=team.pk)


class TeamDetailView(DetailView):
    template_name = "players/team_detail.html"
    context_object_name = "team"

    def get_queryset(self):
        return teams_with_counts()

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        team = self.object
        user = self.request.user
        ctx["members"] = team.members.select_related("profile").order_by("-role", "joined_at")
        ctx["is_captain"] = bool(user.is_authenticated and team.captain_id == user.pk)
        return ctx


# ---------------- Leaderboard ----------------
class LeaderboardView(TemplateView):
    template_name = "players/leaderboard.html"

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        q = (self.request.GET.get("q") or "").strip()
        stats = PlayerStats.objects.select_related("profile").order_by("-kills", "profile__username")
        if q:
            stats = stats.filter(Q(profile__username__icontains=q) | Q(profile__full_name__icontains=q))
        ctx.update({"player_stats": stats[:100], "team_standings": team_standings(), "q": q})
        return ctx
