from django.urls import path
from . import views

app_name = "backoffice"

urlpatterns = [
    path("", views.dashboard, name="dashboard"),

    # Tournaments
    path("tournaments/", views.TournamentPanelView.as_view(), name="tournaments"),
    path("tournaments/new/", views.TournamentCreatePanelView.as_view(), name="tournament_new"),
    path("tournaments/<int:pk>/edit/", views.TournamentUpdatePanelView.as_view(), name="tournament_edit"),
    path("tournaments/<int:pk>/delete/", views.TournamentDeletePanelView.as_view(), name="tournament_delete"),

    # Teams
    path("teams/", views.TeamPanelView.as_view(), name="teams"),
    path("teams/new/", views.TeamCreatePanelView.as_view(), name="team_new"),
    path("teams/<int:pk>/edit/", views.TeamUpdatePanelView.as_view(), name="team_edit"),
    path("teams/<int:pk>/delete/", views.TeamDeletePanelView.as_view(), name="team_delete"),

    # Schedule
    path("schedule/", views.MatchPanelView.as_view(), name="matches"),
    path("schedule/new/", views.MatchCreatePanelView.as_view(), name="match_new"),
    path("schedule/<int:pk>/edit/", views.MatchUpdatePanelView.as_view(), name="match_edit"),
    path("schedule/<int:pk>/delete/", views.MatchDeletePanelView.as_view(), name="match_delete"),

    # Leaderboard
    path("leaderboard/", views.LeaderboardPanelView.as_view(), name="leaderboard"),
    path("leaderboard/new/", views.PlayerStatsCreatePanelView.as_view(), name="stats_new"),
    path("leaderboard/<int:pk>/edit/", views.PlayerStatsUpdatePanelView.as_view(), name="stats_edit"),

    # News
    path("news/", views.NewsPanelView.as_view(), name="news"),
    path("news/new/", views.NewsCreatePanelView.as_view(), name="news_new"),
    path("news/<int:pk>/edit/", views.NewsUpdatePanelView.as_view(), name="news_edit"),
    path("news/<int:pk>/delete/", views.NewsDeletePanelView.as_view(), name="news_delete"),

    # Streams
    path("streams/", views.StreamPanelView.as_view(), name="streams"),
    path("streams/new/", views.StreamCreatePanelView.as_view(), name="stream_new"),
    path("streams/<int:pk>/edit/", views.StreamUpdatePanelView.as_view(), name="stream_edit"),
    path("streams/<int:pk>/delete/", views.StreamDeletePanelView.as_view(), name="stream_delete"),
    path("streams/<int:pk>/toggle-live/", views.StreamToggleLiveView.as_view(), name="stream_toggle_live"),
]
