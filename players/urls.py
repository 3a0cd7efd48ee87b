from django.urls import path

from . import views

app_name = "players"

urlpatterns = [
    # Teams
    path("teams/", views.TeamListView.as_view(), name="team_list"),
    path("teams/create/", views.TeamCreateView.as_view(), name="team_create"),
    path("teams/join/", views.TeamJoinView.as_view(), name="team_join"),
    path("teams/<int:pk>/", views.TeamDetailView.as_view(), name="team_detail"),

    # Leaderboard
    path("leaderboard/", views.LeaderboardView.as_view(), name="leaderboard"),
]
