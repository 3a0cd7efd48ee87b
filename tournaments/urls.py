# tournaments/urls.py
from django.urls import path
from . import views

app_name = "tournaments"

urlpatterns = [
    path("", views.TournamentListView.as_view(), name="tournament_list"),
    path("feed/", views.tournament_feed, name="tournament_feed"),
    path("schedule/", views.ScheduleView.as_view(), name="schedule"),
    path("<int:pk>/", views.TournamentDetailView.as_view(), name="tournament_detail"),
    path("<int:pk>/register/", views.TournamentRegisterView.as_view(), name="tournament_register"),
]
