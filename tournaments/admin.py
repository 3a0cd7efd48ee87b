# tournaments/admin.py
from django.contrib import admin
from .models import Match, MatchParticipant, Tournament, TournamentRegistration


class TournamentRegistrationInline(admin.TabularInline):
    model = TournamentRegistration
    extra = 0
    raw_id_fields = ("profile", "team")


@admin.register(Tournament)
class TournamentAdmin(admin.ModelAdmin):
    list_display = ("title", "status", "mode", "team_size", "start_date", "registration_deadline", "max_teams")
    list_filter = ("status", "mode", "team_size", "start_date")
    search_fields = ("title", "description")
    raw_id_fields = ("creator",)
    inlines = [TournamentRegistrationInline]


class MatchParticipantInline(admin.TabularInline):
    model = MatchParticipant
    extra = 0
    raw_id_fields = ("profile", "team")


@admin.register(Match)
class MatchAdmin(admin.ModelAdmin):
    list_display = ("tournament", "round_number", "match_number", "start_time", "map", "status")
    list_filter = ("status", "tournament")
    search_fields = ("tournament__title", "map")
    inlines = [MatchParticipantInline]


@admin.register(TournamentRegistration)
class TournamentRegistrationAdmin(admin.ModelAdmin):
    list_display = ("tournament", "profile", "team", "payment_status", "registration_date")
    list_filter = ("payment_status", "tournament")
    search_fields = ("tournament__title", "profile__username", "team__name")
    raw_id_fields = ("profile", "team")
