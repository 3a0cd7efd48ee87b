from django.contrib import admin

from .models import PlayerStats, Team, TeamMember


class TeamMemberInline(admin.TabularInline):
    model = TeamMember
    extra = 0
    raw_id_fields = ("profile",)


@admin.register(Team)
class TeamAdmin(admin.ModelAdmin):
    list_display = ("name", "region", "team_code", "captain", "created_at")
    list_filter = ("region",)
    search_fields = ("name", "team_code", "captain__username")
    raw_id_fields = ("captain",)
    inlines = [TeamMemberInline]


@admin.register(PlayerStats)
class PlayerStatsAdmin(admin.ModelAdmin):
    list_display = ("profile", "total_matches", "wins", "kills", "deaths", "assists", "kd_ratio")
    search_fields = ("profile__username", "profile__full_name")
    readonly_fields = ("kd_ratio",)
