from django.contrib import admin, messages
from django.contrib.auth import get_user_model
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from players.models import PlayerStats, TeamMember
from .models import RoleChangeLog

User = get_user_model()


class PlayerStatsInline(admin.StackedInline):
    model = PlayerStats
    can_delete = False
    readonly_fields = ("kd_ratio",)
    fields = (("total_matches", "wins"), ("kills", "deaths", "assists"), "kd_ratio")


class TeamMembershipInline(admin.TabularInline):
    model = TeamMember
    extra = 0
    fields = ("team", "role", "joined_at")
    readonly_fields = ("joined_at",)


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    list_display = ("username", "full_name", "email", "role", "is_active", "last_login")
    list_filter = ("role", "is_active", "is_superuser")
    search_fields = ("username", "full_name", "email")
    ordering = ("username",)
    inlines = [TeamMembershipInline, PlayerStatsInline]

    fieldsets = (
        (None, {"fields": ("username", "password")}),
        ("Player profile", {"fields": ("full_name", "email", "bio", "avatar")}),
        ("Access", {"fields": ("role", "is_active", "is_staff", "is_superuser", "groups", "user_permissions")}),
        ("Dates", {"fields": ("last_login", "date_joined", "updated_at")}),
    )
    add_fieldsets = (
        (None, {"classes": ("wide",), "fields": ("username", "email", "role", "password1", "password2")}),
    )
    readonly_fields = ("last_login", "date_joined", "updated_at")

    def get_readonly_fields(self, request, obj=None):
        readonly = list(super().get_readonly_fields(request, obj))
        if not request.user.is_superuser:
            # role changes go through the users panel so they are audited
            readonly += ["role", "is_staff", "is_superuser", "user_permissions"]
        return readonly

    def delete_model(self, request, obj):
        others = User.objects.filter(is_superuser=True, is_active=True).exclude(pk=obj.pk)
        if obj.is_superuser and not others.exists():
            self.message_user(request, "You can’t delete the last active superuser.", level=messages.ERROR)
            return
        super().delete_model(request, obj)


@admin.register(RoleChangeLog)
class RoleChangeLogAdmin(admin.ModelAdmin):
    list_display = ("changed_at", "target", "old_role", "new_role", "changed_by")
    list_filter = ("new_role",)
    search_fields = ("target__username", "changed_by__username", "reason")
    date_hierarchy = "changed_at"

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
