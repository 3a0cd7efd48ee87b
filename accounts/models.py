from django.conf import settings
from django.contrib.auth.models import AbstractUser, UserManager as DjangoUserManager
from django.db import models
from django.db.models import Q


def normalize_email_address(email):
    return (email or "").strip().lower()


class UserManager(DjangoUserManager):
    """Every new login is a player unless told otherwise; superusers are always admins."""
    use_in_migrations = True

    def create_user(self, username, email=None, password=None, **extra_fields):
        extra_fields.setdefault("role", User.Roles.PLAYER)
        return super().create_user(username, normalize_email_address(email), password, **extra_fields)

    def create_superuser(self, username, email=None, password=None, **extra_fields):
        extra_fields.setdefault("role", User.Roles.ADMIN)
        if extra_fields["role"] != User.Roles.ADMIN:
            raise ValueError("A superuser must have the admin role.")
        return super().create_superuser(username, normalize_email_address(email), password, **extra_fields)


class User(AbstractUser):
    """
    The player profile doubles as the login.

    `role` decides who sees the backoffice: admins and staff do, players don't.
    Django's own is_staff flag is honoured too so dj-admin users aren't locked out.
    """
    class Roles(models.TextChoices):
        ADMIN = "admin", "Admin"
        STAFF = "staff", "Staff"
        PLAYER = "player", "Player"

    role = models.CharField(max_length=20, choices=Roles.choices, default=Roles.PLAYER, db_index=True)
    full_name = models.CharField(max_length=150, blank=True)
    bio = models.TextField(blank=True)
    avatar = models.ImageField(upload_to="avatars/", null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    class Meta:
        constraints = [
            models.CheckConstraint(
                name="superuser_requires_admin_role",
                condition=Q(is_superuser=False) | Q(role="admin"),
            ),
        ]

    def __str__(self) -> str:
        return self.display_name

    def is_admin_like(self) -> bool:
        return self.is_staff or self.role in (self.Roles.ADMIN, self.Roles.STAFF)

    @property
    def display_name(self) -> str:
        return self.username or self.full_name or "Unknown Player"


class RoleChangeLog(models.Model):
    """Audit trail for backoffice role changes. Actors can't be deleted while referenced."""
    target = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="role_change_events"
    )
    changed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="role_changes_made"
    )
    old_role = models.CharField(max_length=20)
    new_role = models.CharField(max_length=20)
    reason = models.CharField(max_length=255, blank=True)
    changed_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-changed_at"]
        indexes = [models.Index(fields=["changed_at"], name="rolelog_changed_at_idx")]

    def __str__(self) -> str:
        return f"{self.target}: {self.old_role} -> {self.new_role} by {self.changed_by}"
