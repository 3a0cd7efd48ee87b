import pytest

from accounts.models import User
from players.models import PlayerStats


@pytest.mark.django_db
class TestUser:
    def test_email_is_lowercased(self):
        u = User.objects.create_user(username="Ace", email="  ACE@Example.COM ", password="x")
        assert u.email == "ace@example.com"

    def test_default_role_is_player(self):
        u = User.objects.create_user(username="ace", password="x")
        assert u.role == User.Roles.PLAYER
        assert not u.is_admin_like()

    def test_display_name_fallbacks(self):
        u = User(username="", full_name="Full Name")
        assert u.display_name == "Full Name"
        u.full_name = ""
        assert u.display_name == "Unknown Player"
        u.username = "ace"
        assert u.display_name == "ace"

    def test_superuser_gets_admin_role(self):
        su = User.objects.create_superuser(username="root", email="root@example.com", password="x")
        assert su.role == User.Roles.ADMIN
        assert su.is_admin_like()

    def test_staff_role_is_admin_like(self):
        u = User.objects.create_user(username="mod", password="x", role=User.Roles.STAFF)
        assert u.is_admin_like()

    def test_new_player_gets_empty_stats(self):
        u = User.objects.create_user(username="ace", password="x")
        stats = PlayerStats.objects.get(profile=u)
        assert stats.kills == 0
        assert str(stats.kd_ratio) == "0.00"

    def test_staff_user_has_no_stats_row(self):
        u = User.objects.create_user(username="mod", password="x", role=User.Roles.STAFF)
        assert not PlayerStats.objects.filter(profile=u).exists()

    def test_promoting_to_superuser_fixes_role(self):
        u = User.objects.create_user(username="promoted", password="x")
        u.is_superuser = True
        u.save()
        u.refresh_from_db()
        assert u.role == User.Roles.ADMIN
