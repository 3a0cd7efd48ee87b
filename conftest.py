from datetime import timedelta

import pytest
from django.core.cache import cache
from django.utils import timezone

from accounts.models import User
from players.models import Team, TeamMember
from tournaments.models import Tournament

PASSWORD = "Sup3r-Secret-Pass!"


@pytest.fixture(autouse=True)
def _clear_cache():
    # login rate limiting keeps counters in the cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def make_user(db):
    def _make(username="player1", role=User.Roles.PLAYER, **extra):
        extra.setdefault("email", f"{username}@example.com")
        return User.objects.create_user(username=username, password=PASSWORD, role=role, **extra)
    return _make


@pytest.fixture
def player(make_user):
    return make_user("ghost", full_name="Ghost Rider")


@pytest.fixture
def other_player(make_user):
    return make_user("viper", full_name="Viper Jones")


@pytest.fixture
def staff_admin(make_user):
    return make_user("organiser", role=User.Roles.ADMIN)


@pytest.fixture
def player_client(client, player):
    client.force_login(player)
    return client


@pytest.fixture
def admin_panel_client(client, staff_admin):
    client.force_login(staff_admin)
    return client


@pytest.fixture
def make_tournament(db):
    def _make(title="Clash Squad Cup", **extra):
        now = timezone.now()
        extra.setdefault("start_date", now + timedelta(days=7))
        extra.setdefault("registration_deadline", now + timedelta(days=5))
        extra.setdefault("prize_pool", "₹10,000")
        extra.setdefault("max_teams", 4)
        return Tournament.objects.create(title=title, **extra)
    return _make


@pytest.fixture
def tournament(make_tournament):
    return make_tournament()


@pytest.fixture
def team(player):
    t = Team.objects.create(name="Booyah Squad", team_code="ABC123", captain=player, region=Team.Region.NORTH)
    TeamMember.objects.create(team=t, profile=player, role=TeamMember.Role.CAPTAIN)
    return t
