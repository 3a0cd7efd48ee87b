import pytest

from tournaments.models import Tournament


@pytest.mark.parametrize(
    "registered, max_teams, expected",
    [(0, 4, 0.0), (1, 4, 25.0), (4, 4, 100.0), (9, 4, 100.0), (-1, 4, 0.0), (1, 3, 100 / 3)],
)
def test_fill_percent_is_clamped(registered, max_teams, expected):
    assert Tournament(max_teams=max_teams).fill_percent(registered) == pytest.approx(expected)


def test_is_free():
    assert Tournament(entry_fee="").is_free
    assert Tournament(entry_fee="   ").is_free
    assert not Tournament(entry_fee="₹50 per squad").is_free


@pytest.mark.django_db
def test_defaults(tournament):
    assert tournament.status == Tournament.Status.REGISTRATION_OPEN
    assert tournament.team_size == Tournament.TeamSize.SQUAD
    assert tournament.mode == Tournament.Mode.ONLINE
