import re
from datetime import timedelta
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError
from django.utils import timezone

from players.models import Team, TeamMember
from players.services import (
    create_team,
    generate_team_code,
    join_team_by_code,
    team_standings,
    teams_with_counts,
)
from tournaments.models import Match, MatchParticipant


def _match(tournament, number):
    return Match.objects.create(
        tournament=tournament, match_number=number, start_time=timezone.now() - timedelta(hours=number)
    )


@pytest.mark.django_db
class TestCreateTeam:
    def test_code_format(self):
        assert re.fullmatch(r"[A-Z0-9]{6}", generate_team_code())

    def test_creator_becomes_captain_member(self, player):
        team = create_team(captain=player, name="  Night Owls ", region=Team.Region.WEST)

        assert team.name == "Night Owls"
        assert team.captain == player
        assert re.fullmatch(r"[A-Z0-9]{6}", team.team_code)
        member = TeamMember.objects.get(profile=player)
        assert member.team == team
        assert member.role == TeamMember.Role.CAPTAIN

    def test_rejected_when_already_in_team(self, player, team):
        with pytest.raises(ValidationError, match="already in a team"):
            create_team(captain=player, name="Second Squad")
        assert Team.objects.count() == 1

    def test_duplicate_name_rejected(self, other_player, team):
        with pytest.raises(ValidationError, match="already exists"):
            create_team(captain=other_player, name="booyah squad")

    def test_backoffice_team_has_no_member_row(self, staff_admin):
        team = create_team(captain=staff_admin, name="House Team", add_captain_member=False)
        assert team.captain == staff_admin
        assert not team.members.exists()


@pytest.mark.django_db
class TestJoinTeam:
    def test_join_is_case_insensitive(self, other_player, team):
        joined = join_team_by_code(profile=other_player, code=" abc123 ")
        assert joined == team
        member = TeamMember.objects.get(profile=other_player)
        assert member.role == TeamMember.Role.MEMBER

    def test_invalid_code(self, other_player, team):
        with pytest.raises(ValidationError) as exc:
            join_team_by_code(profile=other_player, code="NOPE00")
        assert exc.value.messages == ["Invalid Team Code"]

    def test_empty_code(self, other_player):
        with pytest.raises(ValidationError):
            join_team_by_code(profile=other_player, code="")

    def test_already_in_team(self, player, team):
        with pytest.raises(ValidationError) as exc:
            join_team_by_code(profile=player, code=team.team_code)
        assert exc.value.messages == ["Already in a Team"]
        assert team.members.count() == 1


@pytest.mark.django_db
class TestStandings:
    def test_ranked_by_points_then_wins(self, tournament, team, other_player):
        rivals = Team.objects.create(name="Red Fangs", team_code="RED001", captain=other_player)
        m1, m2, m3 = _match(tournament, 1), _match(tournament, 2), _match(tournament, 3)

        MatchParticipant.objects.create(match=m1, team=team, kills=8, placement=1, points=20)
        MatchParticipant.objects.create(match=m2, team=team, kills=3, placement=4, points=5)
        MatchParticipant.objects.create(match=m3, team=team, kills=0, placement=6, points=0)
        MatchParticipant.objects.create(match=m1, team=rivals, kills=12, placement=2, points=30)

        standings = team_standings()

        assert [s.name for s in standings] == ["Red Fangs", "Booyah Squad"]
        assert [s.rank for s in standings] == [1, 2]
        booyah = standings[1]
        assert (booyah.matches, booyah.wins, booyah.kills, booyah.points) == (3, 1, 11, 25)
        assert booyah.kills_per_match == Decimal("3.67")

    def test_limit_and_solo_rows_ignored(self, tournament, team, player):
        m = _match(tournament, 1)
        MatchParticipant.objects.create(match=m, profile=player, kills=4, placement=1, points=10)
        MatchParticipant.objects.create(match=m, team=team, kills=4, placement=1, points=10)

        assert len(team_standings(limit=1)) == 1
        assert team_standings()[0].team_id == team.pk

    def test_teams_with_counts(self, tournament, team, other_player):
        join_team_by_code(profile=other_player, code=team.team_code)
        m1, m2 = _match(tournament, 1), _match(tournament, 2)
        MatchParticipant.objects.create(match=m1, team=team, placement=1)
        MatchParticipant.objects.create(match=m2, team=team, placement=3)

        annotated = teams_with_counts().get(pk=team.pk)
        assert annotated.member_count == 2
        assert annotated.wins == 1
