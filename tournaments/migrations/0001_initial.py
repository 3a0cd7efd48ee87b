import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("players", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Tournament",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True)),
                ("start_date", models.DateTimeField()),
                ("end_date", models.DateTimeField(blank=True, null=True)),
                ("registration_deadline", models.DateTimeField()),
                ("prize_pool", models.CharField(max_length=60)),
                ("entry_fee", models.CharField(blank=True, help_text="Leave blank for free entry.", max_length=60)),
                ("max_teams", models.PositiveIntegerField(default=32, validators=[django.core.validators.MinValueValidator(1)])),
                ("team_size", models.CharField(choices=[("Solo", "Solo"), ("Duo (2 players)", "Duo (2 players)"), ("Squad (4 players)", "Squad (4 players)")], default="Squad (4 players)", max_length=20)),
                ("mode", models.CharField(choices=[("Online", "Online"), ("Offline", "Offline")], default="Online", max_length=10)),
                ("status", models.CharField(choices=[("Registration Open", "Registration Open"), ("In Progress", "In Progress"), ("Completed", "Completed")], db_index=True, default="Registration Open", max_length=20)),
                ("image_url", models.URLField(blank=True)),
                ("rules", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("creator", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="tournaments_created", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-created_at"],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("max_teams__gte", 1)), name="tournament_max_teams_positive"),
                ],
            },
        ),
        migrations.CreateModel(
            name="TournamentRegistration",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("payment_status", models.CharField(choices=[("Pending", "Pending"), ("Free", "Free"), ("Paid", "Paid")], default="Pending", max_length=10)),
                ("registration_date", models.DateTimeField(auto_now_add=True)),
                ("profile", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="tournament_registrations", to=settings.AUTH_USER_MODEL)),
                ("team", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="tournament_registrations", to="players.team")),
                ("tournament", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="registrations", to="tournaments.tournament")),
            ],
            options={
                "ordering": ["tournament_id", "registration_date"],
                "constraints": [
                    models.UniqueConstraint(condition=models.Q(("profile__isnull", False)), fields=("tournament", "profile"), name="unique_profile_per_tournament"),
                    models.UniqueConstraint(condition=models.Q(("team__isnull", False)), fields=("tournament", "team"), name="unique_team_per_tournament"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Match",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("round_number", models.PositiveSmallIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ("match_number", models.PositiveSmallIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ("start_time", models.DateTimeField()),
                ("end_time", models.DateTimeField(blank=True, null=True)),
                ("map", models.CharField(blank=True, max_length=60)),
                ("status", models.CharField(choices=[("Scheduled", "Scheduled"), ("Live", "Live"), ("Completed", "Completed"), ("Cancelled", "Cancelled")], default="Scheduled", max_length=16)),
                ("stream_url", models.URLField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("tournament", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="matches", to="tournaments.tournament")),
            ],
            options={
                "ordering": ["start_time", "id"],
                "indexes": [
                    models.Index(fields=["tournament", "round_number"], name="match_t_round_idx"),
                    models.Index(fields=["start_time"], name="match_start_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="MatchParticipant",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("kills", models.PositiveIntegerField(default=0)),
                ("placement", models.PositiveSmallIntegerField(blank=True, null=True, validators=[django.core.validators.MinValueValidator(1)])),
                ("points", models.IntegerField(default=0)),
                ("match", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="participants", to="tournaments.match")),
                ("profile", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="match_entries", to=settings.AUTH_USER_MODEL)),
                ("team", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="match_entries", to="players.team")),
            ],
            options={
                "ordering": ["match_id", "placement", "id"],
            },
        ),
    ]
