import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Stream",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True)),
                ("thumbnail_url", models.URLField(blank=True)),
                ("stream_url", models.URLField()),
                ("is_live", models.BooleanField(db_index=True, default=False)),
                ("viewers", models.PositiveIntegerField(default=0)),
                ("scheduled_for", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("streamer", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="streams", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-is_live", "-viewers", "scheduled_for"],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("viewers__gte", 0)), name="stream_viewers_non_negative"),
                ],
            },
        ),
    ]
