import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="News",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=200)),
                ("content", models.TextField()),
                ("category", models.CharField(choices=[("General", "General"), ("Tournament", "Tournament"), ("Update", "Update"), ("Interview", "Interview"), ("Guide", "Guide"), ("Team News", "Team News")], db_index=True, default="General", max_length=20)),
                ("image_url", models.URLField(blank=True)),
                ("is_featured", models.BooleanField(default=False)),
                ("published_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("author", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="news_posts", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "verbose_name_plural": "news",
                "ordering": ["-published_at", "-id"],
            },
        ),
    ]
