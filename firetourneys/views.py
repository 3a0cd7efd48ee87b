from django.utils import timezone
from django.views.generic import TemplateView

from news.models import News
from players.services import team_standings
from streams.models import Stream
from tournaments.models import Tournament
from tournaments.services import tournaments_with_counts, with_fill


class HomeView(TemplateView):
    template_name = "home.html"

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        now = timezone.now()
        ctx.update(
            {
                "tournaments": with_fill(
                    tournaments_with_counts()
                    .exclude(status=Tournament.Status.COMPLETED)
                    .filter(start_date__gte=now)
                    .order_by("start_date")[:4]
                ),
                "top_teams": team_standings(limit=5),
                "streams": Stream.objects.select_related("streamer").order_by("-is_live", "-viewers", "scheduled_for")[:4],
                "latest_news": News.objects.order_by("-published_at", "-id")[:3],
            }
        )
        return ctx
