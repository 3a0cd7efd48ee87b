from __future__ import annotations

from django import forms
from django.contrib.auth import get_user_model

from news.models import News
from players.forms import style_form
from players.models import PlayerStats, Team
from streams.models import Stream
from tournaments.forms import DATETIME_WIDGET

User = get_user_model()


class TeamAdminForm(forms.ModelForm):
    """Name/bio/region/logo only. Captain and code are set at creation."""

    class Meta:
        model = Team
        fields = ["name", "bio", "region", "logo_url"]
        widgets = {"bio": forms.Textarea(attrs={"rows": 3})}

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        style_form(self)


class PlayerStatsForm(forms.ModelForm):
    class Meta:
        model = PlayerStats
        fields = ["total_matches", "wins", "kills", "deaths", "assists"]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        style_form(self)


class PlayerStatsCreateForm(PlayerStatsForm):
    class Meta(PlayerStatsForm.Meta):
        fields = ["profile"] + PlayerStatsForm.Meta.fields

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Only profiles without a stats row
        self.fields["profile"].queryset = User.objects.filter(player_stats__isnull=True).order_by("username")
        self.fields["profile"].label = "Player"
        style_form(self)


class NewsForm(forms.ModelForm):
    class Meta:
        model = News
        fields = ["title", "category", "image_url", "is_featured", "content"]
        widgets = {"content": forms.Textarea(attrs={"rows": 10})}

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        style_form(self)


class StreamForm(forms.ModelForm):
    class Meta:
        model = Stream
        fields = ["title", "description", "stream_url", "thumbnail_url", "is_live", "viewers", "streamer", "scheduled_for"]
        widgets = {
            "description": forms.Textarea(attrs={"rows": 3}),
            "scheduled_for": DATETIME_WIDGET,
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["streamer"].queryset = User.objects.filter(is_active=True).order_by("username")
        style_form(self)
