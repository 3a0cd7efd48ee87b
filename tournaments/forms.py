# tournaments/forms.py
from __future__ import annotations

from django import forms
from django.forms import inlineformset_factory

from players.forms import style_form
from .models import Match, MatchParticipant, Tournament

DATETIME_WIDGET = forms.DateTimeInput(attrs={"type": "datetime-local"}, format="%Y-%m-%dT%H:%M")


class TournamentForm(forms.ModelForm):
    class Meta:
        model = Tournament
        fields = [
            "title", "description", "start_date", "end_date", "registration_deadline",
            "prize_pool", "entry_fee", "max_teams", "team_size", "mode", "status",
            "image_url", "rules",
        ]
        widgets = {
            "start_date": DATETIME_WIDGET,
            "end_date": DATETIME_WIDGET,
            "registration_deadline": DATETIME_WIDGET,
            "description": forms.Textarea(attrs={"rows": 3}),
            "rules": forms.Textarea(attrs={"rows": 5}),
            "prize_pool": forms.TextInput(attrs={"placeholder": "e.g. ₹10,000"}),
            "entry_fee": forms.TextInput(attrs={"placeholder": "Blank for free entry"}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        style_form(self)


class MatchForm(forms.ModelForm):
    class Meta:
        model = Match
        fields = ["tournament", "round_number", "match_number", "start_time", "end_time", "map", "status", "stream_url"]
        widgets = {
            "start_time": DATETIME_WIDGET,
            "end_time": DATETIME_WIDGET,
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["tournament"].queryset = Tournament.objects.order_by("title")
        style_form(self)


class MatchParticipantForm(forms.ModelForm):
    class Meta:
        model = MatchParticipant
        fields = ["team", "profile", "kills", "placement", "points"]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        style_form(self)


MatchParticipantFormSet = inlineformset_factory(
    Match,
    MatchParticipant,
    form=MatchParticipantForm,
    extra=2,
    can_delete=True,
)


class TournamentCreateForm(TournamentForm):
    """New tournaments always open with registration; status is edited later."""

    class Meta(TournamentForm.Meta):
        fields = [f for f in TournamentForm.Meta.fields if f != "status"]
