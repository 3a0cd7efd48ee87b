from __future__ import annotations

from django import forms

from .models import Team


def _bs(field_or_bf, *, sel: bool = False, chk: bool = False) -> None:
    """
    Apply Bootstrap 5 classes: form-control, form-select or form-check-input.
    Conflicting classes are removed first.
    """
    field = getattr(field_or_bf, "field", field_or_bf)  # BoundField -> Field
    widget = field.widget
    classes = set(widget.attrs.get("class", "").split())

    classes.discard("form-control")
    classes.discard("form-select")
    classes.discard("form-check-input")

    if chk:
        classes.add("form-check-input")
    elif sel:
        classes.add("form-select")
    else:
        classes.add("form-control")

    widget.attrs["class"] = " ".join(sorted(c for c in classes if c))


def style_form(form: forms.BaseForm) -> None:
    for bf in form.visible_fields():
        _bs(
            bf,
            sel=isinstance(bf.field.widget, (forms.Select, forms.SelectMultiple)),
            chk=isinstance(bf.field.widget, forms.CheckboxInput),
        )


class TeamCreateForm(forms.ModelForm):
    class Meta:
        model = Team
        fields = ["name", "bio", "region", "logo_url"]
        widgets = {
            "name": forms.TextInput(attrs={"placeholder": "Team name"}),
            "bio": forms.Textarea(attrs={"rows": 3, "placeholder": "Describe your team"}),
            "logo_url": forms.URLInput(attrs={"placeholder": "https://..."}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        style_form(self)


class JoinTeamForm(forms.Form):
    code = forms.CharField(
        max_length=12,
        label="Team code",
        widget=forms.TextInput(attrs={"placeholder": "e.g. AB12CD", "autocomplete": "off"}),
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        style_form(self)

    def clean_code(self):
        return self.cleaned_data["code"].strip().upper()


class TeamFilterForm(forms.Form):
    SORT_CHOICES = [("rank", "Rank"), ("name", "Name"), ("wins", "Wins")]

    q = forms.CharField(required=False, label="Search")
    region = forms.ChoiceField(required=False, choices=[("", "All regions")] + list(Team.Region.choices))
    sort = forms.ChoiceField(required=False, choices=SORT_CHOICES)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        style_form(self)
