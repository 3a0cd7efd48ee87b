from django import forms
from django.contrib.auth import get_user_model
from django.contrib.auth.forms import AuthenticationForm, UserCreationForm

from .models import normalize_email_address

User = get_user_model()


class BootstrapFormMixin:
    """Tag every visible widget with the Bootstrap 5 class matching its type."""

    def apply_bootstrap(self):
        for field in self.fields.values():
            widget = field.widget
            if isinstance(widget, forms.CheckboxInput):
                css = "form-check-input"
            elif isinstance(widget, forms.Select):
                css = "form-select"
            else:
                css = "form-control"
            classes = widget.attrs.get("class", "").split()
            if css not in classes:
                widget.attrs["class"] = " ".join(classes + [css])


def _email_taken(email, *, exclude_pk=None):
    qs = User.objects.filter(email__iexact=email)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    return qs.exists()


class RegisterForm(BootstrapFormMixin, UserCreationForm):
    class Meta:
        model = User
        fields = ("username", "email", "full_name")
        widgets = {
            "username": forms.TextInput(attrs={"placeholder": "In-game name", "autocomplete": "username"}),
            "email": forms.EmailInput(attrs={"placeholder": "Email address", "autocomplete": "email"}),
            "full_name": forms.TextInput(attrs={"placeholder": "Full name", "autocomplete": "name"}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["email"].required = True
        self.fields["password1"].help_text = ""
        self.fields["password1"].widget.attrs["placeholder"] = "Password"
        self.fields["password2"].widget.attrs["placeholder"] = "Confirm password"
        self.apply_bootstrap()

    def clean_email(self):
        email = normalize_email_address(self.cleaned_data.get("email"))
        if _email_taken(email):
            raise forms.ValidationError("This email is already in use.")
        return email

    def save(self, commit=True):
        user = super().save(commit=False)
        # Self-registration never grants backoffice access
        user.role = User.Roles.PLAYER
        if commit:
            user.save()
        return user


class LoginForm(BootstrapFormMixin, AuthenticationForm):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["username"].widget.attrs["placeholder"] = "Username"
        self.fields["password"].widget.attrs["placeholder"] = "Password"
        self.apply_bootstrap()


class ProfileForm(BootstrapFormMixin, forms.ModelForm):
    class Meta:
        model = User
        fields = ["username", "full_name", "email", "bio", "avatar"]
        widgets = {
            "bio": forms.Textarea(attrs={"rows": 3, "placeholder": "Tell other players about yourself"}),
            "avatar": forms.FileInput(attrs={"accept": "image/*"}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.apply_bootstrap()

    def clean_email(self):
        email = normalize_email_address(self.cleaned_data.get("email"))
        if email and _email_taken(email, exclude_pk=self.instance.pk):
            raise forms.ValidationError("This email is already in use.")
        return email


class AdminRoleUpdateForm(BootstrapFormMixin, forms.Form):
    """
    Role picker for the users panel.

    Only superusers and admins may hand out the admin role, a superuser's role
    is pinned to admin, and nobody but a superuser edits their own role.
    """
    role = forms.ChoiceField(choices=())
    reason = forms.CharField(
        max_length=255,
        required=False,
        widget=forms.Textarea(attrs={"rows": 2, "placeholder": "Reason for change (optional)"}),
    )

    def __init__(self, *, target_user, acting_user, **kwargs):
        super().__init__(**kwargs)
        self.target_user = target_user
        self.acting_user = acting_user
        self.fields["role"].choices = self.allowed_roles(target_user, acting_user)
        self.apply_bootstrap()

    @staticmethod
    def can_grant_admin(acting_user) -> bool:
        return acting_user.is_superuser or acting_user.role == User.Roles.ADMIN

    @classmethod
    def allowed_roles(cls, target_user, acting_user):
        if target_user.is_superuser:
            return [(User.Roles.ADMIN, User.Roles.ADMIN.label)]
        choices = list(User.Roles.choices)
        if not cls.can_grant_admin(acting_user):
            choices = [c for c in choices if c[0] != User.Roles.ADMIN]
        return choices

    def clean(self):
        cleaned = super().clean()
        if self.target_user.pk == self.acting_user.pk and not self.acting_user.is_superuser:
            raise forms.ValidationError("You cannot change your own role.")
        return cleaned
