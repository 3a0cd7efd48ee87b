import logging

from django.conf import settings
from django.contrib import messages
from django.contrib.auth import get_user_model, login, logout
from django.contrib.auth.decorators import login_required
from django.core.cache import cache
from django.db import DatabaseError
from django.db.models import ProtectedError
from django.shortcuts import redirect, render
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_http_methods

from players.models import PlayerStats, TeamMember
from .forms import LoginForm, ProfileForm, RegisterForm

User = get_user_model()
logger = logging.getLogger(__name__)


class LoginThrottle:
    """
    Failed logins counted per (client IP, username) in the cache.
    Reaching the limit locks that pair out for the lock-out window.
    """

    def __init__(self, request, username):
        ip = request.META.get("REMOTE_ADDR", "0.0.0.0")
        self.label = f"{username} from {ip}"
        self.attempts_key = f"login:attempts:{ip}:{username}"
        self.lock_key = f"login:lock:{ip}:{username}"
        self.limit = getattr(settings, "LOGIN_RATE_LIMIT_ATTEMPTS", 5)
        self.window = getattr(settings, "LOGIN_RATE_LIMIT_LOCKOUT_MINUTES", 10) * 60

    @property
    def locked(self) -> bool:
        return cache.get(self.lock_key) is not None

    def fail(self):
        failures = cache.get(self.attempts_key, 0) + 1
        cache.set(self.attempts_key, failures, self.window)
        if failures >= self.limit:
            cache.set(self.lock_key, failures, self.window)
            logger.warning("Locking out %s after %d failed logins", self.label, failures)

    def reset(self):
        cache.delete_many([self.attempts_key, self.lock_key])


def _safe_next(request):
    target = request.POST.get("next") or request.GET.get("next")
    if target and url_has_allowed_host_and_scheme(
        target, allowed_hosts={request.get_host()}, require_https=request.is_secure()
    ):
        return target
    return None


@require_http_methods(["GET", "POST"])
def register_view(request):
    form = RegisterForm(request.POST or None)
    if request.method == "POST" and form.is_valid():
        user = form.save()
        logger.info("New player registered: %s", user.username)
        messages.success(request, "Account created. You can log in now.")
        return redirect("accounts:login")
    return render(request, "accounts/register.html", {"form": form})


@require_http_methods(["GET", "POST"])
def login_view(request):
    next_url = _safe_next(request)
    form = LoginForm(request, data=request.POST or None)

    if request.method == "POST":
        throttle = LoginThrottle(request, request.POST.get("username", ""))
        if throttle.locked:
            messages.error(request, "Too many attempts. Try again later.")
            return render(request, "accounts/login.html", {"form": LoginForm(request), "next": next_url})

        if form.is_valid():
            user = form.get_user()
            throttle.reset()
            login(request, user)
            messages.success(request, f"Welcome back, {user.display_name}!")
            if next_url:
                return redirect(next_url)
            return redirect("backoffice:dashboard" if user.is_admin_like() else "accounts:profile")

        throttle.fail()

    return render(request, "accounts/login.html", {"form": form, "next": next_url})


@login_required
@require_http_methods(["GET", "POST"])
def logout_view(request):
    if request.method == "POST":
        logout(request)
        messages.info(request, "You have been logged out.")
        return redirect("home")
    return render(request, "accounts/logout_confirm.html")


@login_required
@require_http_methods(["GET", "POST"])
def profile_view(request):
    user = request.user

    if request.POST.get("action") == "remove_avatar":
        if user.avatar:
            user.avatar.delete(save=False)
        user.avatar = None
        try:
            user.save(update_fields=["avatar", "updated_at"])
        except DatabaseError:
            logger.exception("Removing avatar of %s failed", user.username)
            messages.error(request, "Could not update your profile. Please try again.")
        else:
            messages.success(request, "Profile photo removed.")
        return redirect("accounts:profile")

    form = ProfileForm(request.POST or None, request.FILES or None, instance=user)
    if request.method == "POST" and form.is_valid():
        try:
            form.save()
        except DatabaseError:
            logger.exception("Saving profile of %s failed", user.pk)
            messages.error(request, "Could not update your profile. Please try again.")
        else:
            messages.success(request, "Profile updated.")
        return redirect("accounts:profile")

    membership = TeamMember.objects.select_related("team").filter(profile=user).first()
    context = {
        "form": form,
        "membership": membership,
        "team": membership.team if membership else None,
        "stats": PlayerStats.objects.filter(profile=user).first(),
    }
    return render(request, "accounts/profile.html", context)


@login_required
@require_http_methods(["GET", "POST"])
def delete_account_view(request):
    if request.method != "POST":
        return render(request, "accounts/delete_account_confirm.html")

    user = request.user
    if user.is_superuser and not User.objects.filter(is_superuser=True, is_active=True).exclude(pk=user.pk).exists():
        messages.error(request, "You can’t delete the last active superuser.")
        return redirect("accounts:profile")

    username = user.username
    try:
        user.delete()
    except ProtectedError:
        messages.error(request, "This account is referenced by audit records and can’t be deleted.")
        return redirect("accounts:profile")

    logout(request)
    logger.info("Account %s deleted by its owner", username)
    messages.info(request, "Your account has been deleted.")
    return redirect("home")
