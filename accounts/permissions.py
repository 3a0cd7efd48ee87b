# accounts/permissions.py
from functools import wraps

from django.contrib.auth import get_user_model
from django.contrib.auth.decorators import login_required
from django.contrib.auth.mixins import LoginRequiredMixin, UserPassesTestMixin
from django.http import HttpResponseForbidden

User = get_user_model()


def is_admin_like(user: User) -> bool:
    # Centralized gatekeeper. Mirrors accounts.User.is_admin_like
    return bool(user.is_authenticated and (user.is_staff or getattr(user, "role", None) in {"admin", "staff"}))


def admin_required(view_func):
    """Anonymous users go to login; logged-in non-admins get a 403."""
    @wraps(view_func)
    @login_required
    def _wrapped(request, *args, **kwargs):
        if is_admin_like(request.user):
            return view_func(request, *args, **kwargs)
        return HttpResponseForbidden("You do not have permission to access the backoffice.")
    return _wrapped


class AdminRequiredMixin(LoginRequiredMixin, UserPassesTestMixin):
    raise_exception = True

    def test_func(self):
        return is_admin_like(self.request.user)

    def handle_no_permission(self):
        # Anonymous users still go to login
        if not self.request.user.is_authenticated:
            self.raise_exception = False
        return super().handle_no_permission()
