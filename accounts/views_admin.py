"""Users panel of the backoffice: browse accounts and change roles with an audit trail."""
import logging

from django.contrib import messages
from django.contrib.auth import get_user_model
from django.core.paginator import Paginator
from django.db import DatabaseError, transaction
from django.db.models import Count, Q
from django.shortcuts import get_object_or_404, redirect, render
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_http_methods

from .forms import AdminRoleUpdateForm
from .models import RoleChangeLog
from .permissions import admin_required

User = get_user_model()
logger = logging.getLogger(__name__)

USER_ORDERINGS = {
    "username": ("username",),
    "-last_login": ("-last_login", "username"),
    "-date_joined": ("-date_joined", "username"),
}


def _filtered_users(params):
    filters = {
        "q": (params.get("q") or "").strip(),
        "role": params.get("role") or "",
        "active": params.get("active") or "",
        "order": params.get("order") or "username",
    }
    if filters["order"] not in USER_ORDERINGS:
        filters["order"] = "username"

    qs = User.objects.all()
    if filters["q"]:
        q = filters["q"]
        qs = qs.filter(Q(username__icontains=q) | Q(email__icontains=q) | Q(full_name__icontains=q))
    if filters["role"] in User.Roles.values:
        qs = qs.filter(role=filters["role"])
    if filters["active"] in ("1", "0"):
        qs = qs.filter(is_active=filters["active"] == "1")
    return qs.order_by(*USER_ORDERINGS[filters["order"]]), filters


@admin_required
def users_list(request):
    qs, filters = _filtered_users(request.GET)
    roles_choices = [
        (value, label)
        for value, label in User.Roles.choices
        if value != User.Roles.ADMIN or AdminRoleUpdateForm.can_grant_admin(request.user)
    ]
    context = {
        "page": Paginator(qs, 25).get_page(request.GET.get("page")),
        "filters": filters,
        "roles_choices": roles_choices,
        "roles_summary": qs.values("role").annotate(total=Count("id")).order_by("role"),
        "kpi": {
            "total": qs.count(),
            "active": qs.filter(is_active=True).count(),
            "superusers": qs.filter(is_superuser=True).count(),
        },
    }
    return render(request, "accounts/admin_users_list.html", context)


@admin_required
@require_http_methods(["GET", "POST"])
def change_user_role(request, user_id):
    target = get_object_or_404(User, pk=user_id)
    form = AdminRoleUpdateForm(target_user=target, acting_user=request.user, data=request.POST or None)

    if request.method == "POST":
        if form.is_valid():
            old_role, new_role = target.role, form.cleaned_data["role"]
            try:
                with transaction.atomic():
                    target.role = new_role
                    target.save(update_fields=["role", "updated_at"])
                    RoleChangeLog.objects.create(
                        target=target,
                        changed_by=request.user,
                        old_role=old_role,
                        new_role=new_role,
                        reason=form.cleaned_data["reason"] or "Changed in the users panel",
                    )
            except DatabaseError:
                logger.exception("Changing role of %s failed", target.username)
                messages.error(request, "Could not change the role. Please try again.")
                return redirect("accounts:users_list")
            logger.info("%s set role of %s: %s -> %s", request.user.username, target.username, old_role, new_role)
            messages.success(request, f"{target.username} is now {target.get_role_display()}.")

            # the inline dropdown posts back its current filter/page
            next_url = request.POST.get("next")
            if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
                return redirect(next_url)
            return redirect("accounts:users_list")

        for err in form.non_field_errors():
            messages.error(request, err)

    return render(
        request,
        "accounts/change_user_role.html",
        {"form": form, "target": target, "history": target.role_change_events.select_related("changed_by")[:10]},
    )
