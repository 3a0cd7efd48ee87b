from django.urls import path

from . import views, views_admin

app_name = "accounts"

urlpatterns = [
    # Auth
    path("register/", views.register_view, name="register"),
    path("login/", views.login_view, name="login"),
    path("logout/", views.logout_view, name="logout"),
    path("profile/", views.profile_view, name="profile"),
    path("delete/", views.delete_account_view, name="delete_account"),

    # Admin-facing user management
    path("admin/users/", views_admin.users_list, name="users_list"),
    path("admin/users/<int:user_id>/role/", views_admin.change_user_role, name="change_user_role"),
]
