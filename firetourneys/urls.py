from django.contrib import admin as dj_admin
from django.urls import path, include
from django.conf.urls.static import static
from django.conf import settings

from . import views

urlpatterns = [
    # Django's own admin stays reachable at /dj-admin/; day-to-day editing happens in the backoffice.
    path("dj-admin/", dj_admin.site.urls),
    path("", views.HomeView.as_view(), name="home"),
    path("accounts/", include("accounts.urls")),
    path("backoffice/", include("backoffice.urls", namespace="backoffice")),
    path("tournaments/", include("tournaments.urls")),
    path("players/", include("players.urls")),
    path("news/", include("news.urls")),
    path("streams/", include("streams.urls")),
]

if settings.DEBUG:
    # This must match MEDIA_URL exactly (leading/trailing slashes matter)
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
