from django.urls import path

from . import views

app_name = "streams"

urlpatterns = [
    path("", views.StreamListView.as_view(), name="stream_list"),
]
