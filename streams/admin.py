from django.contrib import admin

from .models import Stream


@admin.register(Stream)
class StreamAdmin(admin.ModelAdmin):
    list_display = ("title", "streamer", "is_live", "viewers", "scheduled_for")
    list_filter = ("is_live",)
    search_fields = ("title", "description", "streamer__username")
    raw_id_fields = ("streamer",)
