from django.contrib import admin

from .models import News


@admin.register(News)
class NewsAdmin(admin.ModelAdmin):
    list_display = ("title", "category", "is_featured", "published_at", "author")
    list_filter = ("category", "is_featured")
    search_fields = ("title", "content")
    raw_id_fields = ("author",)
