from __future__ import annotations

from django.db.models import Q
from django.views.generic import DetailView, ListView

from .models import News


class NewsListView(ListView):
    template_name = "news/news_list.html"
    context_object_name = "articles"
    paginate_by = 12

    def get_filtered(self):
        qs = News.objects.select_related("author")
        q = (self.request.GET.get("q") or "").strip()
        category = self.request.GET.get("category") or ""
        if q:
            qs = qs.filter(Q(title__icontains=q) | Q(content__icontains=q))
        if category in News.Category.values:
            qs = qs.filter(category=category)
        return qs

    def get_featured(self):
        if not hasattr(self, "_featured"):
            self._featured = self.get_filtered().filter(is_featured=True).order_by("-published_at", "-id").first()
        return self._featured

    def get_queryset(self):
        qs = self.get_filtered().order_by("-published_at", "-id")
        featured = self.get_featured()
        if featured is not None:
            qs = qs.exclude(pk=featured.pk)
        return qs

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        ctx.update(
            {
                "featured": self.get_featured(),
                "categories": News.Category.choices,
                "current_category": self.request.GET.get("category") or "",
                "q": (self.request.GET.get("q") or "").strip(),
            }
        )
        return ctx


class NewsDetailView(DetailView):
    model = News
    template_name = "news/news_detail.html"
    context_object_name = "article"

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        ctx["related"] = (
            News.objects.filter(category=self.object.category).exclude(pk=self.object.pk).order_by("-published_at")[:3]
        )
        return ctx
