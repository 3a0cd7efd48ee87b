from datetime import timedelta

import pytest
from django.urls import reverse
from django.utils import timezone

from news.models import News


def test_excerpt_short_content_untouched():
    assert News(content="  Patch notes are out.  ").excerpt == "Patch notes are out."


def test_excerpt_trims_on_word_boundary():
    content = "word " * 60
    excerpt = News(content=content).excerpt
    assert excerpt.endswith("word…")
    assert len(excerpt) <= 201
    assert "wor…" not in excerpt


@pytest.fixture
def articles(db):
    now = timezone.now()
    old_featured = News.objects.create(
        title="Old featured", content="Season one recap", is_featured=True, published_at=now - timedelta(days=9)
    )
    featured = News.objects.create(
        title="Grand finals announced",
        content="The finals are coming to Bermuda.",
        category=News.Category.TOURNAMENT,
        is_featured=True,
        published_at=now - timedelta(days=2),
    )
    update = News.objects.create(
        title="OB45 patch", content="Balance changes", category=News.Category.UPDATE, published_at=now - timedelta(days=1)
    )
    guide = News.objects.create(
        title="Gloo wall tips", content="Build faster", category=News.Category.GUIDE, published_at=now
    )
    return {"old_featured": old_featured, "featured": featured, "update": update, "guide": guide}


@pytest.mark.django_db
class TestNewsList:
    def test_featured_first_then_newest(self, client, articles):
        resp = client.get(reverse("news:news_list"))
        assert resp.context["featured"] == articles["featured"]
        assert list(resp.context["articles"]) == [articles["guide"], articles["update"], articles["old_featured"]]

    def test_category_filter(self, client, articles):
        resp = client.get(reverse("news:news_list"), {"category": News.Category.UPDATE})
        assert resp.context["featured"] is None
        assert list(resp.context["articles"]) == [articles["update"]]

    def test_search_title_and_content(self, client, articles):
        resp = client.get(reverse("news:news_list"), {"q": "bermuda"})
        assert resp.context["featured"] == articles["featured"]
        assert list(resp.context["articles"]) == []

        resp = client.get(reverse("news:news_list"), {"q": "gloo"})
        assert list(resp.context["articles"]) == [articles["guide"]]

    def test_detail(self, client, articles):
        resp = client.get(reverse("news:news_detail", args=[articles["update"].pk]))
        assert resp.status_code == 200
        assert resp.context["article"] == articles["update"]

    def test_detail_missing(self, client, articles):
        assert client.get(reverse("news:news_detail", args=[999])).status_code == 404
