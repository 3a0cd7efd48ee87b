from django.urls import reverse

# (label, url name, who sees it)
NAV = [
    ("Home", "home", "all"),
    ("Tournaments", "tournaments:tournament_list", "all"),
    ("Teams", "players:team_list", "all"),
    ("Schedule", "tournaments:schedule", "all"),
    ("Leaderboard", "players:leaderboard", "all"),
    ("Streams", "streams:stream_list", "all"),
    ("News", "news:news_list", "all"),
    ("Admin", "backoffice:dashboard", "admin"),
    ("Profile", "accounts:profile", "member"),
    ("Login", "accounts:login", "anonymous"),
    ("Register", "accounts:register", "anonymous"),
]


def menu_context(request):
    """Top navigation for base.html, filtered by who is looking."""
    user = request.user
    audience = {"all"}
    if user.is_authenticated:
        audience.add("member")
        if user.is_admin_like():
            audience.add("admin")
    else:
        audience.add("anonymous")

    items = [{"label": label, "url": reverse(url_name)} for label, url_name, who in NAV if who in audience]
    # Longest matching prefix wins, so /tournaments/schedule/ highlights Schedule only
    matches = [i for i in items if request.path == i["url"] or (i["url"] != "/" and request.path.startswith(i["url"]))]
    current = max(matches, key=lambda i: len(i["url"]), default=None)
    for item in items:
        item["active"] = item is current
    return {"nav_items": items}
