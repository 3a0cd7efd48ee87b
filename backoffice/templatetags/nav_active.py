from django import template
from django.urls import Resolver404, resolve

register = template.Library()


@register.simple_tag(takes_context=True)
def active(context, *url_names: str, cls="active"):
    """
    {% active "backoffice:teams" "backoffice:team_edit" %} -> "active" when the
    current view matches any name, or shares the namespace of a bare "ns:" prefix.
    """
    try:
        match = resolve(context.request.path)
    except Resolver404:
        return ""
    for name in url_names:
        if name.endswith(":") and match.namespace == name[:-1]:
            return cls
        if match.view_name == name:
            return cls
    return ""
