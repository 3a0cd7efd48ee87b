import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "firetourneys.settings")

# /tournaments/feed/ only streams incrementally under wsgi.py
application = get_asgi_application()
