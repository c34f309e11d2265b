"""
WSGI entry point for the HIS backend.

Plain HTTP deployments (gunicorn, uwsgi) load ``application`` from
here; websocket pushes for the inventory dashboard need the ASGI entry
point in :mod:`hospital.asgi` instead.
"""
import os

from django.core.wsgi import get_wsgi_application  # type: ignore

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'hospital.settings')

application = get_wsgi_application()
