"""
WSGI config for the fieldplan project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "cc.settings")

application = get_wsgi_application()
