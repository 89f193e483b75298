"""WSGI config for car_hire project."""

import os
from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "car_hire.settings")

application = get_wsgi_application()
