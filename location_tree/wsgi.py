"""
WSGI config for the location_tree project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "location_tree.settings")

application = get_wsgi_application()
