"""
ASGI config for the location_tree project.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "location_tree.settings")

application = get_asgi_application()
