"""ASGI config for the FitBuddy project.

Exposes the ASGI application for servers such as uvicorn or daphne.
Bookings run through the synchronous ORM either way.
"""

import os
from django.core.asgi import get_asgi_application  # type: ignore

# Use the development settings by default. Production servers should set
# DJANGO_SETTINGS_MODULE accordingly.
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.dev')

application = get_asgi_application()
