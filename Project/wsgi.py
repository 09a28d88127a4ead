"""
WSGI config for Project project.

It exposes the WSGI callable as a module-level variable named ``application``.

For more information on this file, see
https://docs.djangoproject.com/en/5.0/howto/deployment/wsgi/
"""

import logging
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'Project.settings')

application = get_wsgi_application()

# Log the authorization wiring so a misconfigured deployment is obvious in the logs.
from django.conf import settings  # noqa: E402

logger = logging.getLogger("movies.startup")
release = os.getenv("GIT_SHA") or "unknown"
logger.info(
    "Movies startup release=%s DEBUG=%s permissions_url=%s required_policies=%s",
    release,
    settings.DEBUG,
    getattr(settings, "MOVIES_REVIEW_PERMISSIONS_API_BASE_URL", "") or "local",
    getattr(settings, "MOVIES_REQUIRED_POLICIES", None),
)
