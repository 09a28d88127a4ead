import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class MoviesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "Movies"

    def ready(self):
        from .authorization import get_authorization_service
        from .authorization.settings import get_authorization_settings

        service = get_authorization_service()
        required = get_authorization_settings().required_policies
        # Raises PolicyNotFound and stops startup when a policy is missing.
        service.policies.validate(required)
        logger.info(
            "Authorization ready: policies=%s handlers=%s",
            service.policies.names(),
            len(service.registrations()),
        )
