from __future__ import annotations

from django.contrib.admin.views.decorators import staff_member_required
from django.http import HttpResponseForbidden, JsonResponse

from .authorization.health import authorization_health_snapshot


@staff_member_required
def authorization_health(request):
    return JsonResponse(authorization_health_snapshot())


def access_denied(request):
    return HttpResponseForbidden("You are not allowed to perform this action.", content_type="text/plain")
