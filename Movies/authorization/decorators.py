from __future__ import annotations

from functools import wraps
from typing import Any, Callable

from django.http import Http404, JsonResponse
from django.shortcuts import redirect

from . import get_authorization_service
from .contracts import AuthorizationResult
from .exceptions import ResourceNotFound
from .identity import principal_from_request
from .requirements import Requirement
from .settings import get_authorization_settings


def challenge(request, result: AuthorizationResult):
    """
    Translate a failed result into a response:
    - unauthenticated -> login page, coming back to the current path
    - forbidden on /api/ -> JSON 403
    - forbidden elsewhere -> access denied page
    """
    if result.is_unauthenticated:
        from django.contrib.auth.views import redirect_to_login

        return redirect_to_login(request.get_full_path())

    if request.path.startswith("/api/"):
        return JsonResponse(
            {
                "status": "error",
                "reason": "; ".join(result.failure_reasons),
                "failure": result.failure.value if result.failure else "",
            },
            status=403,
        )
    return redirect(get_authorization_settings().access_denied_url)


def policy_required(policy_name: str):
    def decorator(view_func):
        @wraps(view_func)
        def _wrapped_view(request, *args, **kwargs):
            principal = principal_from_request(request)
            result = get_authorization_service().authorize_policy(principal, policy_name)
            request.authorization_result = result
            if not result.succeeded:
                return challenge(request, result)
            return view_func(request, *args, **kwargs)
        return _wrapped_view
    return decorator


def resource_required(
    loader: Callable[[Any], Any],
    requirement: Requirement,
    url_kwarg: str = "id",
):
    """Load the resource named by ``url_kwarg``, authorize it and hand it to the view as ``resource``."""

    def decorator(view_func):
        @wraps(view_func)
        def _wrapped_view(request, *args, **kwargs):
            try:
                resource = loader(kwargs[url_kwarg])
            except ResourceNotFound as exc:
                raise Http404(str(exc)) from exc
            if resource is None:
                raise Http404(f"No resource matches {url_kwarg}={kwargs[url_kwarg]}.")

            principal = principal_from_request(request)
            result = get_authorization_service().authorize(principal, resource, requirement)
            request.authorization_result = result
            if not result.succeeded:
                return challenge(request, result)
            return view_func(request, *args, resource=resource, **kwargs)
        return _wrapped_view
    return decorator
