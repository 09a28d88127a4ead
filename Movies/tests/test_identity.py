from types import SimpleNamespace
from unittest import mock

from django.contrib.auth.models import AnonymousUser
from django.test import RequestFactory, SimpleTestCase, override_settings

from Movies.authorization.claims import Claim, Principal
from Movies.authorization.identity import AppClaimsService, principal_from_request, principal_from_user


def _user(username="u1", groups=(), full_name=""):
    group_manager = mock.Mock()
    group_manager.values_list.return_value = list(groups)
    return SimpleNamespace(
        is_authenticated=True,
        username=username,
        pk=1,
        groups=group_manager,
        get_full_name=lambda: full_name,
    )


@override_settings(
    MOVIES_APP_CLAIMS={
        "rev1": [["role", "Reviewer"], {"type": "country", "value": "France"}],
        "u1": [["role", "Admin"]],
    }
)
class IdentityTests(SimpleTestCase):
    def test_app_claims_from_settings(self):
        claims = AppClaimsService().get_claims("rev1")
        self.assertEqual(claims, [Claim("role", "Reviewer"), Claim("country", "France")])
        self.assertEqual(AppClaimsService().get_claims("nobody"), [])

    def test_anonymous_user_has_no_identity(self):
        principal = principal_from_user(AnonymousUser())
        self.assertFalse(principal.is_authenticated)
        self.assertEqual(principal.claims, ())
        self.assertFalse(principal_from_user(None).is_authenticated)

    def test_user_claims(self):
        principal = principal_from_user(_user("rev1", groups=["Customer"], full_name="Rita Ever"))
        self.assertTrue(principal.is_authenticated)
        self.assertEqual(principal.subject, "rev1")
        self.assertEqual(principal.find_first("name"), "Rita Ever")
        self.assertEqual(principal.roles, ("Customer", "Reviewer"))
        self.assertTrue(principal.has_claim("country", "France"))

    def test_group_and_app_claim_are_not_duplicated(self):
        principal = principal_from_user(_user("u1", groups=["Admin"]))
        self.assertEqual(principal.roles, ("Admin",))

    def test_principal_is_cached_on_request(self):
        request = RequestFactory().get("/")
        request.user = _user("u1")
        first = principal_from_request(request)
        request.user = AnonymousUser()
        self.assertIs(principal_from_request(request), first)

    def test_preset_principal_wins(self):
        request = RequestFactory().get("/")
        request.principal = Principal.from_claims([("sub", "svc")], authentication_type="Bearer")
        self.assertEqual(principal_from_request(request).subject, "svc")
