from django.test import SimpleTestCase

from Movies.authorization.claims import Principal
from Movies.authorization.contracts import MovieResource, ReviewResource
from Movies.authorization.handlers import (
    AuthorizationHandlerContext,
    MovieAuthorizationHandler,
    ReviewAuthorizationHandler,
)
from Movies.authorization.requirements import MovieOperations, ReviewOperations

from .helpers import StaticPermissionLookup, reviewer


class HandlerContextTests(SimpleTestCase):
    def test_abstention_is_not_success(self):
        context = AuthorizationHandlerContext()
        self.assertFalse(context.has_succeeded)
        self.assertFalse(context.has_failed)

    def test_explicit_failure_wins_over_success(self):
        context = AuthorizationHandlerContext()
        context.succeed()
        context.fail("blocked")
        context.succeed()
        self.assertFalse(context.has_succeeded)
        self.assertTrue(context.has_failed)
        self.assertEqual(context.reasons, ("blocked",))


class MovieAuthorizationHandlerTests(SimpleTestCase):
    def setUp(self):
        self.movie = MovieResource(id=1, country_name="France", title="Amelie")

    def _handle(self, principal, allowed):
        lookup = StaticPermissionLookup(countries=allowed)
        context = AuthorizationHandlerContext()
        MovieAuthorizationHandler(lookup).handle(context, principal, MovieOperations.REVIEW, self.movie)
        return context, lookup

    def test_reviewer_cleared_for_country_succeeds(self):
        context, _ = self._handle(reviewer(), {"France", "Germany"})
        self.assertTrue(context.has_succeeded)

    def test_reviewer_not_cleared_for_country_abstains(self):
        context, _ = self._handle(reviewer(), {"Germany"})
        self.assertFalse(context.has_succeeded)
        self.assertFalse(context.has_failed)

    def test_non_reviewer_abstains_without_lookup(self):
        principal = Principal.from_claims([("sub", "u1"), ("role", "Admin")])
        context, lookup = self._handle(principal, {"France"})
        self.assertFalse(context.has_succeeded)
        self.assertFalse(context.has_failed)
        self.assertEqual(lookup.calls, 0)


class ReviewAuthorizationHandlerTests(SimpleTestCase):
    def setUp(self):
        self.review = ReviewResource(id=7, movie_id=1, user_id="u1", stars=4, comment="Fine")

    def _handle(self, principal):
        context = AuthorizationHandlerContext()
        ReviewAuthorizationHandler().handle(context, principal, ReviewOperations.EDIT, self.review)
        return context

    def test_admin_succeeds_regardless_of_owner(self):
        context = self._handle(Principal.from_claims([("sub", "u9"), ("role", "Admin")]))
        self.assertTrue(context.has_succeeded)

    def test_owner_succeeds(self):
        self.assertTrue(self._handle(Principal.from_claims([("sub", "u1")])).has_succeeded)

    def test_other_user_abstains(self):
        context = self._handle(Principal.from_claims([("sub", "u2"), ("role", "Reviewer")]))
        self.assertFalse(context.has_succeeded)
        self.assertFalse(context.has_failed)

    def test_principal_without_subject_abstains(self):
        self.assertFalse(self._handle(Principal.anonymous()).has_succeeded)
