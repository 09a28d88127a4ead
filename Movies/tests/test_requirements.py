from django.test import SimpleTestCase

from Movies.authorization.claims import Principal
from Movies.authorization.exceptions import PolicyNotFound
from Movies.authorization.policies import SEARCH_POLICY, PolicyRegistry, build_default_policies
from Movies.authorization.requirements import (
    Assertion,
    MovieOperations,
    NamedOperation,
    PolicyBuilder,
    ReviewOperations,
    require_claim,
    require_role,
)


class RequirementEqualityTests(SimpleTestCase):
    def test_named_operations_compare_by_name(self):
        self.assertEqual(NamedOperation("Review"), MovieOperations.REVIEW)
        self.assertEqual(hash(NamedOperation("Edit")), hash(ReviewOperations.EDIT))
        self.assertNotEqual(MovieOperations.REVIEW, ReviewOperations.EDIT)

    def test_role_requirements_compare_by_value(self):
        self.assertEqual(require_role("Admin", "Customer"), require_role("Customer", "Admin"))
        self.assertNotEqual(require_role("Admin"), require_role("Customer"))

    def test_require_claim_without_values_accepts_any_value(self):
        requirement = require_claim("email")
        self.assertTrue(requirement.evaluate(Principal.from_claims([("email", "a@b.c")])))
        self.assertFalse(requirement.evaluate(Principal.from_claims([("sub", "u1")])))

    def test_assertion_uses_predicate(self):
        requirement = Assertion(lambda p: p.subject == "u1", "is u1")
        self.assertTrue(requirement.evaluate(Principal.from_claims([("sub", "u1")])))
        self.assertFalse(requirement.evaluate(Principal.anonymous()))
        self.assertEqual(str(requirement), "is u1")


class PolicyRegistryTests(SimpleTestCase):
    def test_builder_keeps_requirement_order(self):
        policy = (
            PolicyBuilder("Mixed")
            .require_authenticated_user()
            .require_role("Admin")
            .require_claim("sub")
            .build()
        )
        self.assertTrue(policy.require_authenticated_user)
        self.assertEqual(policy.requirements, (require_role("Admin"), require_claim("sub")))

    def test_resolve_unknown_policy_raises(self):
        registry = PolicyRegistry()
        with self.assertRaises(PolicyNotFound) as ctx:
            registry.resolve("Nope")
        self.assertEqual(ctx.exception.name, "Nope")

    def test_validate_reports_missing_policy(self):
        registry = build_default_policies()
        registry.validate(["DefaultPolicy", SEARCH_POLICY])
        with self.assertRaises(PolicyNotFound):
            registry.validate([SEARCH_POLICY, "AdminPolicy"])

    def test_register_under_alias(self):
        registry = PolicyRegistry()
        policy = PolicyBuilder("Search").require_role("Admin").build()
        registry.register("LegacySearch", policy)
        self.assertIs(registry.resolve("LegacySearch"), policy)
        self.assertIn("LegacySearch", registry)
        self.assertNotIn("Search", registry)
        self.assertEqual(registry.names(), ["LegacySearch"])

    def test_register_under_own_name(self):
        registry = PolicyRegistry()
        policy = PolicyBuilder("Search").require_role("Admin").build()
        self.assertIs(registry.register(policy), policy)
        self.assertIs(registry.resolve("Search"), policy)

    def test_register_rejects_misplaced_arguments(self):
        registry = PolicyRegistry()
        policy = PolicyBuilder("Search").build()
        with self.assertRaises(TypeError):
            registry.register("Search", "not a policy")
        with self.assertRaises(TypeError):
            registry.register(policy, policy)
        with self.assertRaises(TypeError):
            registry.register("", policy)
        with self.assertRaises(TypeError):
            registry.register("Search")
        self.assertEqual(registry.names(), [])

    def test_default_search_policy(self):
        policy = build_default_policies().resolve(SEARCH_POLICY)
        self.assertTrue(policy.require_authenticated_user)
        self.assertEqual(policy.requirements, (require_role("Admin", "Customer"),))
