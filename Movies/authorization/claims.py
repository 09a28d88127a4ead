from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

ROLE = "role"
SUBJECT = "sub"
NAME = "name"


@dataclass(frozen=True, slots=True)
class Claim:
    """Typed assertion about a principal, e.g. ``role=Admin``."""

    type: str
    value: str


ClaimLike = Union[Claim, tuple[str, str]]


def _as_claim(item: ClaimLike) -> Claim:
    if isinstance(item, Claim):
        return item
    claim_type, value = item
    return Claim(str(claim_type), str(value))


@dataclass(frozen=True, slots=True)
class Principal:
    """The actor behind a request, represented as an ordered bundle of claims.

    A principal without an authentication type carries no identity and is
    treated as anonymous, even when it holds claims.
    """

    claims: tuple[Claim, ...] = ()
    authentication_type: str = ""

    @classmethod
    def anonymous(cls) -> "Principal":
        return cls()

    @classmethod
    def from_claims(
        cls,
        claims: Iterable[ClaimLike],
        *,
        authentication_type: str = "Cookies",
    ) -> "Principal":
        return cls(
            claims=tuple(_as_claim(item) for item in claims),
            authentication_type=authentication_type,
        )

    @property
    def is_authenticated(self) -> bool:
        return bool(self.authentication_type)

    @property
    def subject(self) -> str | None:
        return self.find_first(SUBJECT)

    @property
    def roles(self) -> tuple[str, ...]:
        return self.find_all(ROLE)

    def has_claim(self, claim_type: str, value: str) -> bool:
        return any(c.type == claim_type and c.value == value for c in self.claims)

    def has_role(self, role: str) -> bool:
        return self.has_claim(ROLE, role)

    def find_first(self, claim_type: str) -> str | None:
        for claim in self.claims:
            if claim.type == claim_type:
                return claim.value
        return None

    def find_all(self, claim_type: str) -> tuple[str, ...]:
        return tuple(c.value for c in self.claims if c.type == claim_type)
