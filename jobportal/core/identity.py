from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """Caller identity decoded from the bearer token, scoped to one request."""

    id: str
    role: str | None = None
    name: str | None = None

    @classmethod
    def from_claims(cls, claims: dict) -> "Identity":
        return cls(id=str(claims["sub"]), role=claims.get("role"), name=claims.get("name"))
