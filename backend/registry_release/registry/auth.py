"""
Registry Release — Registry authentication helpers.

Both release endpoints authenticate with a bearer API key on every request.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class BearerCredentials:
    token: str

    def as_headers(self) -> dict[str, str]:
        """Return the auth headers required by the registry API."""
        return {"Authorization": f"Bearer {self.token}"}
