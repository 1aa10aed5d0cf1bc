"""Identity of the traveler acting on a request."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class RequestContext:
    """The acting traveler.

    Every trip query is filtered on ``user_id``. A traveler with no user row
    yet is provisioned on first write under the placeholder identity below.
    """

    user_id: UUID

    @property
    def placeholder_username(self) -> str:
        return f"traveler-{self.user_id.hex[:8]}"

    @property
    def placeholder_email(self) -> str:
        return f"{self.user_id}@users.globetrotter.local"
