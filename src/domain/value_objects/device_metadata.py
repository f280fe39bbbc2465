"""Client device information captured at login."""

import ipaddress
from dataclasses import dataclass

MAX_USER_AGENT_LENGTH = 500


@dataclass(frozen=True, slots=True, kw_only=True)
class DeviceMetadata:
    """Optional device details recorded on the session.

    Constructing one never fails; ``validate`` applies the session rules
    (user agent length, IP literal) so callers can reject bad details
    before anything is written.
    """

    device_id: str | None = None
    user_agent: str | None = None
    ip_address: str | None = None

    def validate(self) -> None:
        """Raises ValueError when the user agent or IP address is unacceptable."""
        if self.user_agent is not None and len(self.user_agent) > MAX_USER_AGENT_LENGTH:
            raise ValueError(f"user_agent exceeds {MAX_USER_AGENT_LENGTH} characters")
        if self.ip_address is not None:
            try:
                ipaddress.ip_address(self.ip_address)
            except ValueError as e:
                raise ValueError(f"Invalid IP address: {self.ip_address!r}") from e
