"""Session record entity.

One record per successful login, carrying the device details the client
reported. Sessions are deleted on logout and theft response, and expired
ones are swept externally.
"""

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from uuid import UUID

from uuid_extensions import uuid7

from src.domain.value_objects import DeviceMetadata


@dataclass(frozen=True, slots=True, kw_only=True)
class SessionRecord:
    """Login session of a user on one device.

    Attributes:
        id: Session identifier (``sid`` claim of the tokens issued for it).
        user_id: Owning user.
        device_id: Client-supplied device id, if any.
        user_agent: Client user agent (at most 500 characters), if any.
        ip_address: IPv4 or IPv6 literal, if any.
        expires_at: Session expiry.
        created_at: Login time.
        last_used: Last activity (login or token refresh).

    Raises:
        ValueError: If user_agent is too long, ip_address is not an IP
            literal, datetimes are naive, or expires_at is not after created_at.
    """

    id: UUID
    user_id: UUID
    device_id: str | None = None
    user_agent: str | None = None
    ip_address: str | None = None
    expires_at: datetime
    created_at: datetime
    last_used: datetime

    def __post_init__(self) -> None:
        """Validate session invariants."""
        DeviceMetadata(
            device_id=self.device_id,
            user_agent=self.user_agent,
            ip_address=self.ip_address,
        ).validate()
        if self.expires_at.tzinfo is None or self.created_at.tzinfo is None:
            raise ValueError("timestamps must be timezone-aware")
        if self.expires_at <= self.created_at:
            raise ValueError("expires_at must be after created_at")

    @classmethod
    def create(
        cls,
        *,
        user_id: UUID,
        expires_at: datetime,
        device: DeviceMetadata | None = None,
        session_id: UUID | None = None,
        created_at: datetime | None = None,
    ) -> "SessionRecord":
        """Build a new session for a login."""
        now = created_at or datetime.now(UTC)
        device = device or DeviceMetadata()
        return cls(
            id=session_id or uuid7(),
            user_id=user_id,
            device_id=device.device_id,
            user_agent=device.user_agent,
            ip_address=device.ip_address,
            expires_at=expires_at,
            created_at=now,
            last_used=now,
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        """True once ``expires_at`` has passed."""
        return (now or datetime.now(UTC)) >= self.expires_at

    def is_from_same_device(self, device_id: str | None) -> bool:
        """Compare device ids; two unknown (None) devices count as the same."""
        return self.device_id == device_id

    def touch_last_used(self, at: datetime | None = None) -> "SessionRecord":
        """Return a copy with ``last_used`` moved to ``at`` (default: now)."""
        return replace(self, last_used=at or datetime.now(UTC))
