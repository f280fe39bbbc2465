"""Domain value objects.

Usage:
    from src.domain.value_objects import TokenPair, TokenPayload
"""

from src.domain.value_objects.device_metadata import DeviceMetadata
from src.domain.value_objects.provider_identity import ProviderClaims, ProviderTokens
from src.domain.value_objects.token_pair import TokenPair
from src.domain.value_objects.token_payload import TokenPayload

__all__ = [
    "DeviceMetadata",
    "ProviderClaims",
    "ProviderTokens",
    "TokenPair",
    "TokenPayload",
]
