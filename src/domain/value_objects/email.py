"""Normalized email address taken from the identity provider's claims."""

from dataclasses import dataclass

from email_validator import EmailNotValidError, validate_email


@dataclass(frozen=True)
class Email:
    """Syntactically valid, normalized address.

    Deliverability is not checked: the identity provider owns the mailbox,
    this only rejects malformed claims and normalizes the domain part.

    Raises:
        ValueError: Address is malformed.
    """

    value: str

    def __post_init__(self) -> None:
        try:
            normalized = validate_email(self.value, check_deliverability=False).normalized
        except EmailNotValidError as e:
            raise ValueError(f"Invalid email: {e}") from e
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value
