from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class ShortLinkModel:
    """Represent a short code to target URL mapping.

    Attributes:
        code (str):
            The unique short identifier of the link.
        target_url (str):
            The original URL that the short code points to.
        created_at (datetime | None):
            Moment the mapping was allocated (UTC). Kept for audit only.

    Example:
        >>> from datetime import datetime, UTC
        >>> link = ShortLinkModel(
        ...     code="aB3xZ9",
        ...     target_url="https://example.com/article/123",
        ...     created_at=datetime.now(UTC),
        ... )
        >>> link.to_record()['code']
        'aB3xZ9'
    """

    code: str
    target_url: str
    created_at: datetime | None = None

    def to_record(self) -> dict[str, Any]:
        """Convert into the flat record handed over to a record store."""
        return {
            'code': self.code,
            'target_url': self.target_url,
            'created_at': None if self.created_at is None else self.created_at.isoformat(),
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> 'ShortLinkModel':
        """Build a model from a record returned by a record store.

        Raises:
            KeyError: if the record lacks `code` or `target_url`.
        """
        created_at = record.get('created_at')
        return cls(
            code=record['code'],
            target_url=record['target_url'],
            created_at=None if created_at is None else datetime.fromisoformat(created_at),
        )
