import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from backend.compatibility_engine.errors import RepositoryError

logger = logging.getLogger(__name__)

LIKE = 1
DISLIKE = -1


@dataclass(frozen=True)
class InterestValue:
    """One user's signed value for one interest item."""

    user_id: str
    item_id: int
    value: int
    label: str = ""
    categories: Tuple[str, ...] = ()

    @classmethod
    def from_row(cls, row: dict, user_id=None) -> Optional["InterestValue"]:
        """
        Build from a user_interest_items row joined with its interest_items record.

        Returns None when the joined item is missing.
        """
        item = row.get("interest_items")
        if item is None:
            logger.debug(f"Dropping interest row without item: {row.get('item_id')}")
            return None

        value = row.get("value")
        if value not in (LIKE, DISLIKE):
            raise RepositoryError(f"Interest value must be -1 or 1, got {value!r} for item {row.get('item_id')}")

        return cls(
            user_id=str(row.get("user_id", user_id)),
            item_id=row["item_id"],
            value=int(value),
            label=item.get("label") or "",
            categories=_dedupe(item.get("list_codes") or ()),
        )

    @property
    def liked(self):
        return self.value == LIKE


def _dedupe(codes: Iterable[str]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(codes))


def index_by_item(interests: Iterable[InterestValue]) -> Dict[int, InterestValue]:
    """Map item id -> interest; a repeated item id is a data error."""
    indexed = {}
    for interest in interests:
        if interest.item_id in indexed:
            raise duplicate_interest(interest)
        indexed[interest.item_id] = interest
    return indexed


def duplicate_interest(interest: InterestValue) -> RepositoryError:
    return RepositoryError(f"Duplicate interest for user {interest.user_id} and item {interest.item_id}")
