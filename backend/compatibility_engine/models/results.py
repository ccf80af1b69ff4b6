from dataclasses import dataclass, field
from typing import Any, Dict, List

from backend.compatibility_engine.models.user_profile import UserProfile


@dataclass
class CategoryTally:
    """Running agreement score for one category."""

    category: str
    score: float = 0.0
    max_score: float = 0.0
    overlap_count: int = 0

    def add(self, user_value, other_value, weight):
        self.max_score += 2 * weight
        self.overlap_count += 1
        if user_value == other_value:
            self.score += 2 * weight
        else:
            self.score -= 2 * weight

    @property
    def match_ratio(self):
        return self.score / self.max_score if self.max_score > 0 else 0.0


@dataclass
class Conflict:
    item_label: str
    user_value: int
    other_value: int

    def to_dict(self):
        return {"item_label": self.item_label, "user_value": self.user_value, "other_value": self.other_value}


@dataclass
class CategoryComparison(CategoryTally):
    """CategoryTally plus the items behind the score, for explaining a pair."""

    both_liked: List[str] = field(default_factory=list)
    both_disliked: List[str] = field(default_factory=list)
    conflicts: List[Conflict] = field(default_factory=list)
    # per-user category statistics are not tracked, always 0
    user_affinity: float = 0.0
    other_affinity: float = 0.0

    def record(self, label, user_value, other_value, weight):
        self.add(user_value, other_value, weight)
        if user_value != other_value:
            self.conflicts.append(Conflict(label, user_value, other_value))
        elif user_value > 0:
            self.both_liked.append(label)
        else:
            self.both_disliked.append(label)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "match_ratio": self.match_ratio,
            "overlap_count": self.overlap_count,
            "both_liked": list(self.both_liked),
            "both_disliked": list(self.both_disliked),
            "conflicts": [c.to_dict() for c in self.conflicts],
            "user_affinity": self.user_affinity,
            "other_affinity": self.other_affinity,
        }


@dataclass
class CompatibilityResult:
    base_match: float
    confidence: float
    final_match: float
    total_overlap: int
    total_interests_user: int = 0
    total_interests_other: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "base_match": self.base_match,
            "confidence": self.confidence,
            "final_match": self.final_match,
            "total_overlap": self.total_overlap,
            "total_interests_user": self.total_interests_user,
            "total_interests_other": self.total_interests_other,
        }


@dataclass
class MatchDetails:
    user_id: str
    other_user_id: str
    user_profile: UserProfile
    other_profile: UserProfile
    categories: List[CategoryComparison]
    overall: CompatibilityResult

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "other_user_id": self.other_user_id,
            "user_profile": self.user_profile.to_dict(),
            "other_profile": self.other_profile.to_dict(),
            "categories": [c.to_dict() for c in self.categories],
            "overall": self.overall.to_dict(),
        }


@dataclass
class MatchResult:
    profile: UserProfile
    base_match: float
    confidence: float
    final_match: float
    overlap_count: int
    matched_categories: List[CategoryTally]

    @property
    def user_id(self):
        return self.profile.id

    def to_dict(self) -> Dict[str, Any]:
        payload = {"user_id": self.profile.id}
        payload.update({k: v for k, v in self.profile.to_dict().items() if k != "id"})
        payload.update({
            "base_match": self.base_match,
            "confidence": self.confidence,
            "final_match": self.final_match,
            "overlap_count": self.overlap_count,
            "matched_categories": [
                {"category": c.category, "match_ratio": c.match_ratio} for c in self.matched_categories
            ],
        })
        return payload
