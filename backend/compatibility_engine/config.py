import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Every item counts the same; there is no popularity signal in the catalog.
ITEM_WEIGHT = 1.0

# Below this many shared-and-categorized items the overlap is considered thin.
CONFIDENCE_OVERLAP_TARGET = 20

# Share of the base match kept when confidence is zero.
CONFIDENCE_FLOOR = 0.5

MAX_MATCHES = 50


@dataclass(frozen=True)
class ScoringConfig:
    item_weight: float = ITEM_WEIGHT
    confidence_overlap_target: int = CONFIDENCE_OVERLAP_TARGET
    confidence_floor: float = CONFIDENCE_FLOOR
    max_matches: int = MAX_MATCHES

    def __post_init__(self):
        if self.confidence_overlap_target <= 0:
            raise ValueError(f"confidence_overlap_target must be positive, got {self.confidence_overlap_target}")
        # a floor outside [0, 1] would let damping flip or inflate the base match
        if not 0 <= self.confidence_floor <= 1:
            raise ValueError(f"confidence_floor must be between 0 and 1, got {self.confidence_floor}")
        if self.item_weight <= 0:
            raise ValueError(f"item_weight must be positive, got {self.item_weight}")
        if self.max_matches < 0:
            raise ValueError(f"max_matches must not be negative, got {self.max_matches}")

    @classmethod
    def from_env(cls):
        return cls(
            item_weight=float(os.getenv("MATCH_ITEM_WEIGHT", ITEM_WEIGHT)),
            confidence_overlap_target=int(os.getenv("MATCH_CONFIDENCE_OVERLAP", CONFIDENCE_OVERLAP_TARGET)),
            confidence_floor=float(os.getenv("MATCH_CONFIDENCE_FLOOR", CONFIDENCE_FLOOR)),
            max_matches=int(os.getenv("MATCH_MAX_RESULTS", MAX_MATCHES)),
        )


@dataclass(frozen=True)
class DatabaseSettings:
    backend: str = "supabase"
    supabase_url: str = ""
    supabase_key: str = ""
    pg_db: str = ""
    pg_user: str = ""
    pg_password: str = ""
    pg_host: str = ""

    @classmethod
    def from_env(cls):
        return cls(
            backend=os.getenv("COMPATIBILITY_BACKEND", "supabase").lower(),
            supabase_url=os.getenv("SUPABASE_URL", ""),
            supabase_key=os.getenv("SUPABASE_KEY", ""),
            pg_db=os.getenv("PG_DB", ""),
            pg_user=os.getenv("PG_USER", ""),
            pg_password=os.getenv("PG_PASSWORD", ""),
            pg_host=os.getenv("PG_HOST", ""),
        )
