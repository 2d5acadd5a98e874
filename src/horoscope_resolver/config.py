from dataclasses import dataclass
from typing import Optional


@dataclass
class ResolverConfig:
    # Content store
    store_backend: str = "memory"
    daily_csv_path: Optional[str] = None
    monthly_csv_path: Optional[str] = None
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    daily_table: str = "horoscope_cache"
    monthly_table: str = "monthly_forecasts"

    # Dates
    reference_timezone: str = "Australia/Sydney"
    local_timezone: Optional[str] = None

    # Hemisphere
    default_hemisphere: str = "Southern"

    # Fetching
    fetch_timeout_seconds: float = 5.0

    # Matching
    allow_single_sign_fallback: bool = False
    enable_fuzzy_signs: bool = True
    fuzzy_sign_threshold: float = 0.85

    # Cache
    enable_cache: bool = True
