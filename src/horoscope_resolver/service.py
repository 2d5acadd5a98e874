import logging
from time import time
from typing import Any, Dict, Mapping, Optional, Union

from .config import ResolverConfig
from .exceptions import ConfigurationError
from .memory import ResolutionCache
from .models import DAILY, MONTHLY, ContentKind, Profile
from .orchestration import ResolutionOrchestrator, ResolutionOutcome
from .store import ContentStore, create_content_store

logger = logging.getLogger(__name__)

ProfileLike = Union[Profile, Mapping[str, Any]]


class HoroscopeService:
    """
    Facade over the content resolution subsystem.
    The ONLY entry point for presentation layers (HTTP app, CLI).
    """

    def __init__(
        self,
        config: Optional[ResolverConfig] = None,
        daily_store: Optional[ContentStore] = None,
        monthly_store: Optional[ContentStore] = None,
        cache: Optional[ResolutionCache] = None,
    ):
        """
        Composition root.
        Stores are created from config unless injected; both content kinds
        share one cache.
        """
        self.config = config or ResolverConfig()
        self.cache = cache if cache is not None else ResolutionCache()

        stores = {
            DAILY.name: daily_store if daily_store is not None else create_content_store(self.config, DAILY),
            MONTHLY.name: monthly_store if monthly_store is not None else create_content_store(self.config, MONTHLY),
        }

        self._orchestrators: Dict[str, ResolutionOrchestrator] = {}
        for kind in (DAILY, MONTHLY):
            store = stores[kind.name]
            if store is None:
                logger.info(f"No {kind.name} content source configured")
                continue
            self._orchestrators[kind.name] = ResolutionOrchestrator(
                store=store,
                kind=kind,
                config=self.config,
                cache=self.cache,
            )

    # ----------------------------
    # Content
    # ----------------------------
    def daily(
        self,
        profile: ProfileLike,
        date: Optional[str] = None,
        force_fresh: bool = False,
        allow_single_sign_fallback: Optional[bool] = None,
    ) -> ResolutionOutcome:
        """Resolve today's (or ``date``'s) daily horoscope for a profile."""
        return self._resolve(DAILY, profile, date, force_fresh, allow_single_sign_fallback)

    def monthly(
        self,
        profile: ProfileLike,
        date: Optional[str] = None,
        force_fresh: bool = False,
        allow_single_sign_fallback: Optional[bool] = None,
    ) -> ResolutionOutcome:
        """Resolve the monthly forecast for the month containing today (or ``date``)."""
        return self._resolve(MONTHLY, profile, date, force_fresh, allow_single_sign_fallback)

    def has_kind(self, kind: str) -> bool:
        return kind in self._orchestrators

    # ----------------------------
    # Cache
    # ----------------------------
    def clear_cache(self, caller_identity: Optional[str] = None) -> None:
        """Clear one caller's cached results, or everything."""
        if caller_identity is None:
            self.cache.clear()
        else:
            self.cache.invalidate(caller_identity)

    def _resolve(
        self,
        kind: ContentKind,
        profile: ProfileLike,
        date: Optional[str],
        force_fresh: bool,
        allow_single_sign_fallback: Optional[bool],
    ) -> ResolutionOutcome:
        orchestrator = self._orchestrators.get(kind.name)
        if orchestrator is None:
            raise ConfigurationError(f"No content store configured for {kind.name} content.")

        if not isinstance(profile, Profile):
            profile = Profile.from_dict(profile)

        start_time = time()
        outcome = orchestrator.resolve(
            profile,
            date,
            force_fresh=force_fresh,
            allow_single_sign_fallback=allow_single_sign_fallback,
        )
        latency_ms = int((time() - start_time) * 1000)
        logger.info(f"{kind.name} resolution for {profile.caller_identity}: found={outcome.found} ({latency_ms}ms)")
        return outcome
