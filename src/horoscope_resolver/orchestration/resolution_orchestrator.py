"""
Resolution orchestrator.

The single entry point that turns a profile (and optionally a date) into the
content row published for it, or an explicit NotFound.

Stages, per call:
1. Hemisphere from the profile (defaulted and flagged when unrecognized)
2. Sign query from the profile fields, most structured source first
3. Date anchors (day or month keys, depending on the content kind)
4. Per anchor: cache, fetch with timeout, hemisphere and empty-text filters, row match
5. First hit is cached and returned; exhaustion returns NotFound
"""
import asyncio
import inspect
import logging
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple, Union

from ..config import ResolverConfig
from ..memory.resolution_cache import CacheKey, ResolutionCache
from ..models import DAILY, ContentKind, ContentRow, NotFound, Profile, ResolvedContent
from ..resolution.attempt_sequencer import build_attempts
from ..resolution.date_anchors import build_anchors, month_anchors
from ..resolution.hemisphere import Hemisphere, classify_hemisphere, row_matches_hemisphere
from ..resolution.label_normalizer import LabelNormalizer, SignKey, key_from_signs
from ..resolution.resolution_metadata import DiagnosticCode, FetchFailure, ResolutionDiagnostics
from ..resolution.row_match_policy import RowMatchPolicy
from ..store.base import ContentStore

logger = logging.getLogger(__name__)

ResolutionOutcome = Union[ResolvedContent, NotFound]


async def _await(awaitable):
    return await awaitable


class _FetchWorker(threading.Thread):
    """
    One store fetch on a daemon thread.

    Store errors are captured on ``error`` for the orchestrator to record;
    a worker still running at its deadline is simply left behind.
    """

    def __init__(self, call: Callable[..., List[ContentRow]], *args, name: Optional[str] = None):
        super().__init__(name=name, daemon=True)
        self._call = call
        self._args = args
        self.rows: List[ContentRow] = []
        self.error: Optional[Exception] = None

    def run(self) -> None:
        try:
            self.rows = self._call(*self._args)
        except Exception as e:
            self.error = e


class ResolutionOrchestrator:
    """
    Resolves profiles to content rows for one content kind.

    Stateless per call apart from the shared cache. Each store fetch runs on
    its own daemon thread bounded by ``fetch_timeout_seconds``. A fetch that
    overruns is abandoned and never holds up the next anchor; a failed or
    timed-out fetch counts as an anchor with no rows.
    """

    def __init__(
        self,
        store: ContentStore,
        kind: ContentKind = DAILY,
        config: Optional[ResolverConfig] = None,
        cache: Optional[ResolutionCache] = None,
        normalizer: Optional[LabelNormalizer] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        :param store: Content store to read rows from
        :param kind: Content kind this orchestrator resolves
        :param config: Resolver configuration (defaults apply when omitted)
        :param cache: Shared cache; a private one is created when omitted
        :param normalizer: Label normalizer (built from config when omitted)
        :param clock: Returns the current instant (for tests)
        """
        self.config = config or ResolverConfig()
        self.store = store
        self.kind = kind
        self.cache = cache if cache is not None else ResolutionCache()
        self._normalizer = normalizer or LabelNormalizer(
            enable_fuzzy=self.config.enable_fuzzy_signs,
            fuzzy_threshold=self.config.fuzzy_sign_threshold,
        )
        self._policy = RowMatchPolicy(normalizer=self._normalizer)
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._default_hemisphere = Hemisphere.parse_default(self.config.default_hemisphere)

    # ----------------------------
    # Public API
    # ----------------------------
    def resolve(
        self,
        profile: Profile,
        date_override: Optional[str] = None,
        *,
        force_fresh: bool = False,
        allow_single_sign_fallback: Optional[bool] = None,
    ) -> ResolutionOutcome:
        """
        Resolve the content for a profile.

        :param profile: The caller's profile
        :param date_override: Explicit YYYY-MM-DD date; disables anchor computation
        :param force_fresh: Skip cache reads (results are still written)
        :param allow_single_sign_fallback: Let a cusp fall back to its single
            signs (default from config)
        :return: ResolvedContent, or NotFound carrying the attempts and anchors
        :raises InvalidDateError: If ``date_override`` is malformed
        """
        if allow_single_sign_fallback is None:
            allow_single_sign_fallback = self.config.allow_single_sign_fallback

        diagnostics = ResolutionDiagnostics(hemisphere_input=profile.hemisphere or "")

        # Stage 1: hemisphere
        hemisphere = self.resolve_profile_hemisphere(profile, diagnostics)

        # Stage 2: sign query
        key, source = self.select_sign_query(profile)
        diagnostics.sign_input = key.raw
        diagnostics.sign_source = source
        diagnostics.sign_key = key.key
        if key.is_opaque:
            diagnostics.flag(DiagnosticCode.NORMALIZATION_FALLBACK)
            logger.warning(
                f"Sign '{key.raw}' from {source} is not a recognized sign or cusp; "
                f"trying it as an opaque label"
            )
        if key.corrected:
            diagnostics.flag(DiagnosticCode.SIGN_CORRECTED)

        # Stage 3: anchors
        anchors = self.build_anchors(date_override)
        diagnostics.anchors = list(anchors)

        if key.is_empty:
            logger.info(f"No sign designation in profile for {profile.caller_identity}")
            return NotFound(
                reason="empty_sign",
                anchors=anchors,
                kind=self.kind.name,
                diagnostics=diagnostics,
            )

        attempts = build_attempts(key, allow_single_sign_fallback)
        diagnostics.attempts = list(attempts)
        logger.debug(
            f"Resolving {self.kind.name}: key={key.key!r} attempts={attempts} "
            f"hemisphere={hemisphere.value} anchors={anchors}"
        )

        # Stage 4: anchor loop, first hit wins
        for anchor in anchors:
            diagnostics.anchors_tried.append(anchor)
            cache_key = CacheKey(
                caller_identity=profile.caller_identity,
                sign=key.display,
                hemisphere=hemisphere.value,
                anchor=anchor,
                kind=self.kind.name,
            )

            if self.config.enable_cache and not force_fresh:
                cached = self.cache.get(cache_key)
                if cached is not None:
                    logger.debug(f"Cache hit for {cache_key}")
                    return replace(cached, diagnostics=replace(cached.diagnostics, cache_hit=True))

            rows = self._fetch(anchor, hemisphere, diagnostics)
            rows = [r for r in rows if row_matches_hemisphere(r.hemisphere_label, hemisphere)]
            # Rows published without any text are placeholders, not content
            rows = [r for r in rows if self.kind.has_text(r.fields)]
            if not rows:
                continue

            match = self._policy.pick(rows, attempts, key, allow_single_sign_fallback)
            if match is None:
                logger.debug(f"{len(rows)} rows for {anchor} but none matched {key.key!r}")
                continue

            diagnostics.match_strategy = match.strategy_used
            diagnostics.matched_attempt = match.attempt
            result = self._build_result(match.row, anchor, key, hemisphere, diagnostics)

            if self.config.enable_cache:
                self.cache.put(cache_key, result)

            logger.info(
                f"Resolved {self.kind.name} content for {key.display} ({hemisphere.value}) "
                f"on {result.date} via {match.strategy_used} match on '{match.attempt}'"
            )
            return result

        # Stage 5: exhausted
        logger.info(
            f"No {self.kind.name} content for {key.display} ({hemisphere.value}); "
            f"attempts={attempts} anchors={anchors}"
        )
        return NotFound(
            reason="not_found",
            attempts=attempts,
            anchors=anchors,
            kind=self.kind.name,
            diagnostics=diagnostics,
        )

    def resolve_profile_hemisphere(
        self,
        profile: Profile,
        diagnostics: Optional[ResolutionDiagnostics] = None,
    ) -> Hemisphere:
        """Canonical hemisphere of a profile, applying the configured default."""
        hemisphere, recognized = classify_hemisphere(profile.hemisphere)
        if recognized:
            return hemisphere

        if diagnostics is not None:
            diagnostics.flag(DiagnosticCode.HEMISPHERE_DEFAULTED)
        logger.warning(
            f"Unrecognized hemisphere {profile.hemisphere!r} for {profile.caller_identity}; "
            f"defaulting to {self._default_hemisphere.value}"
        )
        return self._default_hemisphere

    def select_sign_query(self, profile: Profile) -> Tuple[SignKey, str]:
        """
        Choose the sign key to look up for a profile.

        Priority:
        1. Primary + secondary sign naming two distinct signs
        2. A cusp named by ``cusp_name`` (marketing names included)
        3. A cusp named by ``preferred_sign``
        4. A recognized ``primary_sign``
        5. A recognized ``preferred_sign`` or ``cusp_name``
        6. The first non-empty field, kept opaque

        :return: (key, name of the profile field it came from)
        """
        normalize = self._normalizer.normalize

        if profile.primary_sign and profile.secondary_sign:
            pair = key_from_signs(profile.primary_sign, profile.secondary_sign, self._normalizer)
            if pair.is_cusp:
                return pair, "primary_secondary"

        cusp_name = normalize(profile.cusp_name)
        preferred = normalize(profile.preferred_sign)
        primary = normalize(profile.primary_sign)

        if cusp_name.is_cusp:
            return cusp_name, "cusp_name"
        if preferred.is_cusp:
            return preferred, "preferred_sign"
        if primary.signs:
            return primary, "primary_sign"
        if preferred.signs:
            return preferred, "preferred_sign"
        if cusp_name.signs:
            return cusp_name, "cusp_name"

        for candidate, source in (
            (cusp_name, "cusp_name"),
            (preferred, "preferred_sign"),
            (primary, "primary_sign"),
        ):
            if not candidate.is_empty:
                return candidate, source

        return SignKey(), "none"

    def build_anchors(self, date_override: Optional[str] = None) -> List[str]:
        """Anchors for this content kind (month keys for monthly content)."""
        anchors = build_anchors(
            now=self._clock(),
            reference_timezone=self.config.reference_timezone,
            local_timezone=self.config.local_timezone,
            override=date_override,
        )
        if self.kind.granularity == "month":
            return month_anchors(anchors)
        return anchors

    # ----------------------------
    # Internals
    # ----------------------------
    def _fetch(
        self,
        anchor: str,
        hemisphere: Hemisphere,
        diagnostics: ResolutionDiagnostics,
    ) -> List[ContentRow]:
        worker = _FetchWorker(self._call_store, anchor, hemisphere, name=f"{self.kind.name}-fetch-{anchor}")
        worker.start()
        worker.join(self.config.fetch_timeout_seconds)

        if worker.is_alive():
            diagnostics.record_fetch_failure(FetchFailure(
                anchor=anchor,
                reason=f"timed out after {self.config.fetch_timeout_seconds}s",
                timed_out=True,
            ))
            logger.warning(f"Fetch for {anchor}/{hemisphere.value} timed out; treating as no rows")
            return []

        if worker.error is not None:
            e = worker.error
            diagnostics.record_fetch_failure(FetchFailure(anchor=anchor, reason=str(e) or type(e).__name__))
            logger.warning(f"Fetch for {anchor}/{hemisphere.value} failed: {e}; treating as no rows")
            return []

        return worker.rows

    def _call_store(self, anchor: str, hemisphere: Hemisphere) -> List[ContentRow]:
        rows = self.store.fetch_rows(anchor, hemisphere)
        if inspect.isawaitable(rows):
            rows = asyncio.run(_await(rows))
        return list(rows or [])

    def _build_result(
        self,
        row: ContentRow,
        anchor: str,
        key: SignKey,
        hemisphere: Hemisphere,
        diagnostics: ResolutionDiagnostics,
    ) -> ResolvedContent:
        display = key.display
        if key.is_opaque:
            row_key = self._normalizer.normalize(row.sign_label)
            if row_key.signs:
                display = row_key.display

        return ResolvedContent(
            date=(row.date or "").strip()[:10] or anchor,
            sign=display,
            hemisphere=hemisphere,
            fields=dict(row.fields),
            source_row=row,
            kind=self.kind.name,
            diagnostics=diagnostics,
        )
