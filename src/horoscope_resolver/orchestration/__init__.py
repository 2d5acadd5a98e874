"""
Orchestration layer: composes normalization, anchors, fetching, matching
and caching into one resolution per call.
"""
from .resolution_orchestrator import ResolutionOrchestrator, ResolutionOutcome

__all__ = [
    "ResolutionOrchestrator",
    "ResolutionOutcome",
]
