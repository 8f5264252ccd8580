#!/usr/bin/env python3
"""
Per-unit result types returned by every pipeline step.

A unit is one source fetch, one article enrichment, one topic comparison or
one storage write. Units never raise into the run; they report how they went.
"""

from datetime import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar('T')


class UnitStatus(str, Enum):
    SUCCESS = "success"
    DEGRADED = "degraded"
    FAILED = "failed"


@dataclass(frozen=True)
class UnitResult(Generic[T]):
    """Outcome of a single unit of work."""
    unit: str
    status: UnitStatus
    value: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, unit: str, value: Optional[T] = None) -> 'UnitResult[T]':
        return cls(unit=unit, status=UnitStatus.SUCCESS, value=value)

    @classmethod
    def degraded(cls, unit: str, value: T, error: str) -> 'UnitResult[T]':
        return cls(unit=unit, status=UnitStatus.DEGRADED, value=value, error=error)

    @classmethod
    def failed(cls, unit: str, error: str, value: Optional[T] = None) -> 'UnitResult[T]':
        return cls(unit=unit, status=UnitStatus.FAILED, value=value, error=error)

    @property
    def ok(self) -> bool:
        return self.status is not UnitStatus.FAILED


@dataclass
class RunReport:
    """Summary of one full analysis cycle."""
    run_id: str
    started_at: datetime
    finished_at: Optional[datetime] = None
    sources_attempted: int = 0
    sources_failed: List[str] = field(default_factory=list)
    articles_collected: int = 0
    articles_degraded: int = 0
    articles_failed: int = 0
    clusters_formed: int = 0
    topics_compared: List[str] = field(default_factory=list)
    topics_skipped: List[str] = field(default_factory=list)
    topics_abandoned: List[str] = field(default_factory=list)
    articles_persisted: int = 0
    comparisons_persisted: int = 0
    persistence_failures: List[str] = field(default_factory=list)

    def record(self, result: UnitResult, kind: str) -> None:
        """Count a unit result under the given kind."""
        if kind == 'source':
            self.sources_attempted += 1
            if result.status is UnitStatus.FAILED:
                self.sources_failed.append(result.unit)
        elif kind == 'article':
            if result.status is UnitStatus.DEGRADED:
                self.articles_degraded += 1
            elif result.status is UnitStatus.FAILED:
                self.articles_failed += 1
        elif kind == 'comparison':
            if result.status is UnitStatus.FAILED:
                self.topics_abandoned.append(result.unit)
            elif result.value is None:
                self.topics_skipped.append(result.unit)
            else:
                self.topics_compared.append(result.unit)
        elif kind in ('store_article', 'store_comparison'):
            if result.status is UnitStatus.FAILED:
                self.persistence_failures.append(result.unit)
            elif kind == 'store_article':
                self.articles_persisted += 1
            else:
                self.comparisons_persisted += 1
        else:
            raise ValueError(f"Unknown result kind: {kind}")

    @property
    def processing_time(self) -> float:
        if not self.finished_at:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'run_id': self.run_id,
            'started_at': self.started_at.isoformat(),
            'finished_at': self.finished_at.isoformat() if self.finished_at else None,
            'processing_time': self.processing_time,
            'sources_attempted': self.sources_attempted,
            'sources_failed': list(self.sources_failed),
            'articles_collected': self.articles_collected,
            'articles_degraded': self.articles_degraded,
            'articles_failed': self.articles_failed,
            'clusters_formed': self.clusters_formed,
            'topics_compared': list(self.topics_compared),
            'topics_skipped': list(self.topics_skipped),
            'topics_abandoned': list(self.topics_abandoned),
            'articles_persisted': self.articles_persisted,
            'comparisons_persisted': self.comparisons_persisted,
            'persistence_failures': list(self.persistence_failures),
        }
