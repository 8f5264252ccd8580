#!/usr/bin/env python3
"""
Standardized exception hierarchy for cross-source news analysis.

Pipeline units catch these at their boundary and turn them into unit
results; only ConfigurationError is meant to stop the process.
"""

from typing import Optional, Dict, Any, List


class NewsAnalysisError(Exception):
    """Base exception for all news analysis errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        """
        Initialize base exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            context: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            'error_type': self.__class__.__name__,
            'error_code': self.error_code,
            'message': self.message,
            'context': self.context
        }


# Source-related exceptions
class SourceError(NewsAnalysisError):
    """Base exception for news source errors."""
    pass


class SourceConnectionError(SourceError):
    """Failed to connect to news source."""

    def __init__(self, source_name: str, url: str, original_error: Exception):
        message = f"Failed to connect to {source_name} at {url}"
        context = {
            'source_name': source_name,
            'url': url,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)


class SourceParseError(SourceError):
    """Failed to parse content from news source."""

    def __init__(self, source_name: str, parse_stage: str, original_error: Exception):
        message = f"Failed to parse {parse_stage} from {source_name}"
        context = {
            'source_name': source_name,
            'parse_stage': parse_stage,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)


# Intelligence service exceptions
class IntelligenceError(NewsAnalysisError):
    """Base exception for the language-analysis service."""
    pass


class IntelligenceUnavailableError(IntelligenceError):
    """Service could not be reached or refused the request."""

    def __init__(self, provider: str, model: str, original_error: Exception):
        message = f"Intelligence service unavailable: {provider} ({model})"
        context = {
            'provider': provider,
            'model': model,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)


class IntelligenceResponseError(IntelligenceError):
    """Service answered, but the answer could not be used."""

    def __init__(self, analysis_type: str, reason: str, raw_excerpt: str = ""):
        message = f"Unusable {analysis_type} response: {reason}"
        context = {
            'analysis_type': analysis_type,
            'reason': reason,
            'raw_excerpt': raw_excerpt[:300]
        }
        super().__init__(message, context=context)


# Persistence exceptions
class PersistenceError(NewsAnalysisError):
    """Base exception for storage errors."""
    pass


class DatabaseConnectionError(PersistenceError):
    """Failed to connect to database."""

    def __init__(self, connection_type: str, original_error: Exception):
        message = f"Failed to connect to database via {connection_type}"
        context = {
            'connection_type': connection_type,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)


class DatabaseOperationError(PersistenceError):
    """Database operation failed."""

    def __init__(self, operation: str, table: str, original_error: Exception):
        message = f"Database {operation} failed on table {table}"
        context = {
            'operation': operation,
            'table': table,
            'original_error': str(original_error)
        }
        super().__init__(message, context=context)


# Configuration-related exceptions
class ConfigurationError(NewsAnalysisError):
    """Configuration is invalid or missing."""

    def __init__(self, config_key: str, issue: str, problems: Optional[List[str]] = None):
        message = f"Configuration error for {config_key}: {issue}"
        context = {
            'config_key': config_key,
            'issue': issue,
            'problems': problems or [f"{config_key}: {issue}"]
        }
        super().__init__(message, context=context)

    @property
    def problems(self) -> List[str]:
        return self.context['problems']

    @classmethod
    def from_problems(cls, problems: List[str]) -> 'ConfigurationError':
        """Bundle several validation problems into one error."""
        if len(problems) == 1:
            key, _, issue = problems[0].partition(': ')
            return cls(key, issue or problems[0])
        return cls('settings', f"{len(problems)} problems: " + "; ".join(problems), problems=problems)
