#!/usr/bin/env python3
"""
JSON extraction and validation for LLM output.

Models sometimes wrap the JSON verdict in prose or markdown fences. The
validator locates the first balanced JSON object and parses it.
"""

import json
import re
import logging
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

_TRAILING_COMMA = re.compile(r',\s*([}\]])')


class JSONValidationError(ValueError):
    """Raised when no usable JSON object can be recovered."""
    pass


class AnalysisValidator:
    """Recovers JSON objects from raw LLM responses."""

    @staticmethod
    def validate_and_parse(raw_output: Optional[str], analysis_type: str = "article") -> Dict[str, Any]:
        """
        Parse LLM output into a dictionary.

        Args:
            raw_output: Raw string output from LLM
            analysis_type: Label used in log messages

        Returns:
            Parsed JSON object

        Raises:
            JSONValidationError: If no JSON object can be recovered
        """
        if not raw_output or not raw_output.strip():
            raise JSONValidationError(f"Empty {analysis_type} output")

        text = raw_output.strip()
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            candidate = AnalysisValidator.extract_json_object(text)
            if candidate is None:
                raise JSONValidationError(f"No JSON object found in {analysis_type} output")
            data = AnalysisValidator._loads_with_repair(candidate, analysis_type)

        if not isinstance(data, dict):
            raise JSONValidationError(f"Expected a JSON object for {analysis_type}, got {type(data).__name__}")
        return data

    @staticmethod
    def extract_json_object(text: str) -> Optional[str]:
        """
        Return the first balanced {...} block in text, or None.

        Braces inside JSON strings (including escaped quotes) are ignored.
        """
        start = text.find('{')
        while start != -1:
            depth = 0
            in_string = False
            escaped = False
            for index in range(start, len(text)):
                char = text[index]
                if in_string:
                    if escaped:
                        escaped = False
                    elif char == '\\':
                        escaped = True
                    elif char == '"':
                        in_string = False
                    continue
                if char == '"':
                    in_string = True
                elif char == '{':
                    depth += 1
                elif char == '}':
                    depth -= 1
                    if depth == 0:
                        return text[start:index + 1]
            # Unbalanced from this brace; try the next one
            start = text.find('{', start + 1)
        return None

    @staticmethod
    def _loads_with_repair(candidate: str, analysis_type: str) -> Any:
        try:
            return json.loads(candidate)
        except json.JSONDecodeError as e:
            logger.warning(f"JSON parsing failed for {analysis_type}: {e}, attempting repair")

        repaired = _TRAILING_COMMA.sub(r'\1', candidate)
        try:
            return json.loads(repaired)
        except json.JSONDecodeError as e:
            logger.error(f"JSON repair failed for {analysis_type}: {e}")
            logger.debug(f"First 300 chars: {candidate[:300]!r}")
            raise JSONValidationError(f"Invalid JSON in {analysis_type} output: {e}") from e


def parse_llm_json(raw_output: Optional[str], analysis_type: str = "article") -> Dict[str, Any]:
    """Convenience wrapper around AnalysisValidator.validate_and_parse."""
    return AnalysisValidator.validate_and_parse(raw_output, analysis_type)
