#!/usr/bin/env python3
"""
LLM Interaction Logger

Writes prompts, raw responses and parsed verdicts to a debug file.
Enabled only when LLM_DEBUG_LOG names a file.
"""

import json
import logging
from datetime import datetime
from typing import Dict, Any, Optional
from pathlib import Path

logger = logging.getLogger(__name__)


class LLMLogger:
    """Logs LLM interactions to a plain-text debug file."""

    def __init__(self, log_file_path: str):
        """Initialize the LLM logger.

        Args:
            log_file_path: Path to the debug log file; relative paths resolve
                against the project root
        """
        path = Path(log_file_path)
        if not path.is_absolute():
            path = Path(__file__).parent.parent.parent / path
        self.log_file_path = path
        self._clear_log()

    def _clear_log(self):
        """Start a fresh log for this process."""
        try:
            with open(self.log_file_path, 'w', encoding='utf-8') as f:
                f.write(f"=== LLM DEBUG LOG - {datetime.now().isoformat()} ===\n\n")
        except OSError as e:
            logger.error(f"Failed to clear LLM log file: {e}")

    def _write_section(self, title: str, content: str):
        try:
            with open(self.log_file_path, 'a', encoding='utf-8') as f:
                f.write(f"\n{'=' * 80}\n")
                f.write(f"{title}\n")
                f.write(f"{'=' * 80}\n")
                f.write(f"{content}\n")
        except OSError as e:
            logger.error(f"Failed to write to LLM log file: {e}")

    def log_llm_interaction(self,
                            system_prompt: str,
                            user_prompt: str,
                            response: str,
                            token_usage: Dict[str, int],
                            analysis_type: str = "unknown"):
        """Log one request/response pair."""
        content = f"Timestamp: {datetime.now().isoformat()}\n"
        content += f"Analysis Type: {analysis_type}\n"
        content += (f"Token Usage: {token_usage.get('prompt_tokens', 0)} prompt + "
                    f"{token_usage.get('completion_tokens', 0)} completion = "
                    f"{token_usage.get('total_tokens', 0)} total\n\n")
        content += f"SYSTEM PROMPT:\n{system_prompt}\n\n"
        content += f"USER PROMPT:\n{user_prompt}\n\n"
        content += f"LLM RESPONSE:\n{response}\n"
        self._write_section(f"LLM INTERACTION ({analysis_type})", content)

    def log_parsed_analysis(self, parsed_data: Dict[str, Any], analysis_type: str = "unknown"):
        """Log the verdict after JSON extraction."""
        content = f"Timestamp: {datetime.now().isoformat()}\n"
        content += f"Analysis Type: {analysis_type}\n\n"
        content += json.dumps(parsed_data, indent=2, ensure_ascii=False, default=str)
        self._write_section(f"PARSED ANALYSIS ({analysis_type})", content)

    def log_error(self, error_type: str, error_message: str, context: str = ""):
        """Log a failed interaction."""
        content = f"Timestamp: {datetime.now().isoformat()}\n"
        content += f"Error Type: {error_type}\n"
        if context:
            content += f"Context: {context}\n"
        content += f"\nError Message:\n{error_message}\n"
        self._write_section("ERROR", content)


_llm_logger: Optional[LLMLogger] = None


def get_llm_logger(log_file_path: Optional[str] = None) -> Optional[LLMLogger]:
    """
    Get the process-wide LLM logger.

    Returns None until a path has been given once.
    """
    global _llm_logger
    if _llm_logger is None and log_file_path:
        _llm_logger = LLMLogger(log_file_path)
    return _llm_logger
