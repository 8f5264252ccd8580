#!/usr/bin/env python3
"""
OpenAI integration for article and topic analysis.

Sends one structured request per call and returns the parsed verdict.
The SDK is built with max_retries=0: a failed call is reported, never repeated.
"""

import logging
from typing import List, Dict, Optional, Any, Sequence

from openai import OpenAI, OpenAIError

from core.analysis.prompts import NewsAnalysisPrompts
from core.exceptions import IntelligenceUnavailableError, IntelligenceResponseError
from core.json_validator import JSONValidationError, parse_llm_json
from core.llm_logger import LLMLogger
from core.models.article import Article
from core.schemas import get_schema_by_type

logger = logging.getLogger(__name__)


class OpenAIClient:
    """Client for OpenAI API integration with structured outputs."""

    def __init__(self, api_key: str, model: str = "gpt-4o", timeout: int = 30,
                 max_tokens: int = 2000, body_char_budget: int = 2000,
                 excerpt_chars: int = 500, llm_logger: Optional[LLMLogger] = None,
                 client: Optional[OpenAI] = None):
        """
        Initialize OpenAI client.

        Args:
            api_key: OpenAI API key
            model: Chat model name
            timeout: Client-side timeout per request in seconds
            max_tokens: Completion token limit
            body_char_budget: Article characters included in article prompts
            excerpt_chars: Characters per article in comparison prompts
            llm_logger: Optional debug-file logger
            client: Pre-built SDK client (tests)
        """
        if not api_key and client is None:
            raise ValueError("OpenAI API key not provided")

        self.client = client or OpenAI(api_key=api_key, timeout=timeout, max_retries=0)
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = 0.3
        self.body_char_budget = body_char_budget
        self.excerpt_chars = excerpt_chars
        self.llm_logger = llm_logger

    def _make_structured_request(self, messages: List[Dict[str, str]], schema: Dict[str, Any],
                                 analysis_type: str) -> str:
        """
        Make a structured request to OpenAI API with JSON schema enforcement.

        Returns:
            Raw response text

        Raises:
            IntelligenceUnavailableError: Transport, auth or rate-limit failure
            IntelligenceResponseError: Empty or truncated response
        """
        logger.info(f"Making OpenAI structured API call for {analysis_type}")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": f"{analysis_type}_response",
                        "schema": schema,
                        "strict": True
                    }
                }
            )
        except OpenAIError as e:
            logger.warning(f"OpenAI request for {analysis_type} failed: {e}")
            if self.llm_logger:
                self.llm_logger.log_error(type(e).__name__, str(e), context=analysis_type)
            raise IntelligenceUnavailableError("openai", self.model, e) from e

        if not response.choices:
            raise IntelligenceResponseError(analysis_type, "no choices returned")

        choice = response.choices[0]
        if getattr(choice, "finish_reason", None) == "length":
            logger.error(f"OpenAI response for {analysis_type} was truncated at max_tokens={self.max_tokens}")
            raise IntelligenceResponseError(analysis_type, "response truncated (finish_reason=length)")

        content = choice.message.content or ""
        if not content.strip():
            raise IntelligenceResponseError(analysis_type, "empty response")

        usage = {}
        if getattr(response, "usage", None) is not None:
            usage = {
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
                "total_tokens": response.usage.total_tokens
            }
            logger.info(f"OpenAI API call successful - tokens: {usage['prompt_tokens']} prompt + "
                        f"{usage['completion_tokens']} completion = {usage['total_tokens']} total")

        if self.llm_logger:
            system_prompt = next((m['content'] for m in messages if m.get('role') == 'system'), '')
            user_prompt = next((m['content'] for m in messages if m.get('role') == 'user'), '')
            self.llm_logger.log_llm_interaction(
                system_prompt=system_prompt,
                user_prompt=user_prompt,
                response=content,
                token_usage=usage,
                analysis_type=analysis_type
            )

        return content

    def _parse(self, content: str, analysis_type: str) -> Dict[str, Any]:
        try:
            data = parse_llm_json(content, analysis_type)
        except JSONValidationError as e:
            raise IntelligenceResponseError(analysis_type, str(e), raw_excerpt=content) from e
        if self.llm_logger:
            self.llm_logger.log_parsed_analysis(data, analysis_type)
        return data

    def analyze_article(self, article: Article) -> Dict[str, Any]:
        """
        Ask for bias, propaganda and factuality analysis of one article.

        Returns:
            Raw verdict dictionary (normalized later by the enricher)
        """
        messages = [
            {"role": "system", "content": NewsAnalysisPrompts.ARTICLE_SYSTEM_PROMPT},
            {"role": "user", "content": NewsAnalysisPrompts.get_article_prompt(article, self.body_char_budget)}
        ]
        content = self._make_structured_request(messages, get_schema_by_type("article"), "article")
        return self._parse(content, "article")

    def compare_topic(self, topic: str, articles: Sequence[Article]) -> Dict[str, Any]:
        """
        Ask for a cross-source comparison of articles sharing a topic.

        Returns:
            Raw verdict dictionary (normalized later by the comparator)
        """
        messages = [
            {"role": "system", "content": NewsAnalysisPrompts.COMPARISON_SYSTEM_PROMPT},
            {"role": "user", "content": NewsAnalysisPrompts.get_comparison_prompt(topic, articles, self.excerpt_chars)}
        ]
        content = self._make_structured_request(messages, get_schema_by_type("comparison"), "comparison")
        return self._parse(content, "comparison")

    def test_connection(self) -> bool:
        """Test OpenAI API connection."""
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": "Hello"}],
                max_tokens=5
            )
        except OpenAIError as e:
            logger.error(f"OpenAI API connection test failed: {e}")
            return False

        if response and response.choices:
            logger.info("OpenAI API connection test successful")
            return True
        logger.error("OpenAI API connection test failed: no response")
        return False
