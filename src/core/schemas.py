#!/usr/bin/env python3
"""
Centralized JSON schemas for OpenAI structured outputs.

Contains the schemas for the two analysis requests: single-article
enrichment and cross-source topic comparison.
"""

from typing import Dict, Any

_STRING_LIST = {"type": "array", "items": {"type": "string"}}

# Schema for single-article analysis
ARTICLE_ANALYSIS_SCHEMA = {
    "type": "object",
    "properties": {
        "propaganda_techniques": {
            **_STRING_LIST,
            "description": "Manipulation techniques present in the article"
        },
        "key_topics": {
            **_STRING_LIST,
            "description": "Short topic labels, e.g. Budget, Healthcare"
        },
        "politicians_involved": {
            **_STRING_LIST,
            "description": "Named officials mentioned in the article"
        },
        "factuality_score": {
            "type": "integer",
            "description": "Factual reliability from 0 to 100"
        },
        "emotional_tone": {
            "type": "string",
            "enum": ["neutral", "positive", "negative", "angry", "fearful", "hopeful"]
        },
        "bias_analysis": {
            "type": "string",
            "enum": ["left", "center", "right"],
            "description": "Political leaning of this article"
        },
        "claims": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "claim": {"type": "string"},
                    "evidence": {"type": "string"},
                    "verifiable": {"type": "boolean"},
                    "contradictions": _STRING_LIST
                },
                "required": ["claim", "evidence", "verifiable", "contradictions"],
                "additionalProperties": False
            }
        },
        "propaganda_analysis": {
            "type": "string",
            "description": "Detailed analysis of propaganda techniques used"
        },
        "credibility_assessment": {
            "type": "string",
            "description": "Assessment of source credibility and article quality"
        }
    },
    "required": [
        "propaganda_techniques", "key_topics", "politicians_involved", "factuality_score",
        "emotional_tone", "bias_analysis", "claims", "propaganda_analysis", "credibility_assessment"
    ],
    "additionalProperties": False
}

# Schema for cross-source topic comparison
TOPIC_COMPARISON_SCHEMA = {
    "type": "object",
    "properties": {
        "consensus_level": {
            "type": "integer",
            "description": "How much the sources agree, 0 to 100"
        },
        "major_discrepancies": {
            **_STRING_LIST,
            "description": "Contradictory facts or claims between sources"
        },
        "propaganda_patterns": {
            **_STRING_LIST,
            "description": "Manipulation patterns seen across the coverage"
        },
        "factual_accuracy": {
            "type": "integer",
            "description": "Overall factual accuracy, 0 to 100"
        },
        "political_bias": {
            "type": "object",
            "properties": {
                "left": {"type": "integer"},
                "center": {"type": "integer"},
                "right": {"type": "integer"}
            },
            "required": ["left", "center", "right"],
            "additionalProperties": False
        },
        "media_manipulation": {
            "type": "string",
            "description": "Analysis of potential media manipulation"
        },
        "public_impact": {
            "type": "string",
            "description": "Assessment of impact on public opinion"
        },
        "recommended_action": {
            "type": "string",
            "description": "Recommended action for citizens"
        }
    },
    "required": [
        "consensus_level", "major_discrepancies", "propaganda_patterns", "factual_accuracy",
        "political_bias", "media_manipulation", "public_impact", "recommended_action"
    ],
    "additionalProperties": False
}


def get_schema_by_type(analysis_type: str) -> Dict[str, Any]:
    """
    Get JSON schema by analysis type.

    Args:
        analysis_type: Type of analysis ("article" or "comparison")

    Returns:
        JSON schema dictionary

    Raises:
        ValueError: If analysis_type is not recognized
    """
    schemas = {
        "article": ARTICLE_ANALYSIS_SCHEMA,
        "comparison": TOPIC_COMPARISON_SCHEMA,
    }

    if analysis_type not in schemas:
        raise ValueError(f"Unknown analysis type: {analysis_type}")

    return schemas[analysis_type]
