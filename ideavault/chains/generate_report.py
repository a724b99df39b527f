"""Generate a six-section business report for an idea with Gemini.

Parse failures, quota exhaustion and unknown models degrade to the
deterministic fallback report; a bad API key, a safety block or any other
error is raised as ``ReportGenerationError`` for the route to translate.
"""

import json
from datetime import datetime, timezone
from typing import Any

from ideavault.core.config import get_settings
from ideavault.core.gemini import generate_text, is_gemini_configured
from ideavault.core.llm import parse_json_array, parse_json_object
from ideavault.core.logging import get_logger
from ideavault.core.memory_store import get_quota
from ideavault.core.report_fallback import (
    build_fallback_mvp_prompt,
    build_fallback_report,
    ensure_visualizations,
    merge_competitors,
    sanitize_report,
)

logger = get_logger(__name__)


class ReportGenerationError(Exception):
    """Report could not be produced and no fallback applies."""


REPORT_PROMPT = """Create a business analysis report for: {title}

Description: {description}
Category: {category}
Target Audience: {target_audience}
Difficulty: {difficulty}

Return JSON object with these sections:

{{
  "business_concept": {{
    "elevator_pitch": "2-3 paragraph pitch explaining the business",
    "problem_statement": "Problem this business solves",
    "solution_overview": "How solution addresses the problem",
    "value_proposition": "Clear value proposition",
    "target_customers": "Target customer segments"
  }},
  "market_intelligence": {{
    "market_size": "Global and/or regional market size figures with source context",
    "market_trends": ["3-6 current quantified market trends"],
    "competitive_landscape": "Summary of competitive dynamics and positioning",
    "key_players": ["List at least 5 named competitors or products in this specific niche"],
    "market_opportunity": "Specific quantified opportunities (segments, geos, ICPs)"
  }},
  "product_strategy": {{
    "core_features": ["Feature 1", "Feature 2", "Feature 3"],
    "development_roadmap": "Development timeline",
    "technology_requirements": "Tech stack requirements",
    "mvp_scope": "MVP features"
  }},
  "go_to_market": {{
    "target_audience": "Target audience analysis",
    "marketing_strategy": "Marketing approach",
    "pricing_model": "Pricing strategy",
    "launch_plan": "6-month launch timeline"
  }},
  "financial_foundation": {{
    "startup_costs": "Initial investment breakdown",
    "revenue_projections": "3-year revenue projections",
    "cost_structure": "Operational costs",
    "funding_strategy": "Funding requirements"
  }},
  "evaluation": {{
    "strengths": ["Strength 1", "Strength 2", "Strength 3"],
    "risks": ["Risk 1", "Risk 2", "Risk 3"],
    "success_metrics": ["Metric 1", "Metric 2", "Metric 3"],
    "recommendations": ["Rec 1", "Rec 2", "Rec 3"]
  }},
  "visualizations": {{
    "three_d_models": {{
      "market_positioning_scatter": {{
        "description": "3D scatter of competitors vs idea (Market Share %, Growth Rate %, Differentiation score)",
        "axes": ["market_share", "growth_rate", "differentiation"],
        "points": [
          {{ "name": "Idea", "market_share": 0.0, "growth_rate": 0.0, "differentiation": 0.0 }}
        ]
      }},
      "efficiency_potential_surface": {{
        "description": "Grid for efficiency vs potential across market maturity (z as potential)",
        "axes": ["efficiency", "market_maturity", "potential"],
        "grid": {{
          "x": [0.2, 0.4, 0.6, 0.8, 1.0],
          "y": [0.2, 0.4, 0.6, 0.8, 1.0],
          "z": [[0.0, 0.0, 0.0, 0.0, 0.0], [0.0, 0.0, 0.0, 0.0, 0.0], [0.0, 0.0, 0.0, 0.0, 0.0], [0.0, 0.0, 0.0, 0.0, 0.0], [0.0, 0.0, 0.0, 0.0, 0.0]]
        }}
      }}
    }}
  }}
}}

Important rules:
- Use only real-world data and company names. Do not invent placeholder text like "Competitor 1" or "undefined".
- If data is uncertain, provide the best widely-cited estimate and clearly note assumptions.
- key_players MUST be an array of 5-10 real named competitors; omit only if truly none exist for niche.
- Ensure every field is non-empty and human-readable. Avoid "N/A", "TBD", "undefined".
- If there are truly no direct competitors in this niche, set market_intelligence.key_players to an empty array [], and set market_intelligence.competitive_landscape to a simple, plain-English sentence stating there are no companies doing this, followed by a brief viability assessment.
- Populate visualizations.three_d_models with realistic, non-zero values derived from known market data and your analysis.
Return ONLY the JSON object."""

COMPETITOR_PROMPT = """List 5-10 real companies, products, or organizations that operate in the same niche or solve the same or closely related problem as the following business.

Business: {title}
Description: {description}
Category: {category}
Target audience: {target_audience}

Rules:
- Return ONLY a JSON array of strings where each string is the company/product name (e.g., ["Company A", "Product B"]).
- Use only real names. Do not invent placeholders. If there are truly no direct competitors, return an empty JSON array [] but prefer adjacent or substitute solutions when reasonable."""

MVP_PROMPT = """Based on this business idea and analysis, create a comprehensive prompt for a no-code app builder to generate a frontend MVP:

Business Idea: {title}
Description: {description}
Category: {category}
Target Audience: {target_audience}

Core Features: {core_features}
MVP Definition: {mvp_scope}

Create a detailed, actionable prompt that includes:
1. App overview and purpose
2. Target user personas
3. Core features and functionality
4. UI/UX requirements and design preferences
5. Technical specifications and integrations
6. Specific pages/screens needed
7. Color scheme and branding guidelines
8. Responsive design requirements

Format the prompt to be copy-paste ready. Make it specific, detailed, and actionable. The prompt should be 300-500 words and include all necessary details for a developer to build a functional MVP.

Return only the prompt text, no additional formatting or explanations."""


def _prompt_fields(idea: dict[str, Any]) -> dict[str, Any]:
    return {
        "title": idea.get("title", ""),
        "description": idea.get("description", ""),
        "category": idea.get("category", ""),
        "target_audience": idea.get("target_audience", ""),
        "difficulty": idea.get("difficulty", ""),
    }


async def fetch_competitors(idea: dict[str, Any]) -> list[str]:
    """Narrow follow-up call asking only for competitor names."""
    text = await generate_text(
        COMPETITOR_PROMPT.format(**_prompt_fields(idea)),
        temperature=0.3,
        top_p=0.9,
        max_output_tokens=1024,
        label="competitor_discovery",
    )
    try:
        names = parse_json_array(text)
    except (json.JSONDecodeError, ValueError):
        logger.warning(f"Failed to parse competitors JSON, raw: {text[:200]}")
        return []
    return [n.strip() for n in names if isinstance(n, str) and n.strip()]


async def generate_mvp_prompt(idea: dict[str, Any], report: dict[str, Any]) -> str:
    """Ready-to-paste build prompt; the fixed template on any failure."""
    strategy = report.get("product_strategy") or {}
    features = strategy.get("core_features")
    try:
        text = await generate_text(
            MVP_PROMPT.format(
                **_prompt_fields(idea),
                core_features=", ".join(features) if isinstance(features, list) and features
                else "Core functionality",
                mvp_scope=strategy.get("mvp_scope") or "Basic version with essential features",
            ),
            label="mvp_prompt",
        )
    except Exception as e:
        logger.warning(f"MVP prompt generation failed, using template: {e}")
        return build_fallback_mvp_prompt(idea)
    return text or build_fallback_mvp_prompt(idea)


def _fallback_with_note(idea: dict[str, Any], reason: str, suffix: str, note: str) -> dict[str, Any]:
    report = sanitize_report(build_fallback_report(idea, reason, model_suffix=suffix), idea)
    report["note"] = note
    return report


def _route_error(idea: dict[str, Any], error: Exception) -> dict[str, Any]:
    message = str(error)
    lowered = message.lower()
    code = getattr(error, "code", None)

    if "quota" in lowered or "resource_exhausted" in lowered or code == 429:
        logger.warning("API quota exceeded, returning fallback report")
        return _fallback_with_note(
            idea,
            "API quota exceeded - using fallback report",
            "quota-fallback",
            "Generated using fallback due to API quota limits",
        )

    if "api key" in lowered or code == 401:
        raise ReportGenerationError("API key not configured or invalid") from error

    if "safety" in lowered or "blocked" in lowered:
        raise ReportGenerationError(
            "Content was blocked by safety filters. Please try a different idea."
        ) from error

    if "404" in message or "not found" in lowered or code == 404:
        logger.warning("Model not found, returning fallback report")
        return _fallback_with_note(
            idea,
            "Model not available - using fallback report",
            "model-fallback",
            "Generated using fallback due to model availability",
        )

    raise ReportGenerationError(f"Failed to generate business report: {message}") from error


async def _generate(idea: dict[str, Any]) -> dict[str, Any]:
    if not is_gemini_configured():
        raise RuntimeError("Gemini API key not configured")

    quota = get_quota()
    if quota.is_exceeded("reports"):
        raise RuntimeError("Quota exceeded for reports")

    response = await generate_text(
        REPORT_PROMPT.format(**_prompt_fields(idea)),
        temperature=0.6,
        top_p=0.9,
        max_output_tokens=8192,
        label="report",
    )
    if not response:
        raise RuntimeError("No response from Gemini API")
    quota.record("reports")

    try:
        raw_report = parse_json_object(response)
    except (json.JSONDecodeError, ValueError) as e:
        logger.warning(f"Failed to parse report JSON ({e}), using fallback report")
        report = sanitize_report(build_fallback_report(idea, response), idea)
        report["mvp_prompt"] = build_fallback_mvp_prompt(idea)
        return report

    players = (raw_report.get("market_intelligence") or {}).get("key_players")
    if not isinstance(players, list) or not players:
        try:
            merge_competitors(raw_report, await fetch_competitors(idea))
        except Exception as e:
            logger.warning(f"Competitor discovery failed: {e}")

    report = sanitize_report(ensure_visualizations(raw_report), idea)
    mvp_prompt = await generate_mvp_prompt(idea, report)

    return {
        **report,
        "mvp_prompt": mvp_prompt,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "model": get_settings().GEMINI_MODEL,
        "idea_id": idea.get("id"),
    }


async def generate_idea_report(idea: dict[str, Any]) -> dict[str, Any]:
    """
    Produce a complete report for an idea.

    Returns:
        Sanitized report with the six sections, ``visualizations``,
        ``mvp_prompt``, ``generated_at``, ``model`` and ``idea_id``; fallback
        reports also carry ``raw_response`` and, for quota/model errors, ``note``

    Raises:
        ReportGenerationError: Bad API key, safety block, timeouts or any other
            unexpected failure
    """
    try:
        return await _generate(idea)
    except Exception as e:
        logger.error(f"Error generating idea report: {e}")
        return _route_error(idea, e)
