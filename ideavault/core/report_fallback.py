"""Deterministic business report pieces and report sanitizing.

The fallback report is templated English built from the insight tables in
``ideavault.core.report_insights``; it involves no randomness so the same idea
always yields the same text. ``sanitize_report`` is applied to every report
before it leaves the service.
"""

import copy
import re
from datetime import datetime, timezone
from typing import Any

from ideavault.core.config import get_settings
from ideavault.core.report_insights import (
    audience_insights,
    category_insights,
    difficulty_insights,
)

REPORT_SECTIONS = (
    "business_concept",
    "market_intelligence",
    "product_strategy",
    "go_to_market",
    "financial_foundation",
    "evaluation",
)

PLACEHOLDER_PATTERN = re.compile(r"undefined|N/A|TBD", re.IGNORECASE)

NO_COMPETITORS_TEXT = "There are no companies currently doing this exact thing."
VIABLE_TEXT = "seems viable if executed well"
UNCERTAIN_TEXT = "has uncertain viability and would require careful validation"

SURFACE_AXIS = [0.2, 0.4, 0.6, 0.8, 1.0]


def _idea_fields(idea: dict[str, Any]) -> dict[str, str]:
    return {
        "title": idea.get("title") or "This idea",
        "description": idea.get("description") or "solving a real customer problem",
        "category": idea.get("category") or "Technology",
        "audience": idea.get("target_audience") or "General",
        "difficulty": idea.get("difficulty") or "medium",
    }


def visualization_scaffold() -> dict[str, Any]:
    """Empty 3D visualization block with zeroed values."""
    return {
        "three_d_models": {
            "market_positioning_scatter": {
                "description": (
                    "3D scatter of competitors vs idea "
                    "(Market Share %, Growth Rate %, Differentiation score)"
                ),
                "axes": ["market_share", "growth_rate", "differentiation"],
                "points": [],
            },
            "efficiency_potential_surface": {
                "description": (
                    "Grid for efficiency vs potential across market maturity (z as potential)"
                ),
                "axes": ["efficiency", "market_maturity", "potential"],
                "grid": {
                    "x": list(SURFACE_AXIS),
                    "y": list(SURFACE_AXIS),
                    "z": [[0.0] * len(SURFACE_AXIS) for _ in SURFACE_AXIS],
                },
            },
        }
    }


def ensure_visualizations(report: dict[str, Any]) -> dict[str, Any]:
    """Add the visualization scaffold when the model left it out."""
    visualizations = report.get("visualizations")
    if not isinstance(visualizations, dict):
        report["visualizations"] = visualization_scaffold()
    elif not visualizations.get("three_d_models"):
        visualizations["three_d_models"] = visualization_scaffold()["three_d_models"]
    return report


def no_competitors_landscape(
    strengths: list[str], risks: list[str], with_highlights: bool = True
) -> str:
    viability = VIABLE_TEXT if len(strengths) > len(risks) else UNCERTAIN_TEXT
    text = f"{NO_COMPETITORS_TEXT} Based on the analysis, the idea {viability}."
    if not with_highlights:
        return text
    if strengths:
        text += f" Advantage: {strengths[0]}."
    if risks:
        text += f" Key risk: {risks[0]}."
    return text


def merge_competitors(report: dict[str, Any], competitors: list[str]) -> dict[str, Any]:
    """Put discovered competitor names into ``market_intelligence``."""
    if not competitors:
        return report
    market = report.setdefault("market_intelligence", {})
    market["key_players"] = competitors
    summary = f"Key players include {', '.join(competitors[:3])} and others."
    landscape = market.get("competitive_landscape") or ""
    if not landscape or "no companies" in landscape:
        market["competitive_landscape"] = summary
    return report


def build_fallback_mvp_prompt(idea: dict[str, Any]) -> str:
    """Fixed MVP build prompt interpolated with the idea's fields."""
    f = _idea_fields(idea)
    category = f["category"].lower()
    return f"""Create a modern, responsive web application for "{f['title']}".

**App Overview:**
Build a {category} platform that {f['description']}. The app should target {f['audience']} with an intuitive, user-friendly interface.

**Core Features:**
- User authentication and profile management
- Main dashboard with key functionality
- Core {category} features
- Responsive design for mobile and desktop
- Clean, modern UI with good UX practices

**Design Requirements:**
- Modern, clean design with professional appearance
- Responsive layout that works on all devices
- Intuitive navigation and user flow
- Accessible design following WCAG guidelines
- Color scheme: Use a professional palette with primary colors in blue/indigo tones

**Technical Specifications:**
- React-based frontend with modern JavaScript
- Component-based architecture
- State management for user data and app state
- API integration capabilities
- Form validation and error handling
- Loading states and user feedback

**Pages/Screens Needed:**
- Landing page with value proposition
- User authentication (login/signup)
- Main dashboard
- Core feature pages
- User profile/settings
- Help/support page

**Additional Requirements:**
- Fast loading times and optimized performance
- SEO-friendly structure
- Cross-browser compatibility
- Mobile-first responsive design
- Professional typography and spacing

Build this as a production-ready MVP that can be deployed and used by real users immediately."""


def build_fallback_report(
    idea: dict[str, Any],
    raw_response: str | None = None,
    model_suffix: str = "fallback",
) -> dict[str, Any]:
    """
    Build a complete six-section report without calling the LLM.

    Args:
        idea: Idea dict (title, description, category, target_audience, difficulty)
        raw_response: Unparseable model output or the reason for falling back
        model_suffix: Appended to the configured model name in ``model``

    Returns:
        Report dict with every section, visualizations, mvp_prompt and metadata
    """
    f = _idea_fields(idea)
    c = category_insights(f["category"])
    a = audience_insights(f["audience"])
    d = difficulty_insights(f["difficulty"])
    category = f["category"].lower()
    audience = f["audience"].lower()

    strengths = list(c["strengths"])
    risks = list(c["risks"])

    report = {
        "business_concept": {
            "elevator_pitch": (
                f"{f['title']} revolutionizes the {category} industry by "
                f"{f['description'].lower()}. Specifically designed for {audience}, this "
                f"{d['complexity']} solution addresses critical pain points that current "
                f"market offerings fail to solve. By leveraging {c['key_technology']}, we "
                f"create a seamless experience that {c['value_proposition']}. Our unique "
                f"approach combines {c['differentiator']} with user-centric design, "
                f"positioning us to capture significant market share in the rapidly growing "
                f"{category} sector."
            ),
            "problem_statement": (
                f"{f['audience']} face significant challenges in {c['problem_area']}. "
                f"Current solutions are {c['current_limitations']}, leaving users frustrated "
                f"with {c['pain_points']}. Market research indicates that {a['market_gap']}, "
                f"creating a substantial opportunity for innovation. The {category} industry "
                f"lacks {c['missing_element']}, which directly impacts user satisfaction and "
                f"business outcomes."
            ),
            "solution_overview": (
                f"{f['title']} solves these problems through {c['solution_approach']}. Our "
                f"platform integrates {c['core_capabilities']} to deliver "
                f"{a['desired_outcome']}. The solution features {d['technical_approach']} and "
                f"provides {c['key_benefits']}. By focusing on {a['primary_need']}, we ensure "
                f"maximum user adoption and retention."
            ),
            "value_proposition": (
                f"We deliver {c['unique_value']} through {c['delivery_method']}. Users "
                f"experience {a['value_realization']} while reducing {c['cost_savings']}. Our "
                f"competitive advantage lies in {c['competitive_edge']}, making us the "
                f"preferred choice for {audience} seeking {c['desired_outcome']}."
            ),
            "target_customers": (
                f"Primary customers include {a['primary_segment']} who "
                f"{a['behavior_profile']}. Secondary markets encompass "
                f"{a['secondary_segment']} and {a['tertiary_segment']}. Our ideal customer "
                f"profile shows {a['demographics']} with {a['psychographics']}. These users "
                f"typically {a['usage_pattern']} and value {a['key_values']}."
            ),
        },
        "market_intelligence": {
            "market_size": (
                f"The global {category} market is valued at {c['market_size']} and growing "
                f"at {c['growth_rate']} annually. The {audience} segment represents "
                f"{a['segment_size']} of this market, with particularly strong growth in "
                f"{c['growth_areas']}. Regional analysis shows {c['regional_trends']}, "
                f"indicating substantial expansion opportunities."
            ),
            "market_trends": list(c["market_trends"]),
            "competitive_landscape": no_competitors_landscape(
                strengths, risks, with_highlights=False
            ),
            "key_players": [],
            "market_opportunity": (
                f"Significant whitespace exists in {c['opportunity_area']} where current "
                f"solutions {c['market_gap']}. The convergence of {c['convergence_trends']} "
                f"creates a perfect storm for innovation. Early movers in this space can "
                f"capture {c['first_mover_advantage']} before larger competitors respond. "
                f"Total addressable market for our specific approach is estimated at "
                f"{c['tam_estimate']}."
            ),
        },
        "product_strategy": {
            "core_features": list(c["core_features"]),
            "development_roadmap": (
                f"{d['development_timeline']}: Phase 1 ({d['phase1_duration']}): "
                f"{d['phase1_scope']}. Phase 2 ({d['phase2_duration']}): {d['phase2_scope']}. "
                f"Phase 3 ({d['phase3_duration']}): {d['phase3_scope']}. Each phase includes "
                f"{d['iteration_approach']} to ensure market fit."
            ),
            "technology_requirements": (
                f"{d['tech_stack']} architecture featuring {c['required_tech']}. "
                f"Infrastructure needs include {d['infrastructure']} with "
                f"{c['scalability_reqs']}. Development approach emphasizes "
                f"{d['development_methodology']} to manage {d['technical_challenges']}."
            ),
            "mvp_scope": (
                f"Initial version focuses on {c['mvp_core']} to validate "
                f"{a['key_hypothesis']}. Core user journey includes {c['mvp_user_flow']} with "
                f"essential features: {', '.join(c['mvp_features'])}. Success metrics include "
                f"{a['mvp_metrics']} to guide iteration decisions."
            ),
        },
        "go_to_market": {
            "target_audience": (
                f"Primary beachhead market: {a['beachhead_market']} who "
                f"{a['adoption_profile']}. Expansion targets include {a['expansion_markets']} "
                f"with {a['expansion_strategy']}. Customer acquisition focuses on "
                f"{a['acquisition_channels']} leveraging {a['acquisition_strategy']}."
            ),
            "marketing_strategy": (
                f"Multi-channel approach emphasizing {c['marketing_channels']}. Content "
                f"strategy targets {a['content_topics']} through {c['content_formats']}. "
                f"Partnership strategy includes {c['partner_types']} to accelerate "
                f"{c['partnership_goals']}. Community building focuses on "
                f"{a['community_strategy']}."
            ),
            "pricing_model": (
                f"{c['pricing_strategy']} with tiers: {c['pricing_tiers']}. Value-based "
                f"pricing reflects {c['value_metrics']} with {a['price_elasticity']}. "
                f"Competitive positioning shows {c['pricing_position']} to maximize "
                f"{c['revenue_optimization']}."
            ),
            "launch_plan": (
                f"{d['launch_timeline']}: Pre-launch ({d['prelaunch_duration']}): "
                f"{d['prelaunch_activities']}. Soft launch ({d['softlaunch_duration']}): "
                f"{d['softlaunch_scope']}. Full launch ({d['fulllaunch_duration']}): "
                f"{d['fulllaunch_activities']}. Post-launch optimization focuses on "
                f"{c['optimization_areas']}."
            ),
        },
        "financial_foundation": {
            "startup_costs": (
                f"Initial investment: {d['startup_costs']} covering {d['cost_breakdown']}. "
                f"Development costs: {d['development_costs']}. Marketing budget: "
                f"{c['marketing_budget']}. Operations: {d['operational_costs']}. Working "
                f"capital: {d['working_capital']} for {d['cashflow_buffer']}."
            ),
            "revenue_projections": (
                f"Conservative projections: Year 1: {c['year1_revenue']}, Year 2: "
                f"{c['year2_revenue']}, Year 3: {c['year3_revenue']}. Revenue drivers include "
                f"{c['revenue_drivers']} with {a['monetization_strategy']}. Growth "
                f"assumptions based on {c['growth_assumptions']}."
            ),
            "cost_structure": (
                f"Variable costs ({c['variable_cost_percent']}): {c['variable_costs']}. Fixed "
                f"costs ({c['fixed_cost_percent']}): {c['fixed_costs']}. Customer acquisition "
                f"cost: {a['cac']} with {a['ltv']} lifetime value. Unit economics show "
                f"{c['unit_economics']}."
            ),
            "funding_strategy": (
                f"{d['funding_approach']}: Pre-seed ({d['preseed_amount']}) for "
                f"{d['preseed_use']}. Seed round ({d['seed_amount']}) targeting "
                f"{d['seed_investors']}. Series A ({d['series_a_amount']}) for "
                f"{d['series_a_use']}. Alternative funding includes "
                f"{c['alternative_funding']}."
            ),
        },
        "evaluation": {
            "strengths": strengths,
            "risks": risks,
            "success_metrics": list(a["success_metrics"]),
            "recommendations": [
                f"Focus on {c['priority_recommendation']}",
                f"Validate {a['validation_priority']} early",
                f"Build {c['build_priority']} for competitive advantage",
                f"Establish {c['partnership_priority']} partnerships",
                f"Monitor {c['monitoring_priority']} closely",
            ],
        },
        "visualizations": visualization_scaffold(),
        "mvp_prompt": build_fallback_mvp_prompt(idea),
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "model": f"{get_settings().GEMINI_MODEL}-{model_suffix}",
        "idea_id": idea.get("id"),
    }
    if raw_response is not None:
        report["raw_response"] = raw_response
    return report


# =============================================================================
# Sanitizing
# =============================================================================


def _strip_placeholders(text: str) -> str:
    # Repeat until stable: removing one token can join the halves of another
    previous = None
    while previous != text:
        previous = text
        text = PLACEHOLDER_PATTERN.sub("", text)
    return text.strip()


def _clean(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, dict):
        return {k: _clean(v) for k, v in value.items()}
    if isinstance(value, list):
        cleaned = [_clean(v) for v in value if v is not None]
        return [v for v in cleaned if not (isinstance(v, str) and not v)]
    if isinstance(value, str):
        return _strip_placeholders(value)
    return value


def _fill_empty(target: dict[str, Any], source: dict[str, Any]) -> None:
    for key, fallback in source.items():
        current = target.get(key)
        if isinstance(fallback, dict):
            if not isinstance(current, dict):
                target[key] = copy.deepcopy(fallback)
            else:
                _fill_empty(current, fallback)
        elif key == "key_players":
            target.setdefault(key, [])
        elif current in (None, "", []):
            target[key] = copy.deepcopy(fallback)


def sanitize_report(
    report: dict[str, Any], idea: dict[str, Any] | None = None
) -> dict[str, Any]:
    """
    Strip placeholder tokens from every string and guarantee complete sections.

    Leaves emptied by stripping (or missing altogether) in the six sections are
    refilled from the deterministic fallback report for ``idea``. An empty
    ``key_players`` list is kept, with ``competitive_landscape`` rewritten to say
    nobody does this yet plus a viability note.

    Returns:
        New report dict; the input is not modified
    """
    sanitized = _clean(copy.deepcopy(report))

    fallback = _clean(build_fallback_report(idea or {}))
    for section in REPORT_SECTIONS:
        if not isinstance(sanitized.get(section), dict):
            sanitized[section] = {}
        _fill_empty(sanitized[section], fallback[section])
    ensure_visualizations(sanitized)

    market = sanitized["market_intelligence"]
    if not isinstance(market.get("key_players"), list) or not market["key_players"]:
        market["key_players"] = []
        evaluation = sanitized["evaluation"]
        market["competitive_landscape"] = _strip_placeholders(
            no_competitors_landscape(
                [s for s in evaluation.get("strengths", []) if isinstance(s, str)],
                [r for r in evaluation.get("risks", []) if isinstance(r, str)],
            )
        )

    if isinstance(sanitized.get("mvp_prompt"), str) and not sanitized["mvp_prompt"]:
        sanitized["mvp_prompt"] = fallback["mvp_prompt"]
    return sanitized
