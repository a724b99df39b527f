"""Environment configuration validator.

Partitions the required environment variables into feature categories and
classifies each as valid, missing or invalid (placeholder value). Results are
computed once per process and cached; the UI reads them through
``GET /api/config-status`` to decide which banners to show.
"""

from dataclasses import asdict, dataclass, field
from functools import lru_cache
from typing import Any

from ideavault.core.config import get_settings
from ideavault.core.logging import get_logger

logger = get_logger(__name__)

# Variables a browser bundle may see
CLIENT_ENV_VARS: dict[str, list[str]] = {
    "clerk": ["CLERK_PUBLISHABLE_KEY"],
    "supabase": [
        "SUPABASE_IDEAS_URL",
        "SUPABASE_IDEAS_ANON_KEY",
        "SUPABASE_USER_URL",
        "SUPABASE_USER_ANON_KEY",
    ],
    "app": ["APP_URL"],
}

# Server-only secrets
SERVER_ENV_VARS: dict[str, list[str]] = {
    "clerk": ["CLERK_SECRET_KEY"],
    "supabase": ["SUPABASE_USER_SERVICE_ROLE_KEY"],
    "ai": ["GOOGLE_GEMINI_API_KEY"],
}

PLACEHOLDER_LITERALS = frozenset({"your-key-here", "your_google_gemini_api_key_here"})


@dataclass
class CategoryResult:
    """Validation outcome for one feature category."""

    category: str
    missing: list[str] = field(default_factory=list)
    invalid: list[str] = field(default_factory=list)
    valid: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.missing and not self.invalid

    @property
    def total_required(self) -> int:
        return len(self.missing) + len(self.invalid) + len(self.valid)


@dataclass
class ValidationResult:
    """Overall validation snapshot."""

    categories: dict[str, CategoryResult]

    @property
    def is_valid(self) -> bool:
        return all(c.is_valid for c in self.categories.values())

    @property
    def summary(self) -> dict[str, int]:
        return {
            "total_missing": sum(len(c.missing) for c in self.categories.values()),
            "total_invalid": sum(len(c.invalid) for c in self.categories.values()),
            "total_categories": len(self.categories),
            "valid_categories": sum(1 for c in self.categories.values() if c.is_valid),
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "categories": {
                name: {**asdict(c), "is_valid": c.is_valid, "total_required": c.total_required}
                for name, c in self.categories.items()
            },
            "summary": self.summary,
        }


def is_placeholder(value: str) -> bool:
    """True if the value is a known placeholder literal."""
    return "placeholder" in value or value in PLACEHOLDER_LITERALS


def _merge(*groups: dict[str, list[str]]) -> dict[str, list[str]]:
    merged: dict[str, list[str]] = {}
    for group in groups:
        for category, names in group.items():
            merged.setdefault(category, []).extend(names)
    return merged


def validate_category(category: str, variables: dict[str, str | None]) -> CategoryResult:
    """Classify each variable of a category as missing, invalid or valid."""
    result = CategoryResult(category=category)
    for name, value in variables.items():
        if not value:
            result.missing.append(name)
        elif is_placeholder(value):
            result.invalid.append(name)
        else:
            result.valid.append(name)
    return result


def _validate(groups: dict[str, list[str]]) -> ValidationResult:
    settings = get_settings()
    categories = {
        category: validate_category(
            category, {name: getattr(settings, name, None) for name in names}
        )
        for category, names in groups.items()
    }
    return ValidationResult(categories=categories)


@lru_cache(maxsize=1)
def validate_environment() -> ValidationResult:
    """Validate every required variable (server view)."""
    result = _validate(_merge(CLIENT_ENV_VARS, SERVER_ENV_VARS))
    if not result.is_valid:
        logger.warning(
            "Environment configuration incomplete",
            extra={"extra_data": result.summary},
        )
    return result


@lru_cache(maxsize=1)
def validate_client_environment() -> ValidationResult:
    """Validate only client-exposed variables; server secrets are assumed valid."""
    result = _validate(CLIENT_ENV_VARS)
    for category in SERVER_ENV_VARS:
        result.categories.setdefault(category, CategoryResult(category=category))
    return result


def reset_validation_cache() -> None:
    """Forget cached snapshots (tests, settings reload)."""
    validate_environment.cache_clear()
    validate_client_environment.cache_clear()


def get_configuration_errors(client: bool = False) -> list[dict[str, str]] | None:
    """
    Get user-facing descriptions of configuration problems.

    Returns:
        None when everything is configured, otherwise one entry per broken
        category with ``severity`` "error" (something missing) or "warning"
        (only placeholder values).
    """
    validation = validate_client_environment() if client else validate_environment()
    if validation.is_valid:
        return None

    errors = []
    for category in validation.categories.values():
        if category.is_valid:
            continue
        issues = []
        if category.missing:
            issues.append(f"Missing: {', '.join(category.missing)}")
        if category.invalid:
            issues.append(f"Invalid: {', '.join(category.invalid)}")
        errors.append(
            {
                "category": category.category,
                "issues": "; ".join(issues),
                "severity": "error" if category.missing else "warning",
            }
        )
    return errors


def is_feature_configured(feature: str, client: bool = False) -> bool:
    """Check if a specific feature category is properly configured."""
    validation = validate_client_environment() if client else validate_environment()
    category = validation.categories.get(feature)
    return bool(category and category.is_valid)


def get_feature_flags(client: bool = False) -> dict[str, bool]:
    """Per-feature boolean map used for UI banners."""
    validation = validate_client_environment() if client else validate_environment()
    return {name: c.is_valid for name, c in validation.categories.items()}
