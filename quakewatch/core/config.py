"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from urllib.parse import urlparse
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import soupsieve

from quakewatch.core.extractor import DEFAULT_ROW_SELECTOR


PHIVOLCS_URL = "https://www.phivolcs.dost.gov.ph/index.php/earthquake/earthquake-information3"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        source_url: Page listing recent earthquakes
        cache_ttl_seconds: How long a fetched record set is served as fresh
        fetch_timeout_seconds: Upper bound on a single source fetch
        user_agent: User-Agent header sent to the source
        row_selector: CSS selector for table rows on the source page
        source_timezone: IANA timezone the source reports local times in
        cors_origins: Origins allowed to call the API from a browser
        host: Interface the API server binds to
        port: Port the API server listens on
    """
    source_url: str = PHIVOLCS_URL
    cache_ttl_seconds: int = 300
    fetch_timeout_seconds: int = 30
    user_agent: str = DEFAULT_USER_AGENT
    row_selector: str = DEFAULT_ROW_SELECTOR
    source_timezone: str = "Asia/Manila"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    host: str = "0.0.0.0"
    port: int = 3001

    @property
    def cache_ttl(self) -> timedelta:
        """Cache time-to-live as a timedelta."""
        return timedelta(seconds=self.cache_ttl_seconds)


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_source_url(url: str) -> list[ValidationError]:
    """Validate that the source URL is an absolute http(s) URL.

    Pure function.
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return [ValidationError(
            field="source_url",
            message=f"Source URL must be an absolute http(s) URL, got '{url}'",
        )]
    return []


def validate_row_selector(selector: str) -> list[ValidationError]:
    """Validate that the row selector is a usable CSS selector.

    Pure function.
    """
    try:
        soupsieve.compile(selector)
    except soupsieve.SelectorSyntaxError as e:
        return [ValidationError(
            field="row_selector",
            message=f"Invalid CSS selector '{selector}': {e}",
        )]
    return []


def validate_timezone(name: str) -> list[ValidationError]:
    """Validate that a timezone name resolves.

    Pure function (reads the tz database).
    """
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return [ValidationError(
            field="source_timezone",
            message=f"Unknown timezone '{name}'",
        )]
    return []


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    errors.extend(validate_source_url(config.source_url))
    errors.extend(validate_row_selector(config.row_selector))
    errors.extend(validate_timezone(config.source_timezone))

    if config.cache_ttl_seconds <= 0:
        errors.append(ValidationError(
            field="cache_ttl_seconds",
            message=f"Cache TTL must be positive, got {config.cache_ttl_seconds}",
        ))

    if config.fetch_timeout_seconds <= 0:
        errors.append(ValidationError(
            field="fetch_timeout_seconds",
            message=f"Fetch timeout must be positive, got {config.fetch_timeout_seconds}",
        ))
    elif config.fetch_timeout_seconds > config.cache_ttl_seconds > 0:
        errors.append(ValidationError(
            field="fetch_timeout_seconds",
            message=(
                f"Fetch timeout ({config.fetch_timeout_seconds}s) exceeds cache TTL "
                f"({config.cache_ttl_seconds}s)"
            ),
            severity="warning",
        ))

    if not 0 < config.port < 65536:
        errors.append(ValidationError(
            field="port",
            message=f"Port {config.port} out of range [1, 65535]",
        ))

    if not config.user_agent:
        errors.append(ValidationError(
            field="user_agent",
            message="Empty User-Agent; the source may reject the request",
            severity="warning",
        ))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
