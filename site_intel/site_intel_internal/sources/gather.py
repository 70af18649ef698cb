"""
Parallel fan-out to upstream site-data sources.

Each source is an async callable. It runs under a per-attempt timeout and is
retried with exponential backoff; when every attempt fails its fallback
value is used and a warning is recorded. One failing source never aborts the
gather, so signal synthesis always has something to work with, and the
warnings feed the confidence score.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 12.0
DEFAULT_MAX_RETRIES = 3
DEFAULT_BACKOFF_BASE_SECONDS = 0.1
DEFAULT_BACKOFF_FACTOR = 2.5


@dataclass(frozen=True)
class SourceSpec:
    name: str
    fetch: Callable[[], Awaitable[Any]]
    label: Optional[str] = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    max_retries: int = DEFAULT_MAX_RETRIES
    backoff_base_seconds: float = DEFAULT_BACKOFF_BASE_SECONDS
    backoff_factor: float = DEFAULT_BACKOFF_FACTOR
    fallback: Any = None

    def __post_init__(self):
        if self.max_retries < 1:
            raise ValueError(f"max_retries must be >= 1 for source {self.name!r}")
        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be positive for source {self.name!r}")

    @property
    def display_label(self) -> str:
        return self.label or self.name

    def backoff_delay(self, attempt: int) -> float:
        """Delay in seconds after the given zero-based failed attempt."""
        return self.backoff_base_seconds * (self.backoff_factor ** attempt)


@dataclass
class SourceGatherResult:
    values: dict[str, Any] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    failed_sources: list[str] = field(default_factory=list)


def _describe_error(error: BaseException) -> str:
    if isinstance(error, asyncio.TimeoutError):
        return "timed out"
    return str(error) or error.__class__.__name__


async def fetch_with_retry(spec: SourceSpec) -> tuple[bool, Any, Optional[str]]:
    """
    Run one source to completion.

    Returns:
        (succeeded, value, error_description). On failure value is spec.fallback.
    """
    last_error: Optional[BaseException] = None
    for attempt in range(spec.max_retries):
        try:
            value = await asyncio.wait_for(spec.fetch(), timeout=spec.timeout_seconds)
            return True, value, None
        except asyncio.CancelledError:
            raise
        except Exception as e:
            last_error = e
            logger.warning(
                f"Source {spec.name!r} failed (attempt {attempt + 1}/{spec.max_retries}): {_describe_error(e)}"
            )
            if attempt < spec.max_retries - 1:
                await asyncio.sleep(spec.backoff_delay(attempt))
    logger.error(f"Max retries reached for source {spec.name!r}; using fallback")
    return False, spec.fallback, _describe_error(last_error)


async def gather_sources(specs: Sequence[SourceSpec]) -> SourceGatherResult:
    """Fetch every source concurrently; failures degrade to fallbacks plus warnings."""
    names = [spec.name for spec in specs]
    if len(set(names)) != len(names):
        raise ValueError(f"Source names must be unique: {names}")

    outcomes = await asyncio.gather(*(fetch_with_retry(spec) for spec in specs))

    result = SourceGatherResult()
    for spec, (succeeded, value, error) in zip(specs, outcomes):
        result.values[spec.name] = value
        if not succeeded:
            result.failed_sources.append(spec.name)
            result.warnings.append(f"{spec.display_label} unavailable: {error}")
    logger.info(
        "Gathered %s sources: %s succeeded, %s fell back",
        len(specs),
        len(specs) - len(result.failed_sources),
        len(result.failed_sources),
    )
    return result
