"""Configuration value object for a validation run. Immutable; created by the caller."""

from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping

from ui_compliance.domain.errors import ConfigurationError


class WcagLevel(Enum):
    """WCAG conformance level the accessibility rules are checked against."""
    A = "A"
    AA = "AA"
    AAA = "AAA"


class ReportingLevel(Enum):
    """How much detail rendered reports include."""
    MINIMAL = "minimal"    # summary block only
    STANDARD = "standard"  # summary + violations grouped by file and severity
    DETAILED = "detailed"  # standard + suggestions and proposed fixes


class OutputFormat(Enum):
    """Report serialization format."""
    JSON = "json"
    HTML = "html"
    MARKDOWN = "markdown"


# Minimum contrast ratio for normal-size text at each level.
CONTRAST_REQUIREMENTS: dict[WcagLevel, float] = {
    WcagLevel.A: 3.0,
    WcagLevel.AA: 4.5,
    WcagLevel.AAA: 7.0,
}


def _coerce_enum(enum_cls: type[Enum], value: object, option: str) -> Enum:
    if isinstance(value, enum_cls):
        return value
    for member in enum_cls:
        if isinstance(value, str) and value.lower() == str(member.value).lower():
            return member
    allowed = ", ".join(str(m.value) for m in enum_cls)
    raise ConfigurationError(f"Invalid {option} {value!r}; expected one of: {allowed}")


@dataclass(frozen=True)
class Configuration:
    """
    Flat set of options controlling which checks are meaningful.

    Defaults are the "strict" preset. Values are validated in __post_init__ so a
    bad option fails when the configuration is built, never mid-run.
    """

    enforce_design_tokens: bool = True
    enforce_semantic_components: bool = True
    enforce_enhanced_8pt_grid: bool = True
    enforce_wcag_compliance: bool = True
    wcag_level: WcagLevel = WcagLevel.AAA
    enforce_rtl_support: bool = True
    enforce_localization: bool = True
    supported_languages: tuple[str, ...] = ("en", "nb", "fr", "ar")
    allow_raw_html: bool = False
    allow_inline_styles: bool = False
    allow_arbitrary_values: bool = False
    allow_hardcoded_text: bool = False
    allow_hardcoded_colors: bool = False
    allow_hardcoded_spacing: bool = False
    token_prefix: str = "token"
    enforce_code_splitting: bool = True
    max_component_size: int = 200
    reporting_level: ReportingLevel = ReportingLevel.STANDARD
    output_format: OutputFormat = OutputFormat.JSON
    approved_components: frozenset[str] = field(default_factory=frozenset)
    """Extra component names accepted in addition to the design-system catalog."""

    def __post_init__(self) -> None:
        # Frozen dataclass: normalize through object.__setattr__.
        object.__setattr__(self, "wcag_level", _coerce_enum(WcagLevel, self.wcag_level, "wcag_level"))
        object.__setattr__(
            self, "reporting_level",
            _coerce_enum(ReportingLevel, self.reporting_level, "reporting_level"),
        )
        object.__setattr__(
            self, "output_format",
            _coerce_enum(OutputFormat, self.output_format, "output_format"),
        )
        if isinstance(self.supported_languages, str):
            raise ConfigurationError("supported_languages must be a sequence of locale codes")
        languages = tuple(str(lang) for lang in self.supported_languages)
        if not languages:
            raise ConfigurationError("supported_languages must not be empty")
        object.__setattr__(self, "supported_languages", languages)
        object.__setattr__(self, "approved_components", frozenset(self.approved_components))
        if isinstance(self.max_component_size, bool) or not isinstance(self.max_component_size, int):
            raise ConfigurationError("max_component_size must be an integer line count")
        if self.max_component_size <= 0:
            raise ConfigurationError("max_component_size must be positive")
        if not self.token_prefix:
            raise ConfigurationError("token_prefix must not be empty")

    @property
    def contrast_ratio(self) -> float:
        """Required contrast ratio for normal text at the configured WCAG level."""
        return CONTRAST_REQUIREMENTS[self.wcag_level]

    def replace(self, **changes: object) -> "Configuration":
        """Return a copy with the given options changed (validated again)."""
        return dataclasses.replace(self, **changes)  # type: ignore[arg-type]

    @classmethod
    def from_mapping(cls, raw: Mapping[str, object]) -> "Configuration":
        """
        Build from a mapping such as a [tool.ui-compliance] table.

        Keys may be snake_case or the camelCase names used by the generator
        pipeline (enforceEnhanced8ptGrid, allowRawHTML, wcagLevel, ...). A
        "preset" key selects the base configuration the other keys override.
        """
        options = {_normalize_key(k): v for k, v in raw.items()}
        preset_name = options.pop("preset", None)
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration option(s): {', '.join(unknown)}")
        if "supported_languages" in options and isinstance(options["supported_languages"], list):
            options["supported_languages"] = tuple(options["supported_languages"])
        if "approved_components" in options and isinstance(options["approved_components"], list):
            options["approved_components"] = frozenset(options["approved_components"])
        if preset_name is not None:
            return cls.preset(str(preset_name), **options)
        return cls(**options)  # type: ignore[arg-type]

    @classmethod
    def preset(cls, name: str, **overrides: object) -> "Configuration":
        """Return a named preset (strict, development, migration) with optional overrides."""
        try:
            base = PRESETS[name.lower()]
        except KeyError:
            raise ConfigurationError(
                f"Unknown preset {name!r}; expected one of: {', '.join(sorted(PRESETS))}"
            ) from None
        return base.replace(**overrides) if overrides else base

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for serialization."""
        out: dict[str, object] = {}
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, tuple):
                value = list(value)
            elif isinstance(value, frozenset):
                value = sorted(value)
            out[f.name] = value
        return out


_ACRONYMS = {"HTML": "Html", "WCAG": "Wcag", "RTL": "Rtl"}


def _normalize_key(key: str) -> str:
    """enforceWCAGCompliance -> enforce_wcag_compliance; enforceEnhanced8ptGrid -> enforce_enhanced_8pt_grid."""
    for acronym, title in _ACRONYMS.items():
        key = key.replace(acronym, title)
    key = key.replace("-", "_")
    key = re.sub(r"(?<=[a-z])(?=\d)", "_", key)
    key = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", key)
    return key.lower()


STRICT = Configuration()

DEVELOPMENT = Configuration(
    wcag_level=WcagLevel.AA,
    enforce_localization=False,
    allow_hardcoded_text=True,
    enforce_code_splitting=False,
    reporting_level=ReportingLevel.DETAILED,
    output_format=OutputFormat.MARKDOWN,
)

MIGRATION = Configuration(
    enforce_enhanced_8pt_grid=False,
    wcag_level=WcagLevel.A,
    enforce_rtl_support=False,
    enforce_localization=False,
    allow_raw_html=True,
    allow_inline_styles=True,
    allow_arbitrary_values=True,
    allow_hardcoded_text=True,
    allow_hardcoded_spacing=True,
    enforce_code_splitting=False,
    max_component_size=400,
    reporting_level=ReportingLevel.MINIMAL,
    output_format=OutputFormat.MARKDOWN,
)

PRESETS: dict[str, Configuration] = {
    "strict": STRICT,
    "development": DEVELOPMENT,
    "migration": MIGRATION,
}
