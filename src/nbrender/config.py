"""Configuration management for nbrender."""

from typing import Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from nbrender import ConfigurationError


class NbRenderConfig(BaseSettings):
    """Renderer configuration loaded from environment variables.

    Environment variables should be prefixed with NBRENDER_
    Example: NBRENDER_CLASS_PREFIX=nb-

    Attributes:
        class_prefix: Prefix for all CSS class names except lang-*
        default_language: Language used when the notebook declares none
        header_ids: Generate id attributes for Markdown headings
        header_anchors: Generate anchor links in Markdown headings
        header_ids_strip_accents: Strip accents from generated heading ids
        header_prefix: Prefix for generated heading ids
        render_math: Render math expressions in Markdown cells
        data_types_priority: MIME types in the priority order (None = default)
    """

    # Element Configuration
    class_prefix: str = Field(
        default="nb-",
        description="Prefix for all CSS class names except lang-*",
    )
    default_language: str = Field(
        default="python",
        min_length=1,
        description="Language used when the notebook declares none",
    )

    # Markdown Configuration
    header_ids: bool = Field(
        default=True,
        description="Generate id attributes for Markdown headings",
    )
    header_anchors: bool = Field(
        default=True,
        description="Generate anchor links in Markdown headings",
    )
    header_ids_strip_accents: bool = Field(
        default=False,
        description="Strip accents from generated heading ids",
    )
    header_prefix: str = Field(
        default="",
        description="Prefix for generated heading ids",
    )
    render_math: bool = Field(
        default=True,
        description="Render math expressions in Markdown cells",
    )

    # Output Configuration
    data_types_priority: Optional[list[str]] = Field(
        default=None,
        description="MIME types in the priority order",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="NBRENDER_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("class_prefix")
    @classmethod
    def validate_class_prefix(cls, v: str) -> str:
        """Validate the class prefix is usable inside a class attribute."""
        if any(c.isspace() for c in v):
            raise ValueError("Class prefix cannot contain whitespace")
        return v


# Global config instance (lazy-loaded)
_config: NbRenderConfig | None = None


def get_config() -> NbRenderConfig:
    """Get or create the global configuration instance.

    Returns:
        NbRenderConfig: The configuration object

    Raises:
        ConfigurationError: If the environment holds invalid settings
    """
    global _config
    if _config is None:
        try:
            _config = NbRenderConfig()
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
    return _config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _config
    _config = None


def override_config(config: NbRenderConfig, **updates) -> NbRenderConfig:
    """Return a copy of the configuration with the given settings replaced.

    The result is validated like a configuration loaded from the environment.

    Raises:
        ConfigurationError: If an updated setting is invalid
    """
    try:
        return NbRenderConfig.model_validate({**config.model_dump(), **updates})
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
