"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use PAGERENDER_ prefix, nested fields are separated by a double
underscore (e.g., PAGERENDER_OUTPUT__COMPACT=true).

Settings can also be loaded from a .env file in the working directory or from
a YAML file passed with --config:

    style:
      title: {color: magenta, bold: true}
      placeholder: {color: red, italic: true}
    indent:
      example: 4
    output:
      compact: true
"""

import sys
from pathlib import Path
from typing import IO, Any, Dict, Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.color import Color, ColorParseError, ColorSystem
from rich.style import Style


class ConfigError(Exception):
    """Raised when a settings file cannot be loaded or validated"""
    pass


class StyleSpec(BaseModel):
    """
    Flat terminal style for one line role or span kind

    Colours accept anything rich understands: standard names ("red",
    "bright_blue"), 256-colour numbers ("color(208)") and hex ("#ff8800").
    """

    color: Optional[str] = None
    background: Optional[str] = None
    bold: bool = False
    italic: bool = False
    underline: bool = False
    dim: bool = False
    blink: bool = False
    reverse: bool = False
    strikethrough: bool = False

    @field_validator("color", "background")
    @classmethod
    def color_validate(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        try:
            Color.parse(value)
        except ColorParseError as e:
            raise ValueError(str(e)) from e
        return value

    def style_make(self) -> Style:
        """
        Build the rich Style this spec describes

        Example:
            >>> str(StyleSpec(color="red", italic=True).style_make())
            'italic red'
        """
        return Style(
            color=self.color,
            bgcolor=self.background,
            bold=self.bold or None,
            italic=self.italic or None,
            underline=self.underline or None,
            dim=self.dim or None,
            blink=self.blink or None,
            reverse=self.reverse or None,
            strike=self.strikethrough or None,
        )


class StyleSettings(BaseModel):
    """One style per line role and inline span kind"""

    title: StyleSpec = Field(default_factory=lambda: StyleSpec(color="magenta", bold=True))
    description: StyleSpec = Field(default_factory=StyleSpec)
    bullet: StyleSpec = Field(default_factory=lambda: StyleSpec(color="green"))
    example: StyleSpec = Field(default_factory=lambda: StyleSpec(color="cyan"))
    url: StyleSpec = Field(default_factory=lambda: StyleSpec(color="red", italic=True))
    inline_code: StyleSpec = Field(default_factory=lambda: StyleSpec(color="yellow", italic=True))
    placeholder: StyleSpec = Field(default_factory=lambda: StyleSpec(color="red", italic=True))


class IndentSettings(BaseModel):
    """Number of spaces written before each line role"""

    title: int = Field(default=2, ge=0)
    description: int = Field(default=2, ge=0)
    bullet: int = Field(default=2, ge=0)
    example: int = Field(default=4, ge=0)


class OutputSettings(BaseModel):
    """Layout flags for rendered pages"""

    show_title: bool = Field(default=True, description="Render the '# ' title line")
    platform_title: bool = Field(
        default=False,
        description="Prefix the title with the page's platform (e.g. 'linux/tar')",
    )
    show_hyphens: bool = Field(
        default=False,
        description="Keep a bullet marker, replacing '- ' with example_prefix",
    )
    example_prefix: str = Field(default="- ", description="Bullet marker used with show_hyphens")
    compact: bool = Field(default=False, description="Drop blank lines between sections")
    raw_markdown: bool = Field(default=False, description="Copy the page verbatim, no styling")


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables and YAML files.

    Environment variables use PAGERENDER_ prefix.

    Examples:
        PAGERENDER_QUIET=true
        PAGERENDER_COLOR=never
        PAGERENDER_OUTPUT__SHOW_HYPHENS=true
        PAGERENDER_INDENT__EXAMPLE=6
    """

    model_config = SettingsConfigDict(
        env_prefix="PAGERENDER_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    style: StyleSettings = Field(default_factory=StyleSettings)
    indent: IndentSettings = Field(default_factory=IndentSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)

    quiet: bool = Field(
        default=False,
        description="Suppress warnings about pages found for other platforms",
    )

    color: Literal["auto", "always", "never"] = Field(
        default="auto",
        description="Emit ANSI styles: only on a terminal (auto), always, or never",
    )

    @classmethod
    def settings_loadFromYAML(cls, path: Union[str, Path], **overrides: Any) -> "AppSettings":
        """
        Load settings from a YAML file.

        Values from the file take precedence over environment variables,
        keyword overrides take precedence over both.

        Args:
            path: YAML settings file
            **overrides: Top-level fields to set explicitly

        Returns:
            Validated AppSettings

        Raises:
            ConfigError: If the file is missing, is not valid YAML, does not
                hold a mapping, or fails validation
        """
        config_path = Path(path)
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data: Any = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Failed to load '{config_path}': {e.strerror or e}")
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse '{config_path}': {e}")

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"'{config_path}' must contain a mapping, got {type(data).__name__}")

        merged: Dict[str, Any] = {**data, **overrides}
        try:
            return cls(**merged)
        except ValidationError as e:
            raise ConfigError(f"Invalid settings in '{config_path}':\n{e}")

    def colorSystem_get(self, stream: Optional[IO[str]] = None) -> Optional[ColorSystem]:
        """
        Resolve the color setting for an output stream.

        Args:
            stream: Stream the styled text goes to (default: sys.stdout)

        Returns:
            ColorSystem.TRUECOLOR when styles are emitted, None for plain text
        """
        if self.color == "never":
            return None
        if self.color == "always":
            return ColorSystem.TRUECOLOR

        stream = stream if stream is not None else sys.stdout
        isatty = getattr(stream, "isatty", None)
        return ColorSystem.TRUECOLOR if isatty is not None and isatty() else None
