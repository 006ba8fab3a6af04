"""
Settings tests - defaults, YAML files, environment variables and colours
"""

import io

import pytest
from rich.color import ColorSystem
from rich.style import Style

from pagerender.config.settings import AppSettings, ConfigError, StyleSpec


class TestDefaults:
    """Built-in settings"""

    def test_layout_defaults(self):
        """Titles shown, no compaction, two-space indent, four for examples"""
        settings = AppSettings()

        assert settings.output.show_title is True
        assert settings.output.compact is False
        assert settings.output.raw_markdown is False
        assert settings.output.example_prefix == "- "
        assert settings.indent.title == 2
        assert settings.indent.example == 4
        assert settings.quiet is False

    def test_style_defaults(self):
        """Title is bold magenta, placeholders italic red"""
        settings = AppSettings()

        assert settings.style.title.style_make() == Style(color="magenta", bold=True)
        assert settings.style.placeholder.style_make() == Style(color="red", italic=True)
        assert settings.style.description.style_make() == Style()


class TestStyleSpec:
    """StyleSpec validation and conversion"""

    def test_all_attributes(self):
        """Every flag maps to a rich attribute"""
        spec = StyleSpec(
            color="#ff8800",
            background="blue",
            bold=True,
            italic=True,
            underline=True,
            dim=True,
            blink=True,
            reverse=True,
            strikethrough=True,
        )
        style = spec.style_make()

        assert style.color.name == "#ff8800"
        assert style.bgcolor.name == "blue"
        assert style.bold and style.italic and style.underline and style.strike

    def test_unknown_color(self):
        """Colours are checked when settings are created"""
        with pytest.raises(ValueError):
            StyleSpec(color="not-a-colour")


class TestYAML:
    """settings_loadFromYAML"""

    def test_load(self, tmp_path):
        """Nested sections override the defaults they name"""
        path = tmp_path / "settings.yaml"
        path.write_text(
            "style:\n"
            "  example: {color: bright_blue, bold: true}\n"
            "indent:\n"
            "  example: 6\n"
            "output:\n"
            "  compact: true\n"
            "quiet: true\n",
            encoding="utf-8",
        )

        settings = AppSettings.settings_loadFromYAML(path)

        assert settings.style.example.style_make() == Style(color="bright_blue", bold=True)
        assert settings.indent.example == 6
        assert settings.indent.title == 2
        assert settings.output.compact is True
        assert settings.quiet is True

    def test_overrides(self, tmp_path):
        """Keyword overrides beat the file"""
        path = tmp_path / "settings.yaml"
        path.write_text("color: always\n", encoding="utf-8")

        assert AppSettings.settings_loadFromYAML(path, color="never").color == "never"

    def test_empty_file(self, tmp_path):
        """An empty file gives the defaults"""
        path = tmp_path / "settings.yaml"
        path.write_text("", encoding="utf-8")

        assert AppSettings.settings_loadFromYAML(path).indent.example == 4

    @pytest.mark.parametrize(
        "content",
        [
            "style: [unclosed\n",
            "- just\n- a list\n",
            "indent:\n  title: -1\n",
            "style:\n  url: {color: no-such-colour}\n",
            "color: sometimes\n",
        ],
    )
    def test_invalid(self, tmp_path, content):
        """Bad YAML, wrong root type and invalid values raise ConfigError"""
        path = tmp_path / "settings.yaml"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(ConfigError):
            AppSettings.settings_loadFromYAML(path)

    def test_missing_file(self, tmp_path):
        """A missing file raises ConfigError"""
        with pytest.raises(ConfigError):
            AppSettings.settings_loadFromYAML(tmp_path / "nope.yaml")


class TestEnvironment:
    """PAGERENDER_ environment variables"""

    def test_nested_variable(self, monkeypatch):
        """Double underscore reaches nested sections"""
        monkeypatch.setenv("PAGERENDER_OUTPUT__COMPACT", "true")
        monkeypatch.setenv("PAGERENDER_QUIET", "1")

        settings = AppSettings()

        assert settings.output.compact is True
        assert settings.quiet is True


class TestColorSystem:
    """colorSystem_get"""

    class Terminal(io.StringIO):
        def isatty(self):
            return True

    def test_never(self):
        assert AppSettings(color="never").colorSystem_get(self.Terminal()) is None

    def test_always(self):
        assert AppSettings(color="always").colorSystem_get(io.StringIO()) is ColorSystem.TRUECOLOR

    def test_auto(self):
        """auto follows isatty()"""
        settings = AppSettings(color="auto")

        assert settings.colorSystem_get(io.StringIO()) is None
        assert settings.colorSystem_get(self.Terminal()) is ColorSystem.TRUECOLOR
