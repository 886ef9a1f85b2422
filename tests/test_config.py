"""Tests for renderer configuration."""

import pytest

from dynarun.config import RendererConfig, color_forced, is_ci


class TestEnvironmentDetection:
    """Tests for CI and FORCE_COLOR detection."""

    def test_ci_flag(self):
        """Test the generic CI variable."""
        assert is_ci({"CI": "true"})
        assert is_ci({"CI": "1"})
        assert not is_ci({"CI": "false"})
        assert not is_ci({})

    def test_provider_variables(self):
        """Test provider specific variables."""
        assert is_ci({"GITHUB_ACTIONS": "true"})
        assert is_ci({"TEAMCITY_VERSION": "2024.1"})

    def test_force_color(self):
        """Test that only an empty string or "true" forces color."""
        assert color_forced({"FORCE_COLOR": ""})
        assert color_forced({"FORCE_COLOR": "true"})
        assert not color_forced({"FORCE_COLOR": "1"})
        assert not color_forced({})


class TestRendererConfig:
    """Tests for RendererConfig."""

    def test_defaults(self):
        """Test default options."""
        config = RendererConfig()
        assert config.no_color is False
        assert config.verbose is False
        assert config.cli_name == "RUN"
        assert config.max_failed_listed == 5

    def test_color_disabled_in_ci(self):
        """Test that CI disables color unless it is forced."""
        assert RendererConfig.from_environment({"CI": "true"}).no_color is True
        assert RendererConfig.from_environment({"CI": "true", "FORCE_COLOR": ""}).no_color is False
        assert RendererConfig.from_environment({}).no_color is False

    def test_explicit_option_wins(self):
        """Test that an explicit no_color is kept."""
        config = RendererConfig.from_environment({"CI": "true"}, no_color=False, verbose=True)
        assert config.no_color is False
        assert config.verbose is True

    def test_invalid_values(self):
        """Test validation of numeric options."""
        with pytest.raises(ValueError, match="frame_interval"):
            RendererConfig(frame_interval=0)
        with pytest.raises(ValueError, match="max_failed_listed"):
            RendererConfig(max_failed_listed=0)

    def test_view_logs_hint_uses_cli_name(self):
        """Test that the hint names the CLI in lower case."""
        assert '"tool view-logs"' in RendererConfig(cli_name="TOOL").view_logs_hint
