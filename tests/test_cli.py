"""Tests for the pwgen-profiles CLI.

Tests cover:
- Listing profiles and custom generators
- Saving, showing and removing profiles
- Previewing and generating passwords
- Error cases
"""

import re

import pytest
from click.testing import CliRunner

from pwgen_profiles.cli.main import cli
from pwgen_profiles.profiles.base import GeneratorType
from pwgen_profiles.profiles.loader import load_store
from pwgen_profiles.settings import STORE_ENV_VAR


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def store_path(tmp_path):
    """Path of a profile store that does not exist yet."""
    return tmp_path / "profiles.yaml"


def invoke(runner, store_path, *args):
    return runner.invoke(cli, ["--store", str(store_path), *args])


def matching_lines(output, pattern):
    return [line for line in output.splitlines() if re.fullmatch(pattern, line.strip())]


# =============================================================================
# Listing Tests
# =============================================================================

class TestListing:
    """Tests for list-profiles and list-generators."""

    def test_list_generators(self, runner):
        """Test listing the built-in custom generators."""
        result = runner.invoke(cli, ["list-generators"])

        assert result.exit_code == 0
        assert "Pronounceable" in result.output

    def test_list_profiles_seeds_standard_profiles(self, runner, store_path):
        """Test that a fresh store lists the built-in profiles."""
        result = invoke(runner, store_path, "list-profiles")

        assert result.exit_code == 0
        assert "Hex" in result.output

    def test_list_profiles_with_invalid_store(self, runner, store_path):
        """Test error reporting for an unreadable store."""
        store_path.write_text("- not\n- a mapping\n", encoding="utf-8")

        result = invoke(runner, store_path, "list-profiles")

        assert result.exit_code == 1
        assert "Error loading profiles" in result.output

    def test_list_profiles_skips_unreadable_entries(self, runner, store_path):
        """Test that one bad stored profile does not break the store."""
        store_path.write_text(
            "user_profiles:\n"
            "  - name: Keeper\n"
            "  - name: stale\n"
            "    length: -3\n"
            "  - name: (Custom)\n",
            encoding="utf-8",
        )

        result = invoke(runner, store_path, "list-profiles")

        assert result.exit_code == 0
        assert "Keeper" in result.output
        assert load_store(store_path).list_names() == ["Keeper"]

    def test_store_from_environment(self, runner, store_path):
        """Test that the store path can come from the environment."""
        result = runner.invoke(
            cli,
            ["save", "FromEnv", "-l", "5"],
            env={STORE_ENV_VAR: str(store_path)},
        )

        assert result.exit_code == 0
        assert load_store(store_path).get("FromEnv") is not None


# =============================================================================
# Save / Show / Remove Tests
# =============================================================================

class TestSave:
    """Tests for the save command."""

    def test_save_charset_profile(self, runner, store_path):
        """Test saving a new character-set profile."""
        result = invoke(
            runner, store_path,
            "save", "Work",
            "--mode", "charset",
            "-l", "12",
            "-c", "upper",
            "-c", "digit",
            "--exclude", "O0",
        )

        assert result.exit_code == 0
        assert "Added profile 'Work'" in result.output

        profile = load_store(store_path).get("Work")
        assert profile.length == 12
        assert profile.char_set == "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
        assert profile.exclude_characters == "O0"

    def test_save_replaces_existing(self, runner, store_path):
        """Test that saving under an existing name replaces it in place."""
        invoke(runner, store_path, "save", "Work", "-l", "12")
        result = invoke(runner, store_path, "save", "Work", "--from", "Work", "-l", "16")

        assert result.exit_code == 0
        assert "Replaced profile 'Work'" in result.output

        store = load_store(store_path)
        assert store.list_names().count("Work") == 1
        assert store.get("Work").length == 16

    def test_save_auto_generated(self, runner, store_path):
        """Test updating the settings for automatically generated passwords."""
        result = invoke(
            runner, store_path,
            "save", "(Automatically generated passwords)", "-l", "30",
        )

        assert result.exit_code == 0
        assert "automatically generated passwords" in result.output

        store = load_store(store_path)
        assert store.auto_generated.length == 30
        assert store.auto_generated.name == ""

    @pytest.mark.parametrize("name", ["(Custom)", "(Derive from previous password)"])
    def test_save_reserved_name(self, runner, store_path, name):
        """Test that reserved labels cannot be used as profile names."""
        result = invoke(runner, store_path, "save", name)

        assert result.exit_code == 1
        assert "Invalid profile name" in result.output

    def test_save_custom_algorithm(self, runner, store_path):
        """Test saving a profile that uses a custom algorithm."""
        result = invoke(
            runner, store_path,
            "save", "Words",
            "--mode", "custom",
            "--algorithm", "Pronounceable",
            "--options", "digits=3",
        )

        assert result.exit_code == 0

        profile = load_store(store_path).get("Words")
        assert profile.generator_type == GeneratorType.CUSTOM
        assert profile.custom_algorithm_id
        assert profile.custom_algorithm_options == "digits=3"

    def test_save_unknown_algorithm(self, runner, store_path):
        """Test error for an unknown custom algorithm."""
        result = invoke(runner, store_path, "save", "X", "--algorithm", "Nope")

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_save_from_unknown_profile(self, runner, store_path):
        """Test error for an unknown source profile."""
        result = invoke(runner, store_path, "save", "X", "--from", "Nope")

        assert result.exit_code == 1
        assert "not found" in result.output


class TestShow:
    """Tests for the show command."""

    def test_show_pattern_profile(self, runner, store_path):
        """Test showing a stored pattern profile."""
        invoke(runner, store_path, "save", "Pin", "--mode", "pattern", "-p", "d{4}")

        result = invoke(runner, store_path, "show", "Pin")

        assert result.exit_code == 0
        assert "pattern" in result.output
        assert "d{4}" in result.output

    def test_show_auto_generated(self, runner, store_path):
        """Test showing the reserved auto-generated profile."""
        result = invoke(runner, store_path, "show", "(Automatically generated passwords)")

        assert result.exit_code == 0
        assert "Mode" in result.output

    def test_show_unknown(self, runner, store_path):
        """Test error for an unknown profile."""
        result = invoke(runner, store_path, "show", "Nope")

        assert result.exit_code == 1
        assert "not found" in result.output


class TestRemove:
    """Tests for the remove command."""

    def test_remove_profile(self, runner, store_path):
        """Test removing a stored profile."""
        invoke(runner, store_path, "save", "Temp")

        result = invoke(runner, store_path, "remove", "Temp")

        assert result.exit_code == 0
        assert load_store(store_path).get("Temp") is None

    @pytest.mark.parametrize("name", ["(Custom)", "(Automatically generated passwords)", "Nope"])
    def test_remove_not_removable(self, runner, store_path, name):
        """Test that reserved labels and unknown names are not removed."""
        result = invoke(runner, store_path, "remove", name)

        assert result.exit_code == 1
        assert "cannot be removed" in result.output


# =============================================================================
# Preview / Generate Tests
# =============================================================================

class TestPreview:
    """Tests for the preview command."""

    def test_preview_hex_key(self, runner, store_path):
        """Test previewing a built-in profile."""
        result = invoke(runner, store_path, "preview", "128-Bit Hex Key (built-in)", "-n", "3")

        assert result.exit_code == 0
        assert len(matching_lines(result.output, r"[0-9a-f]{32}")) == 3

    def test_preview_default_count(self, runner, store_path):
        """Test that previews default to a batch of 30."""
        result = invoke(runner, store_path, "preview", "40-Bit Hex Key (built-in)")

        assert result.exit_code == 0
        assert len(matching_lines(result.output, r"[0-9a-f]{10}")) == 30

    def test_preview_with_seed_is_reproducible(self, runner, store_path):
        """Test that a seed makes previews reproducible."""
        args = ("preview", "40-Bit Hex Key (built-in)", "-n", "5", "--seed", "7")

        first = invoke(runner, store_path, *args)
        second = invoke(runner, store_path, *args)

        assert matching_lines(first.output, r"[0-9a-f]{10}") == \
            matching_lines(second.output, r"[0-9a-f]{10}")

    def test_preview_custom_algorithm(self, runner, store_path):
        """Test previewing a profile using the pronounceable generator."""
        invoke(
            runner, store_path,
            "save", "Words",
            "--mode", "custom",
            "--algorithm", "Pronounceable",
            "--options", "digits=3",
        )

        result = invoke(runner, store_path, "preview", "Words", "-n", "2")

        assert result.exit_code == 0
        assert len(matching_lines(result.output, r"[A-Z][a-z]{7}[0-9]{3}")) == 2

    def test_preview_reports_errors_per_password(self, runner, store_path):
        """Test that generation errors are listed instead of aborting."""
        invoke(runner, store_path, "save", "Broken", "--mode", "pattern", "-p", "q")

        result = invoke(runner, store_path, "preview", "Broken", "-n", "2")

        assert result.exit_code == 0
        assert result.output.count("Unknown placeholder") == 2


class TestGenerate:
    """Tests for the generate command."""

    def test_generate_remembers_last_used(self, runner, store_path):
        """Test generating one password and recording the settings."""
        result = invoke(runner, store_path, "generate", "40-Bit Hex Key (built-in)")

        assert result.exit_code == 0
        assert len(matching_lines(result.output, r"[0-9a-f]{10}")) == 1

        last_used = load_store(store_path).last_used
        assert last_used.name == "40-Bit Hex Key (built-in)"
        assert last_used.pattern == "h{10}"

    def test_generate_with_entropy_prompt(self, runner, store_path):
        """Test that --entropy prompts for keystrokes."""
        result = runner.invoke(
            cli,
            ["--store", str(store_path), "generate", "40-Bit Hex Key (built-in)", "--entropy"],
            input="asdfghjkl\n",
        )

        assert result.exit_code == 0
        assert "Random keystrokes" in result.output
        assert "asdfghjkl" not in result.output

    def test_generate_failure(self, runner, store_path):
        """Test error reporting when no password can be generated."""
        invoke(runner, store_path, "save", "Empty", "-c", "digit", "--exclude", "0123456789")

        result = invoke(runner, store_path, "generate", "Empty")

        assert result.exit_code == 1
        assert "Error generating password" in result.output
