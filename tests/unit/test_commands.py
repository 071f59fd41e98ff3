"""Tests for the manual, commands and envvars click commands."""

import io
import sys

import click
import pytest
from click.testing import CliRunner

from climanual.click_group import AliasedGroup
from climanual.commands import (
    command_lines,
    commands_command,
    envvar_lines,
    envvars_command,
    manual_command,
    register_manual_commands,
    resolve_executable,
)
from climanual.errors import PathResolutionError
from climanual.fragments import TEMPLATE_NAME, FragmentResolver
from climanual.lineage import lineate, subcommands
from climanual.renderer import write_manual


@pytest.fixture
def app(demo_app):
    """The demo application with the documentation commands registered."""
    register_manual_commands(demo_app)
    return demo_app


# =============================================================================
# manual
# =============================================================================


class TestManualCommand:
    """Tests for 'manual'."""

    def test_manual_with_embedded_content(self, app):
        result = CliRunner().invoke(app, ["manual"])

        assert result.exit_code == 0
        assert len(result.output) > 0
        assert "* [list](#list)" in result.output
        assert "* [storage mount](#storagemount)" in result.output

    def test_manual_is_hidden_by_default(self, app):
        result = CliRunner().invoke(app, ["manual"])

        assert "* [manual](#manual)" not in result.output
        assert "* [commands](#commands)" in result.output

    def test_manual_not_hidden(self, app):
        app.commands["manual"].hidden = False

        result = CliRunner().invoke(app, ["manual"])

        assert result.exit_code == 0
        assert "* [manual](#manual)" in result.output

    def test_man_alias(self, app):
        result = CliRunner().invoke(app, ["man"])

        assert result.exit_code == 0
        assert result.output.startswith("# demo\n")

    def test_manual_with_directories(self, app, tmp_path):
        base = tmp_path / "base"
        override = tmp_path / "override"
        base.mkdir()
        override.mkdir()
        (base / "list.md").write_text("base list example")
        (override / "list.md").write_text("override list example")

        result = CliRunner().invoke(app, ["manual", str(base), str(override)])

        assert result.exit_code == 0
        assert "override list example" in result.output
        assert "base list example" not in result.output

    def test_manual_with_output_path(self, app, tmp_path):
        output = tmp_path / "output.md"

        result = CliRunner().invoke(app, ["manual", "-o", str(output)])

        assert result.exit_code == 0
        assert result.output == ""
        assert output.read_text().startswith("# demo\n")

    def test_manual_with_config(self, app, tmp_path):
        fragments = tmp_path / "fragments"
        fragments.mkdir()
        (fragments / "list.md").write_text("configured example")
        config = tmp_path / "climanual.toml"
        config.write_text('template_dirs = ["fragments"]\n')

        result = CliRunner().invoke(app, ["manual", "--config", str(config)])

        assert result.exit_code == 0
        assert "configured example" in result.output

    def test_config_from_environment(self, app, tmp_path, monkeypatch):
        config = tmp_path / "climanual.toml"
        config.write_text('output = "from-config.md"\n')
        monkeypatch.chdir(tmp_path)

        result = CliRunner().invoke(app, ["manual"], env={"CLIMANUAL_CONFIG": str(config)})

        assert result.exit_code == 0
        assert result.output == ""
        assert (tmp_path / "from-config.md").read_text().startswith("# demo\n")

    def test_stdout_matches_write_manual(self, app):
        expected = io.StringIO()
        write_manual(
            expected,
            app_name="demo",
            app_description=app.help,
            global_flags=app.params,
            commands=lineate(subcommands(app)),
            resolver=FragmentResolver(),
        )

        result = CliRunner().invoke(app, ["manual"])

        assert result.exit_code == 0
        assert result.output == expected.getvalue()

    def test_undecodable_config_fails(self, app, tmp_path):
        config = tmp_path / "climanual.toml"
        config.write_bytes(b'output = "\xff\xfe"\n')

        result = CliRunner().invoke(app, ["manual", "--config", str(config)])

        assert result.exit_code == 1
        assert "Error: Failed to load config" in result.output

    def test_bad_template_fails_without_output(self, app, tmp_path):
        (tmp_path / TEMPLATE_NAME).write_text("{% if %}")

        result = CliRunner().invoke(app, ["manual", str(tmp_path)])

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "# demo" not in result.output

    def test_bad_config_fails(self, app, tmp_path):
        config = tmp_path / "bad.toml"
        config.write_text("template_dirs = 7\n")

        result = CliRunner().invoke(app, ["manual", "--config", str(config)])

        assert result.exit_code == 1
        assert "template_dirs must be a list of strings" in result.output


# =============================================================================
# commands
# =============================================================================


class TestCommandsCommand:
    """Tests for 'commands'."""

    def test_commands(self, app):
        result = CliRunner().invoke(app, ["commands"])

        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "demo commands",
            "demo envvars",
            "demo list",
            "demo storage mount",
        ]

    def test_scenario_hidden_and_nested(self):
        @click.group(name="prog")
        def prog():
            pass

        @prog.group(name="a", invoke_without_command=True)
        def a():
            pass

        @a.command(name="c")
        def c():
            pass

        @prog.command(name="b", hidden=True)
        def b():
            pass

        prog.add_command(commands_command())
        prog.commands["commands"].hidden = True

        result = CliRunner().invoke(prog, ["commands"])

        assert result.exit_code == 0
        assert result.output == "prog a\nprog a c\n"

    def test_commands_descriptions(self, app):
        @app.command(name="something", help="This is a description of `something`")
        def something():
            pass

        result = CliRunner().invoke(app, ["commands", "--description"])

        assert result.exit_code == 0
        assert "# This is a description of `something`\ndemo something\n" in result.output

    def test_usage_used_when_description_empty(self, app):
        result = CliRunner().invoke(app, ["commands", "-d"])

        assert "# prints stuff\ndemo list\n" in result.output

    def test_no_comment_when_both_empty(self):
        @click.group(name="prog")
        def prog():
            pass

        @prog.command(name="quiet")
        def quiet():
            pass

        prog.add_command(commands_command())

        result = CliRunner().invoke(prog, ["commands", "-d"])

        assert "prog quiet\n" in result.output
        assert "\n# \n" not in result.output
        assert not result.output.startswith("# \n")

    def test_commands_relative(self, app, tmp_path, monkeypatch):
        program = tmp_path / "bin" / "demo.py"
        program.parent.mkdir()
        program.write_text("")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(sys, "argv", [str(program)])

        result = CliRunner().invoke(app, ["commands", "--relative"])

        assert result.exit_code == 0
        assert "bin/demo.py commands" in result.output.replace("\\", "/")

    def test_commands_relative_unresolvable(self, app, monkeypatch):
        monkeypatch.setattr(sys, "argv", ["definitely-not-a-real-program-xyz"])

        result = CliRunner().invoke(app, ["commands", "-r"])

        assert result.exit_code == 1
        assert "Cannot locate executable" in result.output
        assert "demo list" not in result.output


class TestCommandLines:
    """Tests for the pure command listing builder."""

    def test_containers_excluded(self, demo_app):
        assert command_lines(demo_app, "demo") == ["demo list", "demo storage mount"]

    def test_with_description(self, demo_app):
        assert command_lines(demo_app, "x", with_description=True) == [
            "# prints stuff",
            "x list",
            "# Mount a share.",
            "x storage mount",
        ]

    def test_plain_root_has_no_commands(self):
        assert command_lines(click.Command("solo", callback=lambda: None), "solo") == []

    def test_multiline_description(self):
        root = click.Group(
            "prog",
            commands=[click.Command("run", callback=lambda: None, help="Run it.\n\nReally.")],
        )

        assert command_lines(root, "prog", with_description=True) == [
            "# Run it.",
            "# Really.",
            "prog run",
        ]


class TestResolveExecutable:
    """Tests for resolve_executable()."""

    def test_relative_to_cwd(self, tmp_path, monkeypatch):
        program = tmp_path / "tool"
        program.write_text("")
        monkeypatch.chdir(tmp_path)

        assert resolve_executable(str(program)) == "tool"

    def test_empty_program(self):
        with pytest.raises(PathResolutionError):
            resolve_executable("")

    def test_found_on_path(self, tmp_path, monkeypatch):
        bindir = tmp_path / "bin"
        bindir.mkdir()
        program = bindir / "mytool"
        program.write_text("#!/bin/sh\n")
        program.chmod(0o755)
        monkeypatch.setenv("PATH", str(bindir))
        monkeypatch.chdir(tmp_path)

        assert resolve_executable("mytool").replace("\\", "/") == "bin/mytool"


# =============================================================================
# envvars
# =============================================================================


class TestEnvVarsCommand:
    """Tests for 'envvars'."""

    def test_envvars(self, app):
        result = CliRunner().invoke(app, ["envvars"])

        assert result.exit_code == 0
        assert result.output == "BARBAR=\nBAZBAZ=\nFOO=\n"

    def test_hidden_command_flags_excluded(self, app):
        result = CliRunner().invoke(app, ["envvars"])

        assert "SECRET_TOKEN" not in result.output
        assert "DEBUG_LEVEL" not in result.output
        assert "CLIMANUAL_CONFIG" not in result.output

    def test_nested_flags_collected(self):
        @click.group(name="demo")
        @click.option("--foo", envvar="FOO")
        def demo(foo):
            pass

        @demo.group(name="something")
        @click.option("--today", is_flag=True, envvar="BARBAR")
        @click.option("--tomorrow", type=int, envvar="BAZBAZ")
        def something(today, tomorrow):
            pass

        @something.command(name="else")
        @click.option("--yesterday", is_flag=True)
        @click.option("--fourscore", envvar="FOURSCORE")
        def else_(yesterday, fourscore):
            pass

        demo.add_command(envvars_command())

        result = CliRunner().invoke(demo, ["envvars"])

        assert result.exit_code == 0
        assert result.output == "BARBAR=\nBAZBAZ=\nFOO=\nFOURSCORE=\n"

    def test_envvar_lines(self, demo_app):
        assert envvar_lines(demo_app) == ["BARBAR=", "BAZBAZ=", "FOO="]

    def test_no_envvars_prints_nothing(self):
        @click.group(name="demo")
        def demo():
            pass

        demo.add_command(envvars_command())

        result = CliRunner().invoke(demo, ["envvars"])

        assert result.exit_code == 0
        assert result.output == ""


class TestRegistration:
    """Tests for register_manual_commands()."""

    def test_registers_three_commands(self):
        group = AliasedGroup("host")

        register_manual_commands(group)

        assert set(group.commands) == {"manual", "commands", "envvars"}
        assert group.commands["manual"].hidden

    def test_factories_return_fresh_commands(self):
        assert manual_command() is not manual_command()
