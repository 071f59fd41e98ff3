"""
Shared test fixtures for climanual tests.

This module provides command trees used across the unit tests:
- A small application with groups, hidden commands and env-bound flags
- Fragment directories on disk
"""

import click
import pytest

from climanual.click_group import AliasedGroup

# ============================================================================
# COMMAND TREE FIXTURES
# ============================================================================


@pytest.fixture
def demo_app():
    """Application tree used by most tests.

    demo
    ├── storage (group, no action)
    │   ├── mount (action, aliases m/attach)
    │   └── secret (hidden action)
    ├── list (action)
    └── internal (hidden group)
        └── debug (action, visible but under a hidden parent)
    """

    @click.group(cls=AliasedGroup, name="demo", help="Demo application for tests.")
    @click.option("--foo", envvar="FOO", help="Foo everything")
    def demo(foo):
        pass

    @demo.group(name="storage", short_help="Manage storage")
    def storage():
        pass

    @storage.command(name="mount", aliases=["m", "", "attach"], help="Mount a share.")
    @click.option("--today", "-t", is_flag=True, envvar="BARBAR", help="Mount today")
    @click.option("--tomorrow", type=int, envvar=["BAZBAZ", "BARBAR"])
    def mount(today, tomorrow):
        pass

    @storage.command(name="secret", hidden=True)
    @click.option("--token", envvar="SECRET_TOKEN")
    def secret(token):
        pass

    @demo.command(name="list", short_help="prints stuff")
    def list_():
        pass

    @demo.group(name="internal", hidden=True)
    def internal():
        pass

    @internal.command(name="debug")
    @click.option("--level", envvar="DEBUG_LEVEL")
    def debug(level):
        pass

    return demo


@pytest.fixture
def fragment_dirs(tmp_path):
    """Two fragment directories; the second overrides the first."""
    base = tmp_path / "base"
    override = tmp_path / "override"
    base.mkdir()
    override.mkdir()
    (base / "x.md").write_text("from base")
    (override / "x.md").write_text("from override")
    (base / "only-base.md").write_text("base only")
    return base, override
