"""Tests for ProvisorCore - cookbook loading and recipe convergence."""

import textwrap
from pathlib import Path

import pytest

from provisor.core import ProvisorCore
from provisor.errors import ConfigurationError, ConvergenceError
from provisor.settings import ProvisorSettings

from .helpers import CONVERGED

EXAMPLE_DIR = Path(__file__).parent.parent / "examples" / "webapp"


def write(path: Path, body: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(body), encoding="utf-8")
    return path


@pytest.fixture
def core_factory(temp_dir, load_cache):
    """Build a ProvisorCore over a cookbook directory inside temp_dir."""

    def factory(cookbook_path=None):
        return ProvisorCore(
            cookbook_path=cookbook_path or temp_dir / "cookbooks",
            settings=ProvisorSettings(),
            load_cache=load_cache,
        )

    return factory


# ============================================================================
# 1. Cookbook loading
# ============================================================================


def test_load_cookbooks(temp_dir, core_factory):
    """Test every provider file of every cookbook is loaded."""
    write(temp_dir / "cookbooks" / "corea" / "providers" / "default.py", "define_action('go', lambda self: None)\n")
    write(temp_dir / "cookbooks" / "coreb" / "providers" / "vhost.py", "define_action('go', lambda self: None)\n")
    (temp_dir / "cookbooks" / "notes").mkdir()

    core = core_factory()

    assert core.load_cookbooks() == ["corea", "coreb", "notes"]

    described = core.providers()
    assert described["corea"] == "LWRP provider corea from cookbook corea"
    assert described["coreb_vhost"] == "LWRP provider coreb_vhost from cookbook coreb"
    assert described["file"] == "FileProvider"
    assert list(described) == sorted(described)


def test_missing_cookbook_path(temp_dir, core_factory):
    """Test a missing cookbook directory loads nothing."""
    core = core_factory(temp_dir / "absent")

    assert core.load_cookbooks() == []


def test_cookbook_path_is_a_file(temp_dir, core_factory):
    """Test a cookbook path pointing at a file is a configuration error."""
    not_a_dir = temp_dir / "cookbooks.txt"
    not_a_dir.write_text("")

    with pytest.raises(ConfigurationError, match="not a directory"):
        core_factory(not_a_dir).load_cookbooks()


# ============================================================================
# 2. Converge
# ============================================================================


def test_converge_recipe(temp_dir, core_factory):
    """Test a recipe with an inline provider reports updated resources."""
    write(
        temp_dir / "cookbooks" / "corepkg" / "providers" / "bundle.py",
        """
        use_inline_resources()


        @action("install")
        def install(self):
            for item in self.new_resource.items:
                self.declare("record", item, changes=item == "changed")
        """,
    )
    recipe = write(
        temp_dir / "recipe.py",
        """
        declare("record", "first")
        declare("corepkg_bundle", "tools", items=["same", "changed"])
        declare("corepkg_bundle", "docs", items=["same"])
        declare("record", node["platform"])
        """,
    )

    result = core_factory().converge(recipe, node={"platform": "linux"})

    assert result == {
        "success": True,
        "resources": 4,
        "updated": ["corepkg_bundle[tools]"],
    }
    assert CONVERGED == ["first", "same", "changed", "same", "linux"]


def test_converge_missing_recipe(temp_dir, core_factory):
    """Test converging a recipe that does not exist."""
    with pytest.raises(FileNotFoundError, match="File not found"):
        core_factory().converge(temp_dir / "missing.py")


def test_converge_failure_propagates(temp_dir, core_factory):
    """Test a failing resource aborts the converge with a ConvergenceError."""
    recipe = write(temp_dir / "recipe.py", 'declare("record", "boom", action="fail")\n')

    with pytest.raises(ConvergenceError, match="record\\[boom\\]"):
        core_factory().converge(recipe)


def test_webapp_example(temp_dir, load_cache, monkeypatch):
    """Test the bundled webapp example converges and is idempotent."""
    monkeypatch.chdir(temp_dir)
    recipe = EXAMPLE_DIR / "recipe.py"

    def run():
        core = ProvisorCore(
            cookbook_path=EXAMPLE_DIR / "cookbooks",
            settings=ProvisorSettings(),
            load_cache=load_cache,
        )
        return core.converge(recipe)

    first = run()

    assert first["resources"] == 4
    assert first["updated"] == [
        "file[scratch/site/.webapp]",
        "webapp_site[blog]",
        "log[site changed]",
    ]
    assert (temp_dir / "scratch" / "site" / "index.html").read_text() == (
        "<h1>Hello from provisor</h1>\n"
    )
    assert (temp_dir / "scratch" / "site" / "robots.txt").exists()

    second = run()

    assert second["resources"] == 4
    assert second["updated"] == []
