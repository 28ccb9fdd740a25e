"""Packaging correctness verification for a11y-checker-core.

Tests validate:
- The top-level import exposes the public API
- py.typed marker is present in the wheel
- Pytest plugin entry point is registered
- Package metadata is correct

These tests inspect the built wheel and current installation rather than
creating temporary virtualenvs (faster, more reliable in CI).
"""

from __future__ import annotations

import subprocess
import zipfile
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent.parent


class TestPublicImports:
    """Verify the top-level package exposes every public name."""

    def test_import_a11y_checker(self) -> None:
        import a11y_checker

        for name in a11y_checker.__all__:
            assert hasattr(a11y_checker, name), name

    def test_core_components(self) -> None:
        from a11y_checker import IdentityTagger, IssueResolver, QuickFixRegistry

        assert callable(IdentityTagger)
        assert callable(IssueResolver)
        assert callable(QuickFixRegistry)

    def test_integrations_do_not_import_pytest_plugin(self) -> None:
        import a11y_checker.integrations

        assert a11y_checker.integrations.__all__ == []


class TestWheelContents:
    """Verify the built wheel contains required files."""

    @pytest.fixture(scope="class")
    def wheel_path(self) -> Path:
        """Build a fresh wheel and return its path."""
        dist_dir = PROJECT_ROOT / "dist"
        try:
            result = subprocess.run(
                ["poetry", "build", "-f", "wheel"],
                cwd=str(PROJECT_ROOT),
                capture_output=True,
                text=True,
            )
        except FileNotFoundError:
            pytest.skip("poetry is not installed")
        if result.returncode != 0:
            pytest.skip(f"poetry build failed: {result.stderr}")

        wheels = sorted(dist_dir.glob("*.whl"), key=lambda p: p.stat().st_mtime)
        if not wheels:
            pytest.skip("No wheel found in dist/")
        return wheels[-1]

    def test_py_typed_in_wheel(self, wheel_path: Path) -> None:
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
            assert any(n.endswith("a11y_checker/py.typed") for n in names), names

    def test_all_source_modules_in_wheel(self, wheel_path: Path) -> None:
        expected_modules = [
            "a11y_checker/__init__.py",
            "a11y_checker/codec.py",
            "a11y_checker/config.py",
            "a11y_checker/decorator.py",
            "a11y_checker/errors.py",
            "a11y_checker/events.py",
            "a11y_checker/issues.py",
            "a11y_checker/protocols.py",
            "a11y_checker/resolver.py",
            "a11y_checker/quickfix/__init__.py",
            "a11y_checker/quickfix/loader.py",
            "a11y_checker/quickfix/repository.py",
            "a11y_checker/tree/__init__.py",
            "a11y_checker/tree/document.py",
            "a11y_checker/tree/nodes.py",
            "a11y_checker/integrations/__init__.py",
            "a11y_checker/integrations/_pytest_plugin.py",
        ]
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
            for module in expected_modules:
                assert any(module in n for n in names), f"Module {module} not found in wheel"

    def test_metadata_in_wheel(self, wheel_path: Path) -> None:
        with zipfile.ZipFile(wheel_path) as zf:
            metadata_files = [n for n in zf.namelist() if n.endswith("METADATA")]
            assert metadata_files, "No METADATA found in wheel"
            metadata = zf.read(metadata_files[0]).decode()
            assert "a11y-checker-core" in metadata.lower() or "a11y_checker_core" in metadata.lower()
            assert "0.1.0" in metadata


class TestPytestPluginDiscovery:
    """Verify the pytest plugin is discoverable."""

    def test_entry_point_registered(self) -> None:
        from importlib.metadata import entry_points

        eps = [ep for ep in entry_points(group="pytest11") if "a11y_checker" in str(ep.value)]
        if not eps:
            pytest.skip("a11y-checker-core is not installed; entry points unavailable")
        assert eps[0].value == "a11y_checker.integrations._pytest_plugin"

    def test_fixture_available(self) -> None:
        import importlib

        mod = importlib.import_module("a11y_checker.integrations._pytest_plugin")
        assert callable(mod.assert_markup_clean)
        assert callable(mod.check_markup_clean)
