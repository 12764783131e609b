"""Tests for vinv package."""


def test_package_imports():
    """Test that the package can be imported successfully."""
    import vinv

    assert vinv is not None


def test_package_version():
    """Test that the package has a version string."""
    from vinv import __version__

    assert __version__ == "0.3.0"


def test_subpackages_import_without_cycles():
    """Importing the CLI, config, and orchestrator modules in sequence works."""
    import vinv.cli  # noqa: F401
    import vinv.config  # noqa: F401
    import vinv.scanner.orchestrator  # noqa: F401
