"""Verify package imports work correctly."""


def test_import_unixhuman() -> None:
    """Test that unixhuman can be imported and version matches pyproject."""
    import tomllib
    from pathlib import Path

    import unixhuman

    with (Path(__file__).resolve().parent.parent / "pyproject.toml").open("rb") as f:
        expected = tomllib.load(f)["project"]["version"]
    assert unixhuman.__version__ == expected


def test_version_format() -> None:
    from unixhuman import __version__

    parts = __version__.split(".")
    assert len(parts) == 3
    assert all(part.isdigit() for part in parts)


def test_public_api() -> None:
    import unixhuman

    for name in unixhuman.__all__:
        assert hasattr(unixhuman, name), name
