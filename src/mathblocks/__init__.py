"""Top-level package for MathBlocks.

Provides subpackages:
- mathblocks.analyzer – HTML loading, pattern detectors and the analysis pipeline
- mathblocks.builder – selection of suggestions and conversion into blocks
- mathblocks.core – immutable models, block type registry and serialization
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.3.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    try:
        from importlib.metadata import PackageNotFoundError, version as pkg_version
        return pkg_version("mathblocks")
    except PackageNotFoundError:
        return "0.0.0"


from .analyzer.pipeline import analyze  # noqa: E402

__version__ = _get_version()
__all__: list[str] = ["__version__", "analyze"]
