"""Top-level package for the Form Toolkit.

Provides subpackages:
- form_toolkit.core – block tree, form document and settings models
- form_toolkit.tree – path addressing and pure tree edit operations
- form_toolkit.validation – required fields, section progress, submit gate
- form_toolkit.builder – layout engine and PDF output
- form_toolkit.storage – JSON file store for forms, answers and settings
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text(encoding="utf-8")
        except OSError:
            content = ""
        for line in content.splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.3.0"
                return line.split("=")[1].strip().strip('"').strip("'")

    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("form-toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
