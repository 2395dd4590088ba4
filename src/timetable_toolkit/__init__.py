"""Top-level package for the timetable toolkit.

Provides subpackages:
- timetable_toolkit.core – schedule records, schema validation, JSON I/O
- timetable_toolkit.exporter – grid composition and PDF export
- timetable_toolkit.cli – `timetable-export` command
"""

def _get_version() -> str:
    """Get version from importlib.metadata (installed) or fall back to 0.0.0."""
    from importlib.metadata import PackageNotFoundError, version as pkg_version

    try:
        return pkg_version("timetable-toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
