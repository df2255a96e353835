from importlib.metadata import version, PackageNotFoundError

# Version info - read from package metadata (single source of truth in pyproject.toml)
try:
    __version__ = version("beeper-desktop-api")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"
