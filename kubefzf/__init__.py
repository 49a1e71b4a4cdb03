"""kubefzf - normalised Kubernetes resource records for fuzzy completion."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("kubefzf")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
