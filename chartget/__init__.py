"""chartget — fetch charts from OCI registries through a generic getter interface."""

__version__ = "0.1.0"
