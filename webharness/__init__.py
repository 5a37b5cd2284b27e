"""Browser automation harness: session provisioning and element access."""

__version__ = "1.0.0"
