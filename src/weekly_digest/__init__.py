"""Weekly multi-provider changelog digests published as GitHub Discussions."""

__version__ = "0.1.0"
