"""cilium-releases - release and repository file lookups for Cilium."""

__version__ = "0.1.0"
