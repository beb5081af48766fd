"""AEP metadata derivation for resource-oriented APIs."""

__version__ = "0.1.0"
