"""Post-deploy rollout verification with automatic failure diagnosis."""

__version__ = "0.1.0"
