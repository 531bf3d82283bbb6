"""Constants for registry-tokens."""

__all__ = ["CONFIG_PATH"]

CONFIG_PATH = "/etc/registry-tokens/config.yaml"
"""Default configuration path."""
