"""
spectrace.commands - CLI command implementations
"""

__all__ = [
    "config_cmd",
    "validate",
]
