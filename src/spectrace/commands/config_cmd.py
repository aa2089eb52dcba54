"""
spectrace.commands.config_cmd - Inspect configuration.
"""

import argparse
import json
import sys
from pathlib import Path

import tomlkit

from spectrace.config import ConfigError, find_config_file, get_config


def run(args: argparse.Namespace) -> int:
    """Run the config command."""
    action = getattr(args, "config_action", None) or "show"

    if action == "path":
        return cmd_path(args)
    return cmd_show(args)


def cmd_path(args: argparse.Namespace) -> int:
    """Print the config file in use."""
    config_path = args.config or find_config_file(Path.cwd())
    if config_path is None:
        print("No config file found (using defaults)", file=sys.stderr)
        return 1
    print(config_path)
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    """Print the effective configuration as TOML or JSON."""
    try:
        config = get_config(args.config, start_path=Path.cwd())
    except ConfigError as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    if getattr(args, "json", False):
        print(json.dumps(config, indent=2))
    else:
        print(tomlkit.dumps(config), end="")
    return 0
