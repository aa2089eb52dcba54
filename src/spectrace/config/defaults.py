"""
spectrace.config.defaults - Default configuration values.
"""

DEFAULT_CONFIG = {
    "traceability": {
        "specs_path": ".agents/specs",
        "strict": False,
        "format": "console",
        "completed_statuses": ["complete", "done", "implemented"],
        "directories": {
            "requirements": "requirements",
            "designs": "design",
            "tasks": "tasks",
        },
        "patterns": {
            "requirements": "REQ-*.md",
            "designs": "DESIGN-*.md",
            "tasks": "TASK-*.md",
        },
        "prefixes": {
            "requirement": "REQ-",
            "design": "DESIGN-",
            "task": "TASK-",
        },
    },
}
