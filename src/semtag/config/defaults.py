"""Explicit default settings for tag resolution."""

from __future__ import annotations

DEFAULTS: dict[str, object] = {
    "method": "git-binary",
    "git_executable": "git",
    "repository": ".",
    "logging": {
        "log_level": "WARNING",
        "log_dir": None,
        "log_file_name": "semtag.log",
        "structured_logging": False,
    },
}
