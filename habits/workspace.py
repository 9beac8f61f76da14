"""Workspace root, timezone, path helpers for the habits store."""

from __future__ import annotations

import os
from datetime import date, datetime
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from habits.fileio import read_yaml


def workspace_root() -> Path:
    """Get the workspace root directory (holds habits.yaml and repetitions.json)."""
    return Path(
        os.environ.get("HABITS_ROOT", str(Path.home() / "habits"))
    ).expanduser().resolve()


def get_user_timezone(root: Path | None = None) -> ZoneInfo:
    """Get user's timezone from profile.yaml, defaulting to UTC."""
    if root is None:
        root = workspace_root()
    try:
        profile = read_yaml(profile_path(root))
        if isinstance(profile, dict) and "timezone" in profile:
            return ZoneInfo(profile["timezone"])
    except (yaml.YAMLError, ZoneInfoNotFoundError, ValueError):
        pass
    return ZoneInfo("UTC")


def today(root: Path | None = None) -> date:
    """Today's calendar date in the user's timezone."""
    return datetime.now(get_user_timezone(root)).date()


# ── Path helpers ──────────────────────────────────────────────

def habits_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "habits.yaml"


def repetitions_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "repetitions.json"


def profile_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "profile.yaml"
