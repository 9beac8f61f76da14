"""Habit strength library: scoring engine, bucketing, and workspace store.

Public API re-exports for convenient imports:
    from habits import compute_scores, compute_month_buckets, WorkspaceStore, ...
"""

# Workspace & paths
from habits.workspace import (
    workspace_root,
    get_user_timezone,
    today,
    habits_path,
    repetitions_path,
    profile_path,
)

# Errors
from habits.errors import (
    HabitError,
    HabitConfigError,
    HabitNotFoundError,
)

# Models
from habits.timestamp import Timestamp, SECONDS_PER_DAY
from habits.models import (
    SKIP,
    NO,
    YES_MANUAL,
    NUMERIC_SCALE,
    BOOLEAN_HABIT,
    NUMERICAL_HABIT,
    Frequency,
    NumericalHabitType,
    Habit,
    Repetition,
    Score,
    MonthBucket,
)

# Engines
from habits.entries import compute_entries
from habits.scores import ScoreList, compute_score
from habits.buckets import day_map_for_habit, month_starts, month_buckets

# Storage
from habits.store import CompletionStore, InMemoryStore, WorkspaceStore

# Entry points
from habits.service import (
    compute_scores,
    compute_month_buckets,
    done_today,
    toggle_repetition,
)
