from __future__ import annotations

import logging
import os
import secrets
from datetime import date
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException, Query, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from habits import (
    Habit,
    HabitConfigError,
    HabitNotFoundError,
    Timestamp,
    WorkspaceStore,
    compute_month_buckets,
    compute_scores,
    day_map_for_habit,
    done_today,
    today as _today,
    toggle_repetition,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(title="Habits API", version="0.1.0")


# ── Auth ──────────────────────────────────────────────────────

security = HTTPBasic(auto_error=False)


def _configured_credentials() -> tuple[str, str] | None:
    username = os.environ.get("HABITS_USERNAME", "")
    password = os.environ.get("HABITS_PASSWORD", "")
    if username and password:
        return username, password
    return None


def _matches(given: str, expected: str) -> bool:
    return secrets.compare_digest(given.encode("utf-8"), expected.encode("utf-8"))


def get_current_user(credentials: HTTPBasicCredentials | None = Depends(security)) -> str:
    """Open access unless HABITS_USERNAME and HABITS_PASSWORD are both set."""
    expected = _configured_credentials()
    if expected is None:
        return "guest"
    if credentials is not None:
        username_ok = _matches(credentials.username, expected[0])
        password_ok = _matches(credentials.password, expected[1])
        if username_ok and password_ok:
            return credentials.username
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or missing credentials",
        headers={"WWW-Authenticate": "Basic"},
    )


# ── Helpers ───────────────────────────────────────────────────

def get_store() -> WorkspaceStore:
    return WorkspaceStore()


def _habit_or_404(store: WorkspaceStore, habit_id: int) -> Habit:
    try:
        return store.load_habit(habit_id)
    except HabitNotFoundError as e:
        logger.warning("Unknown habit requested: %d", habit_id)
        raise HTTPException(status_code=404, detail=str(e))


def _parse_date(value: str | None, field: str) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {field}: {value!r}")


# ── Endpoints ─────────────────────────────────────────────────

@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"ok": "true"}


@app.get("/api/habits")
def api_habits(
    username: str = Depends(get_current_user),
    store: WorkspaceStore = Depends(get_store),
) -> dict[str, Any]:
    """Active (non-archived) habits in file order, each flagged with today's state."""
    done = done_today(store)
    return {"habits": [{**h.to_dict(), "done_today": h.id in done} for h in store.load_habits()]}


@app.get("/api/habits/{habit_id}/scores")
def api_scores(
    habit_id: int,
    days: int = Query(30),
    username: str = Depends(get_current_user),
    store: WorkspaceStore = Depends(get_store),
) -> dict[str, Any]:
    """Strength curve for the last *days* days, oldest first."""
    habit = _habit_or_404(store, habit_id)
    try:
        scores = compute_scores(habit, days, store)
    except HabitConfigError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"habit": habit.id, "scores": [s.to_dict() for s in scores]}


@app.get("/api/habits/{habit_id}/months")
def api_months(
    habit_id: int,
    months: int = Query(12),
    username: str = Depends(get_current_user),
    store: WorkspaceStore = Depends(get_store),
) -> dict[str, Any]:
    """Done-day counts per month for the bar chart."""
    habit = _habit_or_404(store, habit_id)
    try:
        buckets = compute_month_buckets(habit, months, store)
    except HabitConfigError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"habit": habit.id, "months": [b.to_dict() for b in buckets]}


@app.get("/api/habits/{habit_id}/days")
def api_days(
    habit_id: int,
    start: str = Query(...),
    end: str = Query(...),
    username: str = Depends(get_current_user),
    store: WorkspaceStore = Depends(get_store),
) -> dict[str, Any]:
    """Per-day values for the calendar view, keyed by ISO date."""
    habit = _habit_or_404(store, habit_id)
    from_date = _parse_date(start, "start")
    to_date = _parse_date(end, "end")
    if from_date is None or to_date is None:
        raise HTTPException(status_code=400, detail="start and end are required")
    try:
        day_map = day_map_for_habit(habit, from_date, to_date, store)
    except HabitConfigError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {
        "habit": habit.id,
        "days": {str(Timestamp.from_seconds(ts)): v for ts, v in sorted(day_map.items())},
    }


@app.post("/api/habits/{habit_id}/toggle")
def api_toggle(
    habit_id: int,
    payload: dict[str, Any] = Body(default={}),
    username: str = Depends(get_current_user),
    store: WorkspaceStore = Depends(get_store),
) -> dict[str, Any]:
    """Mark a day done, or clear it if already logged. Defaults to today."""
    habit = _habit_or_404(store, habit_id)
    day = _parse_date(payload.get("date"), "date") or _today(store.root)
    done = toggle_repetition(habit, day, store)
    return {"ok": True, "habit": habit.id, "date": day.isoformat(), "done": done}
