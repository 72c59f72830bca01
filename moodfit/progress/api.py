# -*- coding: utf-8 -*-
"""User, progress and workout-session endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from ..catalog.data import FALLBACK_EXERCISE, find_by_id, find_by_name
from ..catalog.models import DifficultyLevel, Exercise, MoodType
from ..catalog.recommend import generate_mood_specific_exercises
from ..deps import get_clock, get_progress_engine
from ..validation import sanitize_username, username_validation_error
from .engine import ProgressEngine
from .insights import InsightsResponse, build_insights
from .models import (
    ProgressResponse,
    SessionCompleteRequest,
    SessionExerciseRequest,
    SessionListResponse,
    SessionStartRequest,
    User,
    UserPreferencesRequest,
    UserResponse,
    UserSetupRequest,
    UserStats,
    WorkoutSession,
)

user_router = APIRouter(prefix="/api/user", tags=["User"])
progress_router = APIRouter(prefix="/api/progress", tags=["Progress"])
sessions_router = APIRouter(prefix="/api/sessions", tags=["Sessions"])


def _user_response(engine: ProgressEngine, user: User, now: datetime) -> UserResponse:
    return UserResponse(
        user=user,
        welcome_message=user.welcome_message(now, engine.tz),
        motivational_message=user.motivational_message(),
        days_using_app=user.days_using_app(now),
        has_worked_out_today=user.has_worked_out_today(now, engine.tz),
    )


def _lookup_exercise(exercise_id: Optional[str], name: Optional[str]) -> Optional[Exercise]:
    if exercise_id:
        found = find_by_id(exercise_id)
        if found:
            return found
        if exercise_id == FALLBACK_EXERCISE.exercise_id:
            return FALLBACK_EXERCISE
    if name:
        found = find_by_name(name)
        if found:
            return found
    for mood in MoodType:
        for exercise in generate_mood_specific_exercises(mood, DifficultyLevel.BEGINNER):
            if exercise.exercise_id == exercise_id or (name and exercise.name.lower() == name.strip().lower()):
                return exercise
    return None


# ---- user -----------------------------------------------------------------


@user_router.get("", response_model=UserResponse, summary="Current user (created on first access)")
def get_user(
    engine: ProgressEngine = Depends(get_progress_engine),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    return _user_response(engine, engine.current_user(), clock())


@user_router.post("/setup", response_model=UserResponse, summary="Complete onboarding with a username")
def setup_user(
    payload: UserSetupRequest,
    engine: ProgressEngine = Depends(get_progress_engine),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    error = username_validation_error(payload.username)
    if error:
        raise HTTPException(status_code=400, detail=error)
    username = sanitize_username(payload.username)

    def _apply(user: User) -> None:
        user.complete_onboarding(username)
        if payload.preferred_difficulty is not None:
            user.preferred_difficulty = payload.preferred_difficulty

    return _user_response(engine, engine.update_user(_apply), clock())


@user_router.patch("/preferences", response_model=UserResponse, summary="Update user preferences")
def update_preferences(
    payload: UserPreferencesRequest,
    engine: ProgressEngine = Depends(get_progress_engine),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    changes = payload.model_dump(exclude_none=True)

    def _apply(user: User) -> None:
        for field, value in changes.items():
            setattr(user, field, value)

    return _user_response(engine, engine.update_user(_apply), clock())


@user_router.post("/open", response_model=UserResponse, summary="Record an app open")
def record_open(
    engine: ProgressEngine = Depends(get_progress_engine),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    now = clock()
    user = engine.record_app_open(now) or engine.current_user()
    return _user_response(engine, user, now)


# ---- progress -------------------------------------------------------------


@progress_router.get("", response_model=ProgressResponse, summary="Aggregate progress")
def get_progress(
    engine: ProgressEngine = Depends(get_progress_engine),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    now = clock()
    progress = engine.user_progress()
    return ProgressResponse(
        progress=progress,
        workouts_this_week=progress.workouts_this_week(now),
        minutes_this_month=progress.minutes_this_month(now, engine.tz),
        most_frequent_mood=progress.most_frequent_mood(),
        favorite_category=progress.favorite_category(),
    )


@progress_router.get("/stats", response_model=UserStats, summary="Dashboard statistics")
def get_stats(engine: ProgressEngine = Depends(get_progress_engine)):
    return engine.user_stats()


@progress_router.post("/refresh-streak", response_model=UserStats, summary="Reset a lapsed streak")
def refresh_streak(engine: ProgressEngine = Depends(get_progress_engine)):
    engine.refresh_streak()
    return engine.user_stats()


@progress_router.get("/insights", response_model=InsightsResponse, summary="Weekly and daily activity")
def get_insights(
    days: int = Query(default=7, ge=1, le=366),
    engine: ProgressEngine = Depends(get_progress_engine),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    return build_insights(engine.session_history(), clock(), days=days, tz=engine.tz)


@progress_router.get("/export", summary="Export all stored data as JSON")
def export_progress(engine: ProgressEngine = Depends(get_progress_engine)):
    return Response(content=engine.export_data(), media_type="application/json")


@progress_router.post("/reset-today", response_model=UserStats, summary="Forget today's workout for streak purposes")
def reset_today(engine: ProgressEngine = Depends(get_progress_engine)):
    engine.reset_todays_workout()
    return engine.user_stats()


@progress_router.delete("", summary="Erase all stored data")
def reset_all(engine: ProgressEngine = Depends(get_progress_engine)):
    engine.reset_all_data()
    return {"status": "reset"}


# ---- sessions -------------------------------------------------------------


@sessions_router.post("", response_model=WorkoutSession, summary="Start a workout session")
def start_session(
    payload: SessionStartRequest,
    engine: ProgressEngine = Depends(get_progress_engine),
):
    mood = MoodType.parse(payload.mood) if payload.mood is not None else None
    return engine.start_session(mood)


def _active_or_error(engine: ProgressEngine, session_id: str) -> WorkoutSession:
    session = engine.active_session(session_id)
    if session is not None:
        return session
    if engine.find_session(session_id) is not None:
        raise HTTPException(status_code=409, detail="Session already completed")
    raise HTTPException(status_code=404, detail="Session not found")


@sessions_router.post("/{session_id}/exercises", response_model=WorkoutSession, summary="Add an exercise")
def add_session_exercise(
    session_id: str,
    payload: SessionExerciseRequest,
    engine: ProgressEngine = Depends(get_progress_engine),
):
    session = _active_or_error(engine, session_id)
    exercise = _lookup_exercise(payload.exercise_id, payload.name)
    if exercise is None:
        raise HTTPException(status_code=404, detail="Exercise not found")
    session.add_exercise(exercise)
    engine.save_active_session(session)
    return session


@sessions_router.post("/{session_id}/complete", response_model=WorkoutSession, summary="Complete a session")
def complete_session(
    session_id: str,
    payload: Optional[SessionCompleteRequest] = None,
    engine: ProgressEngine = Depends(get_progress_engine),
):
    _active_or_error(engine, session_id)
    payload = payload or SessionCompleteRequest()
    try:
        session = engine.complete_session(session_id, rating=payload.rating, notes=payload.notes)
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


@sessions_router.get("", response_model=SessionListResponse, summary="Completed session history")
def list_sessions(
    days: Optional[int] = Query(default=None, ge=1, description="Only sessions finished in the last N days"),
    engine: ProgressEngine = Depends(get_progress_engine),
):
    items: List[WorkoutSession] = engine.recent_sessions(days) if days else engine.session_history()
    return SessionListResponse(count=len(items), items=items)


@sessions_router.get("/{session_id}", response_model=WorkoutSession, summary="One session, active or completed")
def get_session(session_id: str, engine: ProgressEngine = Depends(get_progress_engine)):
    session = engine.active_session(session_id) or engine.find_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session
