# gymapp/repositories/workout_repo.py
from __future__ import annotations
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from gymapp.fitness.active_workout import FinishedWorkout
from gymapp.models import CardioLog, ExerciseLog, WorkoutSession, WorkoutSet
from gymapp.repositories.base import BaseRepository

class WorkoutRepository(BaseRepository[WorkoutSession]):
    model = WorkoutSession

    def get(self, session_id: str, user_id: int) -> Optional[WorkoutSession]:
        stmt = (
            select(WorkoutSession)
            .where(WorkoutSession.id == session_id, WorkoutSession.user_id == user_id)
            .options(selectinload(WorkoutSession.exercise_logs).selectinload(ExerciseLog.sets))
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def list_by_user(self, user_id: int, *, limit: int = 50, offset: int = 0) -> list[WorkoutSession]:
        stmt = select(WorkoutSession).where(WorkoutSession.user_id == user_id)\
                                     .order_by(WorkoutSession.started_at.desc())\
                                     .limit(limit).offset(offset)
        return self.read_or_empty(stmt)

    def save_finished(self, user_id: int, finished: FinishedWorkout) -> WorkoutSession:
        """
        Persist a finished workout with its exercise logs, completed sets and
        cardio logs in one transaction. Unfinished sets are not stored.
        """
        s = finished.session
        row = WorkoutSession(
            id=s.id,
            user_id=user_id,
            template_id=s.template_id,
            name=s.name,
            status=s.status,
            started_at=s.started_at,
            completed_at=s.completed_at,
            duration_sec=s.duration_sec,
            notes=s.notes,
            rating=s.rating,
            perceived_exertion=s.perceived_exertion,
            calories_burned=s.calories_burned,
        )
        for entry in finished.exercise_logs:
            log_row = ExerciseLog(
                id=entry.id,
                exercise_id=entry.exercise.id,
                exercise_name=entry.exercise.name,
                order_index=entry.order_index,
                notes=entry.notes or None,
            )
            log_row.sets = [
                WorkoutSet(
                    set_number=st.set_number,
                    set_type=st.set_type,
                    reps=st.reps,
                    weight_kg=st.weight_kg,
                    rpe=st.rpe,
                    is_pr=st.is_pr,
                    completed_at=st.completed_at,
                    notes=st.notes,
                )
                for st in entry.sets if st.completed
            ]
            if entry.cardio_log:
                log_row.cardio_log = CardioLog(**entry.cardio_log)
            row.exercise_logs.append(log_row)
        return self.add_and_refresh(row)
