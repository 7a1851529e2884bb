from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from typing import Callable, Optional

from .art_types.pg_art_type_repository import PgArtTypeRepository
from .art_types.repository import ArtTypeRepository
from .art_types.service import ArtTypeService
from .common.datetime_utils import get_zone, now_local, to_ms
from .database.connection import DBConfig, DatabaseConnection
from .demands.pg_demand_repository import PgDemandRepository
from .demands.repository import DemandRepository
from .demands.service import DemandService
from .feedbacks.pg_feedback_repository import PgFeedbackRepository
from .feedbacks.repository import FeedbackRepository
from .feedbacks.service import FeedbackService
from .lessons.pg_lesson_repository import PgLessonProgressRepository, PgLessonRepository
from .lessons.repository import LessonProgressRepository, LessonRepository
from .lessons.service import LessonService
from .reports.service import ReportService
from .settings.pg_settings_repository import PgSettingsRepository
from .settings.repository import SettingsRepository
from .settings.service import SettingsService
from .users.pg_user_repository import PgUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService
from .work_sessions.pg_work_session_repository import PgWorkSessionRepository
from .work_sessions.repository import WorkSessionRepository
from .work_sessions.service import WorkSessionService


@dataclass(frozen=True)
class Container:
    tz: tzinfo

    users_repo: UserRepository
    art_types_repo: ArtTypeRepository
    demands_repo: DemandRepository
    work_sessions_repo: WorkSessionRepository
    feedbacks_repo: FeedbackRepository
    lessons_repo: LessonRepository
    lesson_progress_repo: LessonProgressRepository
    settings_repo: SettingsRepository

    auth_service: AuthService
    user_service: UserService
    art_type_service: ArtTypeService
    settings_service: SettingsService
    demand_service: DemandService
    work_session_service: WorkSessionService
    feedback_service: FeedbackService
    lesson_service: LessonService
    report_service: ReportService


def assemble(
    *,
    tz: tzinfo,
    users_repo: UserRepository,
    art_types_repo: ArtTypeRepository,
    demands_repo: DemandRepository,
    work_sessions_repo: WorkSessionRepository,
    feedbacks_repo: FeedbackRepository,
    lessons_repo: LessonRepository,
    lesson_progress_repo: LessonProgressRepository,
    settings_repo: SettingsRepository,
    clock_ms: Optional[Callable[[], int]] = None,
) -> Container:
    """Wire services on top of the given repositories (Postgres or in-memory)."""

    if clock_ms is None:
        clock_ms = lambda: to_ms(now_local(tz))  # noqa: E731

    settings_service = SettingsService(settings_repo)

    return Container(
        tz=tz,
        users_repo=users_repo,
        art_types_repo=art_types_repo,
        demands_repo=demands_repo,
        work_sessions_repo=work_sessions_repo,
        feedbacks_repo=feedbacks_repo,
        lessons_repo=lessons_repo,
        lesson_progress_repo=lesson_progress_repo,
        settings_repo=settings_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        art_type_service=ArtTypeService(art_types_repo),
        settings_service=settings_service,
        demand_service=DemandService(
            demands_repo,
            art_types_repo,
            users_repo,
            settings_service,
            clock_ms=clock_ms,
        ),
        work_session_service=WorkSessionService(work_sessions_repo, users_repo, tz=tz, clock_ms=clock_ms),
        feedback_service=FeedbackService(feedbacks_repo, clock_ms=clock_ms),
        lesson_service=LessonService(lessons_repo, lesson_progress_repo, clock_ms=clock_ms),
        report_service=ReportService(demands_repo, work_sessions_repo, users_repo, tz=tz, clock_ms=clock_ms),
    )


def build_container(*, db_config: dict, timezone: Optional[str] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return assemble(
        tz=get_zone(timezone),
        users_repo=PgUserRepository(conn),
        art_types_repo=PgArtTypeRepository(conn),
        demands_repo=PgDemandRepository(conn),
        work_sessions_repo=PgWorkSessionRepository(conn),
        feedbacks_repo=PgFeedbackRepository(conn),
        lessons_repo=PgLessonRepository(conn),
        lesson_progress_repo=PgLessonProgressRepository(conn),
        settings_repo=PgSettingsRepository(conn),
    )
