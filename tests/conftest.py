from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from types import SimpleNamespace
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from designflow.art_types.model import ArtType
from designflow.common.datetime_utils import get_zone, to_ms
from designflow.container import assemble
from designflow.core.enums import Role
from designflow.demands.model import Demand
from designflow.feedbacks.model import Feedback
from designflow.lessons.model import Lesson, LessonChanges, LessonProgress
from designflow.main import create_app
from designflow.settings.model import SystemSettings
from designflow.users.model import User, UserChanges
from designflow.work_sessions.model import WorkSession

TZ = get_zone("America/Sao_Paulo")


def local_ms(*args) -> int:
    return to_ms(datetime(*args, tzinfo=TZ))


class FixedClock:
    """Tuesday 2026-03-10 14:30 in Sao Paulo unless moved."""

    def __init__(self, now_ms: Optional[int] = None):
        self.now_ms = now_ms if now_ms is not None else local_ms(2026, 3, 10, 14, 30)

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


class InMemoryUsers:
    def __init__(self, users=()):
        self.users: dict[str, User] = {u.user_id: u for u in users}
        self.cascaded: list[str] = []

    def list_all(self):
        return sorted(self.users.values(), key=lambda u: u.name)

    def list_designers(self):
        return [u for u in self.list_all() if u.role == Role.DESIGNER]

    def get_by_id(self, user_id):
        return self.users.get(user_id)

    def get_active_by_name(self, name):
        return next((u for u in self.users.values() if u.name == name and u.active), None)

    def create_user(self, user):
        self.users[user.user_id] = user

    def update_user(self, user_id, changes: UserChanges):
        user = self.users.get(user_id)
        if not user:
            return False
        fields = {k: v for k, v in vars(changes).items() if v is not None}
        self.users[user_id] = replace(user, **fields)
        return True

    def deactivate(self, user_id):
        return self.update_user(user_id, UserChanges(active=False))

    def delete_cascade(self, user_id):
        if self.users.pop(user_id, None) is None:
            return False
        self.cascaded.append(user_id)
        return True


class InMemoryArtTypes:
    def __init__(self, art_types=()):
        self.art_types: dict[str, ArtType] = {a.art_type_id: a for a in art_types}

    def list_all(self):
        return sorted(self.art_types.values(), key=lambda a: a.order)

    def get_many(self, art_type_ids):
        return {i: self.art_types[i] for i in art_type_ids if i in self.art_types}

    def create(self, *, art_type_id, label, points, is_variation):
        order = max((a.order for a in self.art_types.values()), default=-1) + 1
        art = ArtType(art_type_id, label, points, order, is_variation)
        self.art_types[art_type_id] = art
        return art

    def update(self, art_type_id, *, label=None, points=None, order=None, is_variation=None):
        art = self.art_types.get(art_type_id)
        if not art:
            return False
        fields = {"label": label, "points": points, "order": order, "is_variation": is_variation}
        self.art_types[art_type_id] = replace(art, **{k: v for k, v in fields.items() if v is not None})
        return True

    def delete(self, art_type_id):
        return self.art_types.pop(art_type_id, None) is not None

    def reorder(self, orders):
        for art_type_id, order in orders:
            self.update(art_type_id, order=order)


class InMemorySettings:
    def __init__(self, settings: Optional[SystemSettings] = None):
        self.settings = settings

    def get(self):
        return self.settings

    def save(self, changes):
        current = self.settings or SystemSettings()
        fields = {k: v for k, v in vars(changes).items() if v is not None}
        self.settings = replace(current, **fields)


class InMemoryDemands:
    def __init__(self):
        self.demands: dict[str, Demand] = {}
        self.items: dict[str, list] = {}

    def list_range(self, *, user_id=None, start_ms=None, end_ms=None):
        out = [
            d
            for d in self.demands.values()
            if (not user_id or d.user_id == user_id)
            and (start_ms is None or d.timestamp >= start_ms)
            and (end_ms is None or d.timestamp <= end_ms)
        ]
        return sorted(out, key=lambda d: d.timestamp, reverse=True)

    def get_by_id(self, demand_id):
        return self.demands.get(demand_id)

    def create(self, demand):
        self.demands[demand.demand_id] = demand
        self.items[demand.demand_id] = list(demand.items)

    def delete(self, demand_id):
        self.items.pop(demand_id, None)
        return self.demands.pop(demand_id, None) is not None


class InMemoryWorkSessions:
    def __init__(self):
        self.sessions: list[WorkSession] = []

    def list_range(self, *, user_id=None, start_ms=None, end_ms=None):
        out = [
            s
            for s in self.sessions
            if (not user_id or s.user_id == user_id)
            and (start_ms is None or s.timestamp >= start_ms)
            and (end_ms is None or s.timestamp <= end_ms)
        ]
        return sorted(out, key=lambda s: s.timestamp, reverse=True)

    def get_or_create_for_day(self, *, user_id, day_start_ms, day_end_ms, new_session):
        for s in sorted(self.sessions, key=lambda s: s.timestamp):
            if s.user_id == user_id and day_start_ms <= s.timestamp < day_end_ms:
                return s, False
        self.sessions.append(new_session)
        return new_session, True


class InMemoryFeedbacks:
    def __init__(self):
        self.feedbacks: dict[str, Feedback] = {}

    def list_for(self, *, designer_id=None):
        out = [f for f in self.feedbacks.values() if not designer_id or f.designer_id == designer_id]
        return sorted(out, key=lambda f: f.created_at, reverse=True)

    def create(self, feedback):
        self.feedbacks[feedback.feedback_id] = feedback

    def mark_viewed(self, feedback_id, *, viewed_at):
        f = self.feedbacks.get(feedback_id)
        if not f:
            return False
        self.feedbacks[feedback_id] = replace(f, viewed=True, viewed_at=viewed_at)
        return True

    def delete(self, feedback_id):
        return self.feedbacks.pop(feedback_id, None) is not None


class InMemoryLessons:
    def __init__(self):
        self.lessons: dict[str, Lesson] = {}

    def list_all(self):
        return sorted(self.lessons.values(), key=lambda l: l.order_index)

    def create(self, *, lesson_id, title, description, video_url, created_at):
        order = max((l.order_index for l in self.lessons.values()), default=-1) + 1
        lesson = Lesson(lesson_id, title, description, video_url, order, created_at)
        self.lessons[lesson_id] = lesson
        return lesson

    def update(self, lesson_id, changes: LessonChanges):
        lesson = self.lessons.get(lesson_id)
        if not lesson:
            return None
        fields = {k: v for k, v in vars(changes).items() if v is not None}
        self.lessons[lesson_id] = replace(lesson, **fields)
        return self.lessons[lesson_id]

    def delete(self, lesson_id):
        return self.lessons.pop(lesson_id, None) is not None


class InMemoryLessonProgress:
    def __init__(self):
        self.rows: dict[tuple[str, str], LessonProgress] = {}

    def list_for_designer(self, designer_id):
        return [p for p in self.rows.values() if p.designer_id == designer_id]

    def mark_viewed(self, *, progress_id, lesson_id, designer_id, viewed_at):
        key = (lesson_id, designer_id)
        current = self.rows.get(key)
        if current:
            self.rows[key] = replace(current, viewed=True, viewed_at=viewed_at)
        else:
            self.rows[key] = LessonProgress(progress_id, lesson_id, designer_id, True, viewed_at)
        return self.rows[key]


def make_user(user_id, name, role=Role.DESIGNER, *, password="123", active=True) -> User:
    return User(
        user_id=user_id,
        name=name,
        password_hash=generate_password_hash(password),
        role=role,
        active=active,
    )


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def repos():
    return SimpleNamespace(
        users=InMemoryUsers(
            [
                make_user("d1", "Designer 01 - Davi"),
                make_user("d2", "Designer 02 - Guilherme"),
                make_user("a1", "Administrador", Role.ADMIN, password="admin"),
            ]
        ),
        art_types=InMemoryArtTypes(
            [
                ArtType("1", "Arte Única", 10, 0),
                ArtType("3", "Carrossel", 40, 1),
                ArtType("7", "Variação de Formato", 5, 2, is_variation=True),
            ]
        ),
        demands=InMemoryDemands(),
        work_sessions=InMemoryWorkSessions(),
        feedbacks=InMemoryFeedbacks(),
        lessons=InMemoryLessons(),
        lesson_progress=InMemoryLessonProgress(),
        settings=InMemorySettings(SystemSettings(brand_title="DesignFlow Pro", variation_points=5)),
    )


@pytest.fixture
def container(repos, clock):
    return assemble(
        tz=TZ,
        users_repo=repos.users,
        art_types_repo=repos.art_types,
        demands_repo=repos.demands,
        work_sessions_repo=repos.work_sessions,
        feedbacks_repo=repos.feedbacks,
        lessons_repo=repos.lessons,
        lesson_progress_repo=repos.lesson_progress,
        settings_repo=repos.settings,
        clock_ms=clock,
    )


@pytest.fixture
def app(container):
    return create_app(container, settings_module="config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


class RecordingCursor:
    def __init__(self, db):
        self._db = db
        self.rowcount = 0

    def execute(self, query, params=None):
        statement = " ".join(str(query).split())
        if self._db.fail_on and self._db.fail_on in statement:
            raise RuntimeError(f"forced failure on: {self._db.fail_on}")
        self._db.statements.append((statement, params))
        self.rowcount = self._db.rowcount

    def fetchone(self):
        return self._db.results.pop(0) if self._db.results else None

    def fetchall(self):
        return self._db.results.pop(0) if self._db.results else []

    def close(self):
        pass


class RecordingConnection:
    def __init__(self, db):
        self._db = db

    def cursor(self):
        return RecordingCursor(self._db)

    def commit(self):
        self._db.events.append("commit")

    def rollback(self):
        self._db.events.append("rollback")

    def close(self):
        self._db.events.append("close")


class RecordingDatabase:
    """Stands in for ``DatabaseConnection``: records SQL, serves queued fetch results."""

    def __init__(self):
        self.statements: list[tuple[str, object]] = []
        self.events: list[str] = []
        self.results: list = []
        self.rowcount = 1
        self.fail_on: Optional[str] = None

    def connect(self):
        self.events.append("connect")
        return RecordingConnection(self)

    def sql(self) -> list[str]:
        return [s for s, _ in self.statements]


@pytest.fixture
def recording_db():
    return RecordingDatabase()
