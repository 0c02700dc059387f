import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from storefront.core.config import settings
from storefront.core.db_retry import with_db_retry


class DummyOrig(Exception):
    def __init__(self, code, message: str, sqlstate: str | None = None):
        super().__init__(message)
        self.sqlstate = sqlstate
        self.args = (code, message)


class DummySession:
    def __init__(self):
        self.rollback_calls = 0

    async def rollback(self):
        self.rollback_calls += 1


@pytest.fixture
def no_backoff(monkeypatch):
    monkeypatch.setattr(settings, "DB_RETRY_ATTEMPTS", 2)
    monkeypatch.setattr(settings, "DB_RETRY_BASE_DELAY", 0.0)
    monkeypatch.setattr(settings, "DB_RETRY_JITTER", 0.0)


@pytest.mark.anyio
async def test_deadlock_is_retried(no_backoff, monkeypatch):
    monkeypatch.setattr(settings, "DB_NOWAIT_LOCKS", True)

    session = DummySession()
    calls = {"count": 0}

    async def flaky_operation():
        calls["count"] += 1
        if calls["count"] == 1:
            raise OperationalError("stmt", {}, DummyOrig(1213, "deadlock"))
        return "ok"

    result = await with_db_retry(session, flaky_operation)

    assert result == "ok"
    assert calls["count"] == 2
    assert session.rollback_calls == 1


@pytest.mark.anyio
async def test_postgres_deadlock_sqlstate_is_retried(no_backoff):
    session = DummySession()
    calls = {"count": 0}

    async def flaky_operation():
        calls["count"] += 1
        if calls["count"] == 1:
            raise OperationalError(
                "stmt", {}, DummyOrig("ERROR", "conflict", sqlstate="40P01")
            )
        return "ok"

    assert await with_db_retry(session, flaky_operation) == "ok"
    assert session.rollback_calls == 1


@pytest.mark.anyio
async def test_nowait_lock_conflict_not_retried(no_backoff, monkeypatch):
    monkeypatch.setattr(settings, "DB_NOWAIT_LOCKS", True)

    session = DummySession()
    calls = {"count": 0}

    async def nowait_operation():
        calls["count"] += 1
        raise OperationalError("stmt", {}, DummyOrig(3572, "could not obtain lock"))

    with pytest.raises(OperationalError):
        await with_db_retry(session, nowait_operation)

    assert calls["count"] == 1
    assert session.rollback_calls == 0


@pytest.mark.anyio
async def test_integrity_error_is_not_retried(no_backoff):
    session = DummySession()
    calls = {"count": 0}

    async def duplicate_insert():
        calls["count"] += 1
        raise IntegrityError("stmt", {}, DummyOrig(1062, "Duplicate entry 'primary'"))

    with pytest.raises(IntegrityError):
        await with_db_retry(session, duplicate_insert)

    assert calls["count"] == 1
