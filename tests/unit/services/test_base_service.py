from __future__ import annotations

import pytest
from sqlalchemy.exc import SQLAlchemyError

import app.database.db as db_module
from app.services.base_service import BaseService


def test_commit_rolls_back_and_reraises(session, monkeypatch):
    calls = []

    def _fail():
        raise SQLAlchemyError("commit failed")

    monkeypatch.setattr(session, "commit", _fail)
    monkeypatch.setattr(session, "rollback", lambda: calls.append("rollback"))

    with pytest.raises(SQLAlchemyError):
        BaseService(db=session).commit()
    assert calls == ["rollback"]


def test_supplied_session_is_rolled_back_but_left_open(session, monkeypatch):
    calls = []
    monkeypatch.setattr(session, "rollback", lambda: calls.append("rollback"))
    monkeypatch.setattr(session, "close", lambda: calls.append("close"))

    with pytest.raises(RuntimeError):
        with BaseService(db=session):
            raise RuntimeError("boom")
    assert calls == ["rollback"]


def test_owned_session_is_closed_on_exit(session_factory, monkeypatch):
    monkeypatch.setattr(db_module, "SessionLocal", session_factory)
    closed = []

    with BaseService() as service:
        monkeypatch.setattr(service.db, "close", lambda: closed.append(True))
    assert closed == [True]
