# -*- coding: utf-8 -*-
"""单元测试：密码历史守卫的判定与裁剪。"""

from __future__ import annotations

from datetime import timedelta

import pytest

from extensions.database import db
from models import PasswordHistoryEntry, User
from repositories.password_history_repository import PasswordHistoryRepository
from services.password_history_guard import can_change_password, record_password_change
from utils.datetime_helpers import utcnow
from utils.password import hash_password, verify_password


def _make_user(username: str = "guard_user", password: str = "P0!") -> User:
    h = hash_password(password)
    user = User(username=username, password_hash=h)
    db.session.add(user)
    db.session.flush()
    PasswordHistoryRepository.add(user.id, h)
    db.session.commit()
    return user


def _history(user_id: int) -> list[PasswordHistoryEntry]:
    return PasswordHistoryRepository.get_recent(user_id, 100)


class TestCanChangePassword:

    def test_empty_history_allows(self, app):
        assert can_change_password("anything", []) is True

    def test_match_in_history_rejects(self, app):
        hashes = [hash_password(p) for p in ("P3!", "P2!", "P1!")]
        assert can_change_password("P1!", hashes) is False
        assert can_change_password("P3!", hashes) is False

    def test_no_match_allows(self, app):
        hashes = [hash_password(p) for p in ("P3!", "P2!", "P1!")]
        assert can_change_password("P0!", hashes) is True

    def test_compares_with_verify_not_equality(self, app):
        """同一明文两次 hash 结果不同（加盐），仍能识别复用"""
        h1, h2 = hash_password("same"), hash_password("same")
        assert h1 != h2
        assert can_change_password("same", [h1]) is False

    def test_idempotent(self, app):
        hashes = [hash_password("P1!")]
        first = can_change_password("P1!", hashes)
        second = can_change_password("P1!", hashes)
        assert first == second is False
        assert can_change_password("P9!", hashes) == can_change_password("P9!", hashes) is True

    def test_accepts_generator(self, app):
        hashes = (hash_password(p) for p in ("a1", "b2"))
        assert can_change_password("b2", hashes) is False


class TestRecordPasswordChange:

    def test_updates_hash_and_appends_history(self, app):
        user = _make_user()
        new_hash = hash_password("P1!")

        pruned = record_password_change(user, new_hash)
        db.session.commit()

        assert pruned == 0
        assert user.password_hash == new_hash
        history = _history(user.id)
        assert len(history) == 2
        assert history[0].password_hash == new_hash

    def test_prunes_to_window(self, app):
        user = _make_user()
        for i in range(1, 6):
            record_password_change(user, hash_password(f"P{i}!"))
            db.session.commit()
            history = _history(user.id)
            assert len(history) <= 3
            assert history[0].password_hash == user.password_hash

        survivors = _history(user.id)
        for entry, plain in zip(survivors, ("P5!", "P4!", "P3!")):
            assert verify_password(entry.password_hash, plain)

    def test_custom_keep(self, app):
        user = _make_user()
        record_password_change(user, hash_password("P1!"))
        record_password_change(user, hash_password("P2!"))
        db.session.commit()
        assert len(_history(user.id)) == 3

        pruned = record_password_change(user, hash_password("P3!"), keep=2)
        db.session.commit()
        assert pruned == 2
        assert len(_history(user.id)) == 2

    def test_keep_never_drops_newest(self, app):
        user = _make_user()
        record_password_change(user, hash_password("P1!"), keep=0)
        db.session.commit()
        history = _history(user.id)
        assert len(history) == 1
        assert history[0].password_hash == user.password_hash

    def test_only_touches_own_history(self, app):
        alice = _make_user("alice")
        bob = _make_user("bob")
        for i in range(1, 5):
            record_password_change(alice, hash_password(f"A{i}"))
            db.session.commit()
        assert len(_history(bob.id)) == 1
        assert len(_history(alice.id)) == 3

    def test_rollback_discards_all_effects(self, app):
        user = _make_user()
        user_id = user.id
        original_hash = user.password_hash

        record_password_change(user, hash_password("P1!"))
        db.session.rollback()

        db.session.expire_all()
        reloaded = db.session.get(User, user_id)
        assert reloaded.password_hash == original_hash
        history = _history(user_id)
        assert len(history) == 1
        assert history[0].password_hash == original_hash

    def test_timestamp_ties_broken_by_insert_order(self, app):
        user = _make_user()
        same_ts = utcnow() + timedelta(seconds=5)
        for i in range(1, 4):
            PasswordHistoryRepository.add(user.id, hash_password(f"T{i}"), changed_at=same_ts)
        db.session.flush()

        PasswordHistoryRepository.prune(user.id, 2)
        db.session.commit()

        remaining = _history(user.id)
        assert len(remaining) == 2
        assert verify_password(remaining[0].password_hash, "T3")
        assert verify_password(remaining[1].password_hash, "T2")


@pytest.mark.parametrize("limit", [0, -1])
def test_get_recent_non_positive_limit(app, limit):
    user = _make_user()
    assert PasswordHistoryRepository.get_recent(user.id, limit) == []
