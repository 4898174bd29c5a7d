# repositories/password_history_repository.py
from __future__ import annotations
from typing import List

from models.password_history import PasswordHistoryEntry
from extensions.database import db
from utils.datetime_helpers import utcnow

# 最近优先；changed_at 相同时按 id 倒序
_NEWEST_FIRST = (PasswordHistoryEntry.changed_at.desc(), PasswordHistoryEntry.id.desc())


class PasswordHistoryRepository:
    """
    密码历史的仓储层。
    - 历史记录只增删，不更新。
    - 不提交事务。
    """

    @staticmethod
    def add(user_id: int, password_hash: str, changed_at=None) -> PasswordHistoryEntry:
        entry = PasswordHistoryEntry(
            user_id=user_id,
            password_hash=password_hash,
            changed_at=changed_at or utcnow(),
        )
        db.session.add(entry)
        return entry

    @staticmethod
    def get_recent(user_id: int, limit: int) -> List[PasswordHistoryEntry]:
        """
        获取最近 limit 条历史（最近优先）。
        limit <= 0 时返回空列表。
        """
        if limit <= 0:
            return []
        return (PasswordHistoryEntry.query
                .filter_by(user_id=user_id)
                .order_by(*_NEWEST_FIRST)
                .limit(limit)
                .all())

    @staticmethod
    def get_recent_hashes(user_id: int, limit: int) -> List[str]:
        return [e.password_hash for e in PasswordHistoryRepository.get_recent(user_id, limit)]

    @staticmethod
    def prune(user_id: int, keep: int) -> int:
        """
        仅保留最近 keep 条历史记录，删除其余，返回删除条数。
        keep <= 0 表示清空全部历史。
        需在 flush 之后调用，保证本事务内新增的记录参与排序。
        """
        q = PasswordHistoryEntry.query.filter_by(user_id=user_id)
        if keep <= 0:
            return q.delete(synchronize_session=False)

        extra_ids = [i for (i,) in (q.with_entities(PasswordHistoryEntry.id)
                                    .order_by(*_NEWEST_FIRST)
                                    .offset(keep)
                                    .all())]
        if not extra_ids:
            return 0
        return (PasswordHistoryEntry.query
                .filter(PasswordHistoryEntry.id.in_(extra_ids))
                .delete(synchronize_session=False))
