# repositories/user_repository.py
from __future__ import annotations
from typing import Optional

from sqlalchemy import select

from models.user import User
from extensions.database import db


class UserRepository:
    """
    用户的仓储（数据访问）层。
    说明：
    - 不做业务规则判断，仅做纯粹的持久化读写。
    - 所有写操作不自动 commit，由上层显式调用 commit()，以便在一个事务中组合多个操作。
    """

    @staticmethod
    def find_by_username(username: str) -> Optional[User]:
        return User.query.filter_by(username=username).first()

    @staticmethod
    def select_for_update_by_username(username: str):
        """构造 SELECT ... FOR UPDATE 语句（不执行）。"""
        return select(User).filter_by(username=username).with_for_update()

    @staticmethod
    def lock_by_username(username: str) -> Optional[User]:
        """
        SELECT ... FOR UPDATE 锁定用户行，串行化同一用户的并发改密。
        调用后仍需在事务内（不要提前 commit），commit / rollback 时释放。
        SQLite 不支持行锁，会忽略 FOR UPDATE。
        """
        stmt = UserRepository.select_for_update_by_username(username)
        return db.session.execute(stmt).scalars().first()

    @staticmethod
    def add(user: User):
        db.session.add(user)

    @staticmethod
    def flush():
        db.session.flush()

    @staticmethod
    def update_password_hash(user: User, new_hash: str):
        user.password_hash = new_hash
        return user

    @staticmethod
    def commit():
        db.session.commit()

    @staticmethod
    def rollback():
        db.session.rollback()
