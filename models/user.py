# -*- coding: utf-8 -*-
"""
user.py
--------------------------------------------------------------------
用户实体。
说明：
- username 唯一，注册时由数据库唯一约束兜底重复校验。
- password_hash 始终为最近一次成功修改后的密码 hash。
- 与 PasswordHistoryEntry 一对多；历史记录随用户删除级联删除。
"""

from extensions.database import db
from utils.datetime_helpers import date_to_iso, datetime_to_iso
from .mixins import CreatedAtMixin


class User(CreatedAtMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(50), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(100))
    birth = db.Column(db.Date)
    pnum = db.Column(db.String(20))
    email = db.Column(db.String(120))

    password_history = db.relationship(
        "PasswordHistoryEntry",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="dynamic",
    )

    def __repr__(self):
        return f"<User id={self.id} username={self.username}>"

    def to_public_dict(self) -> dict:
        """登录返回的资料，不含 id 与 password_hash。"""
        return {
            "username": self.username,
            "name": self.name,
            "birth": date_to_iso(self.birth),
            "pnum": self.pnum,
            "email": self.email,
            "created_at": datetime_to_iso(self.created_at),
        }
