# services/password_history_guard.py
"""
密码历史守卫：禁止新密码与最近 N 次（默认 3）使用过的密码相同，并维护有界的历史记录。

- can_change_password 为纯函数，只做判定。
- record_password_change 在当前事务内完成 “更新当前 hash + 写入历史 + 裁剪历史”，
  不提交；由调用方统一 commit / rollback，保证全有或全无。
"""
import logging
from typing import Iterable, Optional

from flask import current_app

from models.user import User
from repositories.password_history_repository import PasswordHistoryRepository
from repositories.user_repository import UserRepository
from utils.password import verify_password

logger = logging.getLogger(__name__)


def history_size() -> int:
    return current_app.config["PASSWORD_HISTORY_SIZE"]


def can_change_password(candidate_password: str,
                        history_hashes: Iterable[str],
                        user_id: Optional[int] = None) -> bool:
    for stored_hash in history_hashes:
        if verify_password(stored_hash, candidate_password):
            logger.info("password reuse rejected for user_id=%s", user_id)
            return False
    return True


def record_password_change(user: User, new_password_hash: str, keep: Optional[int] = None) -> int:
    """
    前置条件：同一事务内 can_change_password 已返回 True，且用户行已加锁。
    返回被裁剪的历史条数。
    """
    if keep is None:
        keep = history_size()

    UserRepository.update_password_hash(user, new_password_hash)
    PasswordHistoryRepository.add(user.id, new_password_hash)
    UserRepository.flush()
    pruned = PasswordHistoryRepository.prune(user.id, max(keep, 1))
    logger.debug("password history for user_id=%s pruned %s entries", user.id, pruned)
    return pruned
