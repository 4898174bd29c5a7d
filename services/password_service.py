# services/password_service.py
import logging

from sqlalchemy.exc import SQLAlchemyError

from repositories.password_history_repository import PasswordHistoryRepository
from repositories.user_repository import UserRepository
from services import password_history_guard as guard
from utils.exceptions import (
    BizError,
    InvalidCredentials,
    PasswordReused,
    UserNotFound,
    ValidationFailure,
)
from utils.password import hash_password, verify_password
from utils.validators import normalize_username

logger = logging.getLogger(__name__)


class PasswordService:

    @staticmethod
    def change_password(username, current_password: str, new_password: str) -> dict:
        # username 缺失按用户不存在处理（404），只对两个密码字段做必填校验
        username = normalize_username(username)
        if not current_password or not new_password:
            raise ValidationFailure("当前密码和新密码不能为空")

        try:
            return PasswordService._change_locked(username, current_password, new_password)
        except BizError:
            UserRepository.rollback()
            raise
        except SQLAlchemyError:
            UserRepository.rollback()
            logger.exception("change password failed for username=%s", username)
            raise BizError("修改密码失败", code=500)

    @staticmethod
    def _change_locked(username: str, current_password: str, new_password: str) -> dict:
        # 行锁持有到 commit / rollback，检查与写入在同一事务内
        user = UserRepository.lock_by_username(username) if username else None
        if not user:
            raise UserNotFound()

        if not verify_password(user.password_hash, current_password):
            logger.info("change password rejected for user_id=%s: wrong current password", user.id)
            raise InvalidCredentials("当前密码不正确")

        keep = guard.history_size()
        recent = PasswordHistoryRepository.get_recent_hashes(user.id, keep)
        if not guard.can_change_password(new_password, recent, user_id=user.id):
            raise PasswordReused(f"不能使用最近 {keep} 次使用过的密码")

        pruned = guard.record_password_change(user, hash_password(new_password), keep=keep)
        UserRepository.commit()
        logger.info("password changed for user_id=%s, pruned %s history entries", user.id, pruned)
        return {"message": "密码修改成功"}
