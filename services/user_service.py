# services/user_service.py
import logging

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models.user import User
from repositories.password_history_repository import PasswordHistoryRepository
from repositories.user_repository import UserRepository
from utils.exceptions import BizError, DuplicateUser, InvalidCredentials, ValidationFailure
from utils.password import hash_password, verify_password
from utils.validators import clean_text, normalize_username, parse_birth

logger = logging.getLogger(__name__)

# 资料字段长度上限，与 users 表列宽一致
PROFILE_MAX_LENGTH = {
    "name": 100,
    "pnum": 20,
    "email": 120,
}


class UserService:

    @staticmethod
    def _normalize_profile(name, birth, pnum, email) -> dict:
        try:
            profile = {"birth": parse_birth(birth)}
        except ValueError:
            raise ValidationFailure("生日格式不正确，应为 YYYY-MM-DD")
        raw = {"name": name, "pnum": pnum, "email": email}
        for field, max_len in PROFILE_MAX_LENGTH.items():
            try:
                profile[field] = clean_text(raw[field], max_len)
            except ValueError:
                raise ValidationFailure(f"{field} 长度不能超过 {max_len} 位")
        return profile

    @staticmethod
    def register(username, password: str, name=None, birth=None, pnum=None, email=None) -> int:
        """
        注册：创建用户并写入第一条密码历史，两者同一事务提交。
        返回新用户 id。
        """
        # 1. 基础校验
        username = normalize_username(username)
        if not username or not password:
            raise ValidationFailure("用户名和密码必填")
        if len(username) > 50:
            raise ValidationFailure("用户名长度不能超过 50 位")

        profile = UserService._normalize_profile(name, birth, pnum, email)

        # 2. 构造实体
        password_hash = hash_password(password)
        user = User(username=username, password_hash=password_hash, **profile)

        # 3. 持久化（用户 + 历史）
        try:
            UserRepository.add(user)
            UserRepository.flush()
            PasswordHistoryRepository.add(user.id, password_hash, changed_at=user.created_at)
            UserRepository.commit()
        except IntegrityError:
            UserRepository.rollback()
            logger.warning("signup rejected, duplicate username=%s", username)
            raise DuplicateUser(code=current_app.config["SIGNUP_DUPLICATE_STATUS"])
        except SQLAlchemyError:
            UserRepository.rollback()
            logger.exception("signup failed for username=%s", username)
            raise BizError("注册失败", code=500)

        logger.info("user registered id=%s username=%s", user.id, username)
        return user.id

    @staticmethod
    def authenticate(username: str, password: str):
        user = UserRepository.find_by_username(username)
        if not user:
            return None
        if not verify_password(user.password_hash, password):
            return None
        return user

    @staticmethod
    def login(username, password: str) -> dict:
        username = normalize_username(username)
        if not username or not password:
            raise InvalidCredentials()
        try:
            user = UserService.authenticate(username, password)
        except SQLAlchemyError:
            UserRepository.rollback()
            logger.exception("login failed for username=%s", username)
            raise BizError("登录失败", code=500)
        if user is None:
            raise InvalidCredentials()
        return user.to_public_dict()
