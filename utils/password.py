# utils/password.py
from werkzeug.security import generate_password_hash, check_password_hash
from flask import current_app, has_app_context

from config.settings import BaseConfig


def hash_password(plain: str, method: str | None = None) -> str:
    if method is None:
        # 无应用上下文时（脚本 / 单元测试）回退到 BaseConfig 的默认值
        method = (current_app.config["PASSWORD_HASH_METHOD"]
                  if has_app_context() else BaseConfig.PASSWORD_HASH_METHOD)
    return generate_password_hash(plain, method=method)


def verify_password(hashed: str, plain: str) -> bool:
    if not hashed or plain is None:
        return False
    return check_password_hash(hashed, plain)
