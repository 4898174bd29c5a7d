# config/settings.py
import os
from urllib.parse import quote_plus

from dotenv import load_dotenv

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
load_dotenv(os.path.join(BASE_DIR, ".env"))  # 自动加载环境变量


def _as_bool(val, default=False):
    if val is None:
        return default
    return str(val).lower() in ("1", "true", "yes", "on")


def _build_database_uri():
    """
    未显式提供 DATABASE_URI 时，按 DB_USER / DB_PASSWORD / DB_HOST / DB_PORT / DB_NAME 拼接 PostgreSQL 连接串。
    DB_NAME 也没有时返回 None，由调用方决定回退值。
    """
    name = os.getenv("DB_NAME")
    if not name:
        return None
    user = os.getenv("DB_USER", "postgres")
    password = os.getenv("DB_PASSWORD", "")
    host = os.getenv("DB_HOST", "127.0.0.1")
    port = os.getenv("DB_PORT", "5432")
    auth = quote_plus(user)
    if password:
        auth = f"{auth}:{quote_plus(password)}"
    return f"postgresql+psycopg2://{auth}@{host}:{port}/{name}"


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # 服务监听
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", 5000))

    # 日志相关
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR = os.getenv("LOG_DIR", "./logs")
    LOG_JSON = os.getenv("LOG_JSON", "1") == "1"  # 是否 JSON 格式
    LOG_TO_FILE = _as_bool(os.getenv("LOG_TO_FILE", "1"), True)
    LOG_MAX_BYTES = int(os.getenv("LOG_MAX_BYTES", 5 * 1024 * 1024))
    LOG_BACKUP_COUNT = int(os.getenv("LOG_BACKUP_COUNT", 5))

    # 启动时 create_all（无迁移环境时使用；正式环境走 flask db upgrade）
    AUTO_CREATE_TABLES = _as_bool(os.getenv("AUTO_CREATE_TABLES", "0"), False)

    # ========= 密码策略 =========
    # 历史避免重复数量（含当前密码）
    PASSWORD_HISTORY_SIZE = int(os.getenv("PASSWORD_HISTORY_SIZE", 3))
    # werkzeug generate_password_hash 的 method 参数
    PASSWORD_HASH_METHOD = os.getenv("PASSWORD_HASH_METHOD", "scrypt")

    # 注册时用户名重复返回的状态码；默认 500 与旧客户端保持一致，可改为 409
    SIGNUP_DUPLICATE_STATUS = int(os.getenv("SIGNUP_DUPLICATE_STATUS", 500))

    # =========================================


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = (
        os.getenv("DEV_DATABASE_URI")
        or _build_database_uri()
        or "sqlite:///" + os.path.join(BASE_DIR, "dev.db")
    )
    AUTO_CREATE_TABLES = _as_bool(os.getenv("AUTO_CREATE_TABLES", "1"), True)


class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI") or _build_database_uri()


class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URI", "sqlite:///:memory:")
    LOG_TO_FILE = False
    LOG_JSON = False
    # 测试中大量生成 hash，使用低迭代次数加速
    PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"


config_map = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


def get_config(config_name):
    return config_map.get(config_name, DevelopmentConfig)
