import uuid

import pytest

from app import create_app
from extensions.database import db
from models import PasswordHistoryEntry, User

SIGNUP_PATH = "/api/signup"
LOGIN_PATH = "/api/login"
CHANGE_PASSWORD_PATH = "/api/changepassword"


@pytest.fixture()
def app():
    """提供测试用的 Flask 应用（内存 SQLite），每个用例独立建表/删表。"""
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture
def test_user_data():
    """测试用户数据"""
    suffix = uuid.uuid4().hex[:8]
    return {
        "username": f"testuser_{suffix}",
        "password": "Test123!",
        "name": "测试用户",
        "birth": "1995-04-12",
        "pnum": "010-1234-5678",
        "email": f"{suffix}@example.com",
    }


@pytest.fixture
def signup(client):
    """注册用户，返回响应"""
    def _signup(username, password, **profile):
        payload = {"username": username, "password": password}
        payload.update(profile)
        return client.post(SIGNUP_PATH, json=payload)
    return _signup


@pytest.fixture
def change_password(client):
    def _change(username, current_password, new_password):
        return client.post(
            CHANGE_PASSWORD_PATH,
            json={
                "username": username,
                "currentPassword": current_password,
                "newPassword": new_password,
            },
        )
    return _change


@pytest.fixture
def login(client):
    def _login(username, password):
        return client.post(LOGIN_PATH, json={"username": username, "password": password})
    return _login


@pytest.fixture
def load_user(app):
    """重新从数据库读取用户"""
    def _load(username):
        db.session.expire_all()
        return User.query.filter_by(username=username).first()
    return _load


@pytest.fixture
def load_history(app):
    """按最近优先返回该用户全部历史记录"""
    def _load(user_id):
        db.session.expire_all()
        return (PasswordHistoryEntry.query
                .filter_by(user_id=user_id)
                .order_by(PasswordHistoryEntry.changed_at.desc(), PasswordHistoryEntry.id.desc())
                .all())
    return _load
