# app.py
import os

from flask import Flask
from config.settings import get_config
from extensions.database import db, migrate
from extensions.logger import init_logger
from controllers.auth_controller import auth_bp
from utils.response import error_response
from utils.exceptions import BizError
import models  # noqa: F401  注册全部模型，供 create_all / Flask-Migrate 使用


def create_app(config_name=None):
    app = Flask(__name__)
    app.config.from_object(get_config(config_name or os.getenv("APP_ENV", "development")))

    # 初始化扩展
    db.init_app(app)
    migrate.init_app(app, db)
    init_logger(app)

    if app.config.get("AUTO_CREATE_TABLES"):
        with app.app_context():
            db.create_all()

    # 注册 / 登录 / 修改密码
    app.register_blueprint(auth_bp, url_prefix="/api")

    # 错误处理
    @app.errorhandler(404)
    def not_found(e):
        return error_response("接口不存在", 404)

    @app.errorhandler(405)
    def method_not_allowed(e):
        return error_response("请求方法不允许", 405)

    @app.errorhandler(BizError)
    def _biz_err(e: BizError):
        return error_response(e.message, e.code)

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(host=app.config["HOST"], port=app.config["PORT"], debug=app.config.get("DEBUG", False))
