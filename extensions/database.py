# extensions/database.py
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

# 进程级唯一实例，在 create_app 中通过 init_app 绑定到应用
db = SQLAlchemy()
migrate = Migrate()
