# models/mixins.py
from sqlalchemy import DateTime
from extensions.database import db
from utils.datetime_helpers import utcnow


class CreatedAtMixin:
    # 应用侧生成时间（微秒精度），避免同一秒内多条记录无法排序
    created_at = db.Column(DateTime, nullable=False, default=utcnow)
