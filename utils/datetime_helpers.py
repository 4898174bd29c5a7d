# -*- coding: utf-8 -*-
"""Datetime helpers for API serialization.

数据库中存储的 ``datetime`` 一律视为 UTC（无时区信息）。
接口层统一返回带 ``+00:00`` 偏移的 ISO 8601 字符串，日期字段返回 ``YYYY-MM-DD``。
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """返回无时区信息的当前 UTC 时间，用于写库。"""

    return datetime.now(timezone.utc).replace(tzinfo=None)


def _ensure_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def datetime_to_iso(dt: Optional[datetime]) -> Optional[str]:
    """将 ``datetime`` 格式化为 UTC ISO 字符串; ``None`` 时直接返回 ``None``。"""

    if dt is None:
        return None
    return _ensure_utc(dt).isoformat()


def date_to_iso(d: Optional[date]) -> Optional[str]:
    if d is None:
        return None
    if isinstance(d, datetime):
        d = d.date()
    return d.isoformat()
