from datetime import date


def parse_birth(value) -> date | None:
    """
    处理逻辑：
      1. None / 空串 => None（生日为可选字段）
      2. 已是 date => 原样返回
      3. 字符串按 ISO 格式 YYYY-MM-DD 解析，允许携带时间部分（只取日期）
      4. 其它情况抛出 ValueError
    """
    if value is None:
        return None
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"unsupported birth value: {value!r}")
    raw = value.strip()
    if not raw:
        return None
    return date.fromisoformat(raw[:10])


def normalize_username(value) -> str:
    """
    JSON 中 username 可能是数字等非字符串类型，统一按文本处理；None 视为空串。
    """
    if value is None:
        return ""
    return str(value).strip()


def clean_text(value, max_len: int | None = None) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    if max_len is not None and len(text) > max_len:
        raise ValueError(f"too long (>{max_len})")
    return text
