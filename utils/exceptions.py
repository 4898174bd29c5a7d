# utils/exceptions.py
from typing import Any, Optional
from werkzeug.exceptions import HTTPException


class BizError(HTTPException):
    code: int  # HTTP 状态码
    message: str  # 业务提示
    data: Optional[Any]  # 附加数据

    def __init__(self, message: str = "业务异常", code: int = 400, data: Any = None):
        self.code = code
        self.message = message
        self.data = data
        super().__init__(description=message)


class ValidationFailure(BizError):
    def __init__(self, message: str = "参数不合法"):
        super().__init__(message, code=400)


class InvalidCredentials(BizError):
    """用户名不存在与密码错误共用同一提示，避免泄露账号是否存在。"""

    def __init__(self, message: str = "用户名或密码错误"):
        super().__init__(message, code=400)


class UserNotFound(BizError):
    def __init__(self, message: str = "用户不存在"):
        super().__init__(message, code=404)


class PasswordReused(BizError):
    def __init__(self, message: str = "不能使用最近使用过的密码"):
        super().__init__(message, code=400)


class DuplicateUser(BizError):
    # 状态码由 SIGNUP_DUPLICATE_STATUS 决定，默认 500
    def __init__(self, message: str = "用户名已存在", code: int = 500):
        super().__init__(message, code=code)
