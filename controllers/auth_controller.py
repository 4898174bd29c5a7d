# controllers/auth_controller.py
from flask import Blueprint, request
from services.user_service import UserService
from services.password_service import PasswordService
from utils.response import json_response


auth_bp = Blueprint("auth", __name__)


@auth_bp.post("/signup")
def signup():
    data = request.get_json(silent=True) or {}
    user_id = UserService.register(
        username=data.get("username"),
        password=data.get("password"),
        name=data.get("name"),
        birth=data.get("birth"),
        pnum=data.get("pnum"),
        email=data.get("email"),
    )
    return json_response({"message": "注册成功", "userId": user_id}, code=201)


@auth_bp.post("/login")
def login():
    data = request.get_json(silent=True) or {}
    profile = UserService.login(data.get("username"), data.get("password"))
    return json_response({"message": "登录成功", "user": profile})


@auth_bp.post("/changepassword")
def change_password():
    data = request.get_json(silent=True) or {}
    result = PasswordService.change_password(
        username=data.get("username"),
        current_password=data.get("currentPassword"),
        new_password=data.get("newPassword"),
    )
    return json_response(result)
