"""用户相关写路径 schema 的约束表.

三张默认表(完整用户、注册、资料更新)共享同一套字段约束, 只在必填与边界上有差异.
认证相关的补充表(登录、OTP、改密、通知设置)由应用工厂额外注册.
"""

from __future__ import annotations

import dataclasses
from typing import Final

from safespace.schemas.constraints import FieldConstraint, FieldKind, Schema

USER_SCHEMA: Final = "user"
SIGNUP_SCHEMA: Final = "signup"
PROFILE_UPDATE_SCHEMA: Final = "profile_update"
LOGIN_EMAIL_SCHEMA: Final = "login_email"
LOGIN_MOBILE_SCHEMA: Final = "login_mobile"
OTP_SEND_EMAIL_SCHEMA: Final = "otp_send_email"
OTP_SEND_MOBILE_SCHEMA: Final = "otp_send_mobile"
OTP_VERIFY_EMAIL_SCHEMA: Final = "otp_verify_email"
OTP_VERIFY_MOBILE_SCHEMA: Final = "otp_verify_mobile"
CHANGE_PASSWORD_SCHEMA: Final = "change_password"
NOTIFICATION_SETTINGS_SCHEMA: Final = "notification_settings"

EMAIL_PATTERN: Final = r"[^\s@]+@[^\s@]+\.[^\s@]+"
MOBILE_PATTERN: Final = r"[0-9]{10}"
OTP_PATTERN: Final = r"[0-9]{6}"

GENDERS: Final = ("male", "female", "other", "prefer-not-to-say")
BLOOD_GROUPS: Final = ("A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-")
NOTIFICATION_CHANNELS: Final = ("email", "push", "threats", "safety")

USER_AGE_MAX: Final = 100
PROFILE_AGE_MAX: Final = 120
BIO_MAX_LENGTH: Final = 500
PASSWORD_MIN_LENGTH: Final = 6


def _required(constraint: FieldConstraint) -> FieldConstraint:
    return dataclasses.replace(constraint, required=True)


def _optional(constraint: FieldConstraint) -> FieldConstraint:
    return dataclasses.replace(constraint, required=False)


NAME = FieldConstraint(
    "name",
    FieldKind.TEXT,
    label="Name",
    required=True,
    min_length=2,
    messages={"min_length": "Name is minimum 2 characters"},
)
EMAIL = FieldConstraint(
    "email",
    FieldKind.TEXT,
    label="Email",
    required=True,
    pattern=EMAIL_PATTERN,
    messages={"pattern": "Invalid email format"},
)
PASSWORD = FieldConstraint(
    "password",
    FieldKind.TEXT,
    label="Password",
    required=True,
    min_length=PASSWORD_MIN_LENGTH,
    messages={"min_length": f"Password is minimum {PASSWORD_MIN_LENGTH} characters"},
)
MOBILE = FieldConstraint(
    "mobile",
    FieldKind.TEXT,
    label="Mobile number",
    pattern=MOBILE_PATTERN,
    messages={"pattern": "Mobile number must be 10 digits"},
)
AGE = FieldConstraint(
    "age",
    FieldKind.NUMBER,
    label="Age",
    minimum=1,
    maximum=USER_AGE_MAX,
    messages={"minimum": "Age is minimum 1", "maximum": f"Age is maximum {USER_AGE_MAX}"},
)
GENDER = FieldConstraint(
    "gender",
    FieldKind.CHOICE,
    label="Gender",
    choices=GENDERS,
    messages={"choices": "Gender must be 'male', 'female', 'other', or 'prefer-not-to-say'"},
)
IS_ACTIVE = FieldConstraint("isActive", FieldKind.BOOLEAN, label="isActive", default=True)
HOBBIES = FieldConstraint("hobbies", FieldKind.SEQUENCE, label="Hobbies", items=FieldKind.TEXT)
BLOOD_GROUP = FieldConstraint(
    "bloodGroup",
    FieldKind.CHOICE,
    label="Blood group",
    choices=BLOOD_GROUPS,
    messages={"type": "Invalid blood group"},
)
BIO = FieldConstraint(
    "bio",
    FieldKind.TEXT,
    label="Bio",
    max_length=BIO_MAX_LENGTH,
    messages={"max_length": f"Bio must be at most {BIO_MAX_LENGTH} characters"},
)
LOCATION = FieldConstraint("location", FieldKind.TEXT, label="Location")
PREFERRED_CITIES = FieldConstraint(
    "preferredCities",
    FieldKind.SEQUENCE,
    label="Preferred cities",
    items=FieldKind.TEXT,
)
ROLE = FieldConstraint("role", FieldKind.TEXT, label="Role", default="user")


def _notification_settings(name: str, *, with_defaults: bool, required: bool = False) -> FieldConstraint:
    channels = tuple(
        FieldConstraint(channel, FieldKind.BOOLEAN, label=f"{name}.{channel}", default=True)
        if with_defaults
        else FieldConstraint(channel, FieldKind.BOOLEAN, label=f"{name}.{channel}", required=True)
        for channel in NOTIFICATION_CHANNELS
    )
    return FieldConstraint(name, FieldKind.OBJECT, label=name, required=required, fields=channels)


FULL_USER = Schema(
    USER_SCHEMA,
    (
        NAME,
        EMAIL,
        PASSWORD,
        MOBILE,
        AGE,
        GENDER,
        IS_ACTIVE,
        HOBBIES,
        BLOOD_GROUP,
        BIO,
        LOCATION,
        PREFERRED_CITIES,
        ROLE,
        _notification_settings("notificationSettings", with_defaults=True),
    ),
    description="创建用户(完整字段)",
)

SIGNUP = Schema(
    SIGNUP_SCHEMA,
    (NAME, EMAIL, PASSWORD, MOBILE),
    description="注册: 只接收基础字段",
)

PROFILE_UPDATE = Schema(
    PROFILE_UPDATE_SCHEMA,
    (
        _optional(NAME),
        dataclasses.replace(
            AGE,
            maximum=PROFILE_AGE_MAX,
            messages={"minimum": "Age is minimum 1", "maximum": f"Age is maximum {PROFILE_AGE_MAX}"},
        ),
        GENDER,
        BLOOD_GROUP,
        BIO,
        LOCATION,
        HOBBIES,
        PREFERRED_CITIES,
        MOBILE,
        _notification_settings("notificationSettings", with_defaults=False),
    ),
    description="资料更新: 全部字段可选(部分更新)",
)

DEFAULT_SCHEMAS: Final = (FULL_USER, SIGNUP, PROFILE_UPDATE)

_LOGIN_PASSWORD = FieldConstraint("password", FieldKind.TEXT, label="Password", required=True)
_OTP = FieldConstraint(
    "otp",
    FieldKind.TEXT,
    label="OTP",
    required=True,
    pattern=OTP_PATTERN,
    messages={"pattern": "OTP must be 6 digits"},
)

AUTH_SCHEMAS: Final = (
    Schema(LOGIN_EMAIL_SCHEMA, (EMAIL, _LOGIN_PASSWORD), description="邮箱+密码登录"),
    Schema(LOGIN_MOBILE_SCHEMA, (_required(MOBILE), _LOGIN_PASSWORD), description="手机号+密码登录"),
    Schema(OTP_SEND_EMAIL_SCHEMA, (EMAIL,), description="发送邮箱验证码"),
    Schema(OTP_SEND_MOBILE_SCHEMA, (_required(MOBILE),), description="发送短信验证码"),
    Schema(OTP_VERIFY_EMAIL_SCHEMA, (EMAIL, _OTP), description="校验邮箱验证码"),
    Schema(OTP_VERIFY_MOBILE_SCHEMA, (_required(MOBILE), _OTP), description="校验短信验证码"),
    Schema(
        CHANGE_PASSWORD_SCHEMA,
        (
            FieldConstraint("currentPassword", FieldKind.TEXT, label="Current password", required=True),
            dataclasses.replace(
                PASSWORD,
                name="newPassword",
                label="New password",
                messages={"min_length": f"New password is minimum {PASSWORD_MIN_LENGTH} characters"},
            ),
        ),
        description="修改密码",
    ),
    Schema(
        NOTIFICATION_SETTINGS_SCHEMA,
        (_notification_settings("settings", with_defaults=False, required=True),),
        description="通知设置更新",
    ),
)


__all__ = [
    "AUTH_SCHEMAS",
    "BLOOD_GROUPS",
    "CHANGE_PASSWORD_SCHEMA",
    "DEFAULT_SCHEMAS",
    "FULL_USER",
    "GENDERS",
    "LOGIN_EMAIL_SCHEMA",
    "LOGIN_MOBILE_SCHEMA",
    "NOTIFICATION_SETTINGS_SCHEMA",
    "OTP_SEND_EMAIL_SCHEMA",
    "OTP_SEND_MOBILE_SCHEMA",
    "OTP_VERIFY_EMAIL_SCHEMA",
    "OTP_VERIFY_MOBILE_SCHEMA",
    "PROFILE_UPDATE",
    "PROFILE_UPDATE_SCHEMA",
    "SIGNUP",
    "SIGNUP_SCHEMA",
    "USER_SCHEMA",
]
