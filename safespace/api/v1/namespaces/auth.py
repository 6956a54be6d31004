"""Auth namespace (注册、登录、OTP、改密、资料与通知设置)."""

from __future__ import annotations

from flask_restx import Namespace, fields

from safespace.api.v1.models.envelope import (
    get_error_envelope_model,
    get_validation_error_model,
    make_accepted_envelope_model,
)
from safespace.api.v1.resources.base import BaseResource
from safespace.api.v1.resources.decorators import validate_body
from safespace.constants import HttpStatus
from safespace.constants.system_constants import SuccessMessages
from safespace.schemas.users import (
    CHANGE_PASSWORD_SCHEMA,
    LOGIN_EMAIL_SCHEMA,
    LOGIN_MOBILE_SCHEMA,
    NOTIFICATION_SETTINGS_SCHEMA,
    OTP_SEND_EMAIL_SCHEMA,
    OTP_SEND_MOBILE_SCHEMA,
    OTP_VERIFY_EMAIL_SCHEMA,
    OTP_VERIFY_MOBILE_SCHEMA,
    PROFILE_UPDATE_SCHEMA,
    SIGNUP_SCHEMA,
)

ns = Namespace("auth", description="认证")

ErrorEnvelope = get_error_envelope_model(ns)
ValidationErrorResponse = get_validation_error_model(ns)
AcceptedEnvelope = make_accepted_envelope_model(ns, "AuthAcceptedEnvelope")

SignupPayload = ns.model(
    "SignupPayload",
    {
        "name": fields.String(required=True, min_length=2, example="Asha"),
        "email": fields.String(required=True, example="asha@example.com"),
        "password": fields.String(required=True, min_length=6, example="secret1"),
        "mobile": fields.String(required=False, description="10 位数字", example="9876543210"),
    },
)

EmailLoginPayload = ns.model(
    "EmailLoginPayload",
    {
        "email": fields.String(required=True, example="asha@example.com"),
        "password": fields.String(required=True, example="secret1"),
    },
)

MobileLoginPayload = ns.model(
    "MobileLoginPayload",
    {
        "mobile": fields.String(required=True, example="9876543210"),
        "password": fields.String(required=True, example="secret1"),
    },
)

EmailOtpPayload = ns.model(
    "EmailOtpPayload",
    {
        "email": fields.String(required=True, example="asha@example.com"),
        "otp": fields.String(required=False, description="校验时必填, 6 位数字", example="123456"),
    },
)

MobileOtpPayload = ns.model(
    "MobileOtpPayload",
    {
        "mobile": fields.String(required=True, example="9876543210"),
        "otp": fields.String(required=False, description="校验时必填, 6 位数字", example="123456"),
    },
)

ChangePasswordPayload = ns.model(
    "ChangePasswordPayload",
    {
        "currentPassword": fields.String(required=True),
        "newPassword": fields.String(required=True, min_length=6),
    },
)

NotificationSettingsData = ns.model(
    "NotificationSettingsData",
    {
        "email": fields.Boolean(example=True),
        "push": fields.Boolean(example=True),
        "threats": fields.Boolean(example=True),
        "safety": fields.Boolean(example=True),
    },
)

NotificationSettingsPayload = ns.model(
    "NotificationSettingsPayload",
    {"settings": fields.Nested(NotificationSettingsData, required=True)},
)

ProfileUpdatePayload = ns.model(
    "ProfileUpdatePayload",
    {
        "name": fields.String(min_length=2),
        "age": fields.Integer(min=1, max=120),
        "gender": fields.String(enum=["male", "female", "other", "prefer-not-to-say"]),
        "bloodGroup": fields.String(enum=["A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-"]),
        "bio": fields.String(max_length=500),
        "location": fields.String(),
        "hobbies": fields.List(fields.String),
        "preferredCities": fields.List(fields.String),
        "mobile": fields.String(),
        "notificationSettings": fields.Nested(NotificationSettingsData),
    },
)


@ns.route("/register")
class RegisterResource(BaseResource):
    @ns.expect(SignupPayload, validate=False)
    @ns.response(201, "Created", AcceptedEnvelope)
    @ns.response(400, "Validation Error", ValidationErrorResponse)
    @validate_body(SIGNUP_SCHEMA)
    def post(self, payload: dict[str, object]):
        return self.accepted(
            payload,
            SuccessMessages.SIGNUP_ACCEPTED,
            schema=SIGNUP_SCHEMA,
            status=HttpStatus.CREATED,
        )


@ns.route("/login/email-password")
class EmailPasswordLoginResource(BaseResource):
    @ns.expect(EmailLoginPayload, validate=False)
    @ns.response(200, "OK", AcceptedEnvelope)
    @ns.response(400, "Validation Error", ValidationErrorResponse)
    @validate_body(LOGIN_EMAIL_SCHEMA)
    def post(self, payload: dict[str, object]):
        return self.accepted(payload, SuccessMessages.LOGIN_ACCEPTED, schema=LOGIN_EMAIL_SCHEMA)


@ns.route("/login/mobile-password")
class MobilePasswordLoginResource(BaseResource):
    @ns.expect(MobileLoginPayload, validate=False)
    @ns.response(200, "OK", AcceptedEnvelope)
    @ns.response(400, "Validation Error", ValidationErrorResponse)
    @validate_body(LOGIN_MOBILE_SCHEMA)
    def post(self, payload: dict[str, object]):
        return self.accepted(payload, SuccessMessages.LOGIN_ACCEPTED, schema=LOGIN_MOBILE_SCHEMA)


@ns.route("/login/email-otp/send")
class EmailOtpSendResource(BaseResource):
    @ns.expect(EmailOtpPayload, validate=False)
    @ns.response(200, "OK", AcceptedEnvelope)
    @ns.response(400, "Validation Error", ValidationErrorResponse)
    @validate_body(OTP_SEND_EMAIL_SCHEMA)
    def post(self, payload: dict[str, object]):
        return self.accepted(payload, SuccessMessages.OTP_SEND_ACCEPTED, schema=OTP_SEND_EMAIL_SCHEMA)


@ns.route("/login/email-otp/verify")
class EmailOtpVerifyResource(BaseResource):
    @ns.expect(EmailOtpPayload, validate=False)
    @ns.response(200, "OK", AcceptedEnvelope)
    @ns.response(400, "Validation Error", ValidationErrorResponse)
    @validate_body(OTP_VERIFY_EMAIL_SCHEMA)
    def post(self, payload: dict[str, object]):
        return self.accepted(payload, SuccessMessages.OTP_VERIFY_ACCEPTED, schema=OTP_VERIFY_EMAIL_SCHEMA)


@ns.route("/login/mobile-otp/send")
class MobileOtpSendResource(BaseResource):
    @ns.expect(MobileOtpPayload, validate=False)
    @ns.response(200, "OK", AcceptedEnvelope)
    @ns.response(400, "Validation Error", ValidationErrorResponse)
    @validate_body(OTP_SEND_MOBILE_SCHEMA)
    def post(self, payload: dict[str, object]):
        return self.accepted(payload, SuccessMessages.OTP_SEND_ACCEPTED, schema=OTP_SEND_MOBILE_SCHEMA)


@ns.route("/login/mobile-otp/verify")
class MobileOtpVerifyResource(BaseResource):
    @ns.expect(MobileOtpPayload, validate=False)
    @ns.response(200, "OK", AcceptedEnvelope)
    @ns.response(400, "Validation Error", ValidationErrorResponse)
    @validate_body(OTP_VERIFY_MOBILE_SCHEMA)
    def post(self, payload: dict[str, object]):
        return self.accepted(payload, SuccessMessages.OTP_VERIFY_ACCEPTED, schema=OTP_VERIFY_MOBILE_SCHEMA)


@ns.route("/change-password")
class ChangePasswordResource(BaseResource):
    @ns.expect(ChangePasswordPayload, validate=False)
    @ns.response(200, "OK", AcceptedEnvelope)
    @ns.response(400, "Validation Error", ValidationErrorResponse)
    @validate_body(CHANGE_PASSWORD_SCHEMA)
    def post(self, payload: dict[str, object]):
        return self.accepted(payload, SuccessMessages.PASSWORD_CHANGE_ACCEPTED, schema=CHANGE_PASSWORD_SCHEMA)


@ns.route("/profile")
class ProfileResource(BaseResource):
    @ns.expect(ProfileUpdatePayload, validate=False)
    @ns.response(200, "OK", AcceptedEnvelope)
    @ns.response(400, "Validation Error", ValidationErrorResponse)
    @validate_body(PROFILE_UPDATE_SCHEMA)
    def put(self, payload: dict[str, object]):
        return self.accepted(payload, SuccessMessages.PROFILE_ACCEPTED, schema=PROFILE_UPDATE_SCHEMA)


@ns.route("/notifications/settings")
class NotificationSettingsResource(BaseResource):
    @ns.expect(NotificationSettingsPayload, validate=False)
    @ns.response(200, "OK", AcceptedEnvelope)
    @ns.response(400, "Validation Error", ValidationErrorResponse)
    @validate_body(NOTIFICATION_SETTINGS_SCHEMA)
    def put(self, payload: dict[str, object]):
        return self.accepted(
            payload,
            SuccessMessages.NOTIFICATION_SETTINGS_ACCEPTED,
            schema=NOTIFICATION_SETTINGS_SCHEMA,
        )
