"""Users namespace."""

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
from safespace.schemas.users import USER_SCHEMA

ns = Namespace("users", description="用户")

ErrorEnvelope = get_error_envelope_model(ns)
ValidationErrorResponse = get_validation_error_model(ns)
UserAcceptedEnvelope = make_accepted_envelope_model(ns, "UserAcceptedEnvelope")

UserNotificationSettings = ns.model(
    "UserNotificationSettings",
    {
        "email": fields.Boolean(default=True),
        "push": fields.Boolean(default=True),
        "threats": fields.Boolean(default=True),
        "safety": fields.Boolean(default=True),
    },
)

UserCreatePayload = ns.model(
    "UserCreatePayload",
    {
        "name": fields.String(required=True, min_length=2, example="Asha"),
        "email": fields.String(required=True, example="asha@example.com"),
        "password": fields.String(required=True, min_length=6),
        "mobile": fields.String(description="10 位数字", example="9876543210"),
        "age": fields.Integer(min=1, max=100),
        "gender": fields.String(enum=["male", "female", "other", "prefer-not-to-say"]),
        "isActive": fields.Boolean(default=True),
        "hobbies": fields.List(fields.String),
        "bloodGroup": fields.String(enum=["A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-"]),
        "bio": fields.String(max_length=500),
        "location": fields.String(),
        "preferredCities": fields.List(fields.String),
        "role": fields.String(default="user"),
        "notificationSettings": fields.Nested(UserNotificationSettings),
    },
)


@ns.route("")
class UsersResource(BaseResource):
    @ns.expect(UserCreatePayload, validate=False)
    @ns.response(201, "Created", UserAcceptedEnvelope)
    @ns.response(400, "Validation Error", ValidationErrorResponse)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    @validate_body(USER_SCHEMA)
    def post(self, payload: dict[str, object]):
        return self.accepted(payload, SuccessMessages.USER_ACCEPTED, schema=USER_SCHEMA, status=HttpStatus.CREATED)
