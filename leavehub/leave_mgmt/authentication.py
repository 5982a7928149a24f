# -*- coding: utf-8 -*-
"""
Bearer token authentication for the stats API.
- `Authorization: Bearer <jwt>`; the `sub` claim is matched against Employee.auth_id
- Unknown or inactive employees are rejected like a bad token
"""
from __future__ import annotations
import logging

from django.core.exceptions import ValidationError
from drf_spectacular.extensions import OpenApiAuthenticationExtension
from drf_spectacular.plumbing import build_bearer_security_scheme_object
from rest_framework import authentication, exceptions

from leave_mgmt.selectors.employee_selector import get_active_by_auth_id
from leave_mgmt.services.token_service import decode_access_token

logger = logging.getLogger(__name__)

KEYWORD = "Bearer"


class BearerTokenAuthentication(authentication.BaseAuthentication):
    def authenticate(self, request):
        header = authentication.get_authorization_header(request).split()
        if not header or header[0].lower() != KEYWORD.lower().encode():
            return None
        if len(header) != 2:
            raise exceptions.AuthenticationFailed("Malformed Authorization header.")

        try:
            token = header[1].decode()
        except UnicodeError:
            raise exceptions.AuthenticationFailed("Malformed Authorization header.")

        try:
            claims = decode_access_token(token)
        except ValidationError as e:
            logger.info("[auth] token rejected: %s", "; ".join(e.messages))
            raise exceptions.AuthenticationFailed("Invalid or expired token.")

        employee = get_active_by_auth_id(claims["sub"])
        if employee is None:
            logger.info("[auth] no active employee for subject %s", claims["sub"])
            raise exceptions.AuthenticationFailed("Unknown or inactive employee.")
        return employee, claims

    def authenticate_header(self, request):
        # makes DRF answer 401 (not 403) for unauthenticated callers
        return f'{KEYWORD} realm="api"'


class BearerTokenScheme(OpenApiAuthenticationExtension):
    target_class = "leave_mgmt.authentication.BearerTokenAuthentication"
    name = "bearerAuth"

    def get_security_definition(self, auto_schema):
        return build_bearer_security_scheme_object(header_name="Authorization", token_prefix=KEYWORD, bearer_format="JWT")
