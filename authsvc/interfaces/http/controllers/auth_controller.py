# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from flask import Blueprint, Response, jsonify, request, url_for
from pydantic import ValidationError

from authsvc.application.interfaces import AuthService
from authsvc.interfaces.http.dto.auth import LoginRequestDTO, RegisterRequestDTO, UserDTO
from authsvc.shared.errors.validation import raise_validation_error
from authsvc.shared.logging import logger
from authsvc.shared.middleware.rate_limit import rate_limit


def _get_client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


def _request_payload() -> Any:
    payload = request.get_json(silent=True)
    return {} if payload is None else payload


class AuthController:
    def __init__(self, *, auth_service: AuthService) -> None:
        self._auth_service = auth_service

    @rate_limit(limit_key="RATE_LIMIT_REGISTER_REQUESTS")
    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(_request_payload())
        except ValidationError as exc:
            raise_validation_error(exc)

        result = self._auth_service.register(dto.username, dto.password)
        response = jsonify(result.to_dict())
        if not result.success:
            return response, 400

        # 201 carries the path of the newly created user
        response.headers["Location"] = url_for(".get_user", user_id=result.data)
        logger.info(f"auth.register: created user_id={result.data}")
        return response, 201

    def get_user(self, user_id: int) -> tuple[Response, int]:
        user = self._auth_service.get_user(user_id)
        if user is None:
            return Response(status=404), 404
        return jsonify(UserDTO.from_domain(user).model_dump(mode="json")), 200

    @rate_limit()
    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(_request_payload())
        except ValidationError as exc:
            raise_validation_error(exc)

        result = self._auth_service.login(dto.username, dto.password, _get_client_ip())
        response = jsonify(result.to_dict())
        if not result.success:
            return response, 400
        return response, 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule(
            "/<int:user_id>", endpoint="get_user", view_func=self.get_user, methods=["GET"]
        )
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        return bp
