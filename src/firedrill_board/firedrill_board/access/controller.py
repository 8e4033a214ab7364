from __future__ import annotations

import logging

from flask import Flask, jsonify, redirect, request, session, url_for

from ..audit.service import get_client_ip
from ..common.validators import normalize_email
from ..core.enums import AuditCategory, AuditEventType
from ..core.exceptions import AuthenticationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _audit(event_type: AuditEventType, action: str, email: str | None, **metadata) -> None:
        container.audit_service.log_event(
            event_type,
            AuditCategory.AUTH,
            action=action,
            user_email=email or None,
            ip_address=get_client_ip(request.headers),
            user_agent=request.headers.get("User-Agent"),
            source_url=request.referrer,
            target_url=request.path,
            metadata=metadata,
        )

    def _claimed_email() -> str:
        header = app.config.get("AUTH_EMAIL_HEADER", "X-Forwarded-Email")
        email = request.headers.get(header, "")
        if not email and app.config.get("DEV_LOGIN", False):
            payload = request.get_json(silent=True) or {}
            email = request.form.get("email") or payload.get("email") or ""
        return normalize_email(email)

    @app.route("/auth/login", methods=["GET", "POST"], endpoint="login")
    def login():
        email = _claimed_email()
        try:
            identity = container.access_service.require_member(email)
        except AuthenticationError as e:
            session.clear()
            _audit(AuditEventType.LOGIN, "blocked", email, reason="domain")
            return jsonify({"success": False, "message": str(e)}), 401

        session["email"] = identity.email
        _audit(
            AuditEventType.LOGIN,
            "success",
            identity.email,
            login_method="proxy_header",
            role_assigned=identity.admin_role.value if identity.admin_role else "staff",
        )
        logger.info("signed in: %s", identity.email)

        if request.method == "GET":
            return redirect(request.args.get("next") or url_for("board"))
        return jsonify({"success": True, "email": identity.email, "isAdmin": identity.is_admin})

    @app.route("/logout", methods=["GET", "POST"], endpoint="logout")
    def logout():
        email = session.get("email")
        session.clear()
        if email:
            _audit(AuditEventType.LOGOUT, "success", email)
        if request.method == "GET":
            return redirect(url_for("login"))
        return jsonify({"success": True})
