from __future__ import annotations

import json
import logging
import queue
from functools import wraps

from flask import Flask, Response, g, jsonify, render_template, request, session

from ..audit.service import get_client_ip
from ..core.constants import SSE_HEARTBEAT_SECONDS, STATUS_TABLE
from ..core.enums import AuditCategory, AuditEventType, PersonCategory
from ..core.exceptions import PersonNotLoadedError
from ..container import Container
from .filters import ALL_CLASSES, filter_people
from .presenter import person_to_dict, stats_to_dict

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    board = container.board

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            identity = container.access_service.resolve_identity(session.get("email"))
            if not identity.is_member:
                return jsonify({"success": False, "message": "Please sign in to continue"}), 401
            g.identity = identity
            return view(*args, **kwargs)

        return wrapper

    def reset_required(view):
        @wraps(view)
        @login_required
        def wrapper(*args, **kwargs):
            if not g.identity.can_reset:
                return jsonify({"success": False, "message": "Admins only"}), 403
            return view(*args, **kwargs)

        return wrapper

    def _audit_change(action: str, **metadata) -> None:
        container.audit_service.log_event(
            AuditEventType.DATA_CHANGE,
            AuditCategory.DATA,
            action=action,
            user_email=g.identity.email,
            ip_address=get_client_ip(request.headers),
            target_url=request.path,
            metadata=metadata,
        )

    def _board_payload() -> dict:
        return {"loading": board.loading, "error": board.error}

    def _not_found():
        return jsonify({"success": False, "message": "Person not found"}), 404

    def _lookup(category: str, person_id: int):
        try:
            cat = PersonCategory(category)
        except ValueError:
            return None
        return board.get(person_id, cat)

    @app.route("/", endpoint="board")
    @login_required
    def board_page():
        stats = board.get_stats()
        return render_template(
            "board.html",
            identity=g.identity,
            stats=stats_to_dict(stats),
            people=[person_to_dict(p) for p in board.people],
            classes=board.get_classes(),
            error=board.error,
        )

    @app.get("/api/me")
    @login_required
    def api_me():
        identity = g.identity
        return jsonify(
            {
                "success": True,
                "email": identity.email,
                "isMember": identity.is_member,
                "isAdmin": identity.is_admin,
                "isSuperAdmin": identity.is_super_admin,
                "canReset": identity.can_reset,
            }
        )

    @app.get("/api/people")
    @login_required
    def api_people():
        people = filter_people(
            board.people,
            tab=request.args.get("tab"),
            class_name=request.args.get("class") or ALL_CLASSES,
            query=request.args.get("q", ""),
        )
        return jsonify({"success": board.error is None, **_board_payload(), "people": [person_to_dict(p) for p in people]})

    @app.get("/api/stats")
    @login_required
    def api_stats():
        return jsonify({"success": True, **_board_payload(), "stats": stats_to_dict(board.get_stats())})

    @app.get("/api/classes")
    @login_required
    def api_classes():
        return jsonify({"success": True, "classes": board.get_classes()})

    @app.post("/api/refresh")
    @login_required
    def api_refresh():
        ok = board.refresh()
        return jsonify({"success": ok, **_board_payload()}), (200 if ok else 503)

    @app.post("/api/people/<category>/<int:person_id>/check-in")
    @login_required
    def api_toggle_check_in(category: str, person_id: int):
        person = _lookup(category, person_id)
        if person is None:
            return _not_found()

        try:
            ok = board.toggle_check_in(person, g.identity.email)
        except PersonNotLoadedError:
            return _not_found()
        current = board.get(person.person_id, person.category)
        if ok and current is not None:
            _audit_change("update", person_type=category, person_id=person_id, checked_in=current.checked_in)
        return jsonify({"success": ok, "person": person_to_dict(current) if current else None})

    @app.post("/api/people/<category>/<int:person_id>/out-today")
    @login_required
    def api_toggle_out_today(category: str, person_id: int):
        person = _lookup(category, person_id)
        if person is None:
            return _not_found()

        try:
            ok = board.toggle_out_today(person)
        except PersonNotLoadedError:
            return _not_found()
        current = board.get(person.person_id, person.category)
        if ok and current is not None:
            _audit_change("update", person_type=category, person_id=person_id, out_today=current.out_today)
        return jsonify({"success": ok, "person": person_to_dict(current) if current else None})

    @app.post("/api/reset")
    @reset_required
    def api_reset():
        payload = request.get_json(silent=True) or {}
        notes = (payload.get("notes") or "").strip() or "Manual reset"
        ok = board.reset_all(g.identity.email, notes=notes)
        _audit_change("reset" if ok else "reset_failed", notes=notes)
        if not ok:
            return jsonify({"success": False, "message": "Reset failed"}), 500
        return jsonify({"success": True, "stats": stats_to_dict(board.get_stats())})

    @app.get("/api/changes")
    @login_required
    def api_changes():
        events: "queue.Queue" = queue.Queue()
        subscription = container.change_bus.subscribe(STATUS_TABLE, events.put)
        heartbeat = float(app.config.get("SSE_HEARTBEAT_SECONDS", SSE_HEARTBEAT_SECONDS))

        def stream():
            try:
                yield "retry: 3000\n\n"
                while True:
                    try:
                        event = events.get(timeout=heartbeat)
                    except queue.Empty:
                        yield ": keep-alive\n\n"
                        continue
                    data = json.dumps({"table": event.table, "kind": event.kind.value})
                    yield f"event: change\ndata: {data}\n\n"
            finally:
                subscription.close()

        return Response(
            stream(),
            mimetype="text/event-stream",
            headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
        )
