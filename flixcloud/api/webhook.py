from __future__ import annotations

import logging
from typing import Any, List, Optional

from flask import Blueprint, jsonify, request

from flixcloud.notification import JobNotification, NotificationDispatcher, catch_and_parse

api = Blueprint("api", __name__)

dispatcher = NotificationDispatcher()


@dispatcher.on("successful_job")
def _log_success(notification: JobNotification) -> None:
    logging.info(
        "[FLIXCLOUD JOB %s] finished at %s -> %s",
        notification.id,
        notification.finished_job_at,
        notification.output_media_file,
    )


@dispatcher.on("cancelled_job")
def _log_cancelled(notification: JobNotification) -> None:
    logging.warning("[FLIXCLOUD JOB %s] cancelled", notification.id)


@dispatcher.on("failed_job")
def _log_failed(notification: JobNotification) -> None:
    logging.error("[FLIXCLOUD JOB %s] failed: %s", notification.id, notification.error_message)


@dispatcher.default
def _log_unhandled(notification: Optional[JobNotification], errors: List[str]) -> None:
    if notification is None:
        logging.error("[FLIXCLOUD NOTIFICATION] unusable delivery: %s", "; ".join(errors))
    else:
        logging.warning("[FLIXCLOUD JOB %s] unrecognised state %r", notification.id, notification.state)


@api.route("/", methods=["GET"])
def healthcheck() -> str:
    return "FlixCloud notification receiver running"


@api.route("/notifications", methods=["POST"])
def notifications() -> Any:
    """
    FlixCloud job notification endpoint.

    The body is raw XML (not form or JSON), so it is read with
    request.get_data() and handed to the notification parser.
    """
    result = catch_and_parse(request.get_data)

    try:
        dispatcher.dispatch(result)
    except Exception as e:  # noqa: BLE001
        logging.exception("[NOTIFICATION HANDLER ERROR] %s", e)
        return jsonify({"ok": False, "errors": [str(e)]}), 500

    if not result:
        return jsonify({"ok": False, "errors": result.errors}), 400

    notification = result.value
    return jsonify({"ok": True, "id": notification.id, "state": notification.state})
