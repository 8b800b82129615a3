from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from flixcloud.contract import JOB_STATES, Result
from flixcloud.xml_reader import XmlReadError, read_fields

# XML tag -> JobNotification attribute
NOTIFICATION_FIELDS = {
    "id": "id",
    "recipe-id": "recipe_id",
    "recipe-name": "recipe_name",
    "state": "state",
    "error-message": "error_message",
    "initialized-job-at": "initialized_job_at",
    "finished-job-at": "finished_job_at",
    "input-media-file": "input_media_file",
    "output-media-file": "output_media_file",
    "watermark-file": "watermark_file",
}


@dataclass(frozen=True)
class JobNotification:
    """
    Completion callback FlixCloud posts to the notification URL.

    Values are passed through as trimmed strings. Timestamps are UTC
    ``YYYY-MM-DDTHH:MM:SSZ`` text and state is normally one of
    ``successful_job``, ``cancelled_job`` or ``failed_job``, but neither is
    checked here.
    """
    id: str = ""
    recipe_id: str = ""
    recipe_name: str = ""
    state: str = ""
    error_message: str = ""
    initialized_job_at: str = ""
    finished_job_at: str = ""
    input_media_file: str = ""
    output_media_file: str = ""
    watermark_file: str = ""

    @classmethod
    def from_fields(cls, fields: Dict[str, str]) -> "JobNotification":
        return cls(**{attr: (fields.get(tag) or "").strip() for tag, attr in NOTIFICATION_FIELDS.items()})

    @property
    def is_known_state(self) -> bool:
        return self.state in JOB_STATES


def parse_notification(raw_body: bytes | str | None) -> Result[JobNotification]:
    """
    Parse one notification delivery. A body that is not XML fails as a
    whole; missing fields are simply empty.
    """
    try:
        fields = read_fields(raw_body)
    except XmlReadError as e:
        logging.error("[FLIXCLOUD NOTIFICATION] bad XML: %s", e)
        return Result.failure(f"Could not parse notification XML: {e}")

    return Result.success(JobNotification.from_fields(fields))


def catch_and_parse(read_body: Callable[[], bytes | str | None]) -> Result[JobNotification]:
    """Read the inbound request body through ``read_body`` and parse it."""
    return parse_notification(read_body())


Handler = Callable[[JobNotification], object]
DefaultHandler = Callable[[Optional[JobNotification], List[str]], object]


class NotificationDispatcher:
    """
    Route parsed notifications to per-state callbacks.

        dispatcher = NotificationDispatcher()

        @dispatcher.on("failed_job")
        def failed(notification):
            ...

    Anything without a registered handler (unknown state, or a body that
    did not parse) goes to the default handler.
    """

    def __init__(self, default: Optional[DefaultHandler] = None) -> None:
        self._handlers: Dict[str, Handler] = {}
        self._default = default

    def on(self, state: str) -> Callable[[Handler], Handler]:
        def register(func: Handler) -> Handler:
            self._handlers[state] = func
            return func

        return register

    def default(self, func: DefaultHandler) -> DefaultHandler:
        self._default = func
        return func

    def dispatch(self, result: Result[JobNotification]) -> object:
        notification = result.value if result else None

        if notification is not None:
            handler = self._handlers.get(notification.state)
            if handler is not None:
                return handler(notification)
            logging.warning("[FLIXCLOUD NOTIFICATION] no handler for state %r", notification.state)

        if self._default is not None:
            return self._default(notification, list(result.errors))
        return None
