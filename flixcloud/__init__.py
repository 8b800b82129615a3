"""
FlixCloud API client.

Two jobs:
- Submit transcoding jobs (JobRequest) as XML over HTTPS.
- Parse the completion notifications FlixCloud posts back (parse_notification).

Nothing in the core reads the environment or talks to Flask; see
flixcloud.config and flixcloud.api for that wiring.
"""

from .contract import JOB_STATES, JobReceipt, Result
from .files import FileReference, FileRole
from .job import API_URL, JobRequest, decide_response
from .notification import (
    JobNotification,
    NotificationDispatcher,
    catch_and_parse,
    parse_notification,
)
from .params import JobParamsError, submit_job
from .services.transport import (
    RequestsTransport,
    TransportError,
    TransportOptions,
    TransportResponse,
    TrustMode,
)

__all__ = [
    "API_URL",
    "JOB_STATES",
    "FileReference",
    "FileRole",
    "JobNotification",
    "JobParamsError",
    "JobReceipt",
    "JobRequest",
    "NotificationDispatcher",
    "RequestsTransport",
    "Result",
    "TransportError",
    "TransportOptions",
    "TransportResponse",
    "TrustMode",
    "catch_and_parse",
    "decide_response",
    "parse_notification",
    "submit_job",
]
