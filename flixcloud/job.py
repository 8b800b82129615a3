from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from flixcloud.contract import JobReceipt, Result
from flixcloud.files import FileReference, FileRole
from flixcloud.services.transport import (
    HttpTransport,
    RequestsTransport,
    TransportError,
    TransportOptions,
)
from flixcloud.xml_encoder import XML_PROLOG, encode
from flixcloud.xml_reader import XmlReadError, read_fields

API_URL = "https://www.flixcloud.com/jobs"

REQUEST_HEADERS = {
    "Accept": "text/xml",
    "Content-Type": "application/xml",
}

_DEFAULT_TRANSPORT = object()


def _is_positive_int(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value > 0
    if isinstance(value, str):
        text = value.strip()
        return text.isascii() and text.isdecimal() and int(text) > 0
    return False


def _parse_or_error(status_code: int, body: str) -> Dict[str, str] | Result[JobReceipt]:
    try:
        return read_fields(body)
    except XmlReadError as e:
        logging.error("[FLIXCLOUD RESPONSE] unparseable XML for %s: %s", status_code, e)
        return Result.failure(f"Could not parse response XML ({status_code}): {e}")


def decide_response(status_code: Optional[int], body: Optional[str]) -> Result[JobReceipt]:
    """
    Map a FlixCloud HTTP response onto a job outcome.

    Only 201 is a success. 200, 400 and 201 carry XML bodies; if those fail
    to parse the result is an error, never an exception.
    """
    body = body or ""

    match status_code:
        case 201:
            fields = _parse_or_error(201, body)
            if isinstance(fields, Result):
                return fields
            return Result.success(
                JobReceipt(
                    id=fields.get("id", "").strip(),
                    initialized_job_at=fields.get("initialized-job-at", "").strip(),
                )
            )

        case 200:
            # HTTP 200 means the request was understood but rejected
            fields = _parse_or_error(200, body)
            if isinstance(fields, Result):
                return fields
            message = fields.get("error", "").strip()
            return Result.failure(message or "The API returned an error without a message (200).")

        case 302:
            return Result.failure("Redirection occurred (302). The endpoint URL is misconfigured.")

        case 400:
            fields = _parse_or_error(400, body)
            if isinstance(fields, Result):
                return fields
            parts = [fields.get("description", "").strip(), fields.get("error", "").strip()]
            message = " ".join(p for p in parts if p)
            return Result.failure(message or "Bad request (400).")

        case 401:
            return Result.failure("Access denied (401). Probably an invalid API key.")

        case 404:
            return Result.failure("Endpoint not found (404). The API URL may be wrong, or the site is down.")

        case 500:
            return Result.failure("Server-side failure (500). The API may be down.")

        case _:
            code = status_code if status_code else "none"
            shown = f'"{body}"' if body else "empty"
            return Result.failure(
                f"An unknown error has occurred. Status Code: {code}. Result {shown}"
            )


class JobRequest:
    """
    A FlixCloud transcoding job: API key, recipe and file locations.

    Typical use::

        job = JobRequest("api-key", 99)
        job.set_input("http://example.com/in.mpg")
        job.set_output("ftp://example.com/out.flv", "user", "secret")
        result = job.send()
        if result:
            print(job.id, job.initialized_job_at)
        else:
            for error in result.errors:
                print(error)

    One instance must not be sent from several threads at once.
    """

    def __init__(
        self,
        api_key: str,
        recipe_id: Any = None,
        *,
        input: Optional[FileReference] = None,
        output: Optional[FileReference] = None,
        watermark: Optional[FileReference] = None,
        timeout: Optional[float] = 0,
        insecure: bool = False,
        certificate: Optional[str] = None,
        certificate_dir: Optional[str] = None,
        transport: Any = _DEFAULT_TRANSPORT,
        api_url: str = API_URL,
    ) -> None:
        self.api_key = (api_key or "").strip()
        self.recipe_id = recipe_id
        self.input = input
        self.output = output
        self.watermark = watermark

        self.timeout = timeout
        self.insecure = insecure
        self.certificate = certificate
        self.certificate_dir = certificate_dir
        self.api_url = api_url

        self.transport: Optional[HttpTransport] = (
            RequestsTransport() if transport is _DEFAULT_TRANSPORT else transport
        )

        # Set by the last send(); None unless it returned HTTP 201
        self.id: Optional[str] = None
        self.initialized_job_at: Optional[str] = None

        # Last exchange, kept for inspection
        self.final_xml: Optional[str] = None
        self.status_code: Optional[int] = None
        self.result: Optional[str] = None

    @classmethod
    def from_params(cls, api_key: str, params: Dict[str, Any], transport: Any = _DEFAULT_TRANSPORT) -> "JobRequest":
        """Build from a flat params hash; see flixcloud.params."""
        from flixcloud.params import build_job

        return build_job(cls, api_key, params, transport=transport)

    # ------------------------------------------------------------------ #
    # File locations
    # ------------------------------------------------------------------ #
    def set_input(self, url: str, user: str = "", password: str = "") -> None:
        self.input = FileReference(FileRole.INPUT, url, user, password)

    def set_output(self, url: str, user: str = "", password: str = "") -> None:
        self.output = FileReference(FileRole.OUTPUT, url, user, password)

    def set_watermark(self, url: str, user: str = "", password: str = "") -> None:
        self.watermark = FileReference(FileRole.WATERMARK, url, user, password)

    @property
    def transport_options(self) -> TransportOptions:
        return TransportOptions(
            timeout=self.timeout,
            certificate=self.certificate,
            certificate_dir=self.certificate_dir,
            insecure=bool(self.insecure),
        )

    # ------------------------------------------------------------------ #
    # Validation / serialization
    # ------------------------------------------------------------------ #
    def validate(self) -> Result[None]:
        """
        Check everything needed before sending. All problems are collected;
        nothing on the instance is changed.
        """
        errors: List[str] = []

        if self.transport is None:
            errors.append("HTTP transport is not installed.")
        if not self.api_key:
            errors.append("API key is required.")
        if not _is_positive_int(self.recipe_id):
            errors.append("Recipe ID is required and must be an integer.")

        for job_file in (self.input, self.output, self.watermark):
            if job_file is not None:
                errors.extend(job_file.validate())

        if errors:
            return Result.failure(errors)
        return Result.success()

    def to_xml_document(self) -> str:
        file_locations: Dict[str, Any] = {
            "input": self.input.to_transfer_record() if self.input else None,
            "output": self.output.to_transfer_record() if self.output else None,
            "watermark": self.watermark.to_transfer_record() if self.watermark else None,
        }
        document = {
            "prolog": XML_PROLOG,
            "api-request": {
                "api-key": self.api_key,
                "recipe-id": str(self.recipe_id).strip(),
                "file-locations": file_locations,
            },
        }
        return encode(document)

    # ------------------------------------------------------------------ #
    # Submission
    # ------------------------------------------------------------------ #
    def send(self) -> Result[JobReceipt]:
        """
        Validate, serialize and POST the job. Returns the receipt on HTTP
        201, otherwise the reasons it failed. Never retries.
        """
        self.id = None
        self.initialized_job_at = None
        self.final_xml = None
        self.status_code = None
        self.result = None

        validation = self.validate()
        if not validation:
            logging.warning("[FLIXCLOUD SEND] job not sent, %d validation error(s)", len(validation.errors))
            return Result.failure(validation.errors)

        self.final_xml = self.to_xml_document()
        logging.info("[FLIXCLOUD SEND] POST %s recipe=%s", self.api_url, self.recipe_id)

        try:
            response = self.transport.post(  # type: ignore[union-attr]
                self.api_url,
                self.final_xml,
                dict(REQUEST_HEADERS),
                self.transport_options,
            )
        except TransportError as e:
            return Result.failure(f"Transport error ({e.code}): {e.description}")

        self.status_code = response.status_code
        self.result = response.body
        logging.info("[FLIXCLOUD SEND] response status=%s", self.status_code)

        outcome = decide_response(self.status_code, self.result)
        if outcome:
            self.id = outcome.value.id  # type: ignore[union-attr]
            self.initialized_job_at = outcome.value.initialized_job_at  # type: ignore[union-attr]
            logging.info("[FLIXCLOUD SEND] job %s initialized at %s", self.id, self.initialized_job_at)
        else:
            logging.error("[FLIXCLOUD SEND ERROR %s] %s", self.status_code, "; ".join(outcome.errors))
        return outcome
