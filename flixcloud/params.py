"""
Params-hash construction for JobRequest.

Lets a caller describe a whole job as one flat dict, e.g.::

    job, result = submit_job("api-key", {
        "recipe_id": 99,
        "input_url": "http://www.example.com/videos/input.mpg",
        "output_url": "sftp://www.example.com/httpdocs/videos/output.flv",
        "output_user": "username",
        "output_password": "password",
    })

The dict is checked against ``schemas/job_params.json`` first, so a typo in
a key fails loudly instead of silently dropping a file location.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional, Tuple, Type

from jsonschema import ValidationError, validate

from flixcloud.contract import JobReceipt, Result
from flixcloud.files import FileReference, FileRole
from flixcloud.job import _DEFAULT_TRANSPORT, JobRequest

SCHEMA_DIR = os.path.join(os.path.dirname(__file__), "schemas")
SCHEMA_FILE = "job_params.json"

_FILE_PREFIXES = {
    "input": FileRole.INPUT,
    "output": FileRole.OUTPUT,
    "watermark": FileRole.WATERMARK,
}


class JobParamsError(ValueError):
    """The params hash does not match the expected shape."""


def load_schema() -> Dict[str, Any]:
    path = os.path.join(SCHEMA_DIR, SCHEMA_FILE)
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def validate_params(params: Dict[str, Any]) -> Tuple[bool, str]:
    """
    Validate a params hash against the job params schema.

    Returns:
        (True, "") if valid
        (False, "<error message>") if invalid
    """
    try:
        validate(instance=params, schema=load_schema())
        return True, ""
    except ValidationError as e:
        return False, e.message


def build_job(
    cls: Type[JobRequest],
    api_key: str,
    params: Dict[str, Any],
    transport: Any = _DEFAULT_TRANSPORT,
) -> JobRequest:
    ok, err = validate_params(params)
    if not ok:
        raise JobParamsError(f"Invalid job params: {err}")

    job = cls(
        api_key,
        params.get("recipe_id"),
        timeout=params.get("timeout", 0),
        insecure=params.get("insecure", False),
        certificate=params.get("certificate") or None,
        certificate_dir=params.get("certificate_dir") or None,
        transport=transport,
    )

    # A file location is only set when its url key is present and non-empty
    for prefix, role in _FILE_PREFIXES.items():
        url = params.get(f"{prefix}_url")
        if not url:
            continue
        ref = FileReference(
            role,
            url,
            params.get(f"{prefix}_user", ""),
            params.get(f"{prefix}_password", ""),
        )
        setattr(job, prefix, ref)

    return job


def submit_job(
    api_key: str,
    params: Dict[str, Any],
    transport: Any = _DEFAULT_TRANSPORT,
) -> Tuple[JobRequest, Optional[Result[JobReceipt]]]:
    """
    Build a job from ``params`` and send it, unless ``params["send"]`` is
    False. The second element is None when nothing was sent.
    """
    job = JobRequest.from_params(api_key, params, transport=transport)
    if params.get("send") is False:
        logging.info("[FLIXCLOUD PARAMS] send disabled, job built only")
        return job, None
    return job, job.send()
