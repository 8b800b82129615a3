"""Tests for building and submitting jobs from a params hash."""

import pytest

from flixcloud import FileRole, JobParamsError, JobRequest, TransportResponse, submit_job
from flixcloud.params import validate_params

PARAMS = {
    "recipe_id": 99,
    "input_url": "http://www.example.com/videos/input.mpg",
    "output_url": "sftp://www.example.com/httpdocs/videos/output.flv",
    "output_user": "username",
    "output_password": "password",
    "watermark_url": "http://www.example.com/videos/watermark.png",
}


def test_from_params_sets_files_and_options(transport):
    job = JobRequest.from_params("key", {**PARAMS, "insecure": True, "timeout": 10}, transport=transport)

    assert job.recipe_id == 99
    assert job.input.role is FileRole.INPUT
    assert job.output.user == "username"
    assert job.watermark.url == "http://www.example.com/videos/watermark.png"
    assert job.insecure is True
    assert job.transport_options.timeouts() == (10.0, None)
    assert job.validate().ok


def test_from_params_skips_empty_urls(transport):
    job = JobRequest.from_params("key", {"recipe_id": 1, "watermark_url": ""}, transport=transport)
    assert job.watermark is None
    assert job.input is None


def test_unknown_keys_are_rejected():
    ok, err = validate_params({"recipe_id": 1, "input_uri": "http://x"})
    assert not ok
    assert "input_uri" in err

    with pytest.raises(JobParamsError):
        JobRequest.from_params("key", {"recipe_id": 1, "input_uri": "http://x"})


def test_wrong_types_are_rejected():
    with pytest.raises(JobParamsError):
        JobRequest.from_params("key", {"recipe_id": 1, "insecure": "yes"})


def test_submit_job_sends_by_default(transport):
    transport.post.return_value = TransportResponse(
        201, "<job><id>7</id><initialized-job-at>2009-04-06T12:00:00Z</initialized-job-at></job>"
    )

    job, result = submit_job("key", PARAMS, transport=transport)

    assert result.ok
    assert job.id == "7"
    transport.post.assert_called_once()


def test_submit_job_can_skip_sending(transport):
    job, result = submit_job("key", {**PARAMS, "send": False}, transport=transport)

    assert result is None
    assert job.id is None
    transport.post.assert_not_called()
