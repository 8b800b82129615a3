"""Tests for file location validation and transfer records."""

import pytest

from flixcloud.files import FileReference, FileRole


@pytest.mark.parametrize("role", list(FileRole))
def test_user_without_password_names_missing_password(role):
    ref = FileReference(role, "ftp://example.com/a.flv", user="bob")
    assert ref.validate() == [f"{role.value} password needed (user supplied)."]


@pytest.mark.parametrize("role", list(FileRole))
def test_password_without_user_names_missing_user(role):
    ref = FileReference(role, "ftp://example.com/a.flv", password="secret")
    assert ref.validate() == [f"{role.value} user needed (password supplied)."]


def test_empty_url_is_required():
    ref = FileReference(FileRole.OUTPUT, "   ")
    assert ref.validate() == ["Output file url required."]


def test_all_errors_are_collected():
    ref = FileReference(FileRole.WATERMARK, "", user="bob")
    assert ref.validate() == [
        "Watermark file url required.",
        "Watermark password needed (user supplied).",
    ]


@pytest.mark.parametrize("user,password", [("", ""), ("bob", "secret")])
def test_no_credential_error_when_both_or_neither(user, password):
    ref = FileReference(FileRole.INPUT, "http://example.com/in.mpg", user, password)
    assert ref.validate() == []


def test_values_are_trimmed():
    ref = FileReference(FileRole.INPUT, "  http://example.com/in.mpg \n", " bob ", " secret ")
    assert ref.url == "http://example.com/in.mpg"
    assert ref.user == "bob"
    assert ref.password == "secret"


def test_unlisted_protocol_is_not_rejected():
    ref = FileReference(FileRole.OUTPUT, "gopher://example.com/out.flv")
    assert ref.validate() == []


def test_transfer_record_without_credentials_has_no_parameters():
    ref = FileReference(FileRole.INPUT, "http://example.com/in.mpg")
    assert ref.to_transfer_record() == {"url": "http://example.com/in.mpg"}


def test_transfer_record_with_credentials():
    ref = FileReference(FileRole.OUTPUT, "sftp://example.com/out.flv", "bob", "secret")
    assert ref.to_transfer_record() == {
        "url": "sftp://example.com/out.flv",
        "parameters": {"user": "bob", "password": "secret"},
    }


def test_role_accepts_plain_label():
    ref = FileReference("Input", "http://example.com/in.mpg")
    assert ref.role is FileRole.INPUT
