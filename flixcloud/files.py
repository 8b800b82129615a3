from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List


class FileRole(str, Enum):
    INPUT = "Input"
    OUTPUT = "Output"
    WATERMARK = "Watermark"


# Protocols FlixCloud documents per file role. Not enforced: the service
# validates locations itself (see DESIGN.md, open questions).
ACCEPTED_PROTOCOLS = {
    FileRole.INPUT: ("http", "https", "ftp", "sftp", "s3"),
    FileRole.OUTPUT: ("ftp", "sftp", "s3"),
    FileRole.WATERMARK: ("http", "https", "ftp", "sftp", "s3"),
}


@dataclass(frozen=True)
class FileReference:
    """
    A media file location (input, output or watermark) plus optional
    transfer credentials.

    All strings are trimmed on construction. Credentials are all-or-nothing;
    that rule is reported by validate() rather than raised.
    """
    role: FileRole
    url: str
    user: str = ""
    password: str = ""

    def __post_init__(self) -> None:
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "role", FileRole(self.role))
        object.__setattr__(self, "url", (self.url or "").strip())
        object.__setattr__(self, "user", (self.user or "").strip())
        object.__setattr__(self, "password", (self.password or "").strip())

    @property
    def has_credentials(self) -> bool:
        return bool(self.user)

    def validate(self) -> List[str]:
        """
        Return every rule this file location violates, labelled by role.
        An empty list means the file is usable.
        """
        label = self.role.value
        errors: List[str] = []

        if not self.url:
            errors.append(f"{label} file url required.")
        if self.user and not self.password:
            errors.append(f"{label} password needed (user supplied).")
        if self.password and not self.user:
            errors.append(f"{label} user needed (password supplied).")

        return errors

    def to_transfer_record(self) -> Dict[str, Any]:
        """
        Shape consumed by the XML encoder: ``url`` plus a ``parameters``
        block only when credentials are present.
        """
        record: Dict[str, Any] = {"url": self.url}
        if self.has_credentials:
            record["parameters"] = {"user": self.user, "password": self.password}
        return record
