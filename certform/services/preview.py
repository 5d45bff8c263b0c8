"""
Preview Service - scoped local preview of an attached image.

An attached file is written to a temporary file whose file:// URI serves as
the preview URL. The form holds at most one LocalPreview at a time and
releases it when the attachment is replaced, dropped, or the form closes.
"""

import os
import tempfile
from pathlib import Path

from certform.logging_config import get_logger, log_with_context
from certform.models.student_record import Attachment

logger = get_logger("preview")


class LocalPreview:
    """A temporary on-disk copy of an attachment, addressable by URL."""

    def __init__(self, path: str):
        self.path = path
        self.url = Path(path).as_uri()
        self.released = False

    @classmethod
    def acquire(cls, attachment: Attachment) -> "LocalPreview":
        fd, path = tempfile.mkstemp(prefix="certform-preview-", suffix=attachment.suffix)
        with os.fdopen(fd, "wb") as f:
            f.write(attachment.content)
        log_with_context(logger, "DEBUG", "Preview acquired for {}".format(attachment.filename),
                         extra_data={"path": path})
        return cls(path)

    def read(self) -> bytes:
        with open(self.path, "rb") as f:
            return f.read()

    def release(self):
        """Delete the temporary file. Safe to call more than once."""
        if self.released:
            return
        self.released = True
        try:
            os.unlink(self.path)
        except FileNotFoundError:
            pass
        log_with_context(logger, "DEBUG", "Preview released", extra_data={"path": self.path})

    def __repr__(self):
        return f"<LocalPreview(path='{self.path}', released={self.released})>"
