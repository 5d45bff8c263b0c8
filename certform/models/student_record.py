"""
StudentRecord model - the certificate submission held by the form.

Field names follow Python conventions; the camelCase names used on the wire
(and in user-facing notices) are kept as aliases. The record is purely
in-memory: it is filled by user entry or by a search response, and replaced
with an empty record after every successful mutation.
"""

import mimetypes
import os
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Text fields sent to the server, in form order
TEXT_FIELDS = [
    "fullName", "regNo", "email", "courseCode", "trainerName",
    "whatsappNumber", "date", "branch",
]

# Fields that must be non-empty before a record can be created
REQUIRED_FIELDS = TEXT_FIELDS + ["file"]


class Attachment(BaseModel):
    """A locally attached image file, held in memory until upload."""
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @classmethod
    def from_path(cls, path: str) -> "Attachment":
        """Read a file from disk, guessing its content type from the extension."""
        content_type, _ = mimetypes.guess_type(path)
        with open(path, "rb") as f:
            content = f.read()
        return cls(
            filename=os.path.basename(path),
            content=content,
            content_type=content_type or "application/octet-stream",
        )

    @property
    def suffix(self) -> str:
        return os.path.splitext(self.filename)[1]

    def __repr__(self):
        return f"<Attachment(filename='{self.filename}', size={len(self.content)})>"


class StudentRecord(BaseModel):
    """
    Form state for one student's certificate record.

    reg_no is the record's identity on the server. file_path is the
    server's reference to an already stored upload and is never sent back;
    a freshly attached file takes precedence over it for preview.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore", validate_assignment=True)

    full_name: str = Field("", alias="fullName")
    reg_no: str = Field("", alias="regNo")
    email: str = Field("", alias="email")
    course_code: str = Field("", alias="courseCode")
    trainer_name: str = Field("", alias="trainerName")
    whatsapp_number: str = Field("", alias="whatsappNumber")
    date: str = Field("", alias="date")
    branch: str = Field("", alias="branch")
    file: Optional[Attachment] = None
    file_path: str = Field("", alias="filePath")
    certificate_number: str = Field("", alias="certificateNumber")

    @field_validator(
        "full_name", "reg_no", "email", "course_code", "trainer_name",
        "whatsapp_number", "date", "branch", "file_path", "certificate_number",
        mode="before",
    )
    @classmethod
    def coerce_text(cls, value):
        # Server responses may carry nulls or numbers (e.g. phone numbers)
        if value is None:
            return ""
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @classmethod
    def attribute_for(cls, name: str) -> str:
        """Resolve a wire name (regNo) or attribute name (reg_no) to the attribute name."""
        if name in cls.model_fields:
            return name
        for attr, info in cls.model_fields.items():
            if info.alias == name:
                return attr
        raise KeyError(f"Unknown field: {name}")

    def get(self, name: str):
        return getattr(self, self.attribute_for(name))

    def missing_fields(self) -> list:
        """Wire names of required fields that are empty, in form order."""
        return [name for name in REQUIRED_FIELDS if not self.get(name)]

    def form_fields(self) -> dict:
        """
        Text fields to send to the server, keyed by wire name.

        file and filePath are never included; certificateNumber only when
        the record already carries one.
        """
        fields = {name: self.get(name) for name in TEXT_FIELDS}
        if self.certificate_number:
            fields["certificateNumber"] = self.certificate_number
        return fields

    def merged_with(self, data: dict) -> "StudentRecord":
        """
        Return a copy updated from a server record.

        Known fields from the response replace the current values. Any
        locally attached file is dropped and the server's stored file
        reference (its "file" key) becomes file_path.
        """
        values = self.model_dump(by_alias=True, exclude={"file", "file_path"})
        values.update({
            key: value for key, value in data.items()
            if key in TEXT_FIELDS or key == "certificateNumber"
        })
        stored = data.get("file")
        values["filePath"] = stored if isinstance(stored, str) else ""
        return StudentRecord.model_validate(values)

    def __repr__(self):
        return f"<StudentRecord(reg_no='{self.reg_no}', name='{self.full_name}', course='{self.course_code}')>"


def stored_file_name(file_path: str) -> str:
    """Display name of a stored upload: the final segment of its path."""
    return (file_path or "").split("/")[-1]
