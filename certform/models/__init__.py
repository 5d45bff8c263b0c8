from certform.models.student_record import (
    Attachment, StudentRecord, REQUIRED_FIELDS, TEXT_FIELDS, stored_file_name
)

__all__ = ["Attachment", "StudentRecord", "REQUIRED_FIELDS", "TEXT_FIELDS", "stored_file_name"]
