"""
Certificate Form - controller for the student certificate form.

Owns the in-memory StudentRecord, the wizard state, the course suggestion
list and the local image preview, and runs the remote workflows:

1. search:         load a record by registration number, switch to update
2. submit:         validate, check uniqueness, number the certificate, create
3. confirm_update: send the edited record back
4. delete:         confirm with the user, then delete by registration number

Every handler catches its own failures, logs them and shows a notice; the
form stays usable and unchanged after a failed operation. A successful
mutation resets the whole form.
"""

from certform.config import Settings
from certform.errors import CertFormError, DuplicateRegNo, NotFound, ValidationFailed
from certform.logging_config import begin_operation, get_logger, log_with_context
from certform.models.student_record import Attachment, StudentRecord, stored_file_name
from certform import notices
from certform.services.certificate_number import generate_certificate_number
from certform.services.preview import LocalPreview
from certform.services.suggestions import CourseSuggestions
from certform.wizard import INITIAL, Intent, proceed_to_preview, with_update_intent

logger = get_logger("form")


class CertificateForm:
    """
    One instance per form on screen.

    Args:
        api: StudentApiClient (or anything with the same coroutine methods)
        notifier: Notifier used for notices and the delete confirmation
        settings: Settings providing the base URL for stored uploads
    """

    def __init__(self, api, notifier: notices.Notifier, settings: Settings):
        self.api = api
        self.notifier = notifier
        self.settings = settings
        self.record = StudentRecord()
        self.state = INITIAL
        self.image_name = ""
        self.suggestions = CourseSuggestions(api)
        self._local_preview = None
        self._search_generation = 0

    # ── Observable state ────────────────────────────────────

    @property
    def step(self) -> int:
        return self.state.step

    @property
    def mode(self) -> str:
        return self.state.mode

    @property
    def preview_url(self) -> str:
        """Image source: the attached file if any, else the stored upload."""
        if self.record.file is not None and self._local_preview is not None:
            return self._local_preview.url
        if self.record.file_path:
            return self.settings.upload_url(self.record.file_path)
        return ""

    # ── Field editing ───────────────────────────────────────

    def set_field(self, name: str, value: str):
        """Set a text field by wire name (courseCode) or attribute name (course_code)."""
        attr = StudentRecord.attribute_for(name)
        if attr in ("file", "file_path"):
            raise ValueError(f"{name} is not a text field; use attach_file()")
        setattr(self.record, attr, value)

    async def change(self, name: str, value: str):
        """Field edit from the user. Course code edits also refresh suggestions."""
        self.set_field(name, value)
        if StudentRecord.attribute_for(name) == "course_code":
            begin_operation()
            await self.suggestions.lookup(value)

    def select_course(self, course_code: str):
        """Take a suggestion: set the course code and close the list."""
        self.set_field("course_code", course_code)
        self.suggestions.dismiss()

    def dismiss_suggestions(self):
        self.suggestions.dismiss()

    def attach_file(self, attachment: Attachment):
        """Attach an image, replacing (and releasing) any previous local preview."""
        if attachment is None:
            return
        self.record.file = attachment
        self._replace_preview(LocalPreview.acquire(attachment))
        log_with_context(logger, "INFO", "File attached: {}".format(attachment.filename),
                         extra_data={"size": len(attachment.content)})

    def _replace_preview(self, preview):
        if self._local_preview is not None:
            self._local_preview.release()
        self._local_preview = preview

    async def preview_image(self):
        """
        Bytes of the image currently previewed, or None.

        Stored uploads are fetched from the server; a failed fetch is
        logged and yields None.
        """
        if self.record.file is not None:
            return self.record.file.content
        if not self.record.file_path:
            return None
        try:
            return await self.api.fetch_upload(self.record.file_path)
        except CertFormError as e:
            log_with_context(logger, "WARNING", "Could not load stored image: {}".format(e),
                             context={"file_path": self.record.file_path})
            return None

    # ── Wizard ──────────────────────────────────────────────

    def go_to_preview(self):
        self.state = proceed_to_preview(self.state)

    def reset(self):
        """Discard all local state and return to data entry."""
        self.record = StudentRecord()
        self.image_name = ""
        self._replace_preview(None)
        self.suggestions.dismiss()
        self._search_generation += 1
        self.state = INITIAL

    def close(self):
        """Tear down the form, releasing its preview resource."""
        self.reset()
        log_with_context(logger, "DEBUG", "Form closed")

    # ── Remote workflows ────────────────────────────────────

    async def search(self) -> bool:
        """Load the record for the current registration number into the form."""
        begin_operation()
        reg_no = self.record.reg_no
        self._search_generation += 1
        generation = self._search_generation

        try:
            data = await self.api.get_student(reg_no)
        except NotFound as e:
            if generation != self._search_generation:
                return False
            log_with_context(logger, "WARNING", "Student not found: {}".format(e),
                             context={"reg_no": reg_no})
            self.notifier.alert(notices.STUDENT_NOT_FOUND)
            return False
        except CertFormError as e:
            if generation != self._search_generation:
                return False
            log_with_context(logger, "ERROR", "Error fetching student: {}".format(e),
                             context={"reg_no": reg_no}, exc_info=e)
            self.notifier.alert(notices.SEARCH_FAILED)
            return False

        if generation != self._search_generation:
            log_with_context(logger, "DEBUG", "Discarding stale search result",
                             context={"reg_no": reg_no})
            return False

        self.record = self.record.merged_with(data)
        self._replace_preview(None)
        self.image_name = stored_file_name(self.record.file_path)
        self.state = with_update_intent(self.state)
        log_with_context(logger, "INFO", "Loaded student for update",
                         context={"reg_no": self.record.reg_no},
                         extra_data={"file_path": self.record.file_path})
        return True

    def _validate(self, record: StudentRecord):
        missing = record.missing_fields()
        if missing:
            raise ValidationFailed(missing)

    async def _ensure_unique(self, reg_no: str):
        if await self.api.reg_no_exists(reg_no):
            raise DuplicateRegNo(reg_no)

    async def submit(self) -> bool:
        """Create a new record from the form."""
        begin_operation()
        record = self.record.model_copy()

        try:
            self._validate(record)
            await self._ensure_unique(record.reg_no)
        except ValidationFailed as e:
            log_with_context(logger, "WARNING", str(e), extra_data={"missing": e.missing})
            self.notifier.alert(notices.MISSING_FIELDS.format(fields=", ".join(e.missing)))
            return False
        except DuplicateRegNo as e:
            log_with_context(logger, "WARNING", str(e), context={"reg_no": e.reg_no})
            self.notifier.alert(notices.DUPLICATE_REG_NO)
            return False
        except CertFormError as e:
            log_with_context(logger, "ERROR", "Error checking regNo: {}".format(e),
                             context={"reg_no": record.reg_no}, exc_info=e)
            self.notifier.alert(notices.REG_NO_CHECK_FAILED)
            return False

        certificate_number = generate_certificate_number(
            record.full_name, record.reg_no, record.course_code
        )
        fields = record.form_fields()
        fields["certificateNumber"] = certificate_number

        try:
            created = await self.api.create_student(fields, record.file)
        except CertFormError as e:
            log_with_context(logger, "ERROR", "Error submitting student: {}".format(e),
                             context={"reg_no": record.reg_no}, exc_info=e)
            self.notifier.alert(notices.SUBMIT_FAILED)
            return False

        log_with_context(logger, "INFO", "Student submitted",
                         context={"reg_no": record.reg_no, "certificate_number": certificate_number},
                         extra_data={"response": created})
        self.notifier.alert(notices.SUBMITTED)
        self.reset()
        return True

    async def confirm_update(self) -> bool:
        """Send the edited record back to the server."""
        begin_operation()
        if self.state.intent is not Intent.UPDATE:
            self.notifier.alert(notices.UPDATE_WITHOUT_SEARCH)
            return False

        record = self.record.model_copy()
        try:
            updated = await self.api.update_student(record.reg_no, record.form_fields(), record.file)
        except CertFormError as e:
            log_with_context(logger, "ERROR", "Error updating student: {}".format(e),
                             context={"reg_no": record.reg_no}, exc_info=e)
            self.notifier.alert(notices.UPDATE_FAILED)
            return False

        log_with_context(logger, "INFO", "Student updated",
                         context={"reg_no": record.reg_no},
                         extra_data={"response": updated, "new_file": record.file is not None})
        self.notifier.alert(notices.UPDATED)
        self.reset()
        return True

    async def delete(self) -> bool:
        """Delete the record for the current registration number, after confirmation."""
        begin_operation()
        reg_no = self.record.reg_no
        if not reg_no:
            self.notifier.alert(notices.DELETE_NEEDS_REG_NO)
            return False
        if not self.notifier.confirm(notices.CONFIRM_DELETE):
            log_with_context(logger, "DEBUG", "Delete cancelled by user", context={"reg_no": reg_no})
            return False

        try:
            deleted = await self.api.delete_student(reg_no)
        except CertFormError as e:
            log_with_context(logger, "ERROR", "Error deleting student: {}".format(e),
                             context={"reg_no": reg_no}, exc_info=e)
            self.notifier.alert(notices.DELETE_FAILED)
            return False

        log_with_context(logger, "INFO", "Student deleted",
                         context={"reg_no": reg_no}, extra_data={"response": deleted})
        self.notifier.alert(notices.DELETED)
        self.reset()
        return True
