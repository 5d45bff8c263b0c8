"""Shared test helpers: a recording notifier and sample form data."""

from certform.models.student_record import Attachment
from certform.notices import Notifier

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 24

SAMPLE = {
    "fullName": "Asha Rao",
    "regNo": "R100",
    "email": "asha@example.com",
    "courseCode": "CS101",
    "trainerName": "K. Menon",
    "whatsappNumber": "9876543210",
    "date": "2024-05-01",
    "branch": "Kochi",
}


class RecordingNotifier(Notifier):
    """Collects notices; answers confirmations from a script (default: no)."""

    def __init__(self, answers=None):
        self.alerts = []
        self.prompts = []
        self.answers = list(answers or [])

    def alert(self, message):
        self.alerts.append(message)

    def confirm(self, message):
        self.prompts.append(message)
        return self.answers.pop(0) if self.answers else False


def attachment(name="cert.png", content=PNG_BYTES):
    return Attachment(filename=name, content=content, content_type="image/png")


def fill(form, with_file=True, **overrides):
    """Fill every text field (SAMPLE plus overrides) and optionally attach a file."""
    values = {**SAMPLE, **overrides}
    for name, value in values.items():
        form.set_field(name, value)
    if with_file:
        form.attach_file(attachment())
    return values
