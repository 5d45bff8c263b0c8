"""
User-facing notices and confirmation prompts.

The form never talks to the terminal directly; it is given a Notifier.
ConsoleNotifier is the interactive one, tests use a recording notifier.
"""

# ── Notice texts ─────────────────────────────────────────────
MISSING_FIELDS = "⚠️ Please fill all required fields: {fields}"
DUPLICATE_REG_NO = "❌ This Registration Number already exists!"
REG_NO_CHECK_FAILED = "❌ Error verifying registration number."
SUBMITTED = "✅ Student submitted successfully!"
SUBMIT_FAILED = "❌ Error submitting student data."
STUDENT_NOT_FOUND = "❌ Student not found. Please check the value or try again."
SEARCH_FAILED = "⚠️ Error fetching student."
UPDATED = "✅ Student updated successfully"
UPDATE_FAILED = "❌ Error updating student data."
UPDATE_WITHOUT_SEARCH = "⚠️ Search for a student before updating."
DELETE_NEEDS_REG_NO = "⚠️ Please enter the Reg. No to delete."
CONFIRM_DELETE = "Are you sure you want to delete this record?"
DELETED = "🗑️ Student deleted successfully"
DELETE_FAILED = "❌ Error deleting student data."


class Notifier:
    """Blocking notice and yes/no prompt."""

    def alert(self, message: str):
        raise NotImplementedError

    def confirm(self, message: str) -> bool:
        raise NotImplementedError


class ConsoleNotifier(Notifier):
    """Notifier for the interactive console front-end."""

    def __init__(self, input_func=input, print_func=print):
        self._input = input_func
        self._print = print_func

    def alert(self, message: str):
        self._print(message)

    def confirm(self, message: str) -> bool:
        answer = self._input(f"{message} [y/N] ").strip().lower()
        return answer in ("y", "yes")
