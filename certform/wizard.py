"""
Wizard state for the form: data entry, then preview.

The state is a single tagged value instead of separate step/mode flags:

- DataEntry(intent=None)    step 1, mode ""
- DataEntry(intent=UPDATE)  step 1, mode "update" (after a search)
- Preview(intent=SUBMIT)    step 2, mode "submit"
- Preview(intent=UPDATE)    step 2, mode "update"

DataEntry never carries SUBMIT: create intent is only implied by moving to
the preview directly from data entry.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Intent(str, Enum):
    SUBMIT = "submit"
    UPDATE = "update"


@dataclass(frozen=True)
class DataEntry:
    intent: Optional[Intent] = None

    step = 1

    @property
    def mode(self) -> str:
        return self.intent.value if self.intent else ""


@dataclass(frozen=True)
class Preview:
    intent: Intent

    step = 2

    @property
    def mode(self) -> str:
        return self.intent.value


WizardState = Union[DataEntry, Preview]

INITIAL = DataEntry()


def proceed_to_preview(state: WizardState) -> Preview:
    """Step 1 → 2. Without a prior search the intent becomes SUBMIT."""
    return Preview(state.intent or Intent.SUBMIT)


def with_update_intent(state: WizardState) -> WizardState:
    """A successful search switches intent to UPDATE, keeping the step."""
    if isinstance(state, Preview):
        return Preview(Intent.UPDATE)
    return DataEntry(Intent.UPDATE)
