"""
Interactive console front-end for the certificate form.

Usage:
    python -m certform                                        # Uses API_URL or the default service
    python -m certform http://localhost:5000                  # Custom API URL

Commands are read one per line; type "help" for the list.
"""

import asyncio
import os
import sys

from certform.config import Settings
from certform.form import CertificateForm
from certform.logging_config import setup_logging
from certform.models.student_record import Attachment, TEXT_FIELDS
from certform.notices import ConsoleNotifier
from certform.services.api_client import StudentApiClient

HELP = """\
Commands:
  edit            enter or change every text field (blank keeps the value)
  set FIELD VALUE set one field, e.g. "set regNo R100"
  course TEXT     set the course code and list matching courses
  pick N          take suggestion N as the course code
  attach PATH     attach the certificate image
  search          load the record for the current Reg. No
  preview         go to the preview step
  submit          create the record (preview step, new record)
  update          save changes (preview step, after a search)
  delete          delete the record for the current Reg. No
  reset           clear the form
  show            print the form
  quit            leave
"""


def _course_label(item) -> str:
    if isinstance(item, dict):
        code = item.get("courseCode") or item.get("code") or ""
        name = item.get("courseName") or item.get("name") or ""
        return f"{code} {name}".strip()
    return str(item)


def _course_code(item) -> str:
    if isinstance(item, dict):
        return str(item.get("courseCode") or item.get("code") or "")
    return str(item)


def show(form: CertificateForm):
    print()
    print("=" * 60)
    print(f"  Step {form.step}  Mode: {form.mode or '-'}")
    print("=" * 60)
    for name in TEXT_FIELDS:
        print(f"  {name:<16} {form.record.get(name)}")
    if form.record.certificate_number:
        print(f"  {'certificateNumber':<16} {form.record.certificate_number}")
    attached = form.record.file.filename if form.record.file else form.image_name
    print(f"  {'file':<16} {attached or '-'}")
    print(f"  {'preview':<16} {form.preview_url or '-'}")
    for i, item in enumerate(form.suggestions.items, 1):
        print(f"    [{i}] {_course_label(item)}")
    print()


async def report_image(form: CertificateForm):
    image = await form.preview_image()
    if image is None:
        print("  No image to preview")
    else:
        print(f"  Image: {len(image)} bytes")


async def edit(form: CertificateForm):
    for name in TEXT_FIELDS:
        current = form.record.get(name)
        value = input(f"{name} [{current}]: ").strip()
        if value:
            await form.change(name, value)
    form.dismiss_suggestions()


async def run(form: CertificateForm):
    print(HELP)
    while True:
        try:
            line = input("certform> ").strip()
        except EOFError:
            break
        if not line:
            continue
        command, _, arg = line.partition(" ")
        arg = arg.strip()

        if command == "quit":
            break
        elif command == "help":
            print(HELP)
        elif command == "show":
            show(form)
        elif command == "edit":
            await edit(form)
        elif command == "set":
            name, _, value = arg.partition(" ")
            try:
                await form.change(name, value.strip())
            except (KeyError, ValueError) as e:
                print(f"  {e}")
        elif command == "course":
            await form.change("courseCode", arg)
            show(form)
        elif command == "pick":
            try:
                item = form.suggestions.items[int(arg) - 1]
            except (ValueError, IndexError):
                print("  No such suggestion")
                continue
            form.select_course(_course_code(item))
        elif command == "attach":
            try:
                form.attach_file(Attachment.from_path(os.path.expanduser(arg)))
            except OSError as e:
                print(f"  Could not read {arg}: {e}")
        elif command == "search":
            if await form.search():
                show(form)
        elif command == "preview":
            form.go_to_preview()
            show(form)
            await report_image(form)
        elif command == "submit":
            await form.submit()
        elif command == "update":
            await form.confirm_update()
        elif command == "delete":
            await form.delete()
        elif command == "reset":
            form.reset()
        else:
            print(f"  Unknown command: {command}")


async def _main(settings: Settings):
    async with StudentApiClient(settings) as api:
        form = CertificateForm(api, ConsoleNotifier(), settings)
        try:
            await run(form)
        finally:
            form.close()


def main():
    # Determine API base URL
    settings = Settings.from_env(sys.argv[1] if len(sys.argv) > 1 else None)
    setup_logging(settings.log_level)
    print(f"Certificate form connected to: {settings.api_base_url}")
    asyncio.run(_main(settings))


if __name__ == "__main__":
    main()
