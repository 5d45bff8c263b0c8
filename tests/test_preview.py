import os

import pytest

from certform.services.preview import LocalPreview
from helpers import PNG_BYTES, SAMPLE, attachment

pytestmark = pytest.mark.anyio


def test_local_preview_holds_a_copy_until_released():
    preview = LocalPreview.acquire(attachment())
    assert preview.url.startswith("file://")
    assert preview.path.endswith(".png")
    assert preview.read() == PNG_BYTES

    preview.release()
    preview.release()

    assert preview.released
    assert not os.path.exists(preview.path)


async def test_attaching_a_file_sets_the_preview(form):
    assert form.preview_url == ""
    form.attach_file(attachment())
    assert form.preview_url == form._local_preview.url
    assert await form.preview_image() == PNG_BYTES


async def test_replacing_the_file_releases_the_old_preview(form):
    form.attach_file(attachment("first.png", b"first"))
    first_path = form._local_preview.path

    form.attach_file(attachment("second.png", b"second"))

    assert not os.path.exists(first_path)
    assert form._local_preview.read() == b"second"
    assert form.record.file.filename == "second.png"


async def test_attach_nothing_is_ignored(form):
    form.attach_file(attachment())
    url = form.preview_url
    form.attach_file(None)
    assert form.preview_url == url


async def test_new_file_takes_precedence_over_stored_file(form, store):
    store.add_student(SAMPLE, file_path="certificates/R100-cert.png", content=b"stored")
    form.set_field("regNo", "R100")
    await form.search()
    assert form.preview_url == "http://testserver/uploads/certificates/R100-cert.png"
    assert await form.preview_image() == b"stored"

    form.attach_file(attachment("new.png", b"new"))

    assert form.preview_url.startswith("file://")
    assert await form.preview_image() == b"new"
    assert form.record.file_path == "certificates/R100-cert.png"


async def test_missing_stored_image_yields_none(form, store):
    store.add_student({**SAMPLE, "file": "certificates/gone.png"})
    form.set_field("regNo", "R100")
    await form.search()

    assert await form.preview_image() is None


async def test_close_releases_the_preview(form):
    form.attach_file(attachment())
    path = form._local_preview.path

    form.close()

    assert not os.path.exists(path)
    assert form.preview_url == ""


async def test_stored_name_with_space_previews_and_loads(form, store):
    store.add_student(SAMPLE, file_path="certificates/R100 cert.png", content=b"stored")
    form.set_field("regNo", "R100")
    await form.search()

    assert form.image_name == "R100 cert.png"
    assert form.preview_url == "http://testserver/uploads/certificates/R100%20cert.png"
    assert await form.preview_image() == b"stored"
