import httpx
import pytest

from certform.config import Settings
from certform.form import CertificateForm
from certform.services.api_client import StudentApiClient

from fake_api import FakeStore, create_app
from helpers import RecordingNotifier


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings():
    return Settings(api_base_url="http://testserver/")


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
async def api(anyio_backend, store, settings):
    client = StudentApiClient(settings, transport=httpx.ASGITransport(app=create_app(store)))
    yield client
    await client.aclose()


@pytest.fixture
def form(api, notifier, settings):
    form = CertificateForm(api, notifier, settings)
    yield form
    form.close()


@pytest.fixture
def mock_form(anyio_backend, notifier, settings):
    """
    Build a form whose API is served by an httpx.MockTransport handler.

    Usage: form = mock_form(handler)
    """
    forms = []

    def build(handler):
        api = StudentApiClient(settings, transport=httpx.MockTransport(handler))
        form = CertificateForm(api, notifier, settings)
        forms.append(form)
        return form

    yield build
    for form in forms:
        form.close()
