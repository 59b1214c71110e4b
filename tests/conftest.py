"""
Pytest configuration and shared fixtures.
"""
import pytest

from directory_app.services.datasets import DirectorySession

DIRECTORY_CSV = (
    "FLOOR,SUBJECT,KEYWORDS\n"
    "1,Art,painting sculpture\n"
    "2,History,war biography\n"
    "2,Poetry,sonnets verse\n"
    "3,Science Fiction,space robots\n"
)

FAQ_CSV = (
    "Question,Answer,Category,Keywords\n"
    '"What are your hours?","Ten to six daily.",Logistics,time\n'
    '"When can I visit?","Check the sign.",Logistics,hours schedule\n'
    '"Do you buy books?","Yes, during business hours.",Acquisitions,sell\n'
)

DIRECTORY_URL = "https://sheets.test/directory.csv"
FAQ_URL = "https://sheets.test/faq.csv"


class FakeFetcher:
    """Async stand-in for fetch_csv that serves canned bodies by URL."""

    def __init__(self, bodies=None, errors=None):
        self.bodies = dict(bodies or {})
        self.errors = dict(errors or {})
        self.calls = []

    async def __call__(self, url):
        self.calls.append(url)
        if url in self.errors:
            raise self.errors[url]
        return self.bodies[url]

    def count(self, url):
        return self.calls.count(url)


@pytest.fixture
def fake_fetcher():
    return FakeFetcher({DIRECTORY_URL: DIRECTORY_CSV, FAQ_URL: FAQ_CSV})


@pytest.fixture
def session(fake_fetcher):
    return DirectorySession(
        directory_url=DIRECTORY_URL,
        faq_url=FAQ_URL,
        fetcher=fake_fetcher,
    )


@pytest.fixture
def directory_csv():
    return DIRECTORY_CSV


@pytest.fixture
def faq_csv():
    return FAQ_CSV
