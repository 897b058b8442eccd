import json
import pytest

from mf_directory.client import BASE_URL, FundDirectoryClient
from fakes import SCHEMES, FakeResponse, FakeSession


@pytest.fixture
def cache_file(tmp_path):
    return tmp_path / "schema_codes.txt"


@pytest.fixture
def seeded_cache(cache_file):
    cache_file.write_text(json.dumps(SCHEMES, indent=2), encoding="utf-8")
    return cache_file


@pytest.fixture
def session():
    return FakeSession({BASE_URL: FakeResponse(SCHEMES)})


@pytest.fixture
def client(cache_file, session):
    return FundDirectoryClient(cache_path=cache_file, session=session)
