import os

import pytest
from dotenv import load_dotenv


@pytest.fixture(autouse=True)
def load_environment():
    # Set DOTENV_FILE_LOCATION to override the default .env file location
    load_dotenv(os.environ.get("DOTENV_FILE_LOCATION", ".env"))


# test/ is on the pythonpath, so test/src/fixtures is importable as src.fixtures
pytest_plugins = ["src.fixtures.fixtures"]
