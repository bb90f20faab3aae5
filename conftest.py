"""
Root pytest configuration.
Ensures environment variables are loaded BEFORE any module imports.
This must be in the root directory to load before tests are collected.
"""

import os
import pytest
from dotenv import load_dotenv

# Load environment variables IMMEDIATELY before any other imports
load_dotenv()

# Keep test runs independent of a developer's local .env tuning
os.environ["REVEAL_TICK_SECONDS"] = "1.0"
os.environ["ANSWER_MAX_LENGTH"] = "500"

if not os.getenv("LOG_LEVEL"):
    os.environ["LOG_LEVEL"] = "INFO"


@pytest.fixture(scope="session", autouse=True)
def setup_environment():
    """
    Verify environment variables are set for tests.
    """
    yield
