import os
import sys

# Ensure the project root is on sys.path so that
# imports like `from services...` resolve when running from anywhere.
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)
if CURRENT_DIR not in sys.path:
    sys.path.insert(0, CURRENT_DIR)

import pytest

from fakes import FakeSunClient
from services.sun import SolarEnricher


@pytest.fixture
def sun_client():
    return FakeSunClient()


@pytest.fixture
def enricher(sun_client):
    """Enricher with a canned sun client and no courtesy delay."""
    return SolarEnricher(client=sun_client, delay=0)
