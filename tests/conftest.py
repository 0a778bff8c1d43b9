from __future__ import annotations

import sys
from pathlib import Path

import mongomock
import pytest
from fastapi.testclient import TestClient

# Make the top-level modules importable when running tests from the repo root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config import load_config  # noqa: E402
from database import CoupletStore  # noqa: E402
from main import create_app  # noqa: E402

VIRTUE = {"number": 1, "name": "அறத்துப்பால்", "translation": "Virtue", "transliteration": "Arathuppaal"}
PROLOGUE = {"number": 1, "name": "பாயிரவியல்", "translation": "Prologue", "transliteration": "Paayiraviyal"}
DOMESTIC = {"number": 2, "name": "இல்லறவியல்", "translation": "Domestic Virtue", "transliteration": "Illaraviyal"}
PRAISE_OF_GOD = {"number": 1, "name": "கடவுள் வாழ்த்து", "translation": "The Praise of God", "transliteration": "Katavul Vaazhththu"}
RAIN = {"number": 2, "name": "வான்சிறப்பு", "translation": "The Excellence of Rain", "transliteration": "Vaansirappu"}


def couplet_one() -> dict:
    return {
        "number": 1,
        "tamil": ["அகர முதல எழுத்தெல்லாம் ஆதி", "பகவன் முதற்றே உலகு"],
        "tamil_explanation": "எழுத்துக்கள் எல்லாம் அகரத்தை அடிப்படையாக கொண்டிருக்கின்றன.",
        "division": dict(VIRTUE),
        "section": dict(PROLOGUE),
        "chapter": dict(PRAISE_OF_GOD),
        "translations": {
            "en": [
                {
                    "text": "A, as its first of letters, every speech maintains; "
                            "The Primal Deity is first through all the world's domains",
                    "explanation": "As the letter A is the first of all letters, "
                                   "so the eternal God is first in the world",
                    "author": "G. U. Pope",
                    "year": 1886,
                },
                {
                    "text": "As all letters have the letter A for their first, "
                            "so the world has the eternal one for its first",
                    "author": "Rev. W. H. Drew",
                    "year": 1840,
                },
            ],
            "hi": [
                {"text": "अक्षर सबके आदि में, है अकार का स्थान", "author": "Dr. Kumar", "year": 1960},
            ],
        },
        "tamil_interpretations": [
            {"text": "எழுத்துக்கள் எல்லாம் அகரத்தை முதலாக உடையன", "author": "Parimelazhagar", "year": 1272},
            {"text": "அகரம் எழுத்துக்களுக்கு முதல்", "author": "Mu. Varadarajan", "year": 1949},
        ],
        "keywords": ["letters", "deity"],
        "metadata": {"last_updated": "2024-01-01T00:00:00Z"},
    }


def couplet_three() -> dict:
    return {
        "number": 3,
        "tamil": ["வேண்டுதல் வேண்டாமை இலானடி சேர்ந்தார்க்கு", "யாண்டும் இடும்பை இல"],
        "tamil_explanation": "விருப்பு வெறுப்பு இல்லாதவனை அடைந்தவர்க்கு துன்பம் இல்லை.",
        "division": dict(VIRTUE),
        "section": dict(PROLOGUE),
        "chapter": dict(PRAISE_OF_GOD),
        "translations": {
            "en": [
                {
                    "text": "Their feet who know no likes or dislikes find Friendship "
                            "and freedom from sorrow",
                    "author": "G.U. Pope",
                    "year": 1886,
                },
            ],
        },
        "tamil_interpretations": [
            {"text": "வேண்டுதல் வேண்டாமை இல்லாதவன்", "author": "Mu. Varadarajan", "year": 1949},
        ],
        "keywords": ["desire"],
        "metadata": {"last_updated": "2024-01-01T00:00:00Z"},
    }


def couplet_five() -> dict:
    return {
        "number": 5,
        "tamil": ["துப்பார்க்குத் துப்பாய துப்பாக்கித் துப்பார்க்குத்", "துப்பாய தூஉம் மழை"],
        "tamil_explanation": "உணவுப் பொருள்களை விளைவிப்பது மழையே.",
        "division": dict(VIRTUE),
        "section": dict(DOMESTIC),
        "chapter": dict(RAIN),
        "translations": {
            "en": [
                {"text": "The clouds pour down to sustain the world", "author": "George Uglow", "year": 1886},
            ],
        },
        "tamil_interpretations": [
            {"text": "மழையே உணவாகவும் ஆகிறது", "author": "Parimel Azhagar", "year": 1272},
        ],
        "keywords": ["rain"],
        "metadata": {"last_updated": "2024-02-01T00:00:00Z"},
    }


@pytest.fixture
def sample_couplets():
    """Couplets 5, 1, 3 in that (storage) order."""
    return [couplet_five(), couplet_one(), couplet_three()]


@pytest.fixture
def collection():
    return mongomock.MongoClient()["thirukkural"]["couplets"]


@pytest.fixture
def store(collection, sample_couplets):
    collection.insert_many([dict(c) for c in sample_couplets])
    return CoupletStore(collection)


@pytest.fixture
def empty_store(collection):
    return CoupletStore(collection)


@pytest.fixture
def settings():
    return load_config(environment="production")


@pytest.fixture
def client(store, settings):
    app = create_app(settings=settings, store=store)
    with TestClient(app) as test_client:
        yield test_client
