import pytest

from fastapi.testclient import TestClient

from formbuilder.config import Settings
from formbuilder.main import create_app
from formbuilder.models.forms import FormUpsertRequest, Question
from formbuilder.services.repository import FormRepository


# --- Canned payloads ---

SURVEY_PAYLOAD = {
    "title": "Survey",
    "description": "Describe me",
    "questions": [
        {"type": "text", "question": "Name", "required": True},
        {"type": "radio", "question": "Pick one", "options": ["A", "B"]},
    ],
}


def make_request(title: str = "Test", description: str = "", questions: list[Question] | None = None) -> FormUpsertRequest:
    if questions is None:
        questions = [
            Question(type="text", question="Q1"),
            Question(type="radio", question="Q2", options=["A", "B"]),
        ]
    return FormUpsertRequest(title=title, description=description, questions=questions)


@pytest.fixture
def repo():
    """Empty repository, isolated per test."""
    return FormRepository()


@pytest.fixture
def settings():
    return Settings(seed_demo=False, static_dir=None, cors_origins=["*"])


@pytest.fixture
def api_client(repo, settings):
    """FastAPI TestClient over an unseeded repository."""
    return TestClient(create_app(repository=repo, settings=settings))
