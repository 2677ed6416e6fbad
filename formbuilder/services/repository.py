"""In-memory form and response store.

All state lives behind a single lock. Records are replaced wholesale on every
write and handed out as deep copies, so callers never hold a reference into
the store and readers never see a half-applied update.
"""
import itertools
import logging
import threading
from datetime import datetime, timezone

from formbuilder.models.forms import (
    Form,
    FormResponse,
    FormUpsertRequest,
    Question,
    SubmitResponseRequest,
)

logger = logging.getLogger(__name__)


def _number_questions(questions: list[Question]) -> list[Question]:
    """Assign ids 1..N by position, discarding any supplied id."""
    return [
        q.model_copy(update={"id": position}, deep=True)
        for position, q in enumerate(questions, start=1)
    ]


def _keep_or_number_questions(questions: list[Question]) -> list[Question]:
    """Keep a supplied id; otherwise fall back to the 1-based position.

    Mixing explicit and positional ids can yield duplicates, e.g.
    [{id: 2}, {no id}] numbers both questions 2. Callers rely on this as-is.
    """
    return [
        q.model_copy(update={"id": q.id if q.id is not None else position}, deep=True)
        for position, q in enumerate(questions, start=1)
    ]


class FormRepository:
    """Owns every form and response and the counters that number them."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._forms: dict[int, Form] = {}
        # form_id -> responses in append order
        self._responses: dict[int, list[FormResponse]] = {}
        self._form_ids = itertools.count(1)
        self._response_ids = itertools.count(1)

    def reset(self) -> None:
        """Drop all forms and responses and restart both id counters at 1."""
        with self._lock:
            self._forms.clear()
            self._responses.clear()
            self._form_ids = itertools.count(1)
            self._response_ids = itertools.count(1)

    # --- Forms ---

    def list_forms(self) -> list[Form]:
        with self._lock:
            return [self._forms[form_id].model_copy(deep=True) for form_id in sorted(self._forms)]

    def get(self, form_id: int) -> Form | None:
        with self._lock:
            form = self._forms.get(form_id)
            return form.model_copy(deep=True) if form is not None else None

    def create(self, request: FormUpsertRequest) -> Form:
        questions = _number_questions(request.questions)
        with self._lock:
            form = Form(
                id=next(self._form_ids),
                title=request.title,
                description=request.description,
                questions=questions,
            )
            self._forms[form.id] = form
            self._responses[form.id] = []
        logger.info("Created form %d with %d question(s)", form.id, len(questions))
        return form.model_copy(deep=True)

    def update(self, form_id: int, request: FormUpsertRequest) -> Form | None:
        """Replace title, description and questions of an existing form.

        Returns None when the form does not exist. Responses already collected
        are kept and are not checked against the new question list.
        """
        questions = _keep_or_number_questions(request.questions)
        with self._lock:
            if form_id not in self._forms:
                return None
            form = Form(
                id=form_id,
                title=request.title,
                description=request.description,
                questions=questions,
            )
            self._forms[form_id] = form
        logger.info("Updated form %d", form_id)
        return form.model_copy(deep=True)

    def delete(self, form_id: int) -> bool:
        """Remove a form together with its responses. Returns False if nothing was removed."""
        with self._lock:
            if self._forms.pop(form_id, None) is None:
                return False
            dropped = self._responses.pop(form_id, [])
        logger.info("Deleted form %d and %d response(s)", form_id, len(dropped))
        return True

    # --- Responses ---

    def add_response(self, form_id: int, request: SubmitResponseRequest) -> FormResponse | None:
        with self._lock:
            if form_id not in self._forms:
                return None
            response = FormResponse(
                id=next(self._response_ids),
                form_id=form_id,
                submitted_at=datetime.now(timezone.utc),
                answers=dict(request.answers),
            )
            self._responses.setdefault(form_id, []).append(response)
        logger.info("Stored response %d for form %d", response.id, form_id)
        return response.model_copy(deep=True)

    def get_responses(self, form_id: int) -> list[FormResponse] | None:
        """Responses for a form in submission order, or None if the form does not exist."""
        with self._lock:
            if form_id not in self._forms:
                return None
            return [r.model_copy(deep=True) for r in self._responses.get(form_id, [])]

    # --- Bootstrap ---

    def seed_demo(self) -> bool:
        """Insert the demo form and one response if the store is empty.

        Returns True when data was inserted. The emptiness check and the
        inserts happen under one lock acquisition, so concurrent calls seed
        at most once.
        """
        questions = _number_questions(DEMO_FORM.questions)
        with self._lock:
            if self._forms:
                return False
            form = Form(
                id=next(self._form_ids),
                title=DEMO_FORM.title,
                description=DEMO_FORM.description,
                questions=questions,
            )
            response = FormResponse(
                id=next(self._response_ids),
                form_id=form.id,
                submitted_at=datetime.now(timezone.utc),
                answers=dict(DEMO_RESPONSE.answers),
            )
            self._forms[form.id] = form
            self._responses[form.id] = [response]
        logger.info("Seeded demo form %d", form.id)
        return True


DEMO_FORM = FormUpsertRequest(
    title="Customer feedback",
    description="Tell us how we did. It only takes a minute.",
    questions=[
        Question(type="text", question="What is your name?", required=True),
        Question(
            type="radio",
            question="How satisfied are you with our service?",
            required=True,
            options=["Very satisfied", "Satisfied", "Neutral", "Unsatisfied"],
        ),
        Question(type="textarea", question="Anything else you would like to share?"),
    ],
)

DEMO_RESPONSE = SubmitResponseRequest(
    answers={
        "0": "Alex",
        "1": "Satisfied",
        "2": "Quick and friendly support.",
    },
)
