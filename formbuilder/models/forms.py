from datetime import datetime

from pydantic import BaseModel


class Question(BaseModel):
    id: int | None = None
    type: str  # text, textarea, radio, checkbox, dropdown
    question: str
    required: bool = False
    options: list[str] = []  # Used by radio, checkbox, dropdown


class Form(BaseModel):
    id: int
    title: str
    description: str = ""
    questions: list[Question] = []


class FormResponse(BaseModel):
    id: int
    form_id: int
    submitted_at: datetime
    answers: dict[str, str]


class FormUpsertRequest(BaseModel):
    title: str
    description: str = ""
    questions: list[Question] = []


class SubmitResponseRequest(BaseModel):
    answers: dict[str, str] = {}
