import logging
import re

from fastapi import APIRouter, Depends, Request, Response

from formbuilder.exceptions import FormNotFoundError, InvalidFormIdError
from formbuilder.models.forms import (
    Form,
    FormResponse,
    FormUpsertRequest,
    SubmitResponseRequest,
)
from formbuilder.services.repository import FormRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/forms", tags=["forms"])

_FORM_ID_RE = re.compile(r"[+-]?\d+")


def get_repository(request: Request) -> FormRepository:
    return request.app.state.repository


def parse_form_id(form_id: str) -> int:
    """Read the path id as an integer, rejecting anything else before the repository is hit."""
    if not _FORM_ID_RE.fullmatch(form_id):
        logger.warning("Rejected form id %r", form_id)
        raise InvalidFormIdError(form_id)
    try:
        return int(form_id)
    except ValueError as e:
        # Past the interpreter's int conversion digit limit
        logger.warning("Rejected form id of %d digits", len(form_id))
        raise InvalidFormIdError(form_id) from e


@router.get("")
def list_forms(repo: FormRepository = Depends(get_repository)) -> list[Form]:
    return repo.list_forms()


@router.get("/{form_id}")
def get_form(
    form_id: int = Depends(parse_form_id),
    repo: FormRepository = Depends(get_repository),
) -> Form:
    form = repo.get(form_id)
    if form is None:
        raise FormNotFoundError(form_id)
    return form


@router.post("", status_code=201)
def create_form(request: FormUpsertRequest, repo: FormRepository = Depends(get_repository)) -> Form:
    return repo.create(request)


@router.put("/{form_id}")
def update_form(
    request: FormUpsertRequest,
    form_id: int = Depends(parse_form_id),
    repo: FormRepository = Depends(get_repository),
) -> Form:
    form = repo.update(form_id, request)
    if form is None:
        raise FormNotFoundError(form_id)
    return form


@router.delete("/{form_id}", status_code=204)
def delete_form(
    form_id: int = Depends(parse_form_id),
    repo: FormRepository = Depends(get_repository),
) -> Response:
    if not repo.delete(form_id):
        raise FormNotFoundError(form_id)
    return Response(status_code=204)


@router.post("/{form_id}/responses", status_code=201)
def add_response(
    request: SubmitResponseRequest,
    form_id: int = Depends(parse_form_id),
    repo: FormRepository = Depends(get_repository),
) -> FormResponse:
    response = repo.add_response(form_id, request)
    if response is None:
        raise FormNotFoundError(form_id)
    return response


@router.get("/{form_id}/responses")
def list_responses(
    form_id: int = Depends(parse_form_id),
    repo: FormRepository = Depends(get_repository),
) -> list[FormResponse]:
    responses = repo.get_responses(form_id)
    if responses is None:
        raise FormNotFoundError(form_id)
    return responses
