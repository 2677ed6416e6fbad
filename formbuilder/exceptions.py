class FormNotFoundError(Exception):
    """Raised when a request targets a form id that is not in the repository."""

    def __init__(self, form_id: int):
        self.form_id = form_id
        super().__init__(f"Form {form_id} not found")


class InvalidFormIdError(Exception):
    """Raised when a path segment cannot be read as a form id."""

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(f"Invalid form id: {raw!r}")
