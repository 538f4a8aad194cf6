"""
Submission handling for generated insert forms.
Checks the CSRF token, re-encodes JSON fields and hands the row to the insert capability.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from .csrf import CSRF_FIELD, CsrfGuard, SessionStore
from .exceptions import CsrfValidationFailed, PersistenceFailed, SubmissionError
from .form import FormModel

logger = logging.getLogger(__name__)

# execute_insert(table, columns, values)
InsertCapability = Callable[[str, Sequence[str], Mapping[str, Any]], Any]


def encode_json_field(raw: Optional[str]) -> str:
    """'a, b,c' -> '["a", "b", "c"]'"""
    if raw is None:
        return json.dumps([])
    tokens = [token.strip() for token in str(raw).split(",")]
    return json.dumps([token for token in tokens if token])


@dataclass(frozen=True)
class SubmissionResult:
    ok: bool
    message: str
    error: Optional[SubmissionError] = None
    values: Optional[Dict[str, Any]] = None


class SubmissionHandler:
    """Validate a submitted form against its FormModel and persist it."""

    success_message = "Record saved."

    def __init__(self, model: FormModel, insert: InsertCapability, csrf_store: Optional[SessionStore] = None):
        self.model = model
        self.insert = insert
        self.csrf_store = csrf_store

    def _check_csrf(self, form_data: Mapping[str, Any]) -> None:
        if not self.model.csrf_enabled:
            return
        if self.csrf_store is None:
            logger.warning("Form for %s requires CSRF but no session store is configured", self.model.table)
            raise CsrfValidationFailed("No session store configured")
        CsrfGuard(self.csrf_store).validate(form_data.get(CSRF_FIELD))

    def prepare_values(self, form_data: Mapping[str, Any]) -> Dict[str, Any]:
        values = self.model.default_values()
        for name in values:
            if name in form_data:
                values[name] = form_data[name]
        for descriptor in self.model.json_fields:
            # a stored json default is already encoded
            if descriptor.name in form_data or values[descriptor.name] is None:
                values[descriptor.name] = encode_json_field(values[descriptor.name])
        return values

    def submit(self, form_data: Mapping[str, Any]) -> Dict[str, Any]:
        """Persist `form_data`. Raises CsrfValidationFailed or PersistenceFailed."""
        self._check_csrf(form_data)
        data = {k: v for k, v in form_data.items() if k != CSRF_FIELD}
        values = self.prepare_values(data)
        statement = self.model.build_insert_statement()
        try:
            self.insert(self.model.table, list(statement.columns), values)
        except Exception as e:
            logger.exception("Insert into %s failed", self.model.table)
            raise PersistenceFailed(f"Insert into '{self.model.table}' failed") from e
        logger.info("Inserted row into %s", self.model.table)
        return values

    def handle(self, form_data: Mapping[str, Any]) -> SubmissionResult:
        try:
            values = self.submit(form_data)
        except SubmissionError as e:
            return SubmissionResult(ok=False, message=e.user_message, error=e)
        return SubmissionResult(ok=True, message=self.success_message, values=values)
