"""
Forms
Field schemas, client-side validation and the modal form that feeds a
list editor.
"""

import re
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union

from bootcamp.client.errors import FieldError, ValidationError
from bootcamp.client.list_editor import ListEditor

logger = logging.getLogger(__name__)

Values = Dict[str, Any]


def _is_empty(value) -> bool:
    return value is None or value == '' or value == [] or value == ()


@dataclass
class FormField:
    """
    One input of a form.

    kind is a rendering hint: input, textarea, number, select, multiselect,
    tags, radio, checkbox, checkbox_group, date_range, user_search, location.

    `required` may be a predicate over the current values; `visible`
    hides the field (and skips its rules) when it returns False.
    """
    name: str
    label: str
    kind: str = 'input'
    required: Union[bool, Callable[[Values], bool]] = False
    message: Optional[str] = None
    pattern: Optional[str] = None
    pattern_message: Optional[str] = None
    choices: Optional[Dict[Any, str]] = None
    validator: Optional[Callable[[Any, Values], Optional[str]]] = None
    visible: Optional[Callable[[Values], bool]] = None
    help: Optional[str] = None
    placeholder: Optional[str] = None

    def is_visible(self, values: Values) -> bool:
        return self.visible is None or bool(self.visible(values))

    def is_required(self, values: Values) -> bool:
        if callable(self.required):
            return bool(self.required(values))
        return bool(self.required)

    def check(self, value, values: Values) -> Optional[str]:
        """Return the first rule this value breaks, or None."""
        if _is_empty(value):
            if self.is_required(values):
                return self.message or f'Please enter {self.label.lower()}'
            return None

        if self.pattern and isinstance(value, str) and not re.match(self.pattern, value, re.IGNORECASE):
            return self.pattern_message or self.message or f'Please enter a valid {self.label.lower()}'

        if self.choices is not None:
            items = value if isinstance(value, (list, tuple)) else [value]
            unknown = [v for v in items if v not in self.choices]
            if unknown:
                return f'Unknown {self.label.lower()}: {unknown}'

        if self.validator:
            return self.validator(value, values)
        return None


@dataclass
class Form:
    """
    A list of fields with validation.

    validate() returns only the visible fields' values and raises
    ValidationError listing every failing field.
    """
    fields: List[FormField]
    title: str = ''
    get_initial_values: Callable[[Values], Values] = field(default=lambda draft: dict(draft))

    def field(self, name: str) -> Optional[FormField]:
        return next((f for f in self.fields if f.name == name), None)

    def visible_fields(self, values: Values) -> List[FormField]:
        return [f for f in self.fields if f.is_visible(values)]

    def initial_values(self, draft: Values) -> Values:
        return self.get_initial_values(draft)

    def validate(self, values: Values) -> Values:
        errors = []
        clean = {}
        for form_field in self.visible_fields(values):
            value = values.get(form_field.name)
            message = form_field.check(value, values)
            if message:
                errors.append(FieldError(form_field.name, message))
            clean[form_field.name] = value

        if errors:
            raise ValidationError(errors)
        return clean


class ModalForm:
    """
    The edit/create modal of a list page.

    Open while the editor has a draft. Inputs are seeded from the draft's
    initial values; field errors stay here and never reach the editor.
    """

    def __init__(self, form: Form, editor: ListEditor):
        self.form = form
        self.editor = editor
        self.errors: List[FieldError] = []

    @property
    def visible(self) -> bool:
        return self.editor.draft is not None

    @property
    def initial_values(self) -> Optional[Values]:
        if self.editor.draft is None:
            return None
        return self.form.initial_values(self.editor.draft)

    @property
    def submit_enabled(self) -> bool:
        return self.editor.can_submit

    def submit(self, values: Values) -> bool:
        """
        Validate and hand the values to the editor.
        Returns True when the record was saved and the modal closed.
        """
        if not self.submit_enabled:
            return False

        merged = {**(self.initial_values or {}), **values}
        try:
            clean = self.form.validate(merged)
        except ValidationError as e:
            self.errors = e.errors
            logger.debug(f"Form '{self.form.title}' rejected: {e}")
            return False

        self.errors = []
        return self.editor.submit(clean)

    def cancel(self):
        self.errors = []
        self.editor.cancel()
