"""
Mentor Registry Page
Registration form for new mentors: profile update plus mentor application.
"""

import logging
from typing import Any, Dict, List, Optional

from bootcamp.config import (
    EMAIL_PATTERN, EPAM_EMAIL_PATTERN, MENTORING_TECHNOLOGIES, MSG_LOAD_FAILED,
    MSG_REGISTRY_FAILED, PHONE_PATTERN, PREFERED_LOCATIONS, STUDENTS_LIMIT_CHOICES
)
from bootcamp.client.api import ApiClient
from bootcamp.client.errors import FieldError, RecordServiceError, ValidationError
from bootcamp.client.forms import Form, FormField
from bootcamp.client.list_editor import Notifier, log_notification
from bootcamp.client.record_service import Record

logger = logging.getLogger(__name__)

REGISTRY_FIELDS = [
    'comment', 'preferedCourses', 'maxStudentsLimit', 'englishMentoring',
    'preferedStudentsLocation', 'technicalMentoring',
]

PROFILE_FIELDS = [
    'firstName', 'lastName', 'primaryEmail', 'contactsTelegram', 'contactsSkype',
    'contactsPhone', 'contactsEpamEmail', 'contactsNotes', 'aboutMyself',
]


def create_registry_record(values: Dict[str, Any]) -> Record:
    return {name: values.get(name) for name in REGISTRY_FIELDS}


def create_profile_record(values: Dict[str, Any]) -> Record:
    """Profile fields; an unlisted city comes from otherLocationName."""
    location = values.get('location') or {}
    record = {name: values.get(name) for name in PROFILE_FIELDS}
    record['locationId'] = location.get('key') or None
    record['locationName'] = location.get('label') if location.get('key') else values.get('otherLocationName')
    return record


def get_initial_values(profile: Record) -> Dict[str, Any]:
    location = None
    if profile.get('locationName'):
        location = {'key': profile.get('locationId'), 'label': profile.get('locationName')}
    return {
        **profile,
        'location': location,
        'preferedCourses': [],
        'englishMentoring': False,
        'technicalMentoring': [],
    }


def _needs_other_location(values) -> bool:
    location = values.get('location')
    return bool(location) and not location.get('key')


class MentorRegistryPage:
    """
    Loads the caller's profile and the courses open for registration, then
    posts the profile and the application together.
    """

    title = 'Registration'

    def __init__(self, api: ApiClient, notify: Optional[Notifier] = None):
        self.api = api
        self.notify = notify or log_notification
        self.courses: List[Record] = []
        self.initial_data: Optional[Record] = None
        self.errors: List[FieldError] = []
        self.loading = False
        self.submitted = False
        self.form = self.build_form()

    def build_form(self) -> Form:
        return Form(
            title=self.title,
            get_initial_values=get_initial_values,
            fields=[
                FormField('firstName', 'First Name', required=True, message='First name should be in English'),
                FormField('lastName', 'Last Name', required=True, message='Last name should be in English'),
                FormField('preferedCourses', 'Prefered Courses', kind='checkbox_group',
                          validator=self._check_courses),
                FormField('maxStudentsLimit', 'How many students are you ready to mentor per course?',
                          kind='select', required=True, message='Please select students count',
                          choices={n: str(n) for n in STUDENTS_LIMIT_CHOICES}),
                FormField('englishMentoring', 'Are you ready to mentor in ENGLISH?', kind='checkbox'),
                FormField('preferedStudentsLocation', 'Prefered students location', kind='select',
                          required=True, message='Please select a prefered location option',
                          choices=PREFERED_LOCATIONS),
                FormField('technicalMentoring', 'Please pick technologies which you want to mentor in',
                          kind='multiselect', choices=MENTORING_TECHNOLOGIES),
                FormField('location', 'Location', kind='location', required=True,
                          message='Please select city or "Other"'),
                FormField('otherLocationName', 'Other Location', required=_needs_other_location,
                          message='Location name is required'),
                FormField('primaryEmail', 'Primary Email', required=True, pattern=EMAIL_PATTERN,
                          message='Email is required',
                          help='Preferable to use Gmail because we use Google Drive for sharing'),
                FormField('contactsEpamEmail', 'EPAM Email (if applicable)', pattern=EPAM_EMAIL_PATTERN,
                          message='Please enter a valid EPAM email'),
                FormField('aboutMyself', 'About Yourself', kind='textarea'),
                FormField('contactsTelegram', 'Telegram'),
                FormField('contactsSkype', 'Skype'),
                FormField('contactsPhone', 'Phone', pattern=PHONE_PATTERN, message='Please enter a valid phone'),
                FormField('contactsNotes', 'Contact Notes', kind='textarea'),
                FormField('comment', 'Comment', kind='textarea'),
                FormField('gdpr', 'Data processing consent', kind='checkbox', required=True,
                          message='Please accept the data processing terms'),
            ],
        )

    def _check_courses(self, value, values) -> Optional[str]:
        ids = {c.get('id') for c in self.courses}
        unknown = [v for v in value if v not in ids]
        return f'Unknown courses: {unknown}' if unknown else None

    def load(self) -> bool:
        self.loading = True
        try:
            profile = self.api.get('/api/profile') or {}
            self.courses = self.api.get('/api/registry/courses') or []
        except RecordServiceError as e:
            logger.error(f"Loading registration data failed: {e}")
            self.notify(MSG_LOAD_FAILED)
            return False
        finally:
            self.loading = False

        self.initial_data = profile.get('user')
        return True

    @property
    def initial_values(self) -> Optional[Dict[str, Any]]:
        if self.initial_data is None:
            return None
        return self.form.initial_values(self.initial_data)

    def submit_enabled(self, values: Dict[str, Any]) -> bool:
        return bool(values.get('gdpr')) and not self.loading

    def submit(self, values: Dict[str, Any]) -> bool:
        if not self.submit_enabled(values):
            return False

        try:
            clean = self.form.validate({**(self.initial_values or {}), **values})
        except ValidationError as e:
            self.errors = e.errors
            return False
        self.errors = []

        self.loading = True
        try:
            self.api.post('/api/profile/registry', create_profile_record(clean))
            self.api.post('/api/registry/mentor', create_registry_record(clean))
        except RecordServiceError as e:
            logger.error(f"Mentor registration failed: {e}")
            self.notify(MSG_REGISTRY_FAILED)
            return False
        finally:
            self.loading = False

        self.submitted = True
        return True
