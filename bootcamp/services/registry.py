"""
Registry Service
Mentor registration: profile update and mentor application.
"""

import re
import logging
from typing import Optional, List, Dict, Any
from dataclasses import dataclass

from bootcamp.models import db, User, Course, MentorRegistry
from bootcamp.config import (
    STUDENTS_LIMIT_CHOICES, PREFERED_LOCATIONS, MENTORING_TECHNOLOGIES,
    EMAIL_PATTERN, EPAM_EMAIL_PATTERN, PHONE_PATTERN
)
from bootcamp.services.course import format_datetime

logger = logging.getLogger(__name__)


@dataclass
class RegistryResult:
    """Result of a registry operation."""
    success: bool
    error: Optional[str] = None


class RegistryService:
    """
    Mentor registry.
    """

    PROFILE_FIELDS = {
        'firstName': 'first_name',
        'lastName': 'last_name',
        'primaryEmail': 'primary_email',
        'locationId': 'location_id',
        'locationName': 'location_name',
        'contactsTelegram': 'contacts_telegram',
        'contactsSkype': 'contacts_skype',
        'contactsPhone': 'contacts_phone',
        'contactsEpamEmail': 'contacts_epam_email',
        'contactsNotes': 'contacts_notes',
        'aboutMyself': 'about_myself',
    }

    @staticmethod
    def get_registration_courses() -> List[Course]:
        """Courses open for registration, earliest first."""
        courses = Course.query.filter(db.or_(Course.invite_only.is_(False), Course.invite_only.is_(None))).all()
        active = [c for c in courses if c.planned or not c.completed]
        return sorted(active, key=lambda c: c.start_date.isoformat() if c.start_date else '')

    @staticmethod
    def update_profile(user: User, model: Dict[str, Any]) -> RegistryResult:
        """
        Update the whitelisted profile fields.

        Location comes either as locationId/locationName, or as a
        {'key', 'label'} pair with otherLocationName for unlisted cities.
        """
        model = dict(model)
        location = model.pop('location', None)
        if isinstance(location, dict):
            if location.get('key'):
                model['locationId'] = location['key']
                model['locationName'] = location.get('label')
            else:
                model['locationId'] = None
                model['locationName'] = model.get('otherLocationName')

        fields = {
            column: model[key]
            for key, column in RegistryService.PROFILE_FIELDS.items()
            if key in model
        }

        if 'first_name' in fields and not fields['first_name']:
            return RegistryResult(success=False, error='Missing required field: firstName')
        if 'last_name' in fields and not fields['last_name']:
            return RegistryResult(success=False, error='Missing required field: lastName')
        if fields.get('primary_email') and not re.match(EMAIL_PATTERN, fields['primary_email']):
            return RegistryResult(success=False, error='Invalid email')
        if fields.get('contacts_epam_email') and not re.match(EPAM_EMAIL_PATTERN, fields['contacts_epam_email']):
            return RegistryResult(success=False, error='Invalid EPAM email')
        if fields.get('contacts_phone') and not re.match(PHONE_PATTERN, fields['contacts_phone']):
            return RegistryResult(success=False, error='Invalid phone')

        for column, value in fields.items():
            setattr(user, column, value)
        db.session.commit()

        logger.info(f"Profile updated: {user.github_id}")
        return RegistryResult(success=True)

    @staticmethod
    def register_mentor(user: User, model: Dict[str, Any]) -> RegistryResult:
        """Create or replace the user's mentor application."""
        max_students = model.get('maxStudentsLimit')
        if max_students not in STUDENTS_LIMIT_CHOICES:
            return RegistryResult(
                success=False,
                error=f'Invalid maxStudentsLimit. Must be one of: {STUDENTS_LIMIT_CHOICES}'
            )

        location = model.get('preferedStudentsLocation')
        if location not in PREFERED_LOCATIONS:
            return RegistryResult(
                success=False,
                error=f'Invalid preferedStudentsLocation. Must be one of: {list(PREFERED_LOCATIONS)}'
            )

        technologies = list(model.get('technicalMentoring') or [])
        unknown = [t for t in technologies if t not in MENTORING_TECHNOLOGIES]
        if unknown:
            return RegistryResult(success=False, error=f'Unknown technologies: {unknown}')

        registry = MentorRegistry.query.filter_by(user_id=user.id).first()
        if not registry:
            registry = MentorRegistry(user_id=user.id)
            db.session.add(registry)

        registry.prefered_courses = list(model.get('preferedCourses') or [])
        registry.max_students_limit = max_students
        registry.english_mentoring = bool(model.get('englishMentoring'))
        registry.prefered_students_location = location
        registry.technical_mentoring = technologies
        registry.comment = model.get('comment')
        db.session.commit()

        logger.info(f"Mentor registered: {user.github_id} (courses: {registry.prefered_courses})")
        return RegistryResult(success=True)

    @staticmethod
    def course_to_dict(course: Course) -> Dict[str, Any]:
        return {
            'id': course.id,
            'name': course.name,
            'alias': course.alias,
            'startDate': format_datetime(course.start_date),
            'planned': bool(course.planned),
            'completed': bool(course.completed),
            'inviteOnly': bool(course.invite_only),
        }
