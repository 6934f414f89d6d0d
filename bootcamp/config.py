"""
Bootcamp Admin Configuration
All constants, environment variables, and domain enumerations.
"""

import os


# =============================================================================
# ENVIRONMENT
# =============================================================================

ENV = os.environ.get('ENV', 'development')
IS_PRODUCTION = ENV == 'production'
DEBUG = not IS_PRODUCTION

# Database
DATABASE_URL = os.environ.get('DATABASE_URL', 'sqlite:///bootcamp_dev.db')
if DATABASE_URL.startswith('postgres://'):
    DATABASE_URL = DATABASE_URL.replace('postgres://', 'postgresql://', 1)

# Auth keys
ADMIN_KEY = os.environ.get('ADMIN_KEY', 'bootcamp-dev-admin')

# Feature flags
ENABLE_ADMIN = os.environ.get('ENABLE_ADMIN', 'true').lower() == 'true'
ENABLE_SCHEDULER = os.environ.get('START_SCHEDULER', 'false').lower() == 'true'

# Logging: 'text' or 'json'
LOG_FORMAT = os.environ.get('LOG_FORMAT', 'text').lower()

# Score table is recomputed in the background
SCORE_REFRESH_MINUTES = int(os.environ.get('SCORE_REFRESH_MINUTES', 5))


# =============================================================================
# CLIENT
# =============================================================================

API_BASE_URL = os.environ.get('API_BASE_URL', 'http://localhost:5000')
REQUEST_TIMEOUT = float(os.environ.get('REQUEST_TIMEOUT', 10))
PAGE_SIZE = 100


# =============================================================================
# TASKS
# =============================================================================

TASK_TYPES = {
    'jstask': 'JS task',
    'htmltask': 'HTML task',
    'htmlcssacademy': 'HTML/CSS Academy',
    'codewars': 'Codewars',
    'test': 'Test',
    'codejam': 'Code Jam',
    'interview': 'Interview',
}

VERIFICATION_MODES = ['manual', 'auto']

# Who checks a course task
CHECKERS = ['mentor', 'assigned', 'taskOwner', 'crossCheck', 'jury']

DEFAULT_MAX_SCORE = 100
DEFAULT_SCORE_WEIGHT = 1


# =============================================================================
# EVENTS
# =============================================================================

EVENT_TYPES = {
    'lecture_online': 'Online Lecture',
    'lecture_offline': 'Offline Lecture',
    'lecture_mixed': 'Online/Offline Lecture',
    'lecture_self_study': 'Self-studying',
    'warmup': 'Warm-up',
    'info': 'Info (additional announcements)',
    'workshop': 'Workshop',
    'meetup': 'Meetup',
}

# Schedule entries derived from course tasks
SCHEDULE_DEADLINE = 'deadline'
SCHEDULE_TEST = 'test'

EVENT_TYPE_NAMES = {
    'lecture_online': 'online lecture',
    'lecture_offline': 'offline lecture',
    'lecture_mixed': 'mixed lecture',
    'lecture_self_study': 'self study',
    'warmup': 'warm-up',
    'jstask': 'js task',
    'htmltask': 'html task',
    'codejam': 'code jam',
    'externaltask': 'external task',
    'htmlcssacademy': 'html/css academy',
    'codewars': 'codewars',
}


# =============================================================================
# MENTOR REGISTRY
# =============================================================================

STUDENTS_LIMIT_CHOICES = [2, 3, 4, 5, 6]

PREFERED_LOCATIONS = {
    'any': 'Any city or country',
    'country': 'My country only',
    'city': 'My city only',
}

MENTORING_TECHNOLOGIES = {
    'nodejs': 'Node.js',
    'react': 'React',
    'angular': 'Angular',
}


# =============================================================================
# TIMEZONES
# =============================================================================

DEFAULT_TIMEZONE = 'Europe/Minsk'

TIMEZONES = {
    'Europe/Minsk': 'Europe/Minsk',
    'Europe/Moscow': 'Europe/Moscow',
    'Europe/Kiev': 'Europe/Kiev',
    'Europe/Warsaw': 'Europe/Warsaw',
    'Europe/London': 'Europe/London',
    'Asia/Tashkent': 'Asia/Tashkent',
    'Asia/Almaty': 'Asia/Almaty',
    'UTC': 'UTC',
}


# =============================================================================
# VALIDATORS
# =============================================================================

URL_PATTERN = r'^(https?://)?([\da-z.-]+)\.([a-z.]{2,6})([/\w .#?=&%:+~-]*)$'
GITHUB_REPO_URL_PATTERN = r'^https://github\.com/[\w.-]+/[\w.-]+/?$'
EMAIL_PATTERN = r'^[\w.+-]+@[\w-]+(\.[\w-]+)+$'
EPAM_EMAIL_PATTERN = r'^[\w.+-]+@epam\.com$'
PHONE_PATTERN = r'^\+?\d{7,15}$'


# =============================================================================
# MESSAGES
# =============================================================================

MSG_SAVE_FAILED = 'An error occurred. Please try again later.'
MSG_DELETE_FAILED = 'Failed to delete item. Please try later.'
MSG_LOAD_FAILED = 'Failed to load data. Please try later.'
MSG_REGISTRY_FAILED = 'An error occured. Please try later'


# =============================================================================
# VERSION INFO
# =============================================================================

VERSION = '1.0.0'
VERSION_NAME = 'Admin Pages'
FEATURES = ['tasks', 'events', 'course_tasks', 'students', 'score', 'schedule', 'mentor_registry']
