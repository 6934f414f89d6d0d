"""
User Service
User lookup and search with NO HTTP dependencies.
"""

from typing import Optional, List, Dict, Any

from bootcamp.models import db, User


class UserService:

    @staticmethod
    def get_by_github_id(github_id: str) -> Optional[User]:
        return User.query.filter_by(github_id=github_id).first()

    @staticmethod
    def get_or_create(github_id: str) -> User:
        user = UserService.get_by_github_id(github_id)
        if not user:
            user = User(github_id=github_id)
            db.session.add(user)
            db.session.commit()
        return user

    @staticmethod
    def search_users(text: str, limit: int = 20) -> List[User]:
        """Case-insensitive match on github id, first or last name."""
        text = (text or '').strip()
        if not text:
            return []
        pattern = f"%{text}%"
        return (
            User.query
            .filter(db.or_(
                User.github_id.ilike(pattern),
                User.first_name.ilike(pattern),
                User.last_name.ilike(pattern),
            ))
            .order_by(User.github_id.asc())
            .limit(min(limit, 100))
            .all()
        )

    @staticmethod
    def person_to_dict(user: User) -> Dict[str, Any]:
        return {'id': user.id, 'githubId': user.github_id, 'name': user.name}

    @staticmethod
    def profile_to_dict(user: User) -> Dict[str, Any]:
        return {
            'id': user.id,
            'githubId': user.github_id,
            'firstName': user.first_name,
            'lastName': user.last_name,
            'primaryEmail': user.primary_email,
            'locationId': user.location_id,
            'locationName': user.location_name,
            'countryName': user.country_name,
            'contactsTelegram': user.contacts_telegram,
            'contactsSkype': user.contacts_skype,
            'contactsPhone': user.contacts_phone,
            'contactsEpamEmail': user.contacts_epam_email,
            'contactsNotes': user.contacts_notes,
            'aboutMyself': user.about_myself,
        }
