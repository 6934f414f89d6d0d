"""
User Search
Search-as-you-type user picker.
"""

from typing import Any, Callable, Dict, List, Optional

Person = Dict[str, Any]


class UserSearch:
    """
    Options of a user select.

    An empty search text falls back to the default values (the currently
    selected user, when editing).
    """

    def __init__(self, search_fn: Callable[[str], List[Person]],
                 default_values: Optional[List[Person]] = None, key_field: str = 'id'):
        self.search_fn = search_fn
        self.key_field = key_field
        self.default_values = list(default_values or [])
        self.data: List[Person] = list(self.default_values)

    @property
    def placeholder(self) -> str:
        return 'Select...' if self.default_values else 'Search...'

    def set_default_values(self, values: Optional[List[Person]]):
        self.default_values = list(values or [])
        self.data = list(self.default_values)

    def search(self, text: str) -> List[Person]:
        if text:
            self.data = self.search_fn(text) or []
        else:
            self.data = list(self.default_values)
        return self.data

    def options(self) -> List[Dict[str, Any]]:
        return [
            {'value': person.get(self.key_field), 'label': f"{person.get('name')} ({person.get('githubId')})"}
            for person in self.data
        ]
