"""Profile store holding the single user profile."""

import copy
from typing import Callable, Optional

from models.profile import UserProfile

ProfileListener = Callable[[UserProfile], None]


class ProfileStore:
    """Owns the UserProfile singleton; saves replace it wholesale."""

    def __init__(self, profile: Optional[UserProfile] = None, on_change: Optional[ProfileListener] = None) -> None:
        self._profile = copy.deepcopy(profile) if profile else UserProfile()
        self._on_change = on_change

    @property
    def profile(self) -> UserProfile:
        return copy.deepcopy(self._profile)

    def save(self, profile: UserProfile) -> UserProfile:
        self._profile = copy.deepcopy(profile)
        if self._on_change:
            self._on_change(copy.deepcopy(self._profile))
        return self.profile
