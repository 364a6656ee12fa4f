"""Session store: the signed-in profile, read by the rest of the core."""

import logging
from typing import Callable, List, Optional

from pydantic import ValidationError as SchemaError

from config.models import Collections, Profile, UserRole
from services.datastore import DataStore
from services.errors import AccessDenied

logger = logging.getLogger(__name__)

SessionListener = Callable[[Optional[Profile]], None]


class SessionStore:
    """Holds the active profile; the identity provider drives sign-in/sign-out."""

    def __init__(self, datastore: Optional[DataStore] = None):
        self.datastore = datastore
        self._profile: Optional[Profile] = None
        self._listeners: List[SessionListener] = []

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------
    @property
    def current_profile(self) -> Optional[Profile]:
        return self._profile

    @property
    def is_authenticated(self) -> bool:
        return self._profile is not None

    @property
    def is_teacher(self) -> bool:
        return self._profile is not None and self._profile.role is UserRole.TEACHER

    def require_profile(self) -> Profile:
        if self._profile is None:
            raise AccessDenied("No user is signed in.")
        return self._profile

    # ------------------------------------------------------------------
    # Identity provider side
    # ------------------------------------------------------------------
    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener for sign-in/sign-out; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def sign_in(self, profile: Profile) -> None:
        self._profile = profile
        logger.info(f"Signed in {profile.id} ({profile.role.value})")
        self._notify()

    def sign_out(self) -> None:
        if self._profile is None:
            return
        logger.info(f"Signed out {self._profile.id}")
        self._profile = None
        self._notify()

    def load_profile(self, user_id: str) -> Optional[Profile]:
        """Fetch a user's profile from the data store; None if absent or malformed."""
        if self.datastore is None:
            return None

        row = self.datastore.fetch_one(Collections.PROFILES, user_id)
        if row is None:
            logger.warning(f"Profile not found for user: {user_id}")
            return None
        try:
            return Profile.model_validate(row)
        except SchemaError as e:
            logger.warning(f"Malformed profile for user {user_id}: {e}")
            return None

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._profile)
