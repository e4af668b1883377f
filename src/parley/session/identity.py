"""Identity signal consumed from the authentication collaborator.

Authentication itself happens elsewhere; this object only records
whether a user is currently present and counts login edges so that
work tied to a login (history loading) runs once per edge.
"""

from loguru import logger


class IdentitySignal:
    """Presence/absence of the current user.

    ``epoch`` increases on every transition to a (new) present user and
    never decreases. It is 0 until the first login.
    """

    def __init__(self, user: str | None = None):
        self._user = user
        self._epoch = 1 if user else 0

    @property
    def user(self) -> str | None:
        return self._user

    @property
    def is_present(self) -> bool:
        return self._user is not None

    @property
    def epoch(self) -> int:
        return self._epoch

    def login(self, user: str) -> bool:
        """Mark ``user`` as present.

        Returns:
            True if this started a new epoch, False if ``user`` was
            already the present user
        """
        if not user:
            raise ValueError("user must be a non-empty identifier")
        if self._user == user:
            return False

        self._user = user
        self._epoch += 1
        logger.info("User {} logged in (epoch {})", user, self._epoch)
        return True

    def logout(self) -> bool:
        """Mark the user as absent. Returns False if nobody was present."""
        if self._user is None:
            return False
        logger.info("User {} logged out", self._user)
        self._user = None
        return True

    def __repr__(self) -> str:
        return f"IdentitySignal(user={self._user!r}, epoch={self._epoch})"
