"""Errors raised by the review workflow when a referenced record is missing."""


class ItemNotFoundError(LookupError):
    """No reviewable item with the given id exists for the learner."""

    def __init__(self, user_id: str, item_id: str):
        super().__init__(f"Item {item_id} not found for user {user_id}")
        self.user_id = user_id
        self.item_id = item_id


class SessionNotFoundError(LookupError):
    """No review session with the given id exists for the learner."""

    def __init__(self, user_id: str, session_id: str):
        super().__init__(f"Session {session_id} not found for user {user_id}")
        self.user_id = user_id
        self.session_id = session_id
