from __future__ import annotations

from teamstock.buisness.errors import InvalidTransition


class PurchaseRequestStatusValidator:
    """
    Status transition rules for purchase requests.

    Approval and rejection go through these rules. Moving a request to
    pending inventory sets ``ordered`` directly.
    """

    STATUSES = {"pending", "approved", "rejected", "ordered"}

    _NEXT = {
        "pending": {"approved", "rejected"},
        "approved": {"ordered", "rejected"},
        "ordered": set(),
        "rejected": set(),
    }

    @classmethod
    def can_transition(cls, current_status: str, new_status: str) -> bool:
        allowed = cls._NEXT.get(current_status)
        if allowed is None:
            return False
        return new_status in allowed

    @classmethod
    def require_transition(cls, current_status: str, new_status: str) -> None:
        if new_status not in cls.STATUSES:
            raise InvalidTransition(f"Unknown purchase request status '{new_status}'")
        if not cls.can_transition(current_status, new_status):
            raise InvalidTransition(
                f"Cannot change a purchase request from '{current_status}' to '{new_status}'"
            )
