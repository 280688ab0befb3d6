"""
PurchaseRequestManager - Business logic for purchase requests

Responsibilities:
- Submit new requests on behalf of a team
- Approve or reject pending requests
- Keep status changes within the allowed lifecycle
"""

from __future__ import annotations

from teamstock.buisness.purchasing.status_validator import PurchaseRequestStatusValidator
from teamstock.buisness.validation.normalizers import clean_optional_str, validate_team
from teamstock.config import SystemConfig
from teamstock.data.records.purchase_request import PurchaseRequest
from teamstock.data.repositories import Repositories
from teamstock.logger import get_logger

logger = get_logger("teamstock.buisness.purchase_requests")


class PurchaseRequestManager:
    """Handles the purchase request lifecycle"""

    def __init__(self, repositories: Repositories, config: SystemConfig):
        self.repositories = repositories
        self.config = config

    def submit(self, data: dict, actor: str | None = None) -> PurchaseRequest:
        """
        Create a pending purchase request.

        Args:
            data: Request fields (snake_case keys); status and approval fields are ignored
            actor: Acting user, used as ``requested_by`` when the data has none

        Returns:
            The stored PurchaseRequest
        """
        data = dict(data)
        for key in ('id', 'status', 'approved_by', 'approved_date', 'moved_to_pending'):
            data.pop(key, None)
        if not clean_optional_str(data.get('requested_by')) and actor:
            data['requested_by'] = actor
        data['team'] = validate_team(data.get('team'), self.config.teams, self.config.default_settings.default_team)

        request = PurchaseRequest.from_dict(data)
        if not request.item_name:
            raise ValueError("Item name is required")
        if not request.vendor:
            raise ValueError("Vendor is required")
        if not request.requested_by:
            raise ValueError("Requested by is required")

        request = self.repositories.purchase_requests.add(request, actor)
        logger.info(f"Purchase request {request.id} submitted by {request.requested_by} for team {request.team}")
        return request

    def approve(self, request_id: str, approved_by: str, notes: str | None = None) -> PurchaseRequest:
        """Approve a pending request; ``notes`` replaces the request notes when given"""
        approved_by = clean_optional_str(approved_by)
        notes = clean_optional_str(notes)
        if not approved_by:
            raise ValueError("Approver is required")

        def apply(request):
            PurchaseRequestStatusValidator.require_transition(request.status, 'approved')
            request.status = 'approved'
            request.approved_by = approved_by
            request.approved_date = self.repositories.purchase_requests.clock()
            if notes:
                request.notes = notes

        request = self.repositories.purchase_requests.modify(request_id, apply, approved_by)
        logger.info(f"Purchase request {request_id} approved by {approved_by}")
        return request

    def reject(self, request_id: str, reason: str | None = None, actor: str | None = None) -> PurchaseRequest:
        """Reject a pending or approved request, recording the reason in its notes"""
        reason = clean_optional_str(reason)

        def apply(request):
            PurchaseRequestStatusValidator.require_transition(request.status, 'rejected')
            request.status = 'rejected'
            note = f"Rejected by {actor}" if actor else "Rejected"
            if reason:
                note = f"{note}: {reason}"
            request.append_note(note)

        request = self.repositories.purchase_requests.modify(request_id, apply, actor)
        logger.info(f"Purchase request {request_id} rejected by {actor}")
        return request

    def delete(self, request_id: str) -> PurchaseRequest:
        return self.repositories.purchase_requests.delete(request_id)
