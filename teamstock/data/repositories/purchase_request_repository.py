from teamstock.data.records.purchase_request import PurchaseRequest
from teamstock.data.repositories.base import CollectionRepository


class PurchaseRequestRepository(CollectionRepository):
    key = 'purchase-requests'
    record_cls = PurchaseRequest

    def list_by_status(self, status: str):
        return [pr for pr in self.list() if pr.status == status]

    def list_by_team(self, team: str):
        return [pr for pr in self.list() if pr.team == team]
