from teamstock.data.records.bom import BillOfMaterials
from teamstock.data.repositories.base import CollectionRepository


class BomRepository(CollectionRepository):
    key = 'bom'
    record_cls = BillOfMaterials

    def list_by_team(self, team: str):
        return [bom for bom in self.list() if bom.team == team]
