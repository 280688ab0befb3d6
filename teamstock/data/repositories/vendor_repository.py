from teamstock.data.records.vendor import Vendor
from teamstock.data.repositories.base import CollectionRepository


class VendorRepository(CollectionRepository):
    key = 'vendors'
    record_cls = Vendor

    def list_active(self):
        return [vendor for vendor in self.list() if vendor.is_active]

    def toggle_active(self, vendor_id: str, actor: str | None = None) -> Vendor:
        """Flip ``is_active``; raises RecordNotFound for an unknown vendor"""

        def flip(vendor):
            vendor.is_active = not vendor.is_active

        return self.modify(vendor_id, flip, actor)
