from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from teamstock.buisness.validation.normalizers import clean_optional_str, clean_str, coerce_number, validate_enum
from teamstock.data.records.base import StoredRecord, json_object, nested_records
from teamstock.utils.timestamps import from_iso, to_iso


PAYMENT_CHANNELS = (
    'paybill',
    'paybill-with-store',
    'till-number',
    'send-money',
    'pochi-la-biashara',
    'bank-transfer',
    'cash',
)

MAX_RATING = 5.0


@dataclass
class Coordinates:
    latitude: float
    longitude: float

    def to_dict(self):
        return {'latitude': self.latitude, 'longitude': self.longitude}

    @classmethod
    def from_dict(cls, data):
        try:
            return cls(float(data['latitude']), float(data['longitude']))
        except (KeyError, TypeError, ValueError) as error:
            raise ValueError(f"Invalid coordinates: {data!r}") from error


@dataclass
class VendorLocation:
    address: str = ''
    city: str = ''
    country: str = ''
    region: str | None = None
    coordinates: Coordinates | None = None

    def to_dict(self):
        return {
            'address': self.address,
            'city': self.city,
            'region': self.region,
            'country': self.country,
            'coordinates': self.coordinates.to_dict() if self.coordinates else None,
        }

    @classmethod
    def from_dict(cls, data):
        data = data or {}
        coords = data.get('coordinates')
        return cls(
            address=clean_str(data.get('address')),
            city=clean_str(data.get('city')),
            region=clean_optional_str(data.get('region')),
            country=clean_str(data.get('country')),
            coordinates=Coordinates.from_dict(json_object(coords, 'coordinates')) if coords else None,
        )


@dataclass
class PaymentMethod:
    method: str
    details: str
    account_name: str | None = None
    additional_info: str | None = None

    def __post_init__(self):
        canonical = validate_enum(self.method, PAYMENT_CHANNELS)
        if canonical is None:
            raise ValueError(f"Unknown payment method '{self.method}'")
        self.method = canonical

    def to_dict(self):
        return {
            'method': self.method,
            'details': self.details,
            'account_name': self.account_name,
            'additional_info': self.additional_info,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            method=data.get('method') or '',
            details=clean_str(data.get('details')),
            account_name=clean_optional_str(data.get('account_name')),
            additional_info=clean_optional_str(data.get('additional_info')),
        )


@dataclass
class Vendor(StoredRecord):
    """Supplier contact, location and accepted payment channels"""

    ID_PREFIX = "vendor"
    STAMP_FIELD = "updated_at"
    AUDIT_FIELDS = ("created_at", "updated_at", "created_by")

    name: str
    company_name: str = ''
    contact_person: str = ''
    email: str = ''
    phone: str = ''
    alternative_phone: str | None = None
    location: VendorLocation = field(default_factory=VendorLocation)
    payment_methods: list = field(default_factory=list)
    category: str = ''
    rating: float = 0.0
    notes: str | None = None
    website: str | None = None
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None
    created_by: str | None = None
    id: str | None = None

    def __post_init__(self):
        if not 0 <= self.rating <= MAX_RATING:
            raise ValueError(f"rating must be between 0 and {MAX_RATING:g}")

    def __repr__(self):
        return f'<Vendor {self.id}: {self.name}>'

    def stamp_created(self, now, actor):
        self.created_at = now
        self.updated_at = now
        if actor and not self.created_by:
            self.created_by = actor

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'company_name': self.company_name,
            'contact_person': self.contact_person,
            'email': self.email,
            'phone': self.phone,
            'alternative_phone': self.alternative_phone,
            'location': self.location.to_dict(),
            'payment_methods': [pm.to_dict() for pm in self.payment_methods],
            'category': self.category,
            'rating': self.rating,
            'notes': self.notes,
            'website': self.website,
            'is_active': self.is_active,
            'created_at': to_iso(self.created_at),
            'updated_at': to_iso(self.updated_at),
            'created_by': self.created_by,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data.get('id'),
            name=clean_str(data.get('name')),
            company_name=clean_str(data.get('company_name')),
            contact_person=clean_str(data.get('contact_person')),
            email=clean_str(data.get('email')),
            phone=clean_str(data.get('phone')),
            alternative_phone=clean_optional_str(data.get('alternative_phone')),
            location=VendorLocation.from_dict(json_object(data.get('location'), 'location')),
            payment_methods=nested_records(data.get('payment_methods'), PaymentMethod, 'payment_methods'),
            category=clean_str(data.get('category')),
            rating=min(coerce_number(data.get('rating')), MAX_RATING),
            notes=clean_optional_str(data.get('notes')),
            website=clean_optional_str(data.get('website')),
            is_active=bool(data.get('is_active', True)),
            created_at=from_iso(data.get('created_at')),
            updated_at=from_iso(data.get('updated_at')),
            created_by=data.get('created_by'),
        )
