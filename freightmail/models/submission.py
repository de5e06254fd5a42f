"""Website form submissions."""

from dataclasses import dataclass, fields

from freightmail.errors import ValidationError


def _clean(value, strip=True):
    if value is None:
        return ''
    value = str(value)
    return value.strip() if strip else value


class _Submission:
    """Shared parsing for form payloads."""
    required = ()
    # free text kept exactly as submitted
    raw = ('message',)
    # attribute name -> payload key, for camelCase form fields
    aliases = {}

    @classmethod
    def from_payload(cls, data):
        """Build a submission from a JSON or form payload."""
        data = data or {}
        values = {}
        for field in fields(cls):
            key = cls.aliases.get(field.name, field.name)
            values[field.name] = _clean(data.get(key), strip=field.name not in cls.raw)

        missing = [cls.aliases.get(name, name) for name in cls.required if not values[name].strip()]
        if missing:
            raise ValidationError('Missing required fields: ' + ', '.join(missing))
        return cls(**values)


@dataclass
class ContactSubmission(_Submission):
    """Contact form message."""
    name: str
    email: str
    message: str

    required = ('name', 'email', 'message')


@dataclass
class QuotationRequest(_Submission):
    """Freight quotation request."""
    name: str
    company: str
    email: str
    phone: str
    origin_zip: str
    destination_zip: str
    product: str
    truck_type: str
    message: str

    required = ('name', 'email', 'message')
    aliases = {
        'origin_zip': 'originZip',
        'destination_zip': 'destinationZip',
        'truck_type': 'truckType',
    }
