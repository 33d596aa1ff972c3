# ==============================================================================
# partner_commission/calculator/schema.py
# ------------------------------------------------------------------------------
# Defines the expected layout of the commission spreadsheet and the canonical
# record shape. This schema is the single source of truth for the normalizer.
# ==============================================================================

from dataclasses import dataclass, fields
from datetime import datetime

# Positional layout of the first sheet (0-indexed). Row 0 is always the header.
COLUMNS = {
    'order_date': 0,
    'course_name': 1,
    'customer_payment': 6,
    'affiliate_code': 8,
    'affiliate10_recipient': 9,
    'invitor_code': 10,
    'invitor15_recipient': 11,
    'affiliate10_amount': 12,
    'invitor15_amount': 13,
    'order_no': 16,
}

AMOUNT_FIELDS = ('customer_payment', 'affiliate10_amount', 'invitor15_amount')
TEXT_FIELDS = ('course_name', 'affiliate_code', 'affiliate10_recipient',
               'invitor_code', 'invitor15_recipient', 'order_no')

# Canonical field -> camelCase name used by JSON uploads and responses.
CAMEL_NAMES = {
    'id': 'id',
    'order_date': 'orderDate',
    'course_name': 'courseName',
    'customer_payment': 'customerPayment',
    'affiliate_code': 'affiliateCode',
    'affiliate10_recipient': 'affiliate10Recipient',
    'affiliate10_amount': 'affiliate10Amount',
    'invitor_code': 'invitorCode',
    'invitor15_recipient': 'invitor15Recipient',
    'invitor15_amount': 'invitor15Amount',
    'order_no': 'orderNo',
    'created_at': 'createdAt',
    'updated_at': 'updatedAt',
}

FIELD_STYLES = ('camel', 'snake')


@dataclass(frozen=True)
class CommissionRecord:
    """One matched course sale, as persisted and queried."""
    id: str
    order_date: str
    course_name: str = ''
    customer_payment: float = 0.0
    affiliate_code: str = ''
    affiliate10_recipient: str = ''
    affiliate10_amount: float = 0.0
    invitor_code: str = ''
    invitor15_recipient: str = ''
    invitor15_amount: float = 0.0
    order_no: str = ''
    created_at: datetime = None
    updated_at: datetime = None

    @property
    def has_commission(self):
        return self.affiliate10_amount > 0 or self.invitor15_amount > 0

    @property
    def month_key(self):
        return self.order_date[:7] if self.order_date else 'unknown'

    def to_dict(self, style='camel'):
        """Serializes the record for a JSON response in the requested field style."""
        result = {}
        for field in fields(self):
            value = getattr(self, field.name)
            if isinstance(value, datetime):
                value = value.isoformat()
            key = CAMEL_NAMES[field.name] if style == 'camel' else field.name
            result[key] = value
        return result
