# ==============================================================================
# partner_commission/models.py
# ------------------------------------------------------------------------------
# Defines the database schema using SQLAlchemy ORM models.
# ==============================================================================

from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash
from partner_commission import db
from partner_commission.calculator.schema import CommissionRecord


class CommissionRecordRow(db.Model):
    """
    Stores one normalized commission record. The whole table is replaced on
    every upload, so rows are never updated in place.
    """
    __tablename__ = 'commission_records'
    pk = db.Column(db.Integer, primary_key=True)

    # Generated per upload; unique by construction, not by constraint.
    record_id = db.Column(db.String(64), nullable=False)
    order_date = db.Column(db.String(10), index=True, nullable=False)
    course_name = db.Column(db.String(512), default='')
    customer_payment = db.Column(db.Float, default=0)
    affiliate_code = db.Column(db.String(128), default='')
    affiliate10_recipient = db.Column(db.String(256), default='')
    affiliate10_amount = db.Column(db.Float, default=0)
    invitor_code = db.Column(db.String(128), default='')
    invitor15_recipient = db.Column(db.String(256), default='')
    invitor15_amount = db.Column(db.Float, default=0)
    order_no = db.Column(db.String(128))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<CommissionRecordRow {self.record_id}: {self.order_no}>'

    @classmethod
    def from_record(cls, record):
        return cls(
            record_id=record.id, order_date=record.order_date, course_name=record.course_name,
            customer_payment=record.customer_payment, affiliate_code=record.affiliate_code,
            affiliate10_recipient=record.affiliate10_recipient, affiliate10_amount=record.affiliate10_amount,
            invitor_code=record.invitor_code, invitor15_recipient=record.invitor15_recipient,
            invitor15_amount=record.invitor15_amount, order_no=record.order_no,
            created_at=record.created_at, updated_at=record.updated_at
        )

    def to_record(self):
        return CommissionRecord(
            id=self.record_id, order_date=self.order_date, course_name=self.course_name or '',
            customer_payment=self.customer_payment or 0.0, affiliate_code=self.affiliate_code or '',
            affiliate10_recipient=self.affiliate10_recipient or '',
            affiliate10_amount=self.affiliate10_amount or 0.0, invitor_code=self.invitor_code or '',
            invitor15_recipient=self.invitor15_recipient or '',
            invitor15_amount=self.invitor15_amount or 0.0, order_no=self.order_no or '',
            created_at=self.created_at, updated_at=self.updated_at
        )


class SystemInfo(db.Model):
    """Key-value facts about the service, e.g. when the last upload happened."""
    __tablename__ = 'system_info'
    id = db.Column(db.Integer, primary_key=True)
    key = db.Column(db.String(64), unique=True, nullable=False, index=True)
    value = db.Column(db.String(256))
    # 'metadata' is reserved on declarative models, hence the attribute name
    extra = db.Column('metadata', db.JSON, default=dict)

    def __repr__(self):
        return f'<SystemInfo {self.key}: {self.value}>'


class Partner(db.Model):
    """A partner allowed to log in and query their commission."""
    __tablename__ = 'partner'
    id = db.Column(db.Integer, primary_key=True)
    code = db.Column(db.String(64), unique=True, nullable=False, index=True)
    display_name = db.Column(db.String(128))
    password_hash = db.Column(db.String(256), nullable=False)

    def __repr__(self):
        return f'<Partner {self.code}>'

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)
