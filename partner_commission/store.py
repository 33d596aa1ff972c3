# ==============================================================================
# partner_commission/store.py
# ------------------------------------------------------------------------------
# Record stores. An upload replaces everything in two separate phases
# (delete-all, then batched inserts). The phases are NOT atomic: a failure
# between them leaves the store empty, a failure mid-insert leaves a partial set.
# ==============================================================================

import logging
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError

from partner_commission.calculator.errors import StorageError

LAST_UPLOAD_KEY = 'last_upload'


def _in_range(order_date, from_date, to_date):
    if from_date and order_date < from_date:
        return False
    if to_date and order_date > to_date:
        return False
    return True


class RecordStore:
    """Interface for the persisted commission record set."""

    def replace_all(self, records):
        """
        Replaces the stored set with `records` and stamps the upload time.

        Returns:
            int: Number of records inserted.
        """
        records = list(records)
        self.delete_all()
        self.insert_batches(records)
        self.mark_upload(len(records))
        return len(records)

    def delete_all(self):
        raise NotImplementedError

    def insert_batches(self, records):
        raise NotImplementedError

    def mark_upload(self, record_count):
        raise NotImplementedError

    def query(self, from_date=None, to_date=None):
        """Stored records with from_date <= order_date <= to_date ('YYYY-MM-DD', both optional)."""
        raise NotImplementedError

    def last_upload(self):
        """Returns {'timestamp': iso-string, 'recordCount': int}, or None before the first upload."""
        raise NotImplementedError


class InMemoryRecordStore(RecordStore):
    """Process-local store, owned by a single app instance."""

    def __init__(self):
        self._records = []
        self._last_upload = None

    def delete_all(self):
        self._records = []

    def insert_batches(self, records):
        self._records.extend(records)

    def mark_upload(self, record_count):
        self._last_upload = {'timestamp': datetime.now(timezone.utc).isoformat(),
                             'recordCount': record_count}

    def query(self, from_date=None, to_date=None):
        return [r for r in self._records if _in_range(r.order_date, from_date, to_date)]

    def last_upload(self):
        return dict(self._last_upload) if self._last_upload else None


class SqlAlchemyRecordStore(RecordStore):
    """Store backed by the commission_records table."""

    def __init__(self, db, batch_size=100):
        self.db = db
        self.batch_size = max(1, int(batch_size))

    def _fail(self, action, error):
        self.db.session.rollback()
        logging.error(f"Record store failed to {action}: {error}", exc_info=True)
        raise StorageError(f"Failed to {action}", details=str(error)) from error

    def delete_all(self):
        from partner_commission.models import CommissionRecordRow
        try:
            deleted = self.db.session.query(CommissionRecordRow).delete()
            self.db.session.commit()
        except SQLAlchemyError as e:
            self._fail('clear existing records', e)
        logging.info(f"Deleted {deleted} existing commission records.")

    def insert_batches(self, records):
        from partner_commission.models import CommissionRecordRow
        for start in range(0, len(records), self.batch_size):
            batch = records[start:start + self.batch_size]
            try:
                self.db.session.add_all([CommissionRecordRow.from_record(r) for r in batch])
                self.db.session.commit()
            except SQLAlchemyError as e:
                self._fail(f'insert records {start + 1}-{start + len(batch)}', e)
            logging.debug(f"Inserted batch {start + 1}-{start + len(batch)}.")

    def mark_upload(self, record_count):
        from partner_commission.models import SystemInfo
        try:
            info = SystemInfo.query.filter_by(key=LAST_UPLOAD_KEY).first()
            if info is None:
                info = SystemInfo(key=LAST_UPLOAD_KEY)
                self.db.session.add(info)
            info.value = datetime.now(timezone.utc).isoformat()
            info.extra = {'recordCount': record_count}
            self.db.session.commit()
        except SQLAlchemyError as e:
            self._fail('update upload timestamp', e)

    def query(self, from_date=None, to_date=None):
        from partner_commission.models import CommissionRecordRow
        try:
            q = CommissionRecordRow.query
            if from_date:
                q = q.filter(CommissionRecordRow.order_date >= from_date)
            if to_date:
                q = q.filter(CommissionRecordRow.order_date <= to_date)
            rows = q.order_by(CommissionRecordRow.pk).all()
        except SQLAlchemyError as e:
            self._fail('read commission records', e)
        return [row.to_record() for row in rows]

    def last_upload(self):
        from partner_commission.models import SystemInfo
        try:
            info = SystemInfo.query.filter_by(key=LAST_UPLOAD_KEY).first()
        except SQLAlchemyError as e:
            self._fail('read system info', e)
        if info is None:
            return None
        return {'timestamp': info.value, 'recordCount': (info.extra or {}).get('recordCount', 0)}
