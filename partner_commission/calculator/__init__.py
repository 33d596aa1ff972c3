from .aggregator import MonthlyBucket, Summary, aggregate, monthly_breakdown, partner_records
from .dates import normalize_date
from .errors import (AuthenticationError, CommissionError, InvalidInputError,
                     MalformedRowError, NotFoundError, StorageError)
from .matcher import Attribution, MatchPolicy, match_record
from .normalizer import build_record_set, normalize_row
from .schema import CommissionRecord
