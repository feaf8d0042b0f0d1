"""Ticket identity, eligibility and badge contracts (no I/O)."""

from .badge import BadgeOptions, BadgeView, EventContext, badge_filename  # noqa: F401
from .columns import ColumnCandidateSet, ticket_columns  # noqa: F401
from .eligibility import EligibilityResult, evaluate_eligibility  # noqa: F401
from .payload import first_success, normalize  # noqa: F401
from .qr_payload import build_qr_payload, encode_qr_payload  # noqa: F401
from .registrant import RegistrantRecord, record_from_row  # noqa: F401
