from enum import StrEnum


class VerificationResult(StrEnum):
    INVALID = 'INVALID'
    ALREADY_USED = 'ALREADY_USED'
    CANCELLED = 'CANCELLED'
    WRONG_DATE = 'WRONG_DATE'
    VALID_UNUSED = 'VALID_UNUSED'


class EntryAction(StrEnum):
    GRANT_ENTRY = 'GRANT_ENTRY'
    DENY_ENTRY = 'DENY_ENTRY'
