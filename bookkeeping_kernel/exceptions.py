"""
Typed Exception Hierarchy for the Bookkeeping Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Bookkeeping errors must be handled precisely. Generic exceptions like
ValueError or RuntimeError force callers to parse error messages, which is
fragile and hard to test. Every failure the kernel can raise at a posting
or merge boundary therefore:
  1. Has a TYPED exception class (catch by type, not message)
  2. Has a CODE attribute (machine-readable, API-safe)
  3. Carries structured DATA (not just a message string)

Example - WRONG way to handle errors:
    try:
        ledger = ledger.post(entry)
    except Exception as e:
        if "does not match" in str(e):  # FRAGILE - message might change
            ...

Example - RIGHT way:
    try:
        ledger = ledger.post(entry)
    except AccountMismatchError as e:
        log.warning("mismatch", extra={"expected": e.expected_account})

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

All exceptions inherit from BookkeepingError:

    BookkeepingError (base)
    |
    +-- PostingError
    |   +-- AccountMismatchError
    |   +-- UnbalancedEntryError
    |
    +-- MergeError
    |   +-- EmptyMergeInputError
    |
    +-- ChartOfAccountsError
        +-- UnknownLedgerError
        +-- UnknownAccountError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category          | Code               | When Raised
------------------|--------------------|------------------------------------------
Posting           | ACCOUNT_MISMATCH   | Operation posted to / merged with another
                  |                    | account than the one it names
                  | UNBALANCED_ENTRY   | Caller demanded a balanced entry and the
                  |                    | built entry is not balanced
------------------|--------------------|------------------------------------------
Merge             | EMPTY_MERGE_INPUT  | merge_all() called with no elements
------------------|--------------------|------------------------------------------
Chart of accounts | UNKNOWN_LEDGER     | Ledger term not mapped by the chart
                  | UNKNOWN_ACCOUNT    | Account term not mapped by the chart

===============================================================================
HANDLING PATTERNS
===============================================================================

The kernel never logs, retries or swallows these errors. They propagate to
the caller, who decides whether to re-derive the entry or abort. Posting is
all-or-nothing: when AccountMismatchError escapes Ledger.post or
NaiveState.post, the ledger/state the caller holds is unchanged.

Value-object construction errors (negative raw amounts, wrong types,
mis-keyed mappings) are programming errors and raise ValueError/TypeError
from ``__post_init__``, like any other malformed dataclass.
"""

from bookkeeping_kernel.invariants import KernelInvariant


class BookkeepingError(Exception):
    """
    Base exception for all bookkeeping kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "BOOKKEEPING_ERROR"
    invariant: KernelInvariant | None = None


# Posting-related exceptions


class PostingError(BookkeepingError):
    """Base exception for posting-related errors."""

    code: str = "POSTING_ERROR"


class AccountMismatchError(PostingError):
    """
    An operation names a different account than the one it is applied to.

    Raised by Account.post (and therefore Ledger.post / NaiveState.post)
    and by Operation.merge. Signals a caller bug; nothing is applied.
    """

    code: str = "ACCOUNT_MISMATCH"
    invariant = KernelInvariant.ACCOUNT_IDENTITY

    def __init__(self, expected_account: str, received_account: str):
        self.expected_account = expected_account
        self.received_account = received_account
        super().__init__(
            f"Operation for account {received_account!r} does not match "
            f"account {expected_account!r}"
        )


class UnbalancedEntryError(PostingError):
    """Debit-labelled amounts do not equal credit-labelled amounts."""

    code: str = "UNBALANCED_ENTRY"
    invariant = KernelInvariant.DOUBLE_ENTRY_BALANCE

    def __init__(
        self,
        message: str,
        ledger_name: str | None = None,
        debits: int | None = None,
        credits: int | None = None,
    ):
        self.ledger_name = ledger_name
        self.debits = debits
        self.credits = credits
        super().__init__(message)


# Merge-related exceptions


class MergeError(BookkeepingError):
    """Base exception for merge-related errors."""

    code: str = "MERGE_ERROR"


class EmptyMergeInputError(MergeError):
    """merge_all() requires at least one element."""

    code: str = "EMPTY_MERGE_INPUT"

    def __init__(self, subject: str):
        self.subject = subject
        super().__init__(f"Cannot merge an empty sequence of {subject}")


# Chart-of-accounts exceptions


class ChartOfAccountsError(BookkeepingError):
    """Base exception for chart-of-accounts lookups."""

    code: str = "CHART_OF_ACCOUNTS_ERROR"


class UnknownLedgerError(ChartOfAccountsError):
    """The chart of accounts has no ledger for the given term."""

    code: str = "UNKNOWN_LEDGER"

    def __init__(self, term: object, reason: str | None = None):
        self.term = repr(term)
        self.reason = reason
        message = f"Unknown ledger term: {term!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class UnknownAccountError(ChartOfAccountsError):
    """The chart of accounts has no account for the given term."""

    code: str = "UNKNOWN_ACCOUNT"

    def __init__(self, term: object, reason: str | None = None):
        self.term = repr(term)
        self.reason = reason
        message = f"Unknown account term: {term!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
