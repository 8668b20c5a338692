"""Billing engine exceptions

Invariant violations are raised as named errors so that the use cases can
block invoice creation with a specific reason.
"""

from decimal import Decimal


class BillingError(Exception):
    """Base class for billing engine errors"""

    code = "BILLING_ERROR"


class InvalidBillingStateError(BillingError):
    """Requested cumulative amount is below what was already billed"""

    code = "INVALID_BILLING_STATE"

    def __init__(self, cumulative_fee_amount: Decimal, previously_billed: Decimal):
        self.cumulative_fee_amount = cumulative_fee_amount
        self.previously_billed = previously_billed
        super().__init__(
            f"Cumulative fee amount {cumulative_fee_amount} is below the "
            f"already billed amount {previously_billed}"
        )


class FeeExceededError(BillingError):
    """Requested cumulative amount exceeds the project's total fee"""

    code = "FEE_EXCEEDED"

    def __init__(self, cumulative_fee_amount: Decimal, total_fee: Decimal):
        self.cumulative_fee_amount = cumulative_fee_amount
        self.total_fee = total_fee
        super().__init__(
            f"Cumulative fee amount {cumulative_fee_amount} exceeds the "
            f"project total fee {total_fee}"
        )


class InvoiceNumberConflictError(BillingError):
    """Invoice number already taken by a concurrent writer (transient)"""

    code = "INVOICE_NUMBER_CONFLICT"

    def __init__(self, invoice_number: str):
        self.invoice_number = invoice_number
        super().__init__(f"Invoice number {invoice_number} already exists")


class SequenceAllocationError(BillingError):
    """Invoice number allocation failed after the allowed attempts"""

    code = "SEQUENCE_ALLOCATION_FAILED"

    def __init__(self, prefix: str, attempts: int):
        self.prefix = prefix
        self.attempts = attempts
        super().__init__(
            f"Could not allocate an invoice number for prefix {prefix} "
            f"after {attempts} attempts"
        )
