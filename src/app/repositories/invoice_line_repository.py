"""Invoice Line Repository Interface

Defines the contract for invoice line persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.invoice_line import InvoiceLine


class InvoiceLineRepository(ABC):
    """
    Repository interface for InvoiceLine persistence

    Provides access to invoice line items for billing operations.
    """

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: int) -> List[InvoiceLine]:
        """
        Retrieve all line items for an invoice, in insertion order

        Args:
            invoice_id: Invoice ID

        Returns:
            List of InvoiceLine items
        """
        pass

    @abstractmethod
    async def create_many(self, invoice_lines: List[InvoiceLine]) -> List[InvoiceLine]:
        """
        Persist line items

        Args:
            invoice_lines: InvoiceLine entities with invoice_id assigned

        Returns:
            Created InvoiceLine items with generated IDs
        """
        pass

    @abstractmethod
    async def delete_by_invoice_id(self, invoice_id: int) -> None:
        """Remove every line item of an invoice"""
        pass
