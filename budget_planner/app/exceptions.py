"""
Ledger error kinds.

Every rejected operation raises one of these. They are HTTPExceptions so the
API layer renders them directly, and each carries a stable ``code`` that the
batch layer surfaces as the failure reason of a call receipt.
"""
from typing import Optional

from fastapi import HTTPException, status


class LedgerError(HTTPException):
    code = "LedgerError"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: Optional[str] = None):
        super().__init__(status_code=self.status_code, detail=detail or self.code)


class AlreadyExists(LedgerError):
    code = "AlreadyExists"
    status_code = status.HTTP_409_CONFLICT


class BudgetNotFound(LedgerError):
    code = "BudgetNotFound"
    status_code = status.HTTP_404_NOT_FOUND


class AllocationNotFound(LedgerError):
    code = "AllocationNotFound"
    status_code = status.HTTP_404_NOT_FOUND


class AlertNotFound(LedgerError):
    code = "AlertNotFound"
    status_code = status.HTTP_404_NOT_FOUND


class InvalidThreshold(LedgerError):
    code = "InvalidThreshold"


class InvalidAmount(LedgerError):
    code = "InvalidAmount"


class InvalidCategoryName(LedgerError):
    code = "InvalidCategoryName"


class InvalidArguments(LedgerError):
    code = "InvalidArguments"


class UnknownOperation(LedgerError):
    code = "UnknownOperation"


class StorageError(LedgerError):
    code = "StorageError"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
