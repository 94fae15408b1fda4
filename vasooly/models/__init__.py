"""SQLAlchemy models"""
from vasooly.models.bill import Bill, BillStatus, ExpenseCategory
from vasooly.models.participant import Participant, PaymentStatus

__all__ = ["Bill", "BillStatus", "ExpenseCategory", "Participant", "PaymentStatus"]
