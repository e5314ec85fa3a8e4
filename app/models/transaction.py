# app/models/transaction.py
import enum

COLLECTION = "transactions"

REQUIRED_FIELDS = ("amount", "category", "type", "date")


class TransactionType(str, enum.Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"
