# fintrack/models/enums.py
# No database imports here: the client package shares these values.
import enum

class EntryType(str, enum.Enum):
    expense = "expense"
    income = "income"
