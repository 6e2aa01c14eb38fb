MONTHS = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]

COLLECTION_TYPES = ["Maintenance", "Other"]

EXPENSE_TYPES = ["Security Service", "Cleaning Services", "Utilities", "Repairs"]

TRANSACTION_TYPES = ["Debit", "Credit"]

# Labels shown on the accounts form, mapped onto the stored transaction type.
TRANSACTION_TYPE_LABELS = {
    "Debit (Money Paid)": "Debit",
    "Credit (Money Received)": "Credit",
}

VACANT_RESIDENT = "Vacant"

APARTMENT_COLUMNS = ["ID", "Owner", "Resident", "Same"]
APARTMENT_SHEET_NAME = "Sheet1"

LEDGER_EXPORT_COLUMNS = ["timestamp", "month", "type", "amount", "transaction_type"]
