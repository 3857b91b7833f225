"""Static category labels offered to clients when recording a transaction."""

CATEGORY_LABELS: tuple[str, ...] = (
    "Food & Dining",
    "Transportation",
    "Entertainment",
    "Shopping",
    "Bills & Utilities",
    "Healthcare",
    "Education",
    "Travel",
    "Groceries",
    "Rent",
    "Salary",
    "Freelance",
    "Investment",
    "Gift",
    "Other",
)
