"""
Closed enumerations shared by request validation, the database models and
the financial calculators.
"""

from enum import Enum


class RecurringFrequency(str, Enum):
    MONTHLY = "MONTHLY"
    WEEKLY = "WEEKLY"
    YEARLY = "YEARLY"


class AlertLevel(str, Enum):
    SAFE = "safe"
    WARNING = "warning"
    DANGER = "danger"
    CRITICAL = "critical"


class SavingsBucketType(str, Enum):
    TRIP_FUND = "Trip Fund"
    EMERGENCY_FUND = "Emergency Fund"
    INVESTMENT_POOL = "Investment Pool"
    CUSTOM = "Custom"


class PaymentMethodType(str, Enum):
    CASH = "Cash"
    CREDIT_CARD = "Credit Card"
    DEBIT_CARD = "Debit Card"
    DIGITAL_WALLET = "Digital Wallet"
    BANK_TRANSFER = "Bank Transfer"


class IncomeSource(str, Enum):
    SALARY = "Salary"
    FREELANCE = "Freelance"
    BONUS = "Bonus"
    INVESTMENT = "Investment"
    GIFT = "Gift"
    OTHER = "Other"


# Seeded into the categories table at startup, in display order.
PREDEFINED_CATEGORIES = [
    {"name": "Food & Dining", "icon": "UtensilsCrossed", "color": "#f59e0b"},
    {"name": "Transport", "icon": "Car", "color": "#3b82f6"},
    {"name": "Bills & Utilities", "icon": "FileText", "color": "#ef4444"},
    {"name": "Shopping", "icon": "ShoppingBag", "color": "#ec4899"},
    {"name": "Healthcare", "icon": "Heart", "color": "#f43f5e"},
    {"name": "Entertainment", "icon": "Tv", "color": "#8b5cf6"},
    {"name": "Education", "icon": "GraduationCap", "color": "#06b6d4"},
    {"name": "Subscriptions", "icon": "RefreshCw", "color": "#14b8a6"},
    {"name": "EMI & Loans", "icon": "CreditCard", "color": "#f97316"},
    {"name": "Work Related", "icon": "Briefcase", "color": "#64748b"},
    {"name": "Rent", "icon": "Home", "color": "#7c3aed"},
    {"name": "Household", "icon": "Home", "color": "#10b981"},
    {"name": "Others", "icon": "MoreHorizontal", "color": "#6b7280"},
]
