"""HRMS backend resource paths, relative to HRMS_API_BASE_URL."""

EMPLOYEES = "employees/"
APPRAISALS = "performanse_appraisals/"
LEAVE_REQUESTS = "employee_leaves/"
LETTERS = "letter_send/"
HOLIDAYS = "holidays/"
ADMIN_PROVISIONS = "admin_provisions/"

STATIONERY_ITEMS = "stationery_items/"
STATIONERY_USAGE = "stationery_usage/"
STATIONERY_TRANSACTIONS = "stationery_transactions/"

APPROVE_INCREMENT = "approve_increment"
APPROVE_DESIGNATION = "approve_designation"
