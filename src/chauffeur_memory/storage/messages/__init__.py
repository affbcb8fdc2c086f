"""Message history backends other than the CRM store itself."""
