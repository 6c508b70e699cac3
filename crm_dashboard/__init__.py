"""CRM dashboard: customer statistics and self-assignment of unassigned customers."""

__version__ = "0.1.0"
