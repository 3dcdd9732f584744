"""Domain layer for ledgerdesk application.

Services are imported from their own modules (e.g.
``ledgerdesk.domain.payment``) so the database layer can import entities
from here without a circular import.
"""
