"""Domain layer for tillbook application.

Services live in their own modules (``tillbook.domain.cash_register`` and
friends) and are imported from there, so that the database layer can import
``tillbook.domain.entities`` without pulling the services in.
"""
