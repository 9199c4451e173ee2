"""
db/ - Database Layer
====================
Handles PostgreSQL connections, transactions, schema initialization and the
error taxonomy shared by every repository.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
