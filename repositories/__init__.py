"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific domain entity.
Repositories receive raw rows from the database and return domain model objects.
`PostgresStore` combines them into the single `Store` the rest of the
application depends on.
"""
