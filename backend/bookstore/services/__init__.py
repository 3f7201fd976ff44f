# Services package init
"""
Bookstore API — Services Layer
================================

What:  Persistence layer sitting between routes (HTTP) and the database.

Service Inventory:
    - BookStore (abstract): create / find_by_id / get_all / update / delete
    - SqlBookStore: async SQLAlchemy implementation (one per request)
    - InMemoryBookStore: dict-backed implementation (one per process)
    - providers: request-scoped factories handed to create_app()
"""
