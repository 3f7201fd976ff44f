# Routes package init
"""
Bookstore API — Routes Package
================================

Route Inventory:
    - books.py:   GET/POST     {prefix}/books
                  GET/PUT/DELETE {prefix}/books/{id}
    - health.py:  GET /health   (store reachability)

Routes stay thin: parse path and body, call the store, pick the status code.
"""
