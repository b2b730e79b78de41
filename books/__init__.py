"""
books — the book catalog: CRUD, search, filters and stock.
"""
