"""
users — administrative operations on user accounts.
"""
