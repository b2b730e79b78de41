"""
auth — User authentication module.

Provides:
  • Signed bearer token creation & verification
  • Password hashing (bcrypt)
  • Google sign-in with account linking
  • Login / register / profile / change-password API routes
  • ``get_current_user`` FastAPI dependency
"""
