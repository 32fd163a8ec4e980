"""
auth — User authentication module.

Provides:
  • Signed, expiring session tokens (HMAC-SHA256)
  • Password hashing (bcrypt, work factor 10)
  • Signup / Login / Profile API routes
  • ``get_current_user_id`` FastAPI dependency
"""
