"""
auth — User authentication module.

Provides:
  • Credential store over the ``users`` table
  • Password hashing (bcrypt)
  • Signed bearer token creation & verification
  • Register / Login / Profile API routes
"""
