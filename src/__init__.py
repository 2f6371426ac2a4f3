"""
Hospital API - user registration and login with bearer tokens, patient
records, and a doctor dashboard.
"""
