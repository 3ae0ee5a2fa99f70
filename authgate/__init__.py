"""Credential-based login verification for username or email accounts."""
