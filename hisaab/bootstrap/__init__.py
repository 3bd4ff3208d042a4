"""
Hisaab Bootstrap — Startup Self-Checks
======================================
Refuses to start when the role, navigation or plan catalogs disagree,
or when the tenancy tables are missing.
"""
