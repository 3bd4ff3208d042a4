"""
Hisaab Tenancy — Business, Membership and Tax Tables
====================================================
Django models backing the plan, membership and tax configuration
providers.
"""
