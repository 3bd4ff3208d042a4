"""
Hisaab — Access-Control & Financial Policy Core
===============================================
Role/plan guards, Pakistani tax calculation and business health scoring
for the Hisaab SME business-management platform.
"""
