"""
Profession listing: `GET /professions`.
"""
