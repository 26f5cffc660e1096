"""
Event listing: `GET /events`.
"""
