"""
Funnel listing: `GET /funnels` and `GET /professions/{profession_id}/funnels`.
"""
