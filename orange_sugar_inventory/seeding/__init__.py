"""
CSV seeding for master data and the bundle reference.
"""
