"""
Role Seeder: bootstrap users, roles and role mappings from configuration.
"""

__version__ = "0.1.0"
