"""
Licenses module - device-bound license records.

This module handles:
- License entity and domain logic
- Client validation and first-use device binding
- Admin lifecycle (create, update, delete, reset device)
"""
