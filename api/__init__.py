"""
HTTP API for the device license service.

- client: endpoints used by the desktop client (validate, admin login)
- users: admin panel endpoints over license records
"""
