"""Users app package.

Defines the FitBuddy account model with member, trainer and admin roles
and the permission classes the API uses for role checks. Use
``apps.users.models.CustomUser`` as the AUTH_USER_MODEL throughout the
project.
"""
