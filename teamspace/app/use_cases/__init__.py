"""
Use Cases

Organized by domain folder:
- auth/: Identity resolution, profile bootstrap, passwordless sign-in
- invites/: Invite validation, creation, acceptance flow
- organizations/: Organization management and team views

Import from subdirectories.
"""
